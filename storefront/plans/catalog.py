"""
Subscription plan catalog.

Loads the public plan list, keeps it in tier order, derives the feature
list shown on each plan card, and gates checkout on payment configuration.
"""

import json
import logging
import math
from typing import Any

import httpx
import sentry_sdk
from pydantic import ValidationError

from storefront.api import error_message
from storefront.content.envelope import first_key, normalize

from .checkout import (
    PAYMENT_NOT_CONFIGURED,
    CheckoutError,
    CheckoutSessionResponse,
    PaymentNotConfiguredError,
    PlanNotFoundError,
)
from .types import BASIC, PLAN_ORDER, CheckoutReadiness, Plan

logger = logging.getLogger(__name__)


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_plan(record: Any) -> Plan | None:
    """Build a Plan from a backend record, or None if it has no name."""
    if not isinstance(record, dict):
        return None
    name = record.get("name")
    if not isinstance(name, str) or not name.strip():
        return None

    return Plan(
        id=record.get("id"),
        name=name,
        display_name=first_key(record, "display_name", "displayName") or name,
        price=record.get("price"),
        stripe_price_id=first_key(record, "stripe_price_id", "stripePriceId"),
        max_devices=_to_int(first_key(record, "max_devices", "maxDevices")),
        video_quality=first_key(record, "video_quality", "videoQuality"),
        downloadable_content=bool(
            first_key(record, "downloadable_content", "downloadableContent")
        ),
        certificates=bool(record.get("certificates")),
        priority_support=bool(first_key(record, "priority_support", "prioritySupport")),
        ad_free=bool(first_key(record, "ad_free", "adFree")),
        features_raw=first_key(record, "features", "features_raw", "featuresRaw"),
        description=record.get("description"),
    )


def _tier_rank(plan: Plan) -> int:
    try:
        return PLAN_ORDER.index(plan.tier)
    except ValueError:
        return len(PLAN_ORDER)


def sort_plans(plans: list[Plan]) -> list[Plan]:
    """Order plans freemium, basic, premium; unknown tiers last, in source order."""
    return sorted(plans, key=_tier_rank)


def _explicit_features(plan: Plan) -> list:
    raw = plan.features_raw
    features: list = []

    if isinstance(raw, list):
        features = list(raw)
    elif isinstance(raw, str) and raw:
        try:
            parsed = json.loads(raw)
            features = parsed if isinstance(parsed, list) else []
        except ValueError:
            # Not JSON, treat as a single feature
            features = [raw]

    if not features and plan.description:
        features = [
            line.strip() for line in plan.description.splitlines() if line.strip()
        ]

    return features


def features_for(plan: Plan) -> list[str]:
    """
    Feature list for a plan card.

    Explicit features (features field, else one per description line) come
    first, followed by entries derived from the plan's settings.
    """
    features = _explicit_features(plan)

    if plan.max_devices:
        noun = "Device" if plan.max_devices == 1 else "Devices"
        features.append(f"{plan.max_devices} {noun}")
    if plan.video_quality:
        features.append(f"{plan.video_quality} Quality")
    if plan.downloadable_content:
        features.append("Downloadable Content")
    if plan.certificates:
        features.append("Certificates of Completion")
    if plan.priority_support:
        features.append("Priority Support")
    if plan.ad_free:
        features.append("Ad-Free Experience")

    return features


def checkout_readiness(plan: Plan) -> CheckoutReadiness:
    """Freemium is always ready; paid plans need a Stripe price ID."""
    if plan.is_freemium:
        return CheckoutReadiness(ready=True)
    if isinstance(plan.stripe_price_id, str) and plan.stripe_price_id.strip():
        return CheckoutReadiness(ready=True)
    return CheckoutReadiness(ready=False, reason=PAYMENT_NOT_CONFIGURED)


def display_price(plan: Plan) -> str:
    """Price label for a plan card, e.g. "Free" or "€9.99"."""
    if plan.is_freemium:
        return "Free"
    try:
        price = float(plan.price)
    except (TypeError, ValueError):
        return "€0.00"
    if not math.isfinite(price):
        return "€0.00"
    return f"€{price:.2f}"


def is_popular(plan: Plan) -> bool:
    """The basic tier is highlighted as most popular."""
    return plan.tier == BASIC


class PlanCatalog:
    """Per-session plan list used to render plan cards and start checkout."""

    def __init__(self):
        self.plans: list[Plan] = []

    def load(self, envelope: Any) -> list[Plan]:
        """Replace the catalog with the plans in a plan-list response."""
        plans = []
        for record in normalize(envelope).items:
            plan = parse_plan(record)
            if plan is None:
                logger.warning(f"Skipping plan record without a name: {record!r}")
                continue
            plans.append(plan)

        self.plans = sort_plans(plans)
        logger.info(
            f"Loaded {len(self.plans)} plans: {[p.name for p in self.plans]}"
        )
        return self.plans

    async def refresh(self, client) -> list[Plan]:
        """Fetch the public plan list through the backend client and load it."""
        try:
            envelope = await client.get_public_plans()
        except httpx.HTTPError as e:
            logger.error(f"Failed to load subscription plans: {e}")
            raise
        return self.load(envelope)

    def match(self, tier: str) -> Plan:
        """Find the loaded plan whose name equals tier, ignoring case.

        Raises:
            PlanNotFoundError: If no loaded plan has that name
        """
        wanted = tier.strip().lower()
        for plan in self.plans:
            if plan.tier == wanted:
                return plan

        logger.error(
            f"Plan {tier!r} not found, available: {[p.name for p in self.plans]}"
        )
        raise PlanNotFoundError(f'Plan "{tier}" not found. Please contact support.')

    async def start_checkout(
        self, tier: str, client, success_url: str, cancel_url: str
    ) -> str:
        """
        Create a checkout session for a paid tier.

        Args:
            tier: Chosen tier name, e.g. "basic"
            client: Backend client providing create_checkout_session()
            success_url: Redirect target after payment
            cancel_url: Redirect target if the user cancels

        Returns:
            The payment provider's checkout URL

        Raises:
            PlanNotFoundError: If the tier is not in the catalog
            PaymentNotConfiguredError: If the plan has no Stripe price ID
            CheckoutError: If the plan is free or the backend rejects the session
        """
        if not self.plans:
            await self.refresh(client)

        plan = self.match(tier)
        if plan.is_freemium:
            raise CheckoutError("The freemium plan does not require checkout.")

        readiness = checkout_readiness(plan)
        if not readiness.ready:
            logger.error(f"Plan {plan.name} (id={plan.id}) has no Stripe price ID")
            raise PaymentNotConfiguredError(
                "This plan is not configured for payment. Please contact support."
            )

        logger.info(f"Creating checkout session for plan {plan.name} (id={plan.id})")
        try:
            body = await client.create_checkout_session(plan.id, success_url, cancel_url)
        except httpx.HTTPError as e:
            logger.error(f"Checkout session request failed: {e}")
            sentry_sdk.capture_exception(e)
            raise CheckoutError(error_message(e) or "Failed to start checkout.") from e

        try:
            result = CheckoutSessionResponse.model_validate(body)
        except ValidationError:
            logger.error(f"Unexpected checkout session response: {body!r}")
            result = CheckoutSessionResponse()

        if not result.success or not result.url:
            raise CheckoutError(result.message or "Failed to start checkout.")

        return result.url
