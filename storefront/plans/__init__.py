"""Subscription plans: catalog, feature lists and checkout gating."""

from .catalog import (
    PlanCatalog,
    checkout_readiness,
    display_price,
    features_for,
    is_popular,
    parse_plan,
    sort_plans,
)
from .checkout import (
    CheckoutError,
    CheckoutSessionResponse,
    PaymentNotConfiguredError,
    PlanNotFoundError,
    checkout_redirects,
)
from .types import CheckoutReadiness, Plan

__all__ = [
    "PlanCatalog",
    "checkout_readiness",
    "display_price",
    "features_for",
    "is_popular",
    "parse_plan",
    "sort_plans",
    "CheckoutError",
    "CheckoutSessionResponse",
    "PaymentNotConfiguredError",
    "PlanNotFoundError",
    "checkout_redirects",
    "CheckoutReadiness",
    "Plan",
]
