"""
Type definitions for subscription plans.
"""

from dataclasses import dataclass
from typing import Any


FREEMIUM = "freemium"
BASIC = "basic"
PREMIUM = "premium"

# Display order of known tiers; unknown names sort after these
PLAN_ORDER = [FREEMIUM, BASIC, PREMIUM]


@dataclass
class Plan:
    """A subscription plan as returned by the public plans endpoint."""
    id: Any
    name: str
    display_name: str
    price: Any = None
    stripe_price_id: str | None = None
    max_devices: int | None = None
    video_quality: str | None = None
    downloadable_content: bool = False
    certificates: bool = False
    priority_support: bool = False
    ad_free: bool = False
    features_raw: Any = None  # list, JSON string, or free text
    description: str | None = None

    @property
    def tier(self) -> str:
        return self.name.strip().lower()

    @property
    def is_freemium(self) -> bool:
        return self.tier == FREEMIUM


@dataclass
class CheckoutReadiness:
    """Whether a purchase may be started for a plan."""
    ready: bool
    reason: str | None = None
