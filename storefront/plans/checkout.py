"""Checkout errors, response contract and redirect targets."""

from pydantic import BaseModel

from storefront.content.localization import locale_key


PAYMENT_NOT_CONFIGURED = "payment not configured"


class CheckoutError(Exception):
    """Raised when a purchase cannot be started. The message is user-visible."""
    pass


class PlanNotFoundError(CheckoutError):
    """Raised when the chosen tier is not in the loaded catalog."""
    pass


class PaymentNotConfiguredError(CheckoutError):
    """Raised when a paid plan has no payment-provider price identifier."""
    pass


class CheckoutSessionResponse(BaseModel):
    """Schema of the checkout-session creation response."""

    success: bool = False
    url: str | None = None
    message: str | None = None


def checkout_redirects(origin: str, locale: str | None) -> tuple[str, str]:
    """
    Build the success and cancel redirect targets for a checkout session.

    Args:
        origin: Storefront origin, e.g. "https://shop.example.com"
        locale: Current UI locale

    Returns:
        Tuple of (success_url, cancel_url). The success URL keeps the
        provider's {CHECKOUT_SESSION_ID} placeholder for it to fill in.
    """
    base = f"{origin.rstrip('/')}/{locale_key(locale)}"
    success_url = f"{base}?payment=success&session_id={{CHECKOUT_SESSION_ID}}"
    cancel_url = f"{base}/subscription?payment=cancel"
    return success_url, cancel_url
