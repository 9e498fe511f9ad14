"""Deep links into peer-to-peer payment apps."""

from typing import Literal
from urllib.parse import quote

PaymentApp = Literal["venmo", "zelle", "cashapp"]

_APP_NAMES: dict[str, str] = {"venmo": "Venmo", "zelle": "Zelle", "cashapp": "Cash App"}


def generate_payment_link(app: PaymentApp, handle: str, amount: float, note: str | None = None) -> str | None:
    """Return a pre-filled payment URL, or None when the app needs a manual payment."""
    clean = handle[1:] if handle[:1] in ("@", "$") else handle

    if app == "venmo":
        encoded = quote(note or "Trip settlement", safe="-_.!~*'()")
        return f"venmo://paycharge?txn=pay&recipients={clean}&amount={amount:.2f}&note={encoded}"
    if app == "cashapp":
        return f"https://cash.app/${clean}/{amount:.2f}"
    return None


def supports_deep_link(app: str) -> bool:
    return app in ("venmo", "cashapp")


def payment_app_name(app: str) -> str:
    return _APP_NAMES[app]
