"""Order identifiers and public tracking codes.

Both identifiers combine the current epoch milliseconds with a random
base36 suffix, so they can be generated on any worker without a shared
counter, a lock or a round trip to the store:

    ORDER-<epoch millis>-<9 chars>
    TRACK-<last 6 digits of epoch millis>-<6 chars>

Tracking codes are always issued in uppercase and matched case-insensitively.
"""

import secrets
import string
import time

ORDER_ID_PREFIX = "ORDER"
TRACKING_CODE_PREFIX = "TRACK"

_SUFFIX_ALPHABET = string.digits + string.ascii_uppercase


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def _random_suffix(length: int) -> str:
    return "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(length))


def new_order_id() -> str:
    """Return a new order identifier, e.g. ``ORDER-1718000000000-7K2M9QX4B``."""
    return f"{ORDER_ID_PREFIX}-{_epoch_millis()}-{_random_suffix(9)}"


def new_tracking_code() -> str:
    """Return a new public tracking code, e.g. ``TRACK-000123-ABCDEF``."""
    millis = str(_epoch_millis())[-6:]
    return f"{TRACKING_CODE_PREFIX}-{millis}-{_random_suffix(6)}"


def normalize_tracking_code(code: str | None) -> str:
    """Canonical form used for storage and lookups."""
    return (code or "").strip().upper()
