from __future__ import annotations

from typing import Any


def safe_int(value: Any) -> int:
    """
    Platform counters arrive as decimal strings ("12345").
    None, "", junk -> 0. Never raises.
    """
    if value is None or isinstance(value, bool):
        return 0
    try:
        n = int(str(value).strip())
    except (TypeError, ValueError):
        return 0
    return n if n > 0 else 0
