from __future__ import annotations

import time
from urllib.parse import quote

# Characters JavaScript's encodeURIComponent leaves untouched, beyond quote()'s own.
_URI_COMPONENT_SAFE = "!*'()"


def epoch_now() -> int:
    return int(time.time())


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def parse_timestamp(raw: str | None) -> int | None:
    """Parses a unix-seconds query value; zero, blank and non-numeric values yield None."""
    if raw is None:
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None
    return value or None
