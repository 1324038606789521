from __future__ import annotations

import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# Pakistan Standard Time (UTC+5, no DST): the market the prices are quoted in
DEFAULT_TREND_TIMEZONE = "Asia/Karachi"


def trend_timezone() -> ZoneInfo:
    """
    Timezone used to bucket observations into calendar months.

    Read from TREND_TIMEZONE (IANA name); defaults to Asia/Karachi.
    """
    name = os.getenv("TREND_TIMEZONE") or DEFAULT_TREND_TIMEZONE

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise RuntimeError(f"TREND_TIMEZONE '{name}' is not a known IANA timezone") from exc
