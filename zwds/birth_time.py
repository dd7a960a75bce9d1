"""
Birth time utilities.

Handles:
- Timezone detection from birth coordinates (historical DST included)
- LMT (Local Mean Time) correction from clock time

The hour branch of a chart should reflect local solar time: clock time
is first converted back to the zone's standard time (DST stripped), then
shifted by 4 minutes per degree of longitude from the zone's meridian.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Union
from zoneinfo import ZoneInfo

from timezonefinder import TimezoneFinder

from zwds.errors import InvalidBirthInputError


logger = logging.getLogger(__name__)

_tf = None


def _finder() -> TimezoneFinder:
    global _tf
    if _tf is None:
        _tf = TimezoneFinder()
    return _tf


def parse_clock_time(birth_time: str) -> tuple[int, int]:
    """"HH:MM" → (hour, minute)."""
    try:
        hour, minute = map(int, birth_time.split(":"))
    except (AttributeError, ValueError):
        raise InvalidBirthInputError(f"Birth time must be HH:MM, got {birth_time!r}") from None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidBirthInputError(f"Birth time out of range: {birth_time!r}")
    return hour, minute


def lmt_correction(longitude: float, standard_meridian: float) -> float:
    """
    Local Mean Time correction in minutes.

    Args:
        longitude: birth location longitude in degrees (east positive)
        standard_meridian: timezone standard meridian (UTC offset × 15)

    Returns:
        Correction in minutes (negative = subtract from clock time)

    Example:
        Nanning (108.37°E) on China time (120°E): (108.37 - 120.0) * 4 = -46.52 min
    """
    return (longitude - standard_meridian) * 4.0


def utc_offset_for(latitude: float, longitude: float, birth_date: date,
                   birth_time: str) -> tuple[float, float, str, bool]:
    """
    Determine UTC offset from coordinates and date.

    Returns:
        (clock_offset, standard_offset, timezone_name, dst_detected)

        clock_offset:    what the clock was set to (includes DST if active)
        standard_offset: the zone's standard (non-DST) offset
    """
    tz_name = _finder().timezone_at(lat=latitude, lng=longitude)
    if tz_name is None:
        raise InvalidBirthInputError(f"Could not determine timezone for ({latitude}, {longitude})")

    hour, minute = parse_clock_time(birth_time)
    local_dt = datetime(birth_date.year, birth_date.month, birth_date.day,
                        hour, minute, tzinfo=ZoneInfo(tz_name))
    clock_offset = local_dt.utcoffset().total_seconds() / 3600

    dst = local_dt.dst()
    dst_detected = dst is not None and dst.total_seconds() > 0
    standard_offset = clock_offset - dst.total_seconds() / 3600 if dst_detected else clock_offset

    return clock_offset, standard_offset, tz_name, dst_detected


def local_mean_time(birth_date: Union[date, str], birth_time: str, longitude: float,
                    latitude: Optional[float] = None,
                    utc_offset: Optional[float] = None) -> dict:
    """
    Convert clock time at the birth place to Local Mean Time.

    Args:
        birth_date: date or "YYYY-MM-DD"
        birth_time: "HH:MM" local clock time
        longitude: east positive
        latitude: needed only for timezone detection
        utc_offset: manual standard offset in hours; skips detection

    Returns:
        dict with 'lmt' (datetime), 'lmt_correction_minutes', 'timezone',
        'standard_offset', 'dst_detected'. The LMT date can differ from
        the clock date when the correction crosses midnight.
    """
    if isinstance(birth_date, str):
        birth_date = datetime.strptime(birth_date, "%Y-%m-%d").date()
    hour, minute = parse_clock_time(birth_time)
    clock_dt = datetime(birth_date.year, birth_date.month, birth_date.day, hour, minute)

    if utc_offset is not None:
        standard_offset, tz_name, dst_detected = utc_offset, "manual", False
        standard_dt = clock_dt
    else:
        if latitude is None:
            raise InvalidBirthInputError("Latitude is required when utc_offset is not given")
        clock_offset, standard_offset, tz_name, dst_detected = utc_offset_for(
            latitude, longitude, birth_date, birth_time
        )
        # Convert clock time to standard time first
        standard_dt = clock_dt - timedelta(hours=clock_offset - standard_offset)

    correction = lmt_correction(longitude, standard_offset * 15)
    lmt = standard_dt + timedelta(minutes=correction)
    logger.debug("Clock %s (%s) → LMT %s (%+.1f min)", clock_dt, tz_name, lmt, correction)

    return {
        "lmt": lmt,
        "lmt_correction_minutes": round(correction, 2),
        "timezone": tz_name,
        "standard_offset": standard_offset,
        "dst_detected": dst_detected,
    }


# Quick verification
if __name__ == "__main__":
    result = local_mean_time("1990-03-15", "10:30", longitude=-122.4194, utc_offset=-8)
    print(f"San Francisco 10:30 PST → LMT {result['lmt']:%H:%M} "
          f"({result['lmt_correction_minutes']:+.1f} min)")
