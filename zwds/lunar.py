"""
Chinese lunisolar calendar over a fixed table (1900-2100).

Handles:
- Bit-packed year table, decoded once at import into LunarYear records
- Solar → lunar conversion (day offset from the 1900-01-31 epoch)
- Lunar → solar conversion
- Year / month length queries

Each table entry packs one lunar year:
  bits 0-3    leap month number (0 = no leap month)
  bits 4-15   months 12..1, bit set = 30-day month (else 29)
  bit 16      leap month length, set = 30 days (else 29)

Day arithmetic goes through Swiss Ephemeris Julian Days so that no
astronomy is involved, only the calendar table.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

import swisseph as swe

from zwds.errors import InvalidDateError, OutOfRangeError


# ============================================================
# CALENDAR TABLE
# ============================================================

FIRST_TABLE_YEAR = 1900
LAST_TABLE_YEAR = 2100

# 1900-01-31 is lunar 1900-01-01
FIRST_SUPPORTED_DATE = date(1900, 1, 31)
LAST_SUPPORTED_DATE = date(2100, 12, 31)

LUNAR_INFO = (
    0x04bd8, 0x04ae0, 0x0a570, 0x054d5, 0x0d260, 0x0d950, 0x16554, 0x056a0, 0x09ad0, 0x055d2,  # 1900
    0x04ae0, 0x0a5b6, 0x0a4d0, 0x0d250, 0x1d255, 0x0b540, 0x0d6a0, 0x0ada2, 0x095b0, 0x14977,  # 1910
    0x04970, 0x0a4b0, 0x0b4b5, 0x06a50, 0x06d40, 0x1ab54, 0x02b60, 0x09570, 0x052f2, 0x04970,  # 1920
    0x06566, 0x0d4a0, 0x0ea50, 0x16a95, 0x05ad0, 0x02b60, 0x186e3, 0x092e0, 0x1c8d7, 0x0c950,  # 1930
    0x0d4a0, 0x1d8a6, 0x0b550, 0x056a0, 0x1a5b4, 0x025d0, 0x092d0, 0x0d2b2, 0x0a950, 0x0b557,  # 1940
    0x06ca0, 0x0b550, 0x15355, 0x04da0, 0x0a5b0, 0x14573, 0x052b0, 0x0a9a8, 0x0e950, 0x06aa0,  # 1950
    0x0aea6, 0x0ab50, 0x04b60, 0x0aae4, 0x0a570, 0x05260, 0x0f263, 0x0d950, 0x05b57, 0x056a0,  # 1960
    0x096d0, 0x04dd5, 0x04ad0, 0x0a4d0, 0x0d4d4, 0x0d250, 0x0d558, 0x0b540, 0x0b6a0, 0x195a6,  # 1970
    0x095b0, 0x049b0, 0x0a974, 0x0a4b0, 0x0b27a, 0x06a50, 0x06d40, 0x0af46, 0x0ab60, 0x09570,  # 1980
    0x04af5, 0x04970, 0x064b0, 0x074a3, 0x0ea50, 0x06b58, 0x05ac0, 0x0ab60, 0x096d5, 0x092e0,  # 1990
    0x0c960, 0x0d954, 0x0d4a0, 0x0da50, 0x07552, 0x056a0, 0x0abb7, 0x025d0, 0x092d0, 0x0cab5,  # 2000
    0x0a950, 0x0b4a0, 0x0baa4, 0x0ad50, 0x055d9, 0x04ba0, 0x0a5b0, 0x15176, 0x052b0, 0x0a930,  # 2010
    0x07954, 0x06aa0, 0x0ad50, 0x05b52, 0x04b60, 0x0a6e6, 0x0a4e0, 0x0d260, 0x0ea65, 0x0d530,  # 2020
    0x05aa0, 0x076a3, 0x096d0, 0x04afb, 0x04ad0, 0x0a4d0, 0x1d0b6, 0x0d250, 0x0d520, 0x0dd45,  # 2030
    0x0b5a0, 0x056d0, 0x055b2, 0x049b0, 0x0a577, 0x0a4b0, 0x0aa50, 0x1b255, 0x06d20, 0x0ada0,  # 2040
    0x14b63, 0x09370, 0x049f8, 0x04970, 0x064b0, 0x168a6, 0x0ea50, 0x06b20, 0x1a6c4, 0x0aae0,  # 2050
    0x0a2e0, 0x0d2e3, 0x0c960, 0x0d557, 0x0d4a0, 0x0da50, 0x05d55, 0x056a0, 0x0a6d0, 0x055d4,  # 2060
    0x052d0, 0x0a9b8, 0x0a950, 0x0b4a0, 0x0b6a6, 0x0ad50, 0x055a0, 0x0aba4, 0x0a5b0, 0x052b0,  # 2070
    0x0b273, 0x06930, 0x07337, 0x06aa0, 0x0ad50, 0x14b55, 0x04b60, 0x0a570, 0x054e4, 0x0d160,  # 2080
    0x0e968, 0x0d520, 0x0daa0, 0x16aa6, 0x056d0, 0x04ae0, 0x0a9d4, 0x0a2d0, 0x0d150, 0x0f252,  # 2090
    0x0d520,                                                                                    # 2100
)


@dataclass(frozen=True)
class LunarYear:
    year: int
    month_lengths: tuple  # 12 regular months, 29 or 30 days each
    leap_month: Optional[int]  # month the leap month follows, None if no leap
    leap_length: Optional[int]

    @property
    def total_days(self) -> int:
        return sum(self.month_lengths) + (self.leap_length or 0)

    def months(self) -> list[tuple[int, bool, int]]:
        """Months in calendar order as (month, is_leap, length), leap month after its regular month."""
        sequence = []
        for month, length in enumerate(self.month_lengths, start=1):
            sequence.append((month, False, length))
            if month == self.leap_month:
                sequence.append((month, True, self.leap_length))
        return sequence

    def month_length(self, month: int, is_leap: bool = False) -> int:
        if not 1 <= month <= 12:
            raise InvalidDateError(f"Lunar month must be 1-12, got {month}")
        if is_leap:
            if self.leap_month != month:
                raise InvalidDateError(f"Lunar year {self.year} has no leap month {month}")
            return self.leap_length
        return self.month_lengths[month - 1]


@dataclass(frozen=True)
class LunarDate:
    year: int
    month: int
    day: int
    is_leap: bool = False

    def __str__(self):
        leap = "閏" if self.is_leap else ""
        return f"{self.year}年{leap}{self.month}月{self.day}日"

    def to_dict(self):
        return {"year": self.year, "month": self.month, "day": self.day, "is_leap": self.is_leap}


def decode_year(year: int, info: int) -> LunarYear:
    """Unpack one table entry."""
    month_lengths = tuple(30 if info & (0x10000 >> m) else 29 for m in range(1, 13))
    leap_month = info & 0xf
    if leap_month == 0:
        return LunarYear(year, month_lengths, None, None)
    if leap_month > 12:
        raise ValueError(f"Lunar table entry for {year} has invalid leap month {leap_month}")
    leap_length = 30 if info & 0x10000 else 29
    return LunarYear(year, month_lengths, leap_month, leap_length)


def _decode_table() -> dict[int, LunarYear]:
    expected = LAST_TABLE_YEAR - FIRST_TABLE_YEAR + 1
    if len(LUNAR_INFO) != expected:
        raise ValueError(f"Lunar table has {len(LUNAR_INFO)} entries, expected {expected}")
    return {FIRST_TABLE_YEAR + i: decode_year(FIRST_TABLE_YEAR + i, info)
            for i, info in enumerate(LUNAR_INFO)}


LUNAR_YEARS = _decode_table()


# ============================================================
# CONVERSION
# ============================================================

def _julian_day(year: int, month: int, day: int) -> float:
    return swe.julday(year, month, day, 0.0)


_EPOCH_JD = _julian_day(FIRST_SUPPORTED_DATE.year, FIRST_SUPPORTED_DATE.month, FIRST_SUPPORTED_DATE.day)


def lunar_year(year: int) -> LunarYear:
    """Decoded table record for a lunar year."""
    try:
        return LUNAR_YEARS[year]
    except KeyError:
        raise OutOfRangeError(
            f"Lunar year {year} is outside the supported range "
            f"{FIRST_TABLE_YEAR}-{LAST_TABLE_YEAR}"
        ) from None


def year_days(year: int) -> int:
    """Number of days in a lunar year (348 + long months + leap month)."""
    return lunar_year(year).total_days


def solar_to_lunar(year: int, month: int, day: int) -> LunarDate:
    """
    Convert a Gregorian date to a lunar date.

    Args:
        year, month, day: Gregorian date between 1900-01-31 and 2100-12-31

    Returns:
        LunarDate

    Raises:
        InvalidDateError: the Gregorian date does not exist
        OutOfRangeError: the date is outside the table range

    Example:
        solar_to_lunar(2023, 3, 22) → LunarDate(2023, 2, 1, is_leap=True)
    """
    try:
        solar = date(year, month, day)
    except (TypeError, ValueError) as e:
        raise InvalidDateError(f"Invalid solar date {year}-{month}-{day}: {e}") from e

    if not FIRST_SUPPORTED_DATE <= solar <= LAST_SUPPORTED_DATE:
        raise OutOfRangeError(
            f"{solar.isoformat()} is outside the supported range "
            f"{FIRST_SUPPORTED_DATE.isoformat()} to {LAST_SUPPORTED_DATE.isoformat()}"
        )

    offset = int(_julian_day(year, month, day) - _EPOCH_JD)

    # Walk whole lunar years
    current = FIRST_TABLE_YEAR
    while offset >= year_days(current):
        offset -= year_days(current)
        current += 1

    # Walk months; a zero remainder lands on day 1 of the next month in
    # sequence, which is the leap month right after its regular month.
    for lunar_month, is_leap, length in LUNAR_YEARS[current].months():
        if offset < length:
            return LunarDate(current, lunar_month, offset + 1, is_leap)
        offset -= length

    # total_days is the sum of the month lengths, so the loop always returns
    raise AssertionError(f"Day offset overflowed lunar year {current}")


def lunar_to_solar(year: int, month: int, day: int, is_leap: bool = False) -> date:
    """
    Convert a lunar date back to its Gregorian date.

    Raises:
        InvalidDateError: month/day do not exist in that lunar year
        OutOfRangeError: year is outside the table range, or the result
            falls after the last supported solar date
    """
    record = lunar_year(year)
    length = record.month_length(month, is_leap)
    if not 1 <= day <= length:
        raise InvalidDateError(
            f"Lunar {'leap ' if is_leap else ''}month {month} of {year} has {length} days, got day {day}"
        )

    offset = sum(year_days(y) for y in range(FIRST_TABLE_YEAR, year))
    for m, leap, m_length in record.months():
        if m == month and leap == is_leap:
            break
        offset += m_length
    offset += day - 1

    y, m, d, _ = swe.revjul(_EPOCH_JD + offset)
    solar = date(y, m, d)
    if solar > LAST_SUPPORTED_DATE:
        raise OutOfRangeError(f"Lunar {year}-{month}-{day} falls after {LAST_SUPPORTED_DATE.isoformat()}")
    return solar


# Quick verification
if __name__ == "__main__":
    for y, m, d in [(1900, 1, 31), (1990, 1, 1), (2023, 3, 22), (2100, 12, 31)]:
        print(f"{y}-{m:02d}-{d:02d} → {solar_to_lunar(y, m, d)}")
    print(f"Lunar 2024-01-01 → {lunar_to_solar(2024, 1, 1)}")
