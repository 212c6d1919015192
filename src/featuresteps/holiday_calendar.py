"""
featuresteps/holiday_calendar.py

Registry of supported holidays and date-to-indicator helpers.

Extended Description
--------------------
Holidays are identified by the names used in financial calendar libraries
(e.g. "ChristmasDay", "USThanksgivingDay"). Each name maps to a
`pandas.tseries.holiday.Holiday` rule that yields exactly one observance per
year. Dates are the nominal calendar dates: no weekend observance shift is
applied, and US federal holidays are generated for all years (no start date).

Main Components
---------------
- supported_holidays: names accepted by HolidayFeatures.
- validate_holidays: raise UnknownHolidayError for unsupported names.
- observances_for_years: dates a holiday falls on for a set of years.
- is_holiday: 0/1 indicator for a sequence of dates.
- get_holiday_features: one indicator column per holiday.

Usage Example
-------------
>>> days = pd.Series(pd.date_range("2000-12-20", periods=41))
>>> get_holiday_features(days, ["ChristmasDay", "NewYearsDay"]).sum()
ChristmasDay    1
NewYearsDay     1
dtype: int64
"""

from __future__ import annotations

import datetime
from typing import Dict, Iterable, Sequence, Set

import numpy as np
import pandas as pd
from pandas.tseries.holiday import MO, TH, Holiday
from pandas.tseries.offsets import DateOffset, Day, Easter

from .exceptions import UnknownHolidayError


def _easter(name: str, days: int = 0) -> Holiday:
    offset = [Easter(), Day(days)] if days else Easter()
    return Holiday(name, month=1, day=1, offset=offset)


_RULES: Dict[str, Holiday] = {
    # Fixed-date holidays
    "NewYearsDay": Holiday("NewYearsDay", month=1, day=1),
    "Epiphany": Holiday("Epiphany", month=1, day=6),
    "LaborDay": Holiday("LaborDay", month=5, day=1),
    "Assumption": Holiday("Assumption", month=8, day=15),
    "AllSaints": Holiday("AllSaints", month=11, day=1),
    "AllSouls": Holiday("AllSouls", month=11, day=2),
    "ChristmasEve": Holiday("ChristmasEve", month=12, day=24),
    "ChristmasDay": Holiday("ChristmasDay", month=12, day=25),
    "BoxingDay": Holiday("BoxingDay", month=12, day=26),
    # Easter-relative holidays
    "AshWednesday": _easter("AshWednesday", -46),
    "GoodFriday": _easter("GoodFriday", -2),
    "EasterSunday": _easter("EasterSunday"),
    "EasterMonday": _easter("EasterMonday", 1),
    "Ascension": _easter("Ascension", 39),
    "PentecostSunday": _easter("PentecostSunday", 49),
    "PentecostMonday": _easter("PentecostMonday", 50),
    "CorpusChristi": _easter("CorpusChristi", 60),
    # United States
    "USNewYearsDay": Holiday("USNewYearsDay", month=1, day=1),
    "USMLKingsBirthday": Holiday(
        "USMLKingsBirthday", month=1, day=1, offset=DateOffset(weekday=MO(3))
    ),
    "USPresidentsDay": Holiday(
        "USPresidentsDay", month=2, day=1, offset=DateOffset(weekday=MO(3))
    ),
    "USMemorialDay": Holiday(
        "USMemorialDay", month=5, day=31, offset=DateOffset(weekday=MO(-1))
    ),
    "USIndependenceDay": Holiday("USIndependenceDay", month=7, day=4),
    "USLaborDay": Holiday(
        "USLaborDay", month=9, day=1, offset=DateOffset(weekday=MO(1))
    ),
    "USColumbusDay": Holiday(
        "USColumbusDay", month=10, day=1, offset=DateOffset(weekday=MO(2))
    ),
    "USVeteransDay": Holiday("USVeteransDay", month=11, day=11),
    "USThanksgivingDay": Holiday(
        "USThanksgivingDay", month=11, day=1, offset=DateOffset(weekday=TH(4))
    ),
    "USChristmasDay": Holiday("USChristmasDay", month=12, day=25),
}


def supported_holidays() -> frozenset:
    return frozenset(_RULES)


def validate_holidays(names: Iterable[str]) -> None:
    names = [names] if isinstance(names, str) else list(names)
    if not names:
        raise UnknownHolidayError("At least one holiday must be given.")
    unknown = [n for n in names if n not in _RULES]
    if unknown:
        raise UnknownHolidayError(
            "Invalid `holidays` value(s): "
            + ", ".join(f"`{n}`" for n in unknown)
            + ". See featuresteps.holiday_calendar.supported_holidays()."
        )


def observances_for_years(name: str, years: Iterable[int]) -> Set[datetime.date]:
    """
    Dates on which holiday `name` falls, one per requested year.

    Raises
    ------
    UnknownHolidayError
        If `name` is not a supported holiday.
    """
    validate_holidays([name])
    years = sorted({int(y) for y in years})
    if not years:
        return set()

    rule = _RULES[name]
    dates = rule.dates(
        pd.Timestamp(years[0], 1, 1),
        pd.Timestamp(years[-1], 12, 31),
    )
    wanted = set(years)
    return {d.date() for d in dates if d.year in wanted}


def _as_days(dates) -> pd.Series:
    dt = pd.to_datetime(pd.Series(dates).reset_index(drop=True))
    if dt.dt.tz is not None:
        dt = dt.dt.tz_localize(None)
    return dt.dt.normalize()


def is_holiday(name: str, dates) -> np.ndarray:
    """0/1 indicator of whether each date is an observance of `name`; missing dates give 0."""
    days = _as_days(dates)
    years = days.dt.year.dropna().unique()
    observances = observances_for_years(name, years)
    hits = days.isin(pd.to_datetime(sorted(observances)))
    return hits.to_numpy().astype(int)


def get_holiday_features(dates, holidays: Sequence[str]) -> pd.DataFrame:
    """One 0/1 column per holiday, named after the holiday, row-aligned with `dates`."""
    holidays = [holidays] if isinstance(holidays, str) else list(holidays)
    return pd.DataFrame({h: is_holiday(h, dates) for h in holidays})


__all__ = [
    "supported_holidays",
    "validate_holidays",
    "observances_for_years",
    "is_holiday",
    "get_holiday_features",
]
