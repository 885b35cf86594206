"""
Week arithmetic for the planner.

Week 1 starts on the Monday on or before January 1, so it can begin in the
previous December. Weeks then run back to back until the week that contains
December 31. All functions are pure; nothing is cached.

    year_start_monday(2025)  -> 2024-12-30
    total_weeks(2025)        -> 53
    week_start(2025, 1)      -> 2024-12-30
    week_end(2025, 1)        -> 2025-01-05
"""
import calendar
from datetime import date, timedelta

MONTH_NAMES = list(calendar.month_name)[1:]

SEASONS = {
    12: "winter", 1: "winter", 2: "winter",
    3: "spring", 4: "spring", 5: "spring",
    6: "summer", 7: "summer", 8: "summer",
    9: "fall", 10: "fall", 11: "fall",
}

WEEK_STARTS = {"monday": 0, "sunday": 6}


def year_start_monday(year: int) -> date:
    """Monday on or before January 1 of `year`."""
    first_day = date(year, 1, 1)
    days_back = first_day.weekday()  # Monday=0 .. Sunday=6
    return first_day - timedelta(days=days_back)


def total_weeks(year: int) -> int:
    """
    Number of weeks from year_start_monday(year) through the week holding
    December 31. Always 53 or 54 for Gregorian years.
    """
    days = (date(year, 12, 31) - year_start_monday(year)).days
    return max(1, days // 7 + 1)


def week_number_for_date(d: date, year: int | None = None) -> int:
    """
    1-based week number of `d`, counted from year_start_monday(year).

    `year` defaults to d.year. Passing the following year resolves late
    December dates into that year's week 1 when its Monday falls in December.
    """
    start = year_start_monday(d.year if year is None else year)
    return (d - start).days // 7 + 1


def week_start(year: int, week_num: int) -> date:
    return year_start_monday(year) + timedelta(days=(week_num - 1) * 7)


def week_end(year: int, week_num: int) -> date:
    return week_start(year, week_num) + timedelta(days=6)


def week_dates(year: int, week_num: int) -> list[date]:
    """The seven dates (Monday first) of a week."""
    start = week_start(year, week_num)
    return [start + timedelta(days=i) for i in range(7)]


def first_week_of_month(year: int, month: int) -> int:
    return week_number_for_date(date(year, month, 1), year)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def season_for_month(month: int) -> str:
    return SEASONS[month]


def month_for_week(year: int, week_num: int) -> int:
    """
    Month a week is filed under: the month of its Monday, or January for a
    week 1 that starts in the previous December.
    """
    return max(week_start(year, week_num), date(year, 1, 1)).month


def weeks_for_month(year: int, month: int) -> list[int]:
    return [
        w for w in range(1, total_weeks(year) + 1)
        if month_for_week(year, w) == month
    ]


def week_to_month_letter_map(year: int) -> dict[int, str]:
    """week number -> initial of the month whose 1st falls in that week."""
    return {
        first_week_of_month(year, month): MONTH_NAMES[month - 1][0]
        for month in range(1, 13)
    }


def weekday_order(first_day: str = "monday") -> list[int]:
    """`date.weekday()` values in column order for a week starting on `first_day`."""
    if first_day not in WEEK_STARTS:
        raise ValueError(f"first_day must be one of {', '.join(WEEK_STARTS)}, got {first_day!r}")
    start = WEEK_STARTS[first_day]
    return [(start + i) % 7 for i in range(7)]


def days_in_year(year: int) -> int:
    return 366 if calendar.isleap(year) else 365
