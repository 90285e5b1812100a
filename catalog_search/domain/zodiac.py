"""
Western zodiac sign for a month-day birthday.

Birthdays are stored without a year ("8-11", "01-01"), so they are pinned to a
fixed non-leap reference year before the sign is looked up.
"""
from datetime import date, datetime

REFERENCE_YEAR = 2001

# (month, day) each sign starts on, in calendar order; Capricorn wraps the year.
_SIGN_STARTS: tuple[tuple[int, int, str], ...] = (
    (1, 20, "Aquarius"),
    (2, 19, "Pisces"),
    (3, 21, "Aries"),
    (4, 20, "Taurus"),
    (5, 21, "Gemini"),
    (6, 21, "Cancer"),
    (7, 23, "Leo"),
    (8, 23, "Virgo"),
    (9, 23, "Libra"),
    (10, 23, "Scorpio"),
    (11, 22, "Sagittarius"),
    (12, 22, "Capricorn"),
)


def parse_birthday(birthday: str) -> date:
    """Parse "M-D" / "MM-DD" against the reference year. Raises ValueError."""
    return datetime.strptime(f"{birthday.strip()}-{REFERENCE_YEAR}", "%m-%d-%Y").date()


def zodiac_sign(birthday: str) -> str:
    """Capitalised sign name, e.g. ``zodiac_sign("8-11") == "Leo"``."""
    day = parse_birthday(birthday)
    sign = "Capricorn"
    for month, start_day, name in _SIGN_STARTS:
        if (day.month, day.day) >= (month, start_day):
            sign = name
    return sign
