"""Named calendar anchors used to ground relative date expressions."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

DATE_FORMAT = "%Y-%m-%d"

WEEKDAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

WEEKDAY_LABELS = {
    "monday": "월요일",
    "tuesday": "화요일",
    "wednesday": "수요일",
    "thursday": "목요일",
    "friday": "금요일",
    "saturday": "토요일",
    "sunday": "일요일",
}


@dataclass(frozen=True)
class DateAnchors:
    """Concrete dates for the relative expressions the prompt understands.

    Attributes:
        today: Local calendar date of the reference instant
        tomorrow: today + 1 day
        day_after_tomorrow: today + 2 days
        this_week: Weekday name -> next occurrence within 7 days (today included)
        next_week: Weekday name -> this_week date + 7 days
        weekday_name: English weekday name of today
    """

    today: date
    tomorrow: date
    day_after_tomorrow: date
    this_week: dict[str, date] = field(default_factory=dict)
    next_week: dict[str, date] = field(default_factory=dict)
    weekday_name: str = ""

    @property
    def year(self) -> int:
        return self.today.year

    @property
    def month(self) -> int:
        return self.today.month

    @property
    def day(self) -> int:
        return self.today.day

    def formatted(self) -> dict[str, str]:
        """Return every anchor as a YYYY-MM-DD string keyed by anchor name."""
        anchors = {
            "today": format_date(self.today),
            "tomorrow": format_date(self.tomorrow),
            "day_after_tomorrow": format_date(self.day_after_tomorrow),
        }
        for name in WEEKDAY_NAMES:
            anchors[f"this_{name}"] = format_date(self.this_week[name])
            anchors[f"next_{name}"] = format_date(self.next_week[name])
        return anchors


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def _this_weekday(today: date, target: int) -> date:
    diff = target - today.weekday()
    return today + timedelta(days=diff if diff >= 0 else 7 + diff)


def resolve_date_anchors(now: datetime) -> DateAnchors:
    """Compute the anchor table for a reference instant.

    Only the local calendar date of ``now`` is used, so the time of day and
    the offset never move an anchor to another day. Pass an aware datetime
    already converted to the service timezone.

    Args:
        now: Reference instant

    Returns:
        DateAnchors for the day containing ``now``
    """
    today = now.date()

    this_week = {name: _this_weekday(today, index) for index, name in enumerate(WEEKDAY_NAMES)}
    next_week = {name: day + timedelta(days=7) for name, day in this_week.items()}

    return DateAnchors(
        today=today,
        tomorrow=today + timedelta(days=1),
        day_after_tomorrow=today + timedelta(days=2),
        this_week=this_week,
        next_week=next_week,
        weekday_name=WEEKDAY_NAMES[today.weekday()],
    )
