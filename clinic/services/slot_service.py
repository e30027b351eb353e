from collections.abc import Iterator
from datetime import date, timedelta
from typing import NamedTuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.core.config import settings
from clinic.models.appointment import ACTIVE_STATUSES, Appointment

# Indexed by date.weekday(); independent of the process locale
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
SATURDAY = "Saturday"
SUNDAY = "Sunday"


class BookableDate(NamedTuple):
    value: date
    label: str  # e.g. "Monday, Mar 10"
    weekday: str


class TemplateSlot(NamedTuple):
    id: str  # "<Weekday>-<index>"
    day: str
    time: str


def weekday_name(d: date) -> str:
    return WEEKDAY_NAMES[d.weekday()]


def date_label(d: date) -> str:
    return f"{weekday_name(d)}, {MONTH_ABBREVIATIONS[d.month - 1]} {d.day}"


class BookingWindow:
    """Dates from `start` over `horizon_days` days, Sundays excluded.

    Iteration is lazy and restartable: each iter() walks the window again.
    """

    def __init__(self, start: date, horizon_days: int) -> None:
        self.start = start
        self.horizon_days = horizon_days

    def __iter__(self) -> Iterator[BookableDate]:
        for offset in range(self.horizon_days):
            d = self.start + timedelta(days=offset)
            name = weekday_name(d)
            if name == SUNDAY:
                continue
            yield BookableDate(value=d, label=date_label(d), weekday=name)

    def __contains__(self, d: object) -> bool:
        if not isinstance(d, date):
            return False
        offset = (d - self.start).days
        return 0 <= offset < self.horizon_days and weekday_name(d) != SUNDAY


def bookable_dates(today: date | None = None, horizon_days: int | None = None) -> BookingWindow:
    return BookingWindow(
        start=today or date.today(),
        horizon_days=settings.booking_horizon_days if horizon_days is None else horizon_days,
    )


def slots_for_weekday(weekday: str) -> list[str]:
    """Slot labels offered on a weekday, in clinic order.

    Truncate to the day's slot count first, then drop the break label. With
    the default count of 5, "3:30 PM - 5:00 PM" is not offered Monday to
    Friday and booking it on those days raises InvalidSlot, although the
    reception booking screen used to list it.
    """
    if weekday == SUNDAY:
        return []
    count = settings.saturday_slot_count if weekday == SATURDAY else settings.weekday_slot_count
    truncated = settings.time_slot_labels[:count]
    return [label for label in truncated if label != settings.break_slot_label]


def slots_for_date(d: date) -> list[str]:
    return slots_for_weekday(weekday_name(d))


def is_slot_offered(d: date, time_slot: str) -> bool:
    return time_slot in slots_for_date(d)


def slot_sort_key(time_slot: str) -> int:
    """Position of a label in the clinic's day; unknown labels sort last."""
    try:
        return settings.time_slot_labels.index(time_slot)
    except ValueError:
        return len(settings.time_slot_labels)


def weekly_slot_template() -> list[TemplateSlot]:
    template: list[TemplateSlot] = []
    for day in WEEKDAY_NAMES:
        if day == SUNDAY:
            continue
        template.extend(
            TemplateSlot(id=f"{day}-{index}", day=day, time=label)
            for index, label in enumerate(slots_for_weekday(day))
        )
    return template


async def get_booked_time_slots(session: AsyncSession, d: date) -> set[str]:
    result = await session.execute(
        select(Appointment.time_slot).where(
            Appointment.appointment_date == d,
            Appointment.status.in_(ACTIVE_STATUSES),
        )
    )
    return {row[0] for row in result.all()}


async def is_slot_booked(session: AsyncSession, d: date, time_slot: str) -> bool:
    result = await session.execute(
        select(Appointment.id).where(
            Appointment.appointment_date == d,
            Appointment.time_slot == time_slot,
            Appointment.status.in_(ACTIVE_STATUSES),
        ).limit(1)
    )
    return result.first() is not None


async def get_day_schedule(session: AsyncSession, d: date) -> list[tuple[str, bool]]:
    """Returns list of (time_slot, available) for every slot offered on the date."""
    slots = slots_for_date(d)
    if not slots:
        return []
    booked = await get_booked_time_slots(session, d)
    return [(s, s not in booked) for s in slots]
