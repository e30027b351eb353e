from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.api.deps import STAFF_ROLES, get_current_user, get_session, require_roles
from clinic.api.schemas.slots import (
    AvailableSlotsResponse,
    BookableDateInfo,
    SlotInfo,
    TemplateSlotInfo,
)
from clinic.services.slot_service import (
    bookable_dates,
    get_day_schedule,
    weekday_name,
    weekly_slot_template,
)

router = APIRouter(prefix="/slots", tags=["slots"])


@router.get("/dates", response_model=list[BookableDateInfo], dependencies=[Depends(require_roles(*STAFF_ROLES))])
async def available_dates() -> list[BookableDateInfo]:
    """Bookable dates from today across the booking horizon, Sundays excluded."""
    return [BookableDateInfo(**d._asdict()) for d in bookable_dates()]


@router.get("/available", response_model=AvailableSlotsResponse, dependencies=[Depends(require_roles(*STAFF_ROLES))])
async def available_slots(
    date_param: date = Query(..., alias="date"),
    session: AsyncSession = Depends(get_session),
) -> AvailableSlotsResponse:
    """Slots offered on the date, each flagged available unless a pending/approved booking holds it."""
    schedule = await get_day_schedule(session, date_param)
    return AvailableSlotsResponse(
        date=date_param.isoformat(),
        weekday=weekday_name(date_param),
        slots=[SlotInfo(time_slot=s, available=avail) for s, avail in schedule],
    )


@router.get("/template", response_model=list[TemplateSlotInfo], dependencies=[Depends(get_current_user)])
async def slot_template() -> list[TemplateSlotInfo]:
    return [TemplateSlotInfo(**s._asdict()) for s in weekly_slot_template()]
