from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.api.deps import get_current_user, get_session, require_roles
from clinic.models.physiotherapist import PhysiotherapistCreate, PhysiotherapistPublic
from clinic.models.user import UserRole
from clinic.services.physiotherapist_service import (
    add_physiotherapist,
    list_physiotherapists,
    remove_physiotherapist,
)

router = APIRouter(prefix="/physiotherapists", tags=["physiotherapists"])


@router.get("", response_model=list[PhysiotherapistPublic], dependencies=[Depends(get_current_user)])
async def all_physiotherapists(
    session: AsyncSession = Depends(get_session),
) -> list[PhysiotherapistPublic]:
    return [PhysiotherapistPublic.model_validate(p) for p in await list_physiotherapists(session)]


@router.post(
    "",
    response_model=PhysiotherapistPublic,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(UserRole.admin))],
)
async def create_physiotherapist(
    body: PhysiotherapistCreate,
    session: AsyncSession = Depends(get_session),
) -> PhysiotherapistPublic:
    physio = await add_physiotherapist(session, body)
    return PhysiotherapistPublic.model_validate(physio)


@router.delete(
    "/{physiotherapist_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_roles(UserRole.admin))],
)
async def delete_physiotherapist(
    physiotherapist_id: str,
    session: AsyncSession = Depends(get_session),
) -> None:
    await remove_physiotherapist(session, physiotherapist_id)
