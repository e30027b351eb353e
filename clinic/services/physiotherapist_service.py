import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.core.security import hash_password
from clinic.models.physiotherapist import Physiotherapist, PhysiotherapistCreate
from clinic.models.user import User, UserRole
from clinic.services.exceptions import EmailAlreadyRegistered, NotFound

logger = logging.getLogger(__name__)


async def list_physiotherapists(session: AsyncSession) -> list[Physiotherapist]:
    result = await session.execute(select(Physiotherapist).order_by(Physiotherapist.name))
    return list(result.scalars().all())


async def get_physiotherapist(session: AsyncSession, physiotherapist_id: str) -> Physiotherapist | None:
    result = await session.execute(
        select(Physiotherapist).where(Physiotherapist.id == physiotherapist_id)
    )
    return result.scalar_one_or_none()


async def add_physiotherapist(session: AsyncSession, data: PhysiotherapistCreate) -> Physiotherapist:
    """Create the physiotherapist and their login under the same id.

    Only the user whose id equals an appointment's physiotherapist_id can
    approve or decline it.
    """
    existing = await session.execute(
        select(Physiotherapist.id).where(Physiotherapist.email == data.email)
    )
    account = await session.execute(select(User.id).where(User.email == data.email))
    if existing.first() is not None or account.first() is not None:
        raise EmailAlreadyRegistered(f"An account with email {data.email} already exists")
    physio = Physiotherapist(**data.model_dump(exclude={"password"}))
    session.add(physio)
    session.add(
        User(
            id=physio.id,
            name=physio.name,
            email=physio.email,
            role=UserRole.physiotherapist,
            hashed_password=hash_password(data.password),
        )
    )
    await session.flush()
    await session.refresh(physio)
    logger.info("Physiotherapist %s added (%s)", physio.id, physio.name)
    return physio


async def remove_physiotherapist(session: AsyncSession, physiotherapist_id: str) -> None:
    """Appointments and patients keep their id reference; lookups fall back to "Unknown".

    The matching physiotherapist login is removed with the record.
    """
    physio = await get_physiotherapist(session, physiotherapist_id)
    if not physio:
        raise NotFound(f"Physiotherapist {physiotherapist_id} not found")
    user = await session.get(User, physiotherapist_id)
    if user and user.role == UserRole.physiotherapist:
        await session.delete(user)
    await session.delete(physio)
    await session.flush()
    logger.info("Physiotherapist %s removed", physiotherapist_id)
