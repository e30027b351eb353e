from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.core.config import settings
from clinic.core.security import create_access_token, verify_password
from clinic.models.user import User, UserPublic, UserRole


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user(session: AsyncSession, user_id: str) -> User | None:
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


def user_to_public(user: User) -> UserPublic:
    return UserPublic(id=user.id, name=user.name, email=user.email, role=user.role)


def inbox_ids(user: User) -> list[str]:
    """Notification targets a user reads: their own id, plus the shared inbox for reception."""
    ids = [user.id]
    if user.role == UserRole.receptionist:
        ids.append(settings.reception_inbox_id)
    return ids


async def login_user(
    session: AsyncSession, email: str, password: str, role: UserRole
) -> tuple[User, str, int] | None:
    """The account must exist, the password match and the role be the one chosen at sign-in."""
    user = await get_user_by_email(session, email)
    if not user or user.role != role:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    access = create_access_token(user.id, user.role.value)
    return user, access, settings.access_token_expire_minutes * 60
