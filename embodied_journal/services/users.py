import logging
import secrets
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from embodied_journal.models.user import User

logger = logging.getLogger(__name__)


class UserExistsError(ValueError):
    """Raised when the email is already registered."""


def generate_api_token() -> str:
    return secrets.token_urlsafe(32)


async def create_user(
    db: AsyncSession,
    *,
    email: str,
    api_token: Optional[str] = None,
) -> User:
    email = email.strip().lower()

    existing = await db.execute(select(User).where(User.email == email))
    if existing.scalar_one_or_none():
        raise UserExistsError(f"User already exists: {email}")

    user = User(email=email, api_token=api_token or generate_api_token())

    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info("Created user %s (%s)", user.id, email)
    return user
