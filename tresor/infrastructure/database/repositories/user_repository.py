"""User store access."""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tresor.infrastructure.database.models.user import UserModel


class EmailAlreadyStoredError(Exception):
    """The unique email constraint rejected a write."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already stored: {email}")


class UserRepository:
    """Reads and writes users inside the caller's session.

    Writes are flushed, never committed; the unit of work owns the
    transaction.
    """
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def get(self, user_id: UUID) -> Optional[UserModel]:
        return await self.session.get(UserModel, user_id)
    
    async def get_by_email(self, email: str) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
    
    async def email_exists(self, email: str) -> bool:
        stmt = select(exists().where(UserModel.email == email))
        result = await self.session.execute(stmt)
        return bool(result.scalar())
    
    async def page(self, offset: int, limit: int) -> List[UserModel]:
        """Users in registration order."""
        stmt = (
            select(UserModel)
            .order_by(UserModel.created_at, UserModel.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
    
    async def count(self) -> int:
        stmt = select(func.count()).select_from(UserModel)
        result = await self.session.execute(stmt)
        return result.scalar_one()
    
    async def add(self, user: UserModel) -> UserModel:
        """Insert or update a user and flush it.
        
        Raises:
            EmailAlreadyStoredError: If another user holds the email; this
                covers registrations racing past the email_exists check
        """
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise EmailAlreadyStoredError(user.email) from e
        return user
    
    async def remove(self, user_id: UUID) -> bool:
        user = await self.get(user_id)
        if user is None:
            return False
        await self.session.delete(user)
        await self.session.flush()
        return True
