"""Transaction boundary for one service operation."""
from sqlalchemy.ext.asyncio import AsyncSession

from tresor.infrastructure.database.repositories.user_repository import UserRepository
from tresor.infrastructure.logging import get_logger

logger = get_logger(__name__)


class UnitOfWork:
    """Commits the session when the block succeeds, rolls back when it raises.

    Usage:
        async with UnitOfWork(session) as uow:
            user = await uow.users.get_by_email(email)
    """
    
    def __init__(self, session: AsyncSession):
        self.session = session
        self.users = UserRepository(session)
    
    async def __aenter__(self) -> "UnitOfWork":
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            await self.session.commit()
            return
        await self.session.rollback()
        logger.debug("transaction_rolled_back", error_type=exc_type.__name__)
