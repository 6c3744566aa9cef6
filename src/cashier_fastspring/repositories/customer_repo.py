"""Repository for billable customers."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cashier_fastspring.db.models.billable import CustomerRow


class CustomerRepository:
    """Persists billable owners; works with any model using ``BillableMixin``.

    Satisfies the ``CustomerStore`` protocol expected by the subscription builder.
    """

    def __init__(self, session: AsyncSession, model_class=CustomerRow):
        self.session = session
        self.model_class = model_class

    async def create(self, **kwargs: Any):
        """Create and persist a new customer."""
        row = self.model_class(**kwargs)
        self.session.add(row)
        await self.session.flush()
        return row

    async def save(self, owner) -> None:
        """Flush the owner's current state, including its FastSpring id."""
        self.session.add(owner)
        await self.session.flush()

    async def get_by_fastspring_id(self, fastspring_id: str):
        stmt = select(self.model_class).where(self.model_class.fastspring_id == fastspring_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str):
        stmt = select(self.model_class).where(self.model_class.email == email)
        result = await self.session.execute(stmt)
        return result.scalars().first()
