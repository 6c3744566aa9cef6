"""Billable columns and the default customer table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from cashier_fastspring.db.base import Base, TimestampMixin


class BillableMixin:
    """Columns needed to create and track a FastSpring account.

    Mix into the application's own user model to make it billable.
    """

    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    company: Mapped[str | None] = mapped_column(String(200), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    language: Mapped[str | None] = mapped_column(String(8), nullable=True)
    country: Mapped[str | None] = mapped_column(String(2), nullable=True)
    fastspring_id: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)


class CustomerRow(Base, TimestampMixin, BillableMixin):
    __tablename__ = "customers"

    customer_id: Mapped[str] = mapped_column(String(128), primary_key=True)
