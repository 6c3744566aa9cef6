"""SQLAlchemy ORM models - import all to register with Base.metadata."""

from cashier_fastspring.db.models.billable import BillableMixin, CustomerRow

__all__ = [
    "BillableMixin",
    "CustomerRow",
]
