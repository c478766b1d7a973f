import uuid

from sqlalchemy import ForeignKey, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class StoreScopedBase(Base):
    """Abstract base for all store-scoped tables. Adds store_id FK + index."""

    __abstract__ = True

    store_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("stores.id"),
        nullable=False,
        index=True,
    )
