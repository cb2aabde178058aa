from sqlalchemy import Column, String, Date, Index

from models.base_model import BaseModel, Base, SoftDeleteMixin


class Publisher(SoftDeleteMixin, BaseModel, Base):
    __tablename__ = "publishers"

    name = Column(String(50), nullable=False)
    founding_date = Column(Date, nullable=False)

    # Books are never hard-deleted with their publisher (Book.publisher_id is
    # ON DELETE RESTRICT); a soft delete deactivates them instead, see models.queries.

    __table_args__ = (
        Index("ix_publishers_name", "name"),
    )
