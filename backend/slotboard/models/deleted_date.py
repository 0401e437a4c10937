from sqlalchemy import Column, Integer, String
from ..database import Base


class DeletedDate(Base):
    """Data nascosta dal calendario (soft-delete): slot e titolo restano."""
    __tablename__ = "deleted_dates"

    id = Column(Integer, primary_key=True)
    date = Column(String(10), unique=True, nullable=False)  # YYYY-MM-DD
