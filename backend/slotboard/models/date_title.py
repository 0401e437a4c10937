from sqlalchemy import Column, Integer, String
from ..database import Base


class DateTitle(Base):
    __tablename__ = "date_titles"

    id = Column(Integer, primary_key=True)
    date = Column(String(10), unique=True, nullable=False)  # YYYY-MM-DD
    title = Column(String, nullable=False)
