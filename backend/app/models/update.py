from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func

from app.core.database import Base

class Update(Base):
    """Entry in the dashboard notifications feed"""
    __tablename__ = "updates"

    id = Column(Integer, primary_key=True, index=True)
    author = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
