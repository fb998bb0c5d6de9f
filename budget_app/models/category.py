from sqlalchemy import Column, Integer, String, DateTime
from ..database import Base

class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, index=True, nullable=False)  # owner
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)  # 'income' or 'expense'
    color = Column(String)  # hex color for UI
    icon = Column(String)   # optional icon identifier
    created_at = Column(DateTime(timezone=True), nullable=False)
