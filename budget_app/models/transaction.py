from sqlalchemy import Column, Integer, String, DateTime, Float, Index
from ..database import Base

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, index=True, nullable=False)  # owner
    type = Column(String, nullable=False)  # 'income' or 'expense'
    amount = Column(Float, nullable=False)  # always positive, sign comes from type
    category = Column(String, nullable=False)  # category name, not a foreign key
    description = Column(String, nullable=True)
    date = Column(String, nullable=False)  # business date as sent by the client (ISO string)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_transactions_user_date", "user_id", "date"),
    )
