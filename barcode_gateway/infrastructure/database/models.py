"""SQLAlchemy ORM models"""

from sqlalchemy import Column, BigInteger, DateTime, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class QuotaAccount(Base):
    """Consumable barcode quota per account, with the last applied request key"""

    __tablename__ = "quota_account"

    id = Column(Text, primary_key=True)
    balance = Column(BigInteger, nullable=False, default=0)
    last_idempotency_key = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
