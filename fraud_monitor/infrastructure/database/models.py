"""SQLAlchemy ORM models for settings, rules, and fraud reports"""

import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Integer, Text, JSON, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class AppSetting(Base):
    """Operator-configurable key-value setting"""

    __tablename__ = "app_setting"

    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class FraudRule(Base):
    """Configured fraud detection rule"""

    __tablename__ = "fraud_rule"

    id = Column(Integer, primary_key=True, autoincrement=True)
    rule_id = Column(String(32), nullable=False, unique=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    type = Column(String(64), nullable=False)
    value = Column(JSON, nullable=False)  # number or text depending on type
    enabled = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class FraudReportRecord(Base):
    """Suspicious transaction reported to the authorities"""

    __tablename__ = "fraud_report"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    transaction_id = Column(Text, nullable=False, index=True)
    description = Column(Text, nullable=False)
    submitted_at = Column(DateTime(timezone=True), nullable=False)
