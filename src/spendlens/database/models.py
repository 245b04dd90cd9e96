"""SQLAlchemy models for the spendlens database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Float,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    date = Column(Date, nullable=False, index=True)
    description = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    category = Column(String, nullable=False)
    original_category = Column(String, nullable=False)
    merchant = Column(String, nullable=True)
    balance = Column(Float, nullable=True)
    user_modified = Column(Boolean, default=False, nullable=False)
    # Preserves source order among transactions on the same date
    position = Column(Integer, nullable=False, default=0)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class MerchantMapping(Base):
    """User category override for a merchant (lower-cased name)."""

    __tablename__ = "merchant_mappings"

    merchant = Column(String, primary_key=True)
    category = Column(String, nullable=False)


class CategoryMapping(Base):
    """User category override for a description keyword."""

    __tablename__ = "category_mappings"

    keyword = Column(String, primary_key=True)
    category = Column(String, nullable=False)


class AIProviderSetting(Base):
    """Configured remote insight generator (at most one row)."""

    __tablename__ = "ai_provider"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    api_key = Column(String, nullable=False)
    model = Column(String, nullable=False, default="")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
