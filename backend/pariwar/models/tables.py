"""SQLAlchemy ORM models for the household bill tracker.

These models define the relational schema: families own users, and
users register documents and billers; every bill is issued by a
biller.  Tables are created by :meth:`pariwar.core.database.Store.auto_migrate`
(``create_all``), not by hand-written migration scripts.

Every entity carries an :class:`AuditStamp` composed in by value through
:func:`audit_stamp`, so the timestamp columns sit beside the entity's
own columns without a shared base class.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import composite, relationship

from pariwar.core.database import Base


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


@dataclass
class AuditStamp:
    """Creation, modification and soft-deletion times of a record."""

    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
    deleted_at: Optional[dt.datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


def audit_stamp():
    """Return a fresh ``AuditStamp`` composite with its own columns."""
    return composite(
        AuditStamp,
        Column("created_at", DateTime(timezone=True), default=_utcnow, nullable=False),
        Column("updated_at", DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False),
        Column("deleted_at", DateTime(timezone=True), nullable=True, index=True),
    )


class Family(Base):
    """A household sharing bills and documents."""

    __tablename__ = "families"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    audit = audit_stamp()

    users = relationship("User", back_populates="family")


class User(Base):
    """Member of a family, identified by phone number."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    phone_number = Column(String, unique=True, nullable=False)
    family_id = Column(Integer, ForeignKey("families.id"), nullable=False)
    audit = audit_stamp()

    family = relationship("Family", back_populates="users")
    documents = relationship("Document", back_populates="user")
    billers = relationship("Biller", back_populates="user")


class Document(Base):
    """Uploaded file metadata; the bytes live wherever ``storage_key`` points."""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    family_id = Column(Integer, ForeignKey("families.id"), nullable=False)
    file_name = Column(String, nullable=False)
    storage_key = Column(String, nullable=False)
    audit = audit_stamp()

    user = relationship("User", back_populates="documents")
    family = relationship("Family")


class Biller(Base):
    """Service provider a user pays, with the account number they hold there."""

    __tablename__ = "billers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    family_id = Column(Integer, ForeignKey("families.id"), nullable=False)
    provider_name = Column(String, nullable=False)
    consumer_id = Column(String, nullable=False)
    audit = audit_stamp()

    user = relationship("User", back_populates="billers")
    family = relationship("Family")
    bills = relationship("Bill", back_populates="biller")


class Bill(Base):
    """Single bill issued by a biller."""

    __tablename__ = "bills"

    id = Column(Integer, primary_key=True, index=True)
    biller_id = Column(Integer, ForeignKey("billers.id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    # Kept as free text (e.g. "2025-09-15"); not parsed.
    due_date = Column(String, nullable=False)
    is_paid = Column(Boolean, default=False, nullable=False)
    audit = audit_stamp()

    biller = relationship("Biller", back_populates="bills")


ALL_TABLES = (Family, User, Document, Biller, Bill)
