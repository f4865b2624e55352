"""SQLAlchemy models for the showcase catalogue, FAQs and contact inbox."""
from __future__ import annotations

import uuid

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    String,
    Text,
    JSON,
    func,
)

from jarvis_api.domain.constraints import CONTACT, FAQ, PRODUCT

from .session import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (CheckConstraint("price > 0", name="ck_products_price_positive"),)

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(PRODUCT.name.max_length), nullable=False)
    description = Column(String(PRODUCT.description.max_length), nullable=False)
    price = Column(Float, nullable=False)
    image = Column(String(PRODUCT.image_max_length), nullable=False)
    category = Column(String(PRODUCT.category.max_length), nullable=False)
    features = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class FAQ(Base):
    __tablename__ = "faqs"

    id = Column(String(32), primary_key=True, default=_new_id)
    question = Column(String(FAQ.question.max_length), nullable=False)
    answer = Column(Text, nullable=False)
    category = Column(String(FAQ.category.max_length), nullable=False, default=FAQ.default_category)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


_STATUSES = ", ".join(f"'{status}'" for status in CONTACT.statuses)


class Contact(Base):
    __tablename__ = "contacts"
    __table_args__ = (CheckConstraint(f"status IN ({_STATUSES})", name="ck_contacts_status"),)

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(CONTACT.name.max_length), nullable=False)
    email = Column(String(CONTACT.email_max_length), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(16), nullable=False, default=CONTACT.default_status)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class SeedMarker(Base):
    """Row whose unique key guards a running sample-data initialization."""

    __tablename__ = "seed_markers"

    name = Column(String(64), primary_key=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
