"""
Field constraints for every persisted entity.

These are declared once and read by both the request validators
(domain.schemas) and the SQLAlchemy columns (db.models), so the two never
drift apart.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TextRule:
    min_length: int
    max_length: int


@dataclass(frozen=True)
class ProductRules:
    name: TextRule = TextRule(1, 100)
    description: TextRule = TextRule(1, 500)
    category: TextRule = TextRule(1, 50)
    image_max_length: int = 2048
    price_exclusive_min: float = 0
    feature: TextRule = TextRule(1, 100)
    max_features: int = 10


@dataclass(frozen=True)
class FAQRules:
    question: TextRule = TextRule(1, 200)
    answer: TextRule = TextRule(1, 1000)
    category: TextRule = TextRule(1, 50)
    default_category: str = "general"


@dataclass(frozen=True)
class ContactRules:
    name: TextRule = TextRule(1, 100)
    email_max_length: int = 254
    message: TextRule = TextRule(1, 1000)
    statuses: tuple[str, ...] = ("pending", "read", "responded")
    default_status: str = "pending"


PRODUCT = ProductRules()
FAQ = FAQRules()
CONTACT = ContactRules()
