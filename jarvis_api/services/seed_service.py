"""Sample-data initialization for the showcase catalogue and FAQ list."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Sequence

from jarvis_api.domain.sample_data import SAMPLE_FAQS, SAMPLE_PRODUCTS
from jarvis_api.repositories.entity_repository import (
    EntityRepository,
    faq_repository,
    product_repository,
)
from jarvis_api.repositories.sql_repository import SQLRepository, StorageError

logger = logging.getLogger(__name__)

SEED_MARKER = "sample-data"
SEED_MARKER_STALE_AFTER = timedelta(minutes=10)


class SeedError(Exception):
    """Base exception for the seeding workflow."""


class SeedInProgressError(SeedError):
    """Raised when another initialization currently holds the seed marker."""


@dataclass
class SeedResult:
    created: bool
    products: int = 0
    faqs: int = 0

    @property
    def message(self) -> str:
        if self.created:
            return "Sample data initialized successfully"
        return "Sample data already exists"


@dataclass
class SeedService:
    """Populates empty product/FAQ collections with the canonical dataset."""

    store: SQLRepository = field(default_factory=SQLRepository)
    products: EntityRepository | None = None
    faqs: EntityRepository | None = None
    sample_products: Sequence[dict] = SAMPLE_PRODUCTS
    sample_faqs: Sequence[dict] = SAMPLE_FAQS

    def __post_init__(self) -> None:
        if self.products is None:
            self.products = product_repository(self.store)
        if self.faqs is None:
            self.faqs = faq_repository(self.store)

    def is_seeded(self) -> bool:
        return self.products.count() > 0 and self.faqs.count() > 0

    def initialize(self, force: bool = False) -> SeedResult:
        """Seed products and FAQs unless both already hold data.

        ``force`` wipes both collections and re-inserts the canonical set even
        when data exists. Inserts are not transactional: if the FAQ batch
        fails the products stay. The seed marker makes concurrent calls fail
        fast with SeedInProgressError instead of inserting twice.
        """
        if not self.store.acquire_marker(SEED_MARKER, stale_after=SEED_MARKER_STALE_AFTER):
            raise SeedInProgressError("Sample data initialization already in progress")
        try:
            result = self._initialize(force)
        except Exception:
            self._release_marker()
            raise
        self._release_marker()
        return result

    def _release_marker(self) -> None:
        # a stuck marker expires after SEED_MARKER_STALE_AFTER
        try:
            self.store.release_marker(SEED_MARKER)
        except StorageError:
            logger.exception("Could not release the seed marker")

    def _initialize(self, force: bool) -> SeedResult:
        if not force and self.is_seeded():
            logger.info("Sample data already exists; skipping initialization")
            return SeedResult(created=False)
        if force:
            removed_products = self.products.delete_all()
            removed_faqs = self.faqs.delete_all()
            logger.warning(
                "Force initialization removed %d products and %d FAQs", removed_products, removed_faqs
            )
        inserted_products = self.products.insert_many(self.sample_products)
        inserted_faqs = self.faqs.insert_many(self.sample_faqs)
        logger.info(
            "Sample data initialized: %d products, %d FAQs", len(inserted_products), len(inserted_faqs)
        )
        return SeedResult(created=True, products=len(inserted_products), faqs=len(inserted_faqs))
