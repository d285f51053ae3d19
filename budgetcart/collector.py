"""Paginated, price-filtered collection of search result identifiers."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Protocol, Sequence

from budgetcart.errors import ConfigurationError
from budgetcart.logging_config import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class Candidate:
    """An item seen on one results page. A price of zero means it could not be read."""

    price: Decimal
    identifier: str


@dataclass(frozen=True)
class CollectionRequest:
    price_ceiling: Decimal
    target_count: int
    max_pages: int = 1

    def __post_init__(self) -> None:
        try:
            ceiling = Decimal(str(self.price_ceiling))
        except InvalidOperation as exc:
            raise ConfigurationError(f"price_ceiling is not a number: {self.price_ceiling!r}") from exc
        if not ceiling.is_finite() or ceiling < 0:
            raise ConfigurationError(f"price_ceiling must be >= 0, got {self.price_ceiling!r}")
        object.__setattr__(self, "price_ceiling", ceiling)

        if isinstance(self.target_count, bool) or not isinstance(self.target_count, int):
            raise ConfigurationError(f"target_count must be an integer, got {self.target_count!r}")
        if self.target_count <= 0:
            raise ConfigurationError(f"target_count must be positive, got {self.target_count}")
        if isinstance(self.max_pages, bool) or not isinstance(self.max_pages, int):
            raise ConfigurationError(f"max_pages must be an integer, got {self.max_pages!r}")
        if self.max_pages < 1:
            raise ConfigurationError(f"max_pages must be at least 1, got {self.max_pages}")

    def accepts(self, candidate: Candidate) -> bool:
        return Decimal(0) < candidate.price <= self.price_ceiling


class PageSource(Protocol):
    """Paginated supplier of candidates, usually a search results page in a browser."""

    async def fetch_current_page_candidates(self) -> Sequence[Candidate]: ...

    async def advance_to_next_page(self) -> bool: ...


class BoundedPaginatedCollector:
    """Walk pages of *source* until enough affordable items are found.

    Collection stops when ``target_count`` identifiers are accepted, when
    ``max_pages`` pages have been read, or when the source cannot move to
    another page. A page that fails to load counts as an empty page and a
    failed page turn counts as the last page, so ``collect`` returns a
    (possibly short) list instead of raising.
    """

    def __init__(self, source: PageSource) -> None:
        self.source = source

    async def collect(self, request: CollectionRequest) -> list[str]:
        accepted: list[str] = []
        page_number = 1

        while True:
            candidates = await self._fetch(page_number)
            for candidate in candidates:
                if len(accepted) >= request.target_count:
                    break
                if request.accepts(candidate):
                    accepted.append(candidate.identifier)

            LOGGER.info(
                "Collected %d/%d items after page %d",
                len(accepted),
                request.target_count,
                page_number,
                extra={"page": page_number, "candidates": len(candidates)},
            )

            if len(accepted) >= request.target_count:
                break
            if page_number >= request.max_pages:
                LOGGER.info("Page limit reached (%d)", request.max_pages)
                break
            if not await self._advance(page_number):
                LOGGER.info("No more pages available after page %d", page_number)
                break
            page_number += 1

        return accepted

    async def _fetch(self, page_number: int) -> Sequence[Candidate]:
        try:
            return list(await self.source.fetch_current_page_candidates())
        except Exception as exc:
            LOGGER.warning(
                "Could not read candidates on page %d: %s",
                page_number,
                exc,
                extra={"page": page_number},
            )
            return []

    async def _advance(self, page_number: int) -> bool:
        try:
            return bool(await self.source.advance_to_next_page())
        except Exception as exc:
            LOGGER.warning(
                "Could not move past page %d: %s",
                page_number,
                exc,
                extra={"page": page_number},
            )
            return False


async def collect(request: CollectionRequest, source: PageSource) -> list[str]:
    return await BoundedPaginatedCollector(source).collect(request)
