"""Catalog page logic: breed discovery, filters and pagination.

No Streamlit here. The page owns one ``CatalogController`` per session and
calls into it from widget callbacks, then renders ``controller.state``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from pawshop.api.schemas.dogs import DogRead
from pawshop.ui.api_client import APIError, PawshopClient

logger = logging.getLogger(__name__)

LOAD_ERROR = "Error loading dogs. Please try again."
PRICE_RANGE_ERROR = "Minimum price cannot exceed maximum price."


@dataclass
class CatalogState:
    dogs: list[DogRead] = field(default_factory=list)
    breeds: list[str] = field(default_factory=list)
    selected_breeds: list[str] = field(default_factory=list)
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    page: int = 1
    loading: bool = False
    error: Optional[str] = None
    has_more: Optional[bool] = None
    total: Optional[int] = None
    last_page_empty: bool = False
    mounted: bool = False


class CatalogController:
    def __init__(self, client: PawshopClient, page_size: int | None = None) -> None:
        self._client = client
        self.page_size = page_size
        self.state = CatalogState()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def mount(self) -> None:
        """First render of a session: breed options, then page 1."""
        if self.state.mounted:
            return
        self.state.mounted = True
        self.refresh_breeds()
        self.fetch()

    def refresh_breeds(self) -> bool:
        s = self.state
        try:
            breeds = self._client.list_breeds()
        except APIError as e:
            # The filter menu keeps its previous options; not worth a banner.
            logger.error("Error fetching breeds: %s", e)
            return False
        s.breeds = sorted(set(breeds) | set(s.selected_breeds))
        return True

    def fetch(self) -> bool:
        s = self.state
        s.loading = True
        try:
            result = self._client.list_dogs(
                page=s.page,
                breeds=s.selected_breeds,
                min_price=s.min_price,
                max_price=s.max_price,
            )
        except APIError as e:
            logger.warning("Catalog fetch failed on page %s: %s", s.page, e)
            s.error = LOAD_ERROR
            return False
        finally:
            s.loading = False

        s.dogs = result.dogs
        s.has_more = result.has_more
        s.total = result.total
        s.last_page_empty = not result.dogs
        if s.error != PRICE_RANGE_ERROR:
            s.error = None
        seen = result.breeds()
        if not set(seen) <= set(s.breeds):
            s.breeds = sorted(set(s.breeds) | set(seen))
        return True

    # ------------------------------------------------------------------
    # Filters: every change starts over from page 1
    # ------------------------------------------------------------------

    def toggle_breed(self, breed: str) -> bool:
        s = self.state
        if breed in s.selected_breeds:
            s.selected_breeds = [b for b in s.selected_breeds if b != breed]
        else:
            s.selected_breeds = [*s.selected_breeds, breed]
        s.page = 1
        return self.fetch()

    def set_breeds(self, breeds: Iterable[str]) -> bool:
        s = self.state
        selected = list(dict.fromkeys(breeds))
        if set(selected) == set(s.selected_breeds):
            return False
        s.selected_breeds = selected
        s.page = 1
        return self.fetch()

    def set_price_range(self, min_price: float | None, max_price: float | None) -> bool:
        s = self.state
        if min_price is not None and max_price is not None and min_price > max_price:
            # The last valid pair stays in effect for every later fetch.
            s.error = PRICE_RANGE_ERROR
            return False
        if s.error == PRICE_RANGE_ERROR:
            s.error = None
        if (min_price, max_price) == (s.min_price, s.max_price):
            return False
        s.min_price, s.max_price = min_price, max_price
        s.page = 1
        return self.fetch()

    def clear_filters(self) -> bool:
        s = self.state
        if s.error == PRICE_RANGE_ERROR:
            s.error = None
        if not s.selected_breeds and s.min_price is None and s.max_price is None:
            return False
        s.selected_breeds = []
        s.min_price = s.max_price = None
        s.page = 1
        return self.fetch()

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    @property
    def can_prev(self) -> bool:
        return self.state.page > 1

    @property
    def can_next(self) -> bool:
        s = self.state
        if s.has_more is not None:
            return s.has_more
        if s.total is not None and self.page_size:
            return s.page * self.page_size < s.total
        return not s.last_page_empty

    def prev_page(self) -> bool:
        if not self.can_prev:
            return False
        self.state.page -= 1
        return self.fetch()

    def next_page(self) -> bool:
        if not self.can_next:
            return False
        self.state.page += 1
        return self.fetch()

    def dismiss_error(self) -> None:
        self.state.error = None
