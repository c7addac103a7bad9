"""Admin dashboard logic: load, create, edit through drafts, delete.

Every successful mutation is followed by exactly one dashboard reload; the
canonical ``dogs`` list is only ever replaced by a server response.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from pawshop.api.schemas.dashboard import Statistics
from pawshop.api.schemas.dogs import DogCreate, DogId, DogRead, DogUpdate
from pawshop.domain.exceptions import PawshopError, ValidationError
from pawshop.ui.api_client import APIError, PawshopClient

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "image", "breed", "price")


class DraftArena:
    """Working copies of listings under edit, keyed by listing id."""

    def __init__(self) -> None:
        self._drafts: dict[DogId, DogRead] = {}

    def __contains__(self, dog_id: DogId) -> bool:
        return dog_id in self._drafts

    def __len__(self) -> int:
        return len(self._drafts)

    def is_editing(self, dog_id: DogId) -> bool:
        return dog_id in self._drafts

    def open(self, dog: DogRead) -> DogRead:
        if dog.id not in self._drafts:
            self._drafts[dog.id] = dog.model_copy()
        return self._drafts[dog.id]

    def get(self, dog_id: DogId) -> DogRead | None:
        return self._drafts.get(dog_id)

    def update(self, dog_id: DogId, **fields: Any) -> DogRead:
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Not editable: {', '.join(sorted(unknown))}")
        draft = self._drafts.get(dog_id)
        if draft is None:
            raise KeyError(dog_id)
        updated = draft.model_copy(update=fields)
        self._drafts[dog_id] = updated
        return updated

    def discard(self, dog_id: DogId) -> None:
        self._drafts.pop(dog_id, None)

    def commit(self, dog_id: DogId) -> DogUpdate:
        """Validated update payload for the draft; the draft itself stays open."""
        draft = self._drafts.get(dog_id)
        if draft is None:
            raise KeyError(dog_id)
        try:
            return DogUpdate.from_dog(draft)
        except PydanticValidationError as e:
            raise ValidationError(_describe(e)) from e

    def display(self, dog: DogRead) -> DogRead:
        return self._drafts.get(dog.id, dog)

    def retain(self, dog_ids: set[DogId]) -> None:
        """Drop drafts whose listing is gone."""
        for dog_id in [i for i in self._drafts if i not in dog_ids]:
            del self._drafts[dog_id]


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else err.get("msg", "invalid"))
    return "; ".join(parts) or "Invalid input"


@dataclass
class AdminState:
    dogs: list[DogRead] = field(default_factory=list)
    statistics: Optional[Statistics] = None
    loading: bool = False
    error: Optional[str] = None
    adding: bool = False
    drafts: DraftArena = field(default_factory=DraftArena)
    pending_delete: Optional[DogId] = None
    mounted: bool = False


class AdminController:
    def __init__(
        self,
        client: PawshopClient,
        on_mutation: Callable[[], None] | None = None,
    ) -> None:
        self._client = client
        self._on_mutation = on_mutation
        self.state = AdminState()

    def find(self, dog_id: DogId) -> DogRead | None:
        return next((d for d in self.state.dogs if d.id == dog_id), None)

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def mount(self) -> None:
        if self.state.mounted:
            return
        self.state.mounted = True
        self.load()

    def load(self) -> bool:
        s = self.state
        s.loading = True
        try:
            dashboard = self._client.get_dashboard()
        except APIError as e:
            logger.warning("Dashboard load failed: %s", e)
            s.error = f"Failed to fetch dashboard data: {e.detail}"
            return False
        finally:
            s.loading = False
        s.dogs = dashboard.dogs
        s.statistics = dashboard.statistics
        s.drafts.retain({d.id for d in s.dogs})
        return True

    def _after_mutation(self) -> None:
        self.load()
        if self._on_mutation is not None:
            self._on_mutation()

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def toggle_add_form(self) -> None:
        self.state.adding = not self.state.adding

    def create(self, name: str, image: str, breed: str, price: float) -> bool:
        s = self.state
        try:
            payload = DogCreate(name=name, image=image, breed=breed, price=price)
        except PydanticValidationError as e:
            s.error = f"Failed to add dog: {_describe(e)}"
            return False
        try:
            self._client.create_dog(payload)
        except APIError as e:
            logger.warning("Create failed for %r: %s", payload.name, e)
            s.error = f"Failed to add dog: {e.detail}"
            return False
        logger.info("Created dog %r", payload.name)
        s.adding = False
        self._after_mutation()
        return True

    # ------------------------------------------------------------------
    # Edit
    # ------------------------------------------------------------------

    def begin_edit(self, dog_id: DogId) -> DogRead:
        dog = self.find(dog_id)
        if dog is None:
            raise KeyError(dog_id)
        return self.state.drafts.open(dog)

    def update_draft(self, dog_id: DogId, **fields: Any) -> DogRead:
        return self.state.drafts.update(dog_id, **fields)

    def cancel_edit(self, dog_id: DogId) -> None:
        self.state.drafts.discard(dog_id)

    def save_edit(self, dog_id: DogId) -> bool:
        s = self.state
        try:
            payload = s.drafts.commit(dog_id)
        except PawshopError as e:
            s.error = f"Failed to update dog: {e.message}"
            return False
        try:
            self._client.update_dog(payload)
        except APIError as e:
            logger.warning("Update failed for dog %s: %s", dog_id, e)
            s.error = f"Failed to update dog: {e.detail}"
            return False
        logger.info("Updated dog %s", dog_id)
        s.drafts.discard(dog_id)
        self._after_mutation()
        return True

    def display(self, dog: DogRead) -> DogRead:
        """Row values to render: the draft while editing, else the saved row."""
        return self.state.drafts.display(dog)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def request_delete(self, dog_id: DogId) -> None:
        self.state.pending_delete = dog_id

    def cancel_delete(self) -> None:
        self.state.pending_delete = None

    def confirm_delete(self) -> bool:
        s = self.state
        dog_id = s.pending_delete
        if dog_id is None:
            return False
        s.pending_delete = None
        try:
            self._client.delete_dog(dog_id)
        except APIError as e:
            logger.warning("Delete failed for dog %s: %s", dog_id, e)
            s.error = f"Failed to delete dog: {e.detail}"
            return False
        logger.info("Deleted dog %s", dog_id)
        s.drafts.discard(dog_id)
        self._after_mutation()
        return True

    def dismiss_error(self) -> None:
        self.state.error = None
