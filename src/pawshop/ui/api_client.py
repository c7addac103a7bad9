"""Typed HTTP client for the Streamlit pages and the CLI.

Only imports from ``pawshop.api.schemas``; the remote catalog service is the
single source of truth, nothing is cached here.
Instantiate via ``get_client()`` which caches per Streamlit session.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, TypeVar

import httpx
import streamlit as st
from pydantic import BaseModel

from pawshop.api.schemas.dogs import DogCreate, DogId, DogList, DogRead, DogUpdate
from pawshop.api.schemas.dashboard import DashboardResponse
from pawshop.config import settings

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class APIError(Exception):
    """Raised when the backend returns a 4xx/5xx response."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"[{status_code}] {detail}")


class APIConnectionError(APIError):
    """The request never got a response (DNS, refused, timeout...)."""

    def __init__(self, detail: str) -> None:
        super().__init__(0, detail)


def build_listing_params(
    page: int | None = None,
    breeds: Iterable[str] = (),
    min_price: float | None = None,
    max_price: float | None = None,
) -> list[tuple[str, Any]]:
    """Query parameters for ``GET /dogs``; ``breed`` is repeated once per value."""
    params: list[tuple[str, Any]] = []
    if page is not None:
        params.append(("page", page))
    for breed in breeds:
        params.append(("breed", breed))
    if min_price is not None:
        params.append(("min_price", _format_price(min_price)))
    if max_price is not None:
        params.append(("max_price", _format_price(max_price)))
    return params


def _format_price(value: float) -> str:
    # 50.0 -> "50", 12.5 -> "12.5"
    return str(int(value)) if float(value).is_integer() else str(value)


class PawshopClient:
    """One method per backend endpoint. All return pure Pydantic DTOs."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.API_BASE_URL
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout or settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )

    def __enter__(self) -> "PawshopClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s %s", method, url, kwargs.get("params") or kwargs.get("json") or "")
        try:
            resp = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise APIConnectionError(str(e) or e.__class__.__name__) from e
        self._raise_for_status(resp)
        return resp

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        try:
            detail = resp.json().get("detail", resp.text)
        except Exception:
            detail = resp.text
        logger.warning(
            "%s %s -> %s: %s", resp.request.method, resp.request.url.path, resp.status_code, detail,
        )
        raise APIError(resp.status_code, str(detail))

    def _parse(self, resp: httpx.Response, model: type[ModelT], default: Any = None) -> ModelT:
        """Validate a 2xx body into *model*; bad JSON or shape is an ``APIError``."""
        try:
            body = resp.json()
            if body is None and default is not None:
                body = default
            return model.model_validate(body)
        except ValueError as e:
            logger.warning(
                "%s %s -> malformed %s: %s", resp.request.method, resp.request.url.path, model.__name__, e,
            )
            raise APIError(resp.status_code, f"Malformed response from {resp.request.url.path}") from e

    @staticmethod
    def _optional_dog(resp: httpx.Response) -> DogRead | None:
        # Mutation responses are informational only; tolerate empty or partial bodies.
        try:
            body = resp.json()
        except ValueError:
            return None
        if isinstance(body, dict) and isinstance(body.get("dog"), dict):
            body = body["dog"]
        try:
            return DogRead.model_validate(body)
        except ValueError:
            return None

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def list_dogs(
        self,
        page: int | None = None,
        breeds: Iterable[str] = (),
        min_price: float | None = None,
        max_price: float | None = None,
    ) -> DogList:
        params = build_listing_params(page, breeds, min_price, max_price)
        resp = self._request("GET", "/dogs", params=params)
        return self._parse(resp, DogList)

    def list_breeds(self) -> list[str]:
        """Distinct breeds of an unfiltered listing batch."""
        return self.list_dogs().breeds()

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    def get_dashboard(self) -> DashboardResponse:
        resp = self._request("GET", "/dashboard")
        return self._parse(resp, DashboardResponse, default={})

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    def create_dog(self, payload: DogCreate) -> DogRead | None:
        resp = self._request("POST", "/admin", json=payload.model_dump())
        return self._optional_dog(resp)

    def update_dog(self, payload: DogUpdate) -> DogRead | None:
        resp = self._request("PUT", "/admin", json=payload.model_dump())
        return self._optional_dog(resp)

    def delete_dog(self, dog_id: DogId) -> None:
        self._request("DELETE", "/admin", json={"id": dog_id})

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    def health(self) -> bool:
        """The catalog service has no health route; a first-page fetch stands in."""
        self._request("GET", "/dogs", params={"page": 1})
        return True


# ------------------------------------------------------------------
# Streamlit helper: one client per session
# ------------------------------------------------------------------

def get_client() -> PawshopClient:
    """Return a cached ``PawshopClient`` for the current Streamlit session."""
    base_url = st.session_state.get("pawshop_api_url", settings.API_BASE_URL)
    client = st.session_state.get("pawshop_api_client")
    if client is None or client.base_url != base_url:
        if client is not None:
            client.close()
        client = PawshopClient(base_url=base_url)
        st.session_state["pawshop_api_client"] = client
    return client
