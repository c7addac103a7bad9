"""Shared test fixtures.

The remote catalog service is replaced by ``FakeCatalogService`` behind an
``httpx.MockTransport``: no network, no Streamlit runtime.

  catalog_service: in-memory backend with request log and failure switches.
  api:             ``PawshopClient`` wired to ``catalog_service``.
"""
import json
import os

import httpx
import pytest


def pytest_configure(config):
    """Point settings at a non-routable host before ``pawshop.config`` is imported."""
    os.environ.setdefault("PAWSHOP_API_BASE_URL", "http://catalog.test")
    os.environ.setdefault("PAWSHOP_HTTP_TIMEOUT_SECONDS", "5")


SAMPLE_DOGS = [
    {"id": 1, "name": "Rex", "image": "https://images.dog.ceo/rex.jpg", "breed": "Beagle", "price": 120.0},
    {"id": 2, "name": "Luna", "image": "https://images.dog.ceo/luna.jpg", "breed": "Husky", "price": 300.0},
    {"id": 3, "name": "Milo", "image": "https://images.dog.ceo/milo.jpg", "breed": "Beagle", "price": 80.0},
    {"id": 4, "name": "Nala", "image": "https://images.dog.ceo/nala.jpg", "breed": "Poodle", "price": 450.0},
    {"id": 5, "name": "Odin", "image": "https://images.dog.ceo/odin.jpg", "breed": "Husky", "price": 250.0},
]


class FakeCatalogService:
    """Just enough of the catalog REST API to drive the client and controllers."""

    def __init__(self, dogs=None, page_size: int = 2) -> None:
        self.dogs = [dict(d) for d in (SAMPLE_DOGS if dogs is None else dogs)]
        self.page_size = page_size
        self.requests: list[httpx.Request] = []
        # (method, path) -> status code to answer with instead of the real handler
        self.fail: dict[tuple[str, str], int] = {}
        self.report_has_more = False
        self._next_id = max((d["id"] for d in self.dogs), default=0) + 1

    # -- request log helpers -------------------------------------------------

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def count(self, method: str, path: str) -> int:
        return len(self.calls(method, path))

    def last(self, method: str, path: str) -> httpx.Request:
        return self.calls(method, path)[-1]

    # -- transport -----------------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key in self.fail:
            return httpx.Response(self.fail[key], json={"detail": "boom"})

        if key == ("GET", "/dogs"):
            return self._list(request)
        if key == ("GET", "/dashboard"):
            return httpx.Response(200, json={"dogs": self.dogs, "statistics": self._stats()})
        if request.url.path == "/admin":
            body = json.loads(request.content or b"{}")
            if request.method == "POST":
                dog = {"id": self._next_id, **body}
                self._next_id += 1
                self.dogs.append(dog)
                return httpx.Response(201, json=dog)
            if request.method == "PUT":
                for d in self.dogs:
                    if d["id"] == body["id"]:
                        d.update(body)
                        return httpx.Response(200, json=d)
                return httpx.Response(404, json={"detail": "Dog not found"})
            if request.method == "DELETE":
                before = len(self.dogs)
                self.dogs = [d for d in self.dogs if d["id"] != body["id"]]
                if len(self.dogs) == before:
                    return httpx.Response(404, json={"detail": "Dog not found"})
                return httpx.Response(200, json={"message": "deleted"})
        return httpx.Response(404, json={"detail": "Not Found"})

    def _list(self, request: httpx.Request) -> httpx.Response:
        params = request.url.params
        rows = self.dogs
        breeds = params.get_list("breed")
        if breeds:
            rows = [d for d in rows if d["breed"] in breeds]
        if "min_price" in params:
            rows = [d for d in rows if d["price"] >= float(params["min_price"])]
        if "max_price" in params:
            rows = [d for d in rows if d["price"] <= float(params["max_price"])]
        body: dict = {}
        if "page" in params:
            page = int(params["page"])
            start = (page - 1) * self.page_size
            if self.report_has_more:
                body["has_more"] = start + self.page_size < len(rows)
            rows = rows[start:start + self.page_size]
        body["dogs"] = rows
        return httpx.Response(200, json=body)

    def _stats(self) -> dict:
        prices = [d["price"] for d in self.dogs]
        distribution: dict[str, int] = {}
        for d in self.dogs:
            distribution[d["breed"]] = distribution.get(d["breed"], 0) + 1
        return {
            "total_dogs": len(self.dogs),
            "unique_breeds": len(distribution),
            "breed_distribution": distribution,
            "total_inventory_value": round(sum(prices), 2),
            "average_price": round(sum(prices) / len(prices), 2) if prices else 0,
        }


@pytest.fixture
def catalog_service():
    return FakeCatalogService()


@pytest.fixture
def api(catalog_service):
    from pawshop.ui.api_client import PawshopClient

    client = PawshopClient(
        base_url="http://catalog.test", transport=httpx.MockTransport(catalog_service.handle),
    )
    yield client
    client.close()
