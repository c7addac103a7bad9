"""Tests for the typed catalog client against an in-memory transport."""
import json

import httpx
import pytest

from pawshop.api.schemas.dogs import DogCreate, DogUpdate
from pawshop.ui.api_client import (
    APIConnectionError, APIError, PawshopClient, build_listing_params,
)


def test_listing_params_repeat_breed_and_skip_unset_prices():
    params = build_listing_params(page=2, breeds=["Beagle", "Husky"])
    assert params == [("page", 2), ("breed", "Beagle"), ("breed", "Husky")]


def test_listing_params_include_prices_when_set():
    params = build_listing_params(page=1, min_price=50.0, max_price=12.5)
    assert ("min_price", "50") in params
    assert ("max_price", "12.5") in params


def test_list_dogs_sends_query_string(api, catalog_service):
    result = api.list_dogs(page=1, breeds=["Beagle", "Husky"], max_price=200)
    req = catalog_service.last("GET", "/dogs")
    assert req.url.params.get_list("breed") == ["Beagle", "Husky"]
    assert req.url.params["page"] == "1"
    assert req.url.params["max_price"] == "200"
    assert "min_price" not in req.url.params
    assert [d.name for d in result.dogs] == ["Rex", "Milo"]


def test_list_breeds_is_distinct_and_sorted(api, catalog_service):
    assert api.list_breeds() == ["Beagle", "Husky", "Poodle"]
    # unfiltered batch: no page parameter
    assert "page" not in catalog_service.last("GET", "/dogs").url.params


def test_dashboard_parses_statistics(api):
    dashboard = api.get_dashboard()
    assert len(dashboard.dogs) == 5
    assert dashboard.statistics.total_dogs == 5
    assert dashboard.statistics.breed_distribution["Beagle"] == 2


def test_dashboard_missing_fields_default():
    transport = httpx.MockTransport(lambda r: httpx.Response(200, json={}))
    with PawshopClient(base_url="http://catalog.test", transport=transport) as client:
        dashboard = client.get_dashboard()
    assert dashboard.dogs == []
    assert dashboard.statistics is None


def test_dashboard_null_fields_default():
    transport = httpx.MockTransport(
        lambda r: httpx.Response(200, json={"dogs": None, "statistics": None})
    )
    with PawshopClient(base_url="http://catalog.test", transport=transport) as client:
        dashboard = client.get_dashboard()
    assert dashboard.dogs == []
    assert dashboard.statistics is None


def test_create_posts_fields(api, catalog_service):
    created = api.create_dog(
        DogCreate(name="Bella", image="https://images.dog.ceo/b.jpg", breed="Pug", price=99.5)
    )
    body = json.loads(catalog_service.last("POST", "/admin").content)
    assert body == {"name": "Bella", "image": "https://images.dog.ceo/b.jpg", "breed": "Pug", "price": 99.5}
    assert created is not None and created.id == 6


def test_create_tolerates_empty_response_body():
    transport = httpx.MockTransport(lambda r: httpx.Response(201))
    with PawshopClient(base_url="http://catalog.test", transport=transport) as client:
        assert client.create_dog(DogCreate(name="A", image="i", breed="b", price=0)) is None


def test_update_puts_id_and_fields(api, catalog_service):
    api.update_dog(DogUpdate(id=2, name="Luna", image="x", breed="Husky", price=310))
    body = json.loads(catalog_service.last("PUT", "/admin").content)
    assert body["id"] == 2
    assert body["price"] == 310
    assert catalog_service.dogs[1]["price"] == 310


def test_delete_sends_id_in_body(api, catalog_service):
    api.delete_dog(3)
    req = catalog_service.last("DELETE", "/admin")
    assert json.loads(req.content) == {"id": 3}
    assert all(d["id"] != 3 for d in catalog_service.dogs)


def test_non_success_raises_api_error_with_detail(api, catalog_service):
    catalog_service.fail[("GET", "/dashboard")] = 503
    with pytest.raises(APIError) as exc_info:
        api.get_dashboard()
    assert exc_info.value.status_code == 503
    assert exc_info.value.detail == "boom"


def test_non_json_error_body_uses_text():
    transport = httpx.MockTransport(lambda r: httpx.Response(502, text="Bad Gateway"))
    with PawshopClient(base_url="http://catalog.test", transport=transport) as client:
        with pytest.raises(APIError) as exc_info:
            client.list_dogs(page=1)
    assert exc_info.value.detail == "Bad Gateway"


def test_transport_failure_raises_connection_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with PawshopClient(base_url="http://catalog.test", transport=httpx.MockTransport(refuse)) as client:
        with pytest.raises(APIConnectionError) as exc_info:
            client.list_dogs(page=1)
    assert exc_info.value.status_code == 0
    assert isinstance(exc_info.value, APIError)


def test_string_ids_are_kept():
    transport = httpx.MockTransport(
        lambda r: httpx.Response(200, json={"dogs": [{"id": "abc", "name": "Rex", "image": "", "breed": "Lab", "price": 1}]})
    )
    with PawshopClient(base_url="http://catalog.test", transport=transport) as client:
        assert client.list_dogs(page=1).dogs[0].id == "abc"


def test_health(api):
    assert api.health() is True


def test_invalid_listing_raises_api_error():
    transport = httpx.MockTransport(
        lambda r: httpx.Response(200, json={"dogs": [{"id": 1, "name": "Rex", "breed": "Pug", "price": None}]})
    )
    with PawshopClient(base_url="http://catalog.test", transport=transport) as client:
        with pytest.raises(APIError) as exc_info:
            client.list_dogs(page=1)
    assert exc_info.value.status_code == 200
    assert "Malformed response" in exc_info.value.detail


def test_non_json_success_body_raises_api_error():
    transport = httpx.MockTransport(lambda r: httpx.Response(200, text=""))
    with PawshopClient(base_url="http://catalog.test", transport=transport) as client:
        with pytest.raises(APIError) as exc_info:
            client.get_dashboard()
    assert "Malformed response from /dashboard" in exc_info.value.detail


def test_update_allows_empty_image(api, catalog_service):
    api.update_dog(DogUpdate(id=2, name="Luna", image="", breed="Husky", price=300))
    assert json.loads(catalog_service.last("PUT", "/admin").content)["image"] == ""
