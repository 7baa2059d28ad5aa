"""Tests for the resource wrappers."""

from unittest.mock import Mock

import pytest

from mercadopago_engine.client.request_core import RequestCore
from mercadopago_engine.client.transport import Transport
from mercadopago_engine.core.credentials import StaticCredentialSource
from mercadopago_engine.core.models import Credentials, HttpMethod, Settings
from mercadopago_engine.core.outcomes import NoContent, Success, TransportResponse
from mercadopago_engine.resources import (
    IdentificationTypes,
    MerchantOrders,
    Payments,
    PointOfSale,
    Preferences,
    Resource,
)

BASE = "https://api.test.com"


@pytest.fixture
def mock_transport():
    transport = Mock(spec=Transport)
    transport.send.return_value = TransportResponse(200, b'{"ok": true}')
    return transport


@pytest.fixture
def core(mock_transport):
    source = StaticCredentialSource(Credentials("123", "shh", "APP_TOKEN"))
    return RequestCore(source, mock_transport, Settings(api_base_url=BASE))


def last_call(mock_transport):
    method, url, headers, body = mock_transport.send.call_args[0]
    return method, url.removeprefix(BASE), headers, body


# (resource class, method name, args, expected verb, expected path)
ROUTES = [
    (Preferences, "search", (), HttpMethod.GET, "/checkout/preferences/search"),
    (Preferences, "show", ("pref-1",), HttpMethod.GET, "/checkout/preferences/pref-1"),
    (Preferences, "create", ({"items": []},), HttpMethod.POST, "/checkout/preferences"),
    (Preferences, "update", ("pref-1", {"items": []}), HttpMethod.PUT, "/checkout/preferences/pref-1"),
    (MerchantOrders, "search", (), HttpMethod.GET, "/merchant_orders/search"),
    (MerchantOrders, "show", (77,), HttpMethod.GET, "/merchant_orders/77"),
    (MerchantOrders, "create", ({"items": []},), HttpMethod.POST, "/merchant_orders"),
    (MerchantOrders, "update", (77, {"notification_url": "x"}), HttpMethod.PUT, "/merchant_orders/77"),
    (PointOfSale, "search", (), HttpMethod.GET, "/pos"),
    (PointOfSale, "show", ("1212121",), HttpMethod.GET, "/pos/1212121"),
    (PointOfSale, "create", ({"name": "First POS"},), HttpMethod.POST, "/pos"),
    (PointOfSale, "update", ("1", {"name": "Renamed"}), HttpMethod.PUT, "/pos/1"),
    (PointOfSale, "delete", ("1",), HttpMethod.DELETE, "/pos/1"),
    (Payments, "methods", (), HttpMethod.GET, "/v1/payment_methods"),
    (Payments, "search", (), HttpMethod.GET, "/v1/payments/search"),
    (Payments, "show", (123,), HttpMethod.GET, "/v1/payments/123"),
    (Payments, "create", ({"transaction_amount": 100},), HttpMethod.POST, "/v1/payments"),
    (Payments, "update", (123, {"status": "cancelled"}), HttpMethod.PUT, "/v1/payments/123"),
    (IdentificationTypes, "search", (), HttpMethod.GET, "/v1/identification_types"),
]


@pytest.mark.parametrize("resource_cls,name,args,verb,path", ROUTES)
def test_routes(core, mock_transport, resource_cls, name, args, verb, path):
    """Each wrapper method maps to a fixed verb and path."""
    resource = resource_cls(core)

    outcome = getattr(resource, name)(*args)

    assert outcome == Success(body={"ok": True})
    method, sent_path, headers, _ = last_call(mock_transport)
    assert method == verb
    assert sent_path == path
    assert headers["Authorization"] == "Bearer APP_TOKEN"


@pytest.mark.parametrize("resource_cls,name,args,verb,path", ROUTES)
def test_routes_with_user_token(core, mock_transport, resource_cls, name, args, verb, path):
    """Each wrapper method accepts an OAuth user token."""
    getattr(resource_cls(core), name)(*args, access_token="APP_USR-seller")

    _, _, headers, _ = last_call(mock_transport)
    assert headers["Authorization"] == "Bearer APP_USR-seller"


def test_payment_create_with_idempotency_key(core, mock_transport):
    """Test the idempotency key reaches the header."""
    Payments(core).create({"transaction_amount": 100}, idempotency_key="order-42")

    _, _, headers, body = last_call(mock_transport)
    assert headers["X-Idempotency-Key"] == "order-42"
    assert body == b'{"transaction_amount": 100}'


def test_payment_create_without_idempotency_key(core, mock_transport):
    """Test the header is omitted by default."""
    Payments(core).create({"transaction_amount": 100})

    _, _, headers, _ = last_call(mock_transport)
    assert "X-Idempotency-Key" not in headers


def test_search_filters_in_query_string(core, mock_transport):
    """Test search filters are URL-encoded."""
    Payments(core).search({"sort": "date_created", "external_reference": "order 1"})

    _, path, _, _ = last_call(mock_transport)
    assert path == "/v1/payments/search?sort=date_created&external_reference=order+1"


def test_pos_search_filters(core, mock_transport):
    """Test POS listing filters go on the base path."""
    PointOfSale(core).search({"store_id": 5})

    _, path, _, _ = last_call(mock_transport)
    assert path == "/pos?store_id=5"


def test_ids_are_quoted(core, mock_transport):
    """Test IDs cannot escape their path segment."""
    Preferences(core).show("../admin")

    _, path, _, _ = last_call(mock_transport)
    assert path == "/checkout/preferences/..%2Fadmin"


def test_delete_no_content(core, mock_transport):
    """Test delete passes through NoContent."""
    mock_transport.send.return_value = TransportResponse(204, b"")
    assert PointOfSale(core).delete("1") == NoContent()


def test_resource_base_is_abstract(core):
    """Test Resource cannot be instantiated directly."""
    with pytest.raises(TypeError):
        Resource(core)
