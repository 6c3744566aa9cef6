"""Tests for the FastSpring API client."""

import base64
import json

import httpx
import pytest

from cashier_fastspring.config import Settings
from cashier_fastspring.integrations.fastspring_client import FastspringClient, FastspringClientError


class FakeFastspring:
    """Records requests and answers with canned responses."""

    def __init__(self, responses=None):
        self.requests: list[httpx.Request] = []
        self.responses = responses or {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        status, body = self.responses.get(key, (200, {}))
        return httpx.Response(status, json=body)

    def client(self) -> FastspringClient:
        return FastspringClient("api-user", "api-pass", transport=httpx.MockTransport(self))


@pytest.mark.asyncio
async def test_create_session_posts_payload_with_basic_auth():
    fake = FakeFastspring({("POST", "/sessions"): (200, {"id": "sess_1", "currency": "USD"})})
    payload = {"account": "acc_1", "items": [{"product": "pro", "quantity": 1}]}

    response = await fake.client().create_session(payload)

    assert response["id"] == "sess_1"
    request = fake.requests[0]
    assert str(request.url) == "https://api.fastspring.com/sessions"
    assert json.loads(request.content) == payload
    expected_auth = "Basic " + base64.b64encode(b"api-user:api-pass").decode()
    assert request.headers["Authorization"] == expected_auth


@pytest.mark.asyncio
async def test_get_accounts_by_email():
    fake = FakeFastspring({("GET", "/accounts"): (200, {"accounts": [{"id": "acc_9"}]})})

    response = await fake.client().get_accounts(email="jane@example.com")

    assert response["accounts"][0]["id"] == "acc_9"
    assert fake.requests[0].url.params["email"] == "jane@example.com"


@pytest.mark.asyncio
async def test_error_response_raises_with_decoded_error():
    body = {"action": "account.create", "result": "error", "error": {"email": "email is already in use"}}
    fake = FakeFastspring({("POST", "/accounts"): (400, body)})

    with pytest.raises(FastspringClientError) as exc_info:
        await fake.client().create_account({"contact": {"email": "jane@example.com"}})

    exc = exc_info.value
    assert exc.status_code == 400
    assert exc.error == {"email": "email is already in use"}
    assert "POST /accounts" in str(exc)


@pytest.mark.asyncio
async def test_error_without_error_object():
    fake = FakeFastspring({("GET", "/accounts/missing"): (404, {"result": "error"})})

    with pytest.raises(FastspringClientError) as exc_info:
        await fake.client().get_account("missing")

    assert exc_info.value.error == {}


@pytest.mark.asyncio
async def test_subscription_endpoints():
    fake = FakeFastspring()
    client = fake.client()

    await client.get_subscription("sub_1")
    await client.cancel_subscription("sub_1")
    await client.uncancel_subscription("sub_1")
    await client.update_account("acc_1", {"language": "de"})

    calls = [(r.method, r.url.path) for r in fake.requests]
    assert calls == [
        ("GET", "/subscriptions/sub_1"),
        ("DELETE", "/subscriptions/sub_1"),
        ("POST", "/subscriptions"),
        ("POST", "/accounts/acc_1"),
    ]
    assert json.loads(fake.requests[2].content) == {
        "subscriptions": [{"subscription": "sub_1", "deactivation": None}]
    }


def test_from_settings():
    config = Settings(
        _env_file=None,
        username="u",
        password="p",
        api_base_url="https://sandbox.example.com/",
        api_timeout=3.0,
    )
    client = FastspringClient.from_settings(config)
    assert client.base_url == "https://sandbox.example.com"
    assert client.timeout == 3.0
