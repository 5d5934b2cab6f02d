"""Tests for the impersonation link fetcher."""

import json

import httpx
import pytest
import respx

from auth0_errors import NetworkError
from fetch_auth0_impersonation_link import build_impersonation_request, fetch_impersonation_link

IMPERSONATE_URL = "https://apex-inc.auth0.com/users/user-42/impersonate"
LINK = "https://apex-inc.auth0.com/authorize?response_type=token&client_id=app&state=xyz"


def _fetch(**overrides):
    kwargs = {
        "account": "apex-inc",
        "user_id": "user-42",
        "impersonator_id": "admin-1",
        "app_client_id": "app",
        "token": "abc123",
        "scope": "openid email",
    }
    kwargs.update(overrides)
    return fetch_impersonation_link(**kwargs)


def test_build_impersonation_request_shape():
    assert build_impersonation_request("admin-1", "app", "openid email") == {
        "protocol": "oauth2",
        "impersonator_id": "admin-1",
        "client_id": "app",
        "additionalParameters": {"response_type": "token", "scope": "openid email"},
    }


@respx.mock
def test_fetch_link_sends_bearer_token_and_body():
    route = respx.post(IMPERSONATE_URL).respond(200, text=LINK)

    _fetch()

    request = route.calls.last.request
    assert request.headers["Authorization"] == "Bearer abc123"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {
        "protocol": "oauth2",
        "impersonator_id": "admin-1",
        "client_id": "app",
        "additionalParameters": {"response_type": "token", "scope": "openid email"},
    }


@respx.mock
def test_fetch_link_returns_body_verbatim():
    respx.post(IMPERSONATE_URL).respond(200, text=LINK + "\n")

    assert _fetch() == LINK + "\n"


@respx.mock
def test_fetch_link_does_not_validate_body():
    respx.post(IMPERSONATE_URL).respond(200, text="not a url")

    assert _fetch() == "not a url"


@respx.mock
def test_fetch_link_empty_body_is_empty_string():
    respx.post(IMPERSONATE_URL).respond(200, text="")

    assert _fetch() == ""


@respx.mock
def test_fetch_link_sends_timeout():
    route = respx.post(IMPERSONATE_URL).respond(200, text=LINK)

    _fetch(timeout=3.0)

    assert route.calls.last.request.extensions["timeout"]["read"] == 3.0


@respx.mock
def test_fetch_link_reuses_given_client():
    route = respx.post(IMPERSONATE_URL).respond(200, text=LINK)

    with httpx.Client() as client:
        assert _fetch(client=client) == LINK
        assert not client.is_closed
    assert route.call_count == 1


@respx.mock
def test_fetch_link_connection_error_is_network_error():
    respx.post(IMPERSONATE_URL).mock(side_effect=httpx.ConnectError("connection reset"))

    with pytest.raises(NetworkError) as exc_info:
        _fetch()
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@respx.mock
def test_fetch_link_error_status_is_network_error():
    respx.post(IMPERSONATE_URL).respond(404, json={"message": "User not found"})

    with pytest.raises(NetworkError) as exc_info:
        _fetch()
    assert exc_info.value.status_code == 404
