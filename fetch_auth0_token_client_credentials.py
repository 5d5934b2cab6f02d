import logging

import httpx

from auth0_common import DEFAULT_TIMEOUT, auth0_url
from auth0_errors import DecodeError, NetworkError

logger = logging.getLogger(__name__)


def build_token_request(client_id, client_secret):
    """Returns the JSON body for a client credentials grant."""
    return {
        'client_id': client_id,
        'client_secret': client_secret,
        'grant_type': 'client_credentials',
    }


def fetch_token(account, client_id, client_secret, timeout=DEFAULT_TIMEOUT, client=None):
    """
    Exchanges the application's client credentials for an Auth0 access token.

    The token expires within roughly 24 hours. Nothing is cached: every call
    asks Auth0 for a fresh one. Pass ``client`` to reuse an open httpx.Client,
    otherwise a one-off request is made.
    """
    token_url = auth0_url(account, '/oauth/token')
    headers = {
        'Accept': 'application/json',
        'Content-Type': 'application/json',
    }
    data = build_token_request(client_id, client_secret)

    logger.info("Requesting client credentials token from %s", token_url)
    try:
        if client is None:
            resp = httpx.post(token_url, headers=headers, json=data, timeout=timeout)
        else:
            resp = client.post(token_url, headers=headers, json=data, timeout=timeout)
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.debug("Token response body: %s", exc.response.text)
        raise NetworkError(
            f"token request returned status {exc.response.status_code}",
            status_code=exc.response.status_code,
        ) from exc
    except httpx.HTTPError as exc:
        raise NetworkError(f"token request failed: {exc}") from exc

    try:
        token_info = resp.json()
    except ValueError as exc:
        raise DecodeError(f"invalid JSON in token response: {exc}") from exc

    if not isinstance(token_info, dict):
        raise DecodeError("token response is not a JSON object")

    access_token = token_info.get('access_token')
    if not isinstance(access_token, str) or not access_token:
        raise DecodeError("token response has no access_token")

    logger.debug("Received %s token", token_info.get('token_type', 'unknown'))
    return access_token
