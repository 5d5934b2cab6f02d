import logging
from urllib.parse import quote

import httpx

from auth0_common import DEFAULT_TIMEOUT, auth0_url
from auth0_errors import NetworkError

logger = logging.getLogger(__name__)


def build_impersonation_request(impersonator_id, app_client_id, scope):
    """Returns the JSON body for an impersonation request."""
    return {
        'protocol': 'oauth2',
        'impersonator_id': impersonator_id,
        'client_id': app_client_id,
        'additionalParameters': {
            'response_type': 'token',
            'scope': scope,
        },
    }


def fetch_impersonation_link(account, user_id, impersonator_id, app_client_id, token, scope,
                             timeout=DEFAULT_TIMEOUT, client=None):
    """
    Asks Auth0 for a link which can be used to authenticate as ``user_id``.

    The response body is returned verbatim. Auth0 answers with the link as
    plain text, so it is neither parsed nor checked to be a well-formed URL;
    an empty body comes back as an empty string.
    """
    if client is None:
        with httpx.Client(timeout=timeout) as own_client:
            return fetch_impersonation_link(account, user_id, impersonator_id, app_client_id,
                                            token, scope, timeout=timeout, client=own_client)

    impersonate_url = auth0_url(account, f"/users/{quote(user_id, safe='')}/impersonate")
    headers = {
        'Content-Type': 'application/json',
        'Authorization': f"Bearer {token}",
    }
    data = build_impersonation_request(impersonator_id, app_client_id, scope)

    logger.info("Requesting impersonation link from %s", impersonate_url)
    try:
        with client.stream('POST', impersonate_url, headers=headers, json=data, timeout=timeout) as resp:
            resp.read()
            resp.raise_for_status()
            return resp.text
    except httpx.HTTPStatusError as exc:
        logger.debug("Impersonation response body: %s", exc.response.text)
        raise NetworkError(
            f"impersonation request returned status {exc.response.status_code}",
            status_code=exc.response.status_code,
        ) from exc
    except httpx.HTTPError as exc:
        raise NetworkError(f"impersonation request failed: {exc}") from exc
