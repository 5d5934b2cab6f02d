"""
Prints an Auth0 impersonation link for a user.

Usage:
    AUTH0_CLIENT_ID=... AUTH0_CLIENT_SECRET=... \\
        auth0-impersonate [--impersonator-id ID] [--client-id ID] [--scope SCOPE] <user-id>

A client credentials token is fetched first and then used to request the
link, which is written to stdout. Any failure is logged and exits with 1.
"""
import argparse
import logging
import os
import sys
from dataclasses import dataclass

from auth0_common import DEFAULT_ACCOUNT, DEFAULT_SCOPE, DEFAULT_TIMEOUT
from auth0_errors import ConfigError, ImpersonateError
from fetch_auth0_impersonation_link import fetch_impersonation_link
from fetch_auth0_token_client_credentials import fetch_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImpersonateConfig:
    client_id: str
    client_secret: str
    user_id: str
    impersonator_id: str = ''
    app_client_id: str = ''
    scope: str = DEFAULT_SCOPE
    account: str = DEFAULT_ACCOUNT
    timeout: float = DEFAULT_TIMEOUT


def build_parser():
    parser = argparse.ArgumentParser(
        prog='auth0-impersonate',
        description="Print an Auth0 impersonation link for <user-id>.",
    )
    parser.add_argument('user_id', nargs='?', default='', metavar='<user-id>',
                        help="User ID to impersonate")
    parser.add_argument('--impersonator-id', default='', help="User ID of impersonator")
    parser.add_argument('--client-id', dest='app_client_id', default='',
                        help="Client ID of the application")
    parser.add_argument('--scope', default=DEFAULT_SCOPE, help="OAuth scope")
    parser.add_argument('--account', default=None,
                        help=f"Auth0 account name (default: $AUTH0_ACCOUNT or {DEFAULT_ACCOUNT})")
    parser.add_argument('--timeout', type=float, default=DEFAULT_TIMEOUT,
                        help="Seconds to wait for each Auth0 request")
    parser.add_argument('-v', '--verbose', action='store_true', help="Enable debug logging")
    return parser


def _require_env(environ, name):
    value = environ.get(name)
    if not value:
        raise ConfigError(f"{name} environment variable required")
    return value


def config_from_args(args, environ=None):
    """Assembles the run configuration from parsed flags and the environment."""
    if environ is None:
        environ = os.environ

    client_id = _require_env(environ, 'AUTH0_CLIENT_ID')
    client_secret = _require_env(environ, 'AUTH0_CLIENT_SECRET')

    if not args.user_id:
        raise ConfigError("<user-id> argument required")
    if args.timeout <= 0:
        raise ConfigError("--timeout must be positive")

    return ImpersonateConfig(
        client_id=client_id,
        client_secret=client_secret,
        user_id=args.user_id,
        impersonator_id=args.impersonator_id,
        app_client_id=args.app_client_id,
        scope=args.scope,
        account=args.account or environ.get('AUTH0_ACCOUNT') or DEFAULT_ACCOUNT,
        timeout=args.timeout,
    )


def load_config(argv=None, environ=None):
    return config_from_args(build_parser().parse_args(argv), environ)


def main(argv=None, environ=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    try:
        config = config_from_args(args, environ)
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(1)

    try:
        token = fetch_token(config.account, config.client_id, config.client_secret,
                            timeout=config.timeout)
    except ImpersonateError as e:
        logger.error("error fetching token: %s", e)
        sys.exit(1)

    try:
        link = fetch_impersonation_link(config.account, config.user_id, config.impersonator_id,
                                        config.app_client_id, token, config.scope,
                                        timeout=config.timeout)
    except ImpersonateError as e:
        logger.error("error fetching link: %s", e)
        sys.exit(1)

    print(link)


if __name__ == '__main__':
    main()
