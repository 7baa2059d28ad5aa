"""Main CLI entry point for the Mercado Pago engine."""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Any

from mercadopago_engine.core import (
    Credentials,
    HttpMethod,
    RequestSpec,
    ConfigError,
    MercadoPagoError,
    Outcome,
    Success,
    RawError,
    TransportFailure,
    OAuthError,
    TokenSet,
    save_credentials,
)
from mercadopago_engine.client import build_client, calculate_expiry

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )
    # Suppress httpx INFO logs for cleaner output
    logging.getLogger("httpx").setLevel(logging.WARNING)


def outcome_to_dict(outcome: Outcome) -> dict[str, Any]:
    """Render an Outcome as a JSON-friendly dict."""
    data: dict[str, Any] = {"outcome": outcome.name, "ok": outcome.ok}
    if isinstance(outcome, Success):
        data["body"] = outcome.body
    elif isinstance(outcome, RawError):
        data["status_code"] = outcome.status_code
        data["body"] = outcome.body.decode("utf-8", errors="replace")
    elif isinstance(outcome, TransportFailure):
        data["kind"] = outcome.kind.value
        data["detail"] = outcome.detail
    return data


def token_result_to_dict(result: TokenSet | OAuthError) -> dict[str, Any]:
    """Render a token call result as a JSON-friendly dict."""
    if isinstance(result, OAuthError):
        return {
            "ok": False,
            "error": result.reason,
            "kind": result.kind.value,
            "status_code": result.status_code,
        }

    data = asdict(result)
    data.pop("raw", None)
    data["ok"] = True
    if result.expires_in is not None:
        data["expires_at"] = calculate_expiry(result.expires_in).isoformat()
    return data


def _print_json(data: dict[str, Any]) -> None:
    print(json.dumps(data, indent=2, default=str))


def cmd_configure(args):
    """Handle the configure command."""
    try:
        credentials = Credentials(
            client_id=args.client_id,
            client_secret=args.client_secret,
            access_token=args.access_token,
        )
        path = save_credentials(credentials, args.profile)
        print(f"Credentials saved for profile '{args.profile}'")
        print(f"Configuration saved to: {path}")

    except ConfigError as e:
        print(f"Error saving credentials: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_auth_url(args):
    """Handle the auth-url command."""
    try:
        with build_client(profile=args.profile) as client:
            print(client.oauth.authorization_url(args.redirect_uri, state=args.state))

    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)


def _run_token_call(args, call) -> None:
    try:
        with build_client(profile=args.profile) as client:
            result = call(client)
    except MercadoPagoError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    _print_json(token_result_to_dict(result))
    if isinstance(result, OAuthError):
        sys.exit(1)


def cmd_exchange_code(args):
    """Handle the exchange-code command."""
    _run_token_call(args, lambda client: client.oauth.exchange_code(args.code, args.redirect_uri))


def cmd_refresh_token(args):
    """Handle the refresh-token command."""
    _run_token_call(args, lambda client: client.oauth.refresh_token(args.refresh_token))


def cmd_request(args):
    """Handle the request command."""
    try:
        method = HttpMethod(args.method.upper())
    except ValueError:
        print(f"Error: Invalid method '{args.method}'. Must be one of GET, POST, PUT, DELETE.", file=sys.stderr)
        sys.exit(1)

    body = None
    if args.data is not None:
        try:
            body = json.loads(args.data)
        except json.JSONDecodeError as e:
            print(f"Error: --data is not valid JSON: {e}", file=sys.stderr)
            sys.exit(1)

    try:
        spec = RequestSpec(
            method=method,
            path=args.path,
            body=body,
            bearer_override=args.token,
            idempotency_key=args.idempotency_key,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        with build_client(profile=args.profile) as client:
            outcome = client.core.execute(spec)
    except MercadoPagoError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    _print_json(outcome_to_dict(outcome))
    if not outcome.ok:
        sys.exit(1)


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="mercadopago-engine",
        description="Mercado Pago API client CLI",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Configure command
    configure_parser = subparsers.add_parser("configure", help="Save application credentials")
    configure_parser.add_argument("--client-id", required=True, help="Application client ID")
    configure_parser.add_argument("--client-secret", required=True, help="Application client secret")
    configure_parser.add_argument("--access-token", help="Application access token (optional)")
    configure_parser.add_argument("--profile", default="default", help="Profile name")
    configure_parser.set_defaults(func=cmd_configure)

    # Auth-url command
    auth_url_parser = subparsers.add_parser("auth-url", help="Print the OAuth authorization URL")
    auth_url_parser.add_argument("--redirect-uri", required=True, help="OAuth redirect URI")
    auth_url_parser.add_argument("--state", help="CSRF state value")
    auth_url_parser.add_argument("--profile", default="default", help="Profile name")
    auth_url_parser.set_defaults(func=cmd_auth_url)

    # Exchange-code command
    exchange_parser = subparsers.add_parser("exchange-code", help="Exchange an authorization code for tokens")
    exchange_parser.add_argument("--code", required=True, help="Authorization code from the callback")
    exchange_parser.add_argument("--redirect-uri", required=True, help="OAuth redirect URI")
    exchange_parser.add_argument("--profile", default="default", help="Profile name")
    exchange_parser.set_defaults(func=cmd_exchange_code)

    # Refresh-token command
    refresh_parser = subparsers.add_parser("refresh-token", help="Refresh a user access token")
    refresh_parser.add_argument("--refresh-token", required=True, help="Stored refresh token")
    refresh_parser.add_argument("--profile", default="default", help="Profile name")
    refresh_parser.set_defaults(func=cmd_refresh_token)

    # Request command
    request_parser = subparsers.add_parser("request", help="Make a raw API request")
    request_parser.add_argument("method", help="HTTP method (GET, POST, PUT, DELETE)")
    request_parser.add_argument("path", help="API path (e.g., /v1/payments/123)")
    request_parser.add_argument("--data", help="JSON request body")
    request_parser.add_argument("--token", help="Act on behalf of the owner of this access token")
    request_parser.add_argument("--idempotency-key", help="X-Idempotency-Key for POST requests")
    request_parser.add_argument("--profile", default="default", help="Profile name")
    request_parser.set_defaults(func=cmd_request)

    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
