import argparse
import json
import os
import sys
from typing import Optional

from .client import SmsApi
from .config import SmsApiConfig
from .exceptions import SmsApiError
from .logging_config import setup_logging


def get_default_config_dir() -> str:
    """Get the default configuration directory following XDG standards"""
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return os.path.join(xdg_config_home, "smsapi")

    home = os.environ.get("HOME")
    if home:
        return os.path.join(home, ".config", "smsapi")

    return os.path.join(os.getcwd(), ".config", "smsapi")


def load_client(args: argparse.Namespace) -> SmsApi:
    """Config file when --config is given, then .env/environment, then the default config file"""
    if args.config:
        return SmsApi.from_config(SmsApiConfig.from_file(args.config))
    if args.env_file or os.environ.get("API_KEY"):
        return SmsApi.from_env(args.env_file)
    return SmsApi.from_config(SmsApiConfig.from_file())


def print_response(response, verbose: bool, summary: Optional[str] = None) -> int:
    if verbose or not response.ok:
        print(json.dumps(response.to_dict(), indent=2, default=str))
    elif summary:
        print(summary)
    else:
        print(json.dumps(response.data, indent=2, default=str))
    return 0 if response.ok else 1


def cmd_init(args: argparse.Namespace) -> int:
    """Create the config directory and write config.json"""
    config_dir = args.config_dir or get_default_config_dir()
    config_path = os.path.join(config_dir, "config.json")

    print(f"Initializing SMS API client in: {config_dir}")

    if os.path.exists(config_path) and not args.force:
        print(f"File already exists: {config_path}")
        print("Use --force to overwrite existing files")
        return 1

    try:
        config = SmsApiConfig(args.api_key, args.api_secret, args.base_url)
    except SmsApiError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        os.makedirs(config_dir, exist_ok=True)
        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(include_secret=True), f, indent=2)
        os.chmod(config_path, 0o600)
    except OSError as e:
        print(f"Failed to create config file: {e}", file=sys.stderr)
        return 1

    print(f"Created config file: {config_path}")
    return 0


def cmd_test_connection(args: argparse.Namespace) -> int:
    """Test connection to the SMS API"""
    try:
        with load_client(args) as api:
            result = api.test_connection()
    except SmsApiError as e:
        print(f"Connection failed: {e}", file=sys.stderr)
        return 1

    if result["success"]:
        print("Connection successful!")
        return 0
    print(f"Connection failed: {result.get('error')}", file=sys.stderr)
    return 1


def cmd_send(args: argparse.Namespace) -> int:
    """Send a message to one or more contacts"""
    try:
        with load_client(args) as api:
            if len(args.to) == 1:
                response = api.messages.send_to_contact(args.to[0], args.message, id=args.id)
                return print_response(response, args.verbose, "Message sent successfully!")

            result = api.messages.send_to_multiple_contacts(
                args.to, args.message, id=args.id, max_workers=args.workers
            )
    except SmsApiError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(json.dumps(result.to_dict(), indent=2, default=str))
    else:
        print(f"Sent {result.successful}/{result.total} messages ({result.failed} failed)")
    return 0 if result.ok else 1


def cmd_send_tags(args: argparse.Namespace) -> int:
    """Send a message to contacts carrying the given tags"""
    try:
        with load_client(args) as api:
            response = api.messages.send_to_tags(args.tag, args.message, id=args.id)
    except SmsApiError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return print_response(response, args.verbose, "Message sent successfully!")


def cmd_contacts(args: argparse.Namespace) -> int:
    """List contacts"""
    try:
        with load_client(args) as api:
            response = api.contacts.list_contacts(limit=args.limit, status=args.status)
    except SmsApiError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return print_response(response, args.verbose)


def cmd_shortlink(args: argparse.Namespace) -> int:
    """Create a shortlink"""
    try:
        with load_client(args) as api:
            response = api.shortlinks.create_shortlink(args.long_url, name=args.name, alias=args.alias)
    except SmsApiError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    short_url = response.data.get("short_url") if isinstance(response.data, dict) else None
    return print_response(response, args.verbose, f"Short URL: {short_url or 'N/A'}")


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default=None, help="Config file path (default: auto-detect from config directory)")
    parser.add_argument("--env-file", default=None, help="Load API_KEY, API_SECRET and URL from this .env file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output (default: False)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="smsapi-cli", description="SMS API client utilities")
    p.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL or WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_init = sub.add_parser("init", help="Write a config file", description="Create the configuration directory and write config.json with API credentials.")
    p_init.add_argument("--config-dir", help="Config directory (default: XDG_CONFIG_HOME/smsapi or ~/.config/smsapi)")
    p_init.add_argument("--api-key", required=True, help="API key")
    p_init.add_argument("--api-secret", required=True, help="API secret")
    p_init.add_argument("--base-url", required=True, help="API base URL")
    p_init.add_argument("--force", action="store_true", help="Overwrite existing files")
    p_init.set_defaults(func=cmd_init)

    p_test = sub.add_parser("test", help="Test connection to the SMS API", description="List a single contact to check connectivity and credentials.")
    add_common_arguments(p_test)
    p_test.set_defaults(func=cmd_test_connection)

    p_send = sub.add_parser("send", help="Send a message to contacts", description="Send a message to one or more contacts (one API call per recipient).")
    p_send.add_argument("message", help="Message to send")
    p_send.add_argument("--to", action="append", required=True, help="Recipient MSISDN (repeat for several)")
    p_send.add_argument("--id", default=None, help="Client-side message identifier")
    p_send.add_argument("--workers", type=int, default=None, help="Send to several recipients in parallel")
    add_common_arguments(p_send)
    p_send.set_defaults(func=cmd_send)

    p_tags = sub.add_parser("send-tags", help="Send a message to tagged contacts", description="Send a message to every contact carrying one of the given tags.")
    p_tags.add_argument("message", help="Message to send")
    p_tags.add_argument("--tag", action="append", required=True, help="Tag short name (repeat for several)")
    p_tags.add_argument("--id", default=None, help="Client-side message identifier")
    add_common_arguments(p_tags)
    p_tags.set_defaults(func=cmd_send_tags)

    p_contacts = sub.add_parser("contacts", help="List contacts")
    p_contacts.add_argument("--limit", type=int, default=10, help="Number of contacts (default: 10)")
    p_contacts.add_argument("--status", default=None, help="SUBSCRIBED, INVITED, CONFIRMED or CANCELLED")
    add_common_arguments(p_contacts)
    p_contacts.set_defaults(func=cmd_contacts)

    p_link = sub.add_parser("shortlink", help="Create a shortlink")
    p_link.add_argument("long_url", help="URL to shorten")
    p_link.add_argument("--name", default=None, help="Shortlink name (max 50 characters)")
    p_link.add_argument("--alias", default=None, help="Custom alias (max 30 characters, no spaces)")
    add_common_arguments(p_link)
    p_link.set_defaults(func=cmd_shortlink)

    return p


def main(argv=None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(log_level=args.log_level)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
