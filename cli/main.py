"""CLI entry point and argument parsing"""

import argparse
import asyncio
import json
import sys
from rich.console import Console

from config.startup import relay_config_from_settings
from relay import ConfigurationError, RequestDispatcher
from relay.server import RelayServer, setup_debug_logging
from cli.status_display import show_accounts


console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Realm Relay CLI")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the relay HTTP server (default)")
    serve.add_argument("--bind", "-b", default=None, help="Override bind address (default: from config)")
    serve.add_argument("--port", "-p", type=int, default=None, help="Override port (default: from config)")

    subparsers.add_parser("accounts", help="List remote accounts and their realms")

    send = subparsers.add_parser("send", help="Sign and send one payload")
    target = send.add_mutually_exclusive_group(required=True)
    target.add_argument("--url", help="Target URL")
    target.add_argument("--account", help="Configured remote account name")
    body = send.add_mutually_exclusive_group(required=True)
    body.add_argument("--query", help="Query text, sent as {\"query\": ...}")
    body.add_argument("--payload", help="Raw JSON payload")

    return parser


def build_payload(args) -> dict:
    """JSON payload for the send command"""
    if args.query is not None:
        return {"query": args.query}
    try:
        return json.loads(args.payload)
    except json.JSONDecodeError as e:
        raise ValueError(f"--payload is not valid JSON: {e.msg}") from None


def run_send(dispatcher: RequestDispatcher, args) -> int:
    """Run one dispatch and print the relayed JSON

    Returns:
        Process exit status: 1 if the result carries an error, else 0
    """
    payload = build_payload(args)
    if args.account:
        result = asyncio.run(dispatcher.dispatch_to_account(args.account, payload))
    else:
        result = asyncio.run(dispatcher.dispatch(args.url, payload))

    console.print_json(json.dumps(result))
    return 1 if isinstance(result, dict) and "error" in result else 0


def main(argv=None):
    """Entry point for the CLI"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug and args.command != "serve":
        setup_debug_logging()

    try:
        relay_config = relay_config_from_settings()

        if args.command == "accounts":
            show_accounts(relay_config, console)
        elif args.command == "send":
            sys.exit(run_send(RequestDispatcher(relay_config), args))
        else:
            server = RelayServer(
                relay_config,
                debug=args.debug,
                bind_address=getattr(args, "bind", None),
                port=getattr(args, "port", None),
            )
            server.run()

    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]ERROR:[/red] {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")


if __name__ == "__main__":
    main()
