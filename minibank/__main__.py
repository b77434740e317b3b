"""
Minibank command line

    python -m minibank demo     # replay the walkthrough and print reports
    python -m minibank serve    # start the HTTP API
"""

import argparse
import sys
from typing import List, Optional

from .config import get_config
from .logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="minibank", description="In-memory banking ledger")
    parser.add_argument("--log-level", default=None, help="Override MINIBANK_LOG_LEVEL")
    subcommands = parser.add_subparsers(dest="command", required=True)

    subcommands.add_parser("demo", help="Run the account walkthrough")

    serve = subcommands.add_parser("serve", help="Start the HTTP API")
    serve.add_argument("--host", default=None, help="Override MINIBANK_API_HOST")
    serve.add_argument("--port", type=int, default=None, help="Override MINIBANK_API_PORT")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()
    setup_logging(args.log_level or config.log_level, config.log_format)

    if args.command == "demo":
        from .demo import run_demo
        run_demo()
        return 0

    from .api import run_server
    try:
        run_server(
            host=args.host or config.api_host,
            port=args.port or config.api_port,
            debug=args.reload
        )
    except KeyboardInterrupt:
        print("\nShutting down Minibank API...")
    except OSError as e:
        print(f"Error starting server: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
