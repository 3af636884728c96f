"""Arcana Crawler CLI entry point.

Provides subcommands for running the Socket.IO server and for generating a
single dungeon layout to inspect on the terminal. Accepts configuration via
flags and environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import random
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()

__version__ = "0.1.0"


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Arcana Crawler Dungeon Server

    Run the real-time Flask-SocketIO server, or generate one dungeon layout and
    print it. Configuration can be provided via CLI flags or environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                 Bind address for the web server (default: 0.0.0.0)
          PORT                 Port for the web server (default: 5000)
          DUNGEON_WIDTH        Map width, odd and >= 5 (default: 25)
          DUNGEON_HEIGHT       Map height, odd and >= 5 (default: 25)
          DUNGEON_SEED         Fixed seed for every new session (default: random)
          ARCANA_LOG_LEVEL     Structured log level: debug|info|warn|error

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Run the server on a custom port
          python run.py server --port 8080

          # Print a seeded 31x21 layout with its generation metrics
          python run.py generate --width 31 --height 21 --seed 42 --metrics
        """
    )

    parser = argparse.ArgumentParser(
        prog="Arcana",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Arcana Crawler {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the Socket.IO web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the real-time Flask/Socket.IO server",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one dungeon and print it as tile characters",
        formatter_class=argparse.RawTextHelpFormatter,
        description=dedent(
            """
            Generate a single dungeon layout and print one row per line using
            the tile chars: W wall, F floor, S start, D door (exit),
            E encounter, T treasure.
            """
        ),
    )
    gen_parser.add_argument("--width", type=int, default=None, help="Map width (default: env DUNGEON_WIDTH or 25)")
    gen_parser.add_argument("--height", type=int, default=None, help="Map height (default: env DUNGEON_HEIGHT or 25)")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    gen_parser.add_argument("--metrics", action="store_true", help="Also print generation metrics as JSON")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def _generate(args) -> int:
    from arcana.dungeon import DungeonConfig, DungeonConfigError, generate

    try:
        config = DungeonConfig.from_mapping(os.environ)
        width = args.width or config.width
        height = args.height or config.height
        seed = args.seed if args.seed is not None else config.seed
        result = generate(width, height, random.Random(seed), config)
    except DungeonConfigError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    for row in result.grid:
        print("".join(kind.value for kind in row))
    if args.metrics:
        print(json.dumps(result.metrics, indent=2, sort_keys=True))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _generate(args)

    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)
    if _COLOR_ENABLED:  # pragma: no cover - terminal only
        _color_init()

    # Import server entrypoints only after environment is ready
    from arcana.logging_utils import log
    from arcana.server import start_server

    title = (
        f"{Fore.CYAN}{Style.BRIGHT}Arcana Dungeon Server{Style.RESET_ALL}"
        if _COLOR_ENABLED
        else "Arcana Dungeon Server"
    )

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    size = f"{os.getenv('DUNGEON_WIDTH', '25')}x{os.getenv('DUNGEON_HEIGHT', '25')}"
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Map size:'):12} {value(size)}",
        f"  {label('WebSockets:'):12} {value('enabled')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
