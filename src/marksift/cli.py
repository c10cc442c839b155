"""CLI entry point for the MarkSift server."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point for the MarkSift server."""
    parser = argparse.ArgumentParser(
        prog="marksift",
        description="MarkSift — Pluggable bookmark search service",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Server bind address (overrides config)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Server port (overrides config)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--list-plugins",
        action="store_true",
        help="Load the search plugins, print their registrations and exit",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"MarkSift {_get_version()}",
    )

    args = parser.parse_args(argv)

    log_level = (args.log_level or "info").upper()
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    from marksift.api.app import CONFIG_ENV_VAR, LOG_LEVEL_ENV_VAR, load_settings

    # The app factory runs inside uvicorn and reads these back
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        os.environ[CONFIG_ENV_VAR] = str(config_path.resolve())
    if args.log_level:
        os.environ[LOG_LEVEL_ENV_VAR] = args.log_level

    settings = load_settings()
    host = args.host or settings.server.host
    port = args.port or settings.server.port

    if args.list_plugins:
        sys.exit(_list_plugins())

    import uvicorn

    uvicorn.run(
        "marksift.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        workers=settings.server.workers if not args.reload else 1,
        reload=args.reload,
        log_level=log_level.lower(),
    )


def _list_plugins() -> int:
    """Print every registered plugin in priority order. Returns an exit code."""
    from marksift.adapters.base.exceptions import ConfigurationError
    from marksift.adapters.base.registry import PluginManager
    from marksift.adapters.loader import load_all_plugins

    try:
        manager = load_all_plugins(PluginManager())
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    active_found = False
    for entry in manager.registrations():
        configured = entry.provider.is_configured()
        marker = " "
        if configured and not active_found:
            marker = "*"
            active_found = True
        state = "configured" if configured else "not configured"
        print(f"{marker} {entry.type.value:<8} {entry.name:<12} {state}")
    if not active_found:
        print("No search backend is configured.", file=sys.stderr)
        return 1
    return 0


def _get_version() -> str:
    """Get the package version."""
    try:
        from marksift import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
