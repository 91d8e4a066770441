from __future__ import annotations

import argparse
import sys

from .config import LOG_LEVELS, VARIANTS, ConfigError, Settings, load_settings
from .logging_conf import setup_logging


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    """CLI parser; environment-derived settings supply the defaults."""
    parser = argparse.ArgumentParser(prog="bookserver", description="Fixed-route JSON server")
    parser.add_argument("--host", default=defaults.host)
    parser.add_argument("--port", type=int, default=defaults.port)
    parser.add_argument("--routes", choices=VARIANTS, default=defaults.variant, dest="variant")
    parser.add_argument(
        "--log-level", type=str.upper, choices=LOG_LEVELS, default=defaults.log_level
    )
    return parser


def build_settings(argv: list[str]) -> Settings:
    """Merge environment and flags; bad values exit through parser.error()."""
    try:
        env_settings = load_settings()
    except ConfigError as e:
        build_parser(Settings()).error(str(e))

    parser = build_parser(env_settings)
    args = parser.parse_args(argv)
    try:
        return env_settings.override(
            host=args.host,
            port=args.port,
            variant=args.variant,
            log_level=args.log_level,
        )
    except ConfigError as e:
        parser.error(str(e))


def main(argv: list[str] | None = None) -> None:
    settings = build_settings(sys.argv[1:] if argv is None else argv)
    setup_logging(settings.log_level)

    from .server import HttpServer

    server = HttpServer(settings.host, settings.port, settings=settings)
    server.start()


if __name__ == "__main__":
    main()
