"""
NoteStore — Command-Line Entry Point
=====================================

Usage:
    notestore --hostname 127.0.0.1 --port 8000 --cache ./cache

Each of the three server options may instead come from the environment
(NOTESTORE_HOST, NOTESTORE_PORT, NOTESTORE_CACHE_DIR). Options given on the
command line win. If a value is missing from both, the process prints which
options are required and exits with status 1.
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional

import uvicorn
from pydantic import ValidationError as PydanticValidationError

from notestore.config import Settings
from notestore.exceptions import FileStorageError
from notestore.main import create_app, setup_logging

logger = logging.getLogger("notestore.cli")

# Settings field → command-line option
OPTION_NAMES: Dict[str, str] = {
    "host": "--hostname",
    "port": "--port",
    "cache_dir": "--cache",
    "log_level": "--log-level",
}
REQUIRED_OPTIONS = "--hostname, --port, --cache"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notestore",
        description="HTTP service storing text notes as files in a directory.",
    )
    parser.add_argument("--hostname", dest="host", help="server bind host")
    parser.add_argument("--port", dest="port", help="server bind port")
    parser.add_argument("--cache", dest="cache_dir", help="directory holding the note files")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)",
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """
    Build Settings from parsed arguments, falling back to the environment.

    Raises:
        pydantic.ValidationError: A required value is missing or invalid.
    """
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    return Settings(**overrides)


def describe_settings_error(exc: PydanticValidationError) -> str:
    missing: List[str] = []
    invalid: List[str] = []
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else ""
        option = OPTION_NAMES.get(field, field)
        if err["type"] == "missing":
            missing.append(option)
        else:
            invalid.append(f"{option}: {err['msg']}")

    lines = []
    if missing:
        lines.append(f"All options ({REQUIRED_OPTIONS}) are required; missing: {', '.join(missing)}")
    lines.extend(f"Invalid value for {item}" for item in invalid)
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except PydanticValidationError as e:
        print(describe_settings_error(e), file=sys.stderr)
        sys.exit(1)

    setup_logging(settings.log_level)
    app = create_app(settings)

    # A store directory failure exits with status 1 before uvicorn starts
    try:
        app.state.note_store.ensure_root()
    except FileStorageError as e:
        logger.error("Server start error: %s | Context: %s", e.message, e.context)
        sys.exit(1)

    logger.info("Server is running at %s", settings.base_url)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
