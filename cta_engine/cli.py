"""
CTA Engine CLI

Command-line interface for checking and previewing CTA documents.

Commands:
  cta-engine validate <file>   - Validate a document
  cta-engine render <file>     - Render a document (JSON tree or HTML)
  cta-engine default           - Print the default document
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any

from cta_engine.config import get_settings
from cta_engine.services.config_validator import (
    default_config,
    dump_config_text,
    normalize_config,
    validate_config,
)
from cta_engine.services.cta_renderer import render_screen
from cta_engine.services.html_writer import screen_to_html


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, get_settings().log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_document(path: str) -> Any:
    """
    Load a JSON document from a file path ("-" reads stdin).

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the content is not JSON
    """
    if path == "-":
        return json.load(sys.stdin)
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _read_or_report(path: str) -> tuple[bool, Any]:
    try:
        return True, _load_document(path)
    except OSError as e:
        print(f"Error reading {path}: {e}", file=sys.stderr)
    except json.JSONDecodeError as e:
        print(f"Invalid JSON in {path}: line {e.lineno}, column {e.colno}: {e.msg}", file=sys.stderr)
    return False, None


def main(args: list[str] | None = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if args is None:
        args = sys.argv[1:]

    _configure_logging()

    # No args - show help
    if not args:
        print_help()
        return 0

    command = args[0].lower()

    if command in ("help", "-h", "--help"):
        print_help()
        return 0

    if command == "validate":
        return handle_validate(args[1:])

    if command == "render":
        return handle_render(args[1:])

    if command == "default":
        return handle_default(args[1:])

    # Unknown command
    print(f"Unknown command: {command}", file=sys.stderr)
    print_help()
    return 1


def print_help() -> None:
    """Print CLI help message."""
    print("""
CTA Engine CLI - Validate and render CTA configuration documents

Usage:
  cta-engine <command> [options]

Commands:
  validate    Validate a document file
  render      Render a document file to a visual tree (or HTML)
  default     Print the default document
  help        Show this help message

Examples:
  cta-engine validate cta.json
  cta-engine validate generated.json --normalize
  cta-engine render cta.json --html
  cta-engine default > cta.json
""".strip())


def handle_validate(args: list[str]) -> int:
    """
    Handle 'cta-engine validate' command.

    Args:
        args: <file> [--normalize]

    Returns:
        Exit code (0 for a valid document, 1 otherwise)
    """
    if not args or args[0] in ("--help", "-h"):
        print("Usage: cta-engine validate <file> [--normalize]")
        return 0 if args else 1

    ok, data = _read_or_report(args[0])
    if not ok:
        return 1

    if "--normalize" in args[1:] and isinstance(data, dict):
        data = normalize_config(data)

    result = validate_config(data)
    if not result.ok:
        print("Invalid configuration:", file=sys.stderr)
        for error in result.errors:
            location = error["path"] or "(document)"
            print(f"  {location}: {error['message']}", file=sys.stderr)
        return 1

    config = result.config
    print(
        f"Valid configuration: version {config.version}, "
        f"{len(config.components)} component(s), "
        f"{'enabled' if config.enabled else 'disabled'}"
    )
    return 0


def handle_render(args: list[str]) -> int:
    """
    Handle 'cta-engine render' command.

    Args:
        args: <file> [--html]

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if not args or args[0] in ("--help", "-h"):
        print("Usage: cta-engine render <file> [--html]")
        return 0 if args else 1

    ok, data = _read_or_report(args[0])
    if not ok:
        return 1

    result = validate_config(data)
    if not result.ok:
        print(f"Invalid configuration: {result.message}", file=sys.stderr)
        return 1

    screen = render_screen(result.config)
    if screen is None:
        print("Document is disabled; nothing to render", file=sys.stderr)
        return 0

    if "--html" in args[1:]:
        print(screen_to_html(screen))
    else:
        print(json.dumps(screen.model_dump(exclude_none=True), indent=get_settings().json_indent))
    return 0


def handle_default(args: list[str]) -> int:
    """
    Handle 'cta-engine default' command.

    Returns:
        Exit code (always 0)
    """
    if args and args[0] in ("--help", "-h"):
        print("Usage: cta-engine default")
        return 0

    print(dump_config_text(default_config()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
