"""Command line entrypoint for rendering markup from JSON definitions."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from webmarkup.config import load_render_settings
from webmarkup.context import RouteTable
from webmarkup.errors import MarkupError
from webmarkup.helper import Helper
from webmarkup.logging_config import configure_logging
from webmarkup.strings import StringTable

_LOGGER = logging.getLogger("webmarkup.cli")


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise argparse.ArgumentTypeError(f"Unable to read JSON from {path}: {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render HTML menus, lists and selects from JSON definitions")
    parser.add_argument("kind", choices=["list", "menu", "select"], help="What to render.")
    parser.add_argument("definition", type=Path, help="JSON file holding the definition.")
    parser.add_argument("--type", dest="list_type", choices=["ul", "ol"], help="List element for 'list'.")
    parser.add_argument("--path", default="/", help="Current request path for 'menu' (default: /).")
    parser.add_argument("--routes", type=Path, help="JSON object mapping route names to path patterns.")
    parser.add_argument("--options", type=Path, help="JSON object with render options.")
    parser.add_argument("--name", default="select", help="Name attribute for 'select' (default: select).")
    parser.add_argument("--strings", type=Path, help="JSON translation table.")
    parser.add_argument("--config", type=Path, help="JSON render settings file.")
    parser.add_argument("--log-level", help="Python logging level (default: from settings).")
    return parser


def render(args: argparse.Namespace) -> str:
    settings = load_render_settings(args.config)
    configure_logging(args.log_level or settings.log_level)

    strings = StringTable.from_json(args.strings) if args.strings else None
    helper = Helper(settings, translate=strings)
    definition = _read_json(args.definition)
    options = _read_json(args.options) if args.options else {}
    options.setdefault("trim", True)

    _LOGGER.info("Rendering %s from %s", args.kind, args.definition)
    if args.kind == "menu":
        routes = RouteTable(_read_json(args.routes) if args.routes else {})
        return helper.routemenu(definition, routes.context_for(args.path), options)
    if args.kind == "select":
        return helper.select(args.name, definition, options)
    if args.list_type:
        options["type"] = args.list_type
    return helper.ul(definition, options)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        output = render(args)
    except (argparse.ArgumentTypeError, MarkupError) as exc:
        parser.exit(2, f"error: {exc}\n")
    sys.stdout.write(f"{output}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
