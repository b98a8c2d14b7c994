# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Page Signal CLI: analyze, extract-apis commands.

Usage:
    python -m pagesignal.cli analyze [PATH|-] [--url URL] [--meta SIDECAR.json] [--indent N]
    python -m pagesignal.cli extract-apis [PATH|-] [--url URL] [--meta SIDECAR.json]

Settings precedence: defaults < --config YAML < PAGESIGNAL_* env vars < flags.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from .errors import PageSignalError, ResourceExhaustionError

if TYPE_CHECKING:
    from .document import HtmlDocument

logger = logging.getLogger(__name__)

DEFAULT_MAX_HTML_BYTES = 20 * 1024 * 1024


@dataclass
class CliSettings:
    log_level: str = "WARNING"
    log_json: bool = False
    max_html_bytes: int = DEFAULT_MAX_HTML_BYTES


def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes")


def load_settings(config_path: str | None = None, environ: dict[str, str] | None = None) -> CliSettings:
    """Resolve settings from an optional YAML file and PAGESIGNAL_* env vars."""
    settings = CliSettings()
    env = os.environ if environ is None else environ

    if config_path:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise PageSignalError(f"Config file {config_path} must contain a mapping")
        if "log_level" in data:
            settings.log_level = str(data["log_level"])
        if "log_json" in data:
            settings.log_json = bool(data["log_json"])
        if "max_html_bytes" in data:
            settings.max_html_bytes = int(data["max_html_bytes"])

    env_level = env.get("PAGESIGNAL_LOG_LEVEL", "").strip()
    if env_level:
        settings.log_level = env_level

    env_json = env.get("PAGESIGNAL_LOG_JSON", "")
    if env_json.strip():
        settings.log_json = _truthy(env_json)

    env_max = env.get("PAGESIGNAL_MAX_HTML_BYTES", "").strip()
    if env_max:
        with suppress(ValueError):
            settings.max_html_bytes = int(env_max)

    return settings


def _read_html(source: str, max_bytes: int) -> bytes:
    if source == "-":
        data = sys.stdin.buffer.read()
    else:
        data = Path(source).read_bytes()
    if max_bytes > 0 and len(data) > max_bytes:
        raise ResourceExhaustionError(
            f"Input is {len(data)} bytes, limit is {max_bytes}",
            size=len(data),
            limit=max_bytes,
        )
    return data


def _load_document(args: argparse.Namespace) -> HtmlDocument:
    from .document import HtmlDocument

    html = _read_html(args.source, args.settings.max_html_bytes)
    meta: dict[str, Any] = {}
    if args.meta:
        meta = json.loads(Path(args.meta).read_text(encoding="utf-8"))
        if not isinstance(meta, dict):
            raise PageSignalError(f"Sidecar {args.meta} must contain a JSON object")
    if args.url:
        meta = {**meta, "url": args.url}
    return HtmlDocument.from_snapshot(html, meta)


def cmd_analyze(args: argparse.Namespace) -> None:
    """Print the full PageAnalysisReport as JSON."""
    from .analyzer import analyze_page
    from .serializer import to_json

    report = analyze_page(_load_document(args))
    print(to_json(report, indent=args.indent))


def cmd_extract_apis(args: argparse.Namespace) -> None:
    """Print only the endpoint/webhook inventory as JSON."""
    from .endpoint_extractor import extract_javascript_apis
    from .serializer import apis_to_dict

    apis = extract_javascript_apis(_load_document(args))
    print(json.dumps({"apis": apis_to_dict(apis)}, ensure_ascii=False, indent=args.indent))


def _add_input_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("source", nargs="?", default="-", help="HTML file path, or - for stdin (default)")
    p.add_argument("--url", type=str, metavar="URL", help="Document URL (overrides the sidecar url)")
    p.add_argument("--meta", type=str, metavar="PATH", help="JSON sidecar with url/scroll/layout/resources")
    p.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Page Signal CLI",
        prog="python -m pagesignal.cli",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--config", type=str, metavar="PATH", help="YAML settings file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_analyze = subparsers.add_parser(
        "analyze",
        help="Analyze an HTML document",
        epilog="""\
examples:
  %(prog)s page.html --url https://shop.example.com/   Relative links resolve against URL
  %(prog)s page.html --meta page.meta.json             Layout + resource entries from sidecar
  curl -s https://example.com | %(prog)s -             Read from stdin""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_input_args(p_analyze)

    p_apis = subparsers.add_parser("extract-apis", help="Only extract API endpoints and webhooks")
    _add_input_args(p_apis)

    commands = {"analyze": cmd_analyze, "extract-apis": cmd_extract_apis}

    args = parser.parse_args(argv)

    try:
        args.settings = load_settings(args.config)
    except (OSError, TypeError, ValueError, yaml.YAMLError, PageSignalError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    from .logging_config import configure

    configure(
        json_output=args.settings.log_json,
        level="DEBUG" if args.verbose else args.settings.log_level,
    )

    try:
        commands[args.command](args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)
    except (PageSignalError, OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            logger.debug("Command %s failed", args.command, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
