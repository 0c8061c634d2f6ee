"""
Command line tool for the CodeFirst SDK.

This tool compiles and synchronizes content types:
- snapshot: Print the compiled schema of a module as JSON or YAML
- sync: Create or update the module's content types remotely

Usage:
    codefirst snapshot --module myapp.content > schema.json
    codefirst snapshot --module myapp.content --format yaml -o schema.yaml
    codefirst sync --module myapp.content --publish

Connection settings come from CODEFIRST_* environment variables.

Invariants:
    - Snapshot output is deterministic (sorted keys, content types by order)
    - Errors exit with a non-zero code and a one-line message
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Optional, Sequence

import json_log_formatter
import yaml

from .compiler import initialize_content_types
from .config import CodeFirstSettings
from .errors import CodeFirstError
from .registry import fingerprint
from .scanner import load_types
from .sync import create_content_types_from_module

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO", log_format: str = "text") -> None:
    """Configure logging for the command line tool.

    Args:
        level: Log level name
        log_format: "text" or "json"
    """
    if log_format == "json":
        formatter: logging.Formatter = json_log_formatter.JSONFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers = [handler]

    # Reduce noise from libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def snapshot(module: str) -> dict[str, Any]:
    """Compile a module into a snapshot document.

    Args:
        module: Module path to scan

    Returns:
        Dictionary with fingerprint, content types and editor interfaces
    """
    compiled = list(initialize_content_types(load_types(module)))
    return {
        "fingerprint": fingerprint(c.content_type for c in compiled),
        "content_types": [c.content_type.to_dict() for c in compiled],
        "editor_interfaces": {
            c.id: [control.to_dict() for control in c.controls]
            for c in compiled
            if c.controls
        },
    }


def render(document: dict[str, Any], output_format: str = "json") -> str:
    """Render a snapshot as JSON or YAML."""
    if output_format == "yaml":
        return yaml.dump(document, default_flow_style=False, sort_keys=True)
    return json.dumps(document, indent=2, sort_keys=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codefirst", description="Content type compiler and synchronizer"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # snapshot command
    snapshot_parser = subparsers.add_parser("snapshot", help="Print the compiled schema")
    snapshot_parser.add_argument(
        "--module", "-m", required=True, help="Python module containing content types"
    )
    snapshot_parser.add_argument(
        "--format", choices=["json", "yaml"], default="json", help="Output format"
    )
    snapshot_parser.add_argument("--output", "-o", help="Output file (default: stdout)")

    # sync command
    sync_parser = subparsers.add_parser("sync", help="Create or update content types")
    sync_parser.add_argument(
        "--module", "-m", required=True, help="Python module containing content types"
    )
    sync_parser.add_argument(
        "--force", action="store_true", help="Update content types that already exist"
    )
    sync_parser.add_argument(
        "--publish", action="store_true", help="Activate content types after upsert"
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    settings = CodeFirstSettings()
    setup_logging(settings.log_level, settings.log_format)

    try:
        if args.command == "snapshot":
            output = render(snapshot(args.module), args.format)
            if args.output:
                with open(args.output, "w") as f:
                    f.write(output)
                print(f"Schema exported to {args.output}", file=sys.stderr)
            else:
                print(output)

        elif args.command == "sync":
            overrides = {}
            if args.force:
                overrides["force_update"] = True
            if args.publish:
                overrides["publish_automatically"] = True
            settings = settings.model_copy(update=overrides)

            created = asyncio.run(create_content_types_from_module(args.module, settings))
            print(f"Synchronized {len(created)} content type(s)")
            for definition in created:
                print(f"  - {definition.id} (version {definition.version})")

    except CodeFirstError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
