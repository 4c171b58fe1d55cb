"""Storagekit CLI — quick storage operations from the command line.

Usage examples::

    storagekit list-buckets
    storagekit --config '{"project_id": "my-project"}' signed-url my-bucket path/file.png \
        --kwargs '{"method": "PUT", "content_type": "image/png"}'
"""

from __future__ import annotations

import argparse
import inspect
import json
import sys
from typing import Any

from pydantic import ValidationError


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``storagekit`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="storagekit",
        description="Cloud Storage project CLI",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="{}",
        help='JSON config string (e.g. \'{"project_id":"my-project"}\')',
    )
    parser.add_argument(
        "operation",
        help="Operation to perform (method name, e.g. list-buckets)",
    )
    parser.add_argument(
        "args",
        nargs="*",
        help="Positional arguments for the operation",
    )
    parser.add_argument(
        "--kwargs", "-k",
        type=str,
        default="{}",
        help="JSON keyword arguments for the operation",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses arguments, connects to the project via :func:`new_storage`, and
    invokes the requested operation. Results are printed as JSON
    (dicts/lists) or plain text.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    try:
        config: dict[str, Any] = json.loads(ns.config)
    except json.JSONDecodeError as e:
        print(f"Invalid --config JSON: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        kwargs: dict[str, Any] = json.loads(ns.kwargs)
    except json.JSONDecodeError as e:
        print(f"Invalid --kwargs JSON: {e}", file=sys.stderr)
        sys.exit(1)

    # Lazy-import to avoid loading the SDK for --help
    from storagekit.factory import new_storage

    try:
        svc = new_storage(config)
    except (ValueError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    method_name = ns.operation.replace("-", "_")
    method = getattr(svc, method_name, None)
    if (
        method_name.startswith("_")
        or method is None
        or not callable(method)
        or inspect.iscoroutinefunction(method)
    ):
        print(f"Unknown operation '{ns.operation}'", file=sys.stderr)
        sys.exit(1)

    try:
        result = method(*ns.args, **kwargs)
    except Exception as e:
        print(f"Operation failed: {e}", file=sys.stderr)
        sys.exit(1)

    if result is None:
        print("OK")
    elif isinstance(result, (dict, list)):
        print(json.dumps(result, indent=2, default=str))
    else:
        print(result)


if __name__ == "__main__":
    main()
