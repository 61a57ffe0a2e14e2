"""Command line entry point.

Usage:
    reg-notify-github --config regconfig.json --result .reg/out.json
    python -m regnotify --dry-run --report-url https://example.com/report
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .config import ConfigurationError, load_settings
from .notifier import ComparisonResult, GitHubNotifierPlugin, NotifyResult

logger = logging.getLogger(__name__)


def load_comparison_result(result_path: str | Path) -> ComparisonResult:
    """Read a reg-suit ``out.json`` comparison result.

    Raises:
        ConfigurationError: If the file is missing or not a JSON object
    """
    result_path = Path(result_path)
    try:
        with open(result_path, encoding="utf-8") as f:
            data: Any = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read comparison result {result_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid comparison result {result_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Comparison result {result_path} must be a JSON object")
    try:
        return ComparisonResult.from_dict(data)
    except ValueError as e:
        raise ConfigurationError(f"Invalid comparison result {result_path}: {e}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reg-notify-github",
        description="Report a visual regression comparison to GitHub",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Notify using reg-suit's configuration and output
  reg-notify-github --config regconfig.json --result .reg/out.json

  # Compute everything without touching GitHub
  reg-notify-github --dry-run --report-url https://example.com/index.html
        """,
    )
    parser.add_argument(
        "--config",
        "-c",
        default="regconfig.json",
        help="Configuration file path (default: regconfig.json)",
    )
    parser.add_argument(
        "--result",
        "-r",
        default=".reg/out.json",
        help="Comparison result file (default: .reg/out.json)",
    )
    parser.add_argument("--report-url", help="URL of the published report")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Do not set commit statuses or post comments",
    )
    parser.add_argument(
        "--best-effort",
        action="store_true",
        help="Exit 0 even when GitHub calls fail",
    )
    parser.add_argument("--log-level", default="INFO", help="Log level")
    return parser


async def run(args: argparse.Namespace) -> NotifyResult:
    settings = load_settings(args.config)
    comparison = load_comparison_result(args.result)

    async with GitHubNotifierPlugin(settings, no_emit=args.dry_run) as plugin:
        return await plugin.notify(comparison, report_url=args.report_url)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        result = asyncio.run(run(args))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    if result.ok:
        return 0

    logger.error(f"{len(result.failures)} GitHub notification step(s) failed")
    return 0 if args.best_effort else 1


if __name__ == "__main__":
    sys.exit(main())
