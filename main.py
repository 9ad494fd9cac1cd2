# main.py

"""Entry point for the price_banner application (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.services.errors import MissingAPIKeyError

logger = logging.getLogger("price_banner.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="price_banner",
        description=(
            "Barcode lookup, optimal sale price, tags and promotional "
            "banners backed by Gemini. All product data is simulated."
        ),
    )
    parser.add_argument(
        "barcode",
        nargs="?",
        default=None,
        help="Barcode to look up. Omit to launch the interactive TUI.",
    )
    parser.add_argument(
        "-n",
        "--name",
        default=None,
        help="Optional product name hint.",
    )
    parser.add_argument("--cost", default="", help="Cost price.")
    parser.add_argument("--shipping", default="", help="Shipping fee.")
    parser.add_argument("--margin", default="", help="Desired margin.")
    parser.add_argument(
        "-t",
        "--tags",
        action="store_true",
        default=False,
        help="Also generate marketing tags.",
    )
    parser.add_argument(
        "-b",
        "--banner",
        default=None,
        dest="banner_path",
        help="Also generate a banner and write the image to this path.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    return parser


def _run_tui() -> None:
    """Launch the interactive Textual TUI."""
    from src.ui.app import PriceBannerApp

    try:
        app = PriceBannerApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("price_banner TUI shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run a headless lookup and exit."""
    from src.cli.runner import cli_lookup
    from src.services.gemini_client import GeminiClient
    from src.services.product_gateway import ProductGateway

    client = GeminiClient()
    try:
        exit_code = asyncio.run(
            cli_lookup(
                ProductGateway(client),
                barcode=args.barcode,
                product_name=args.name,
                cost=args.cost,
                shipping=args.shipping,
                margin=args.margin,
                with_tags=args.tags,
                banner_path=args.banner_path,
                output_format=args.output_format,
            )
        )
    finally:
        client.close()
    sys.exit(exit_code)


def main() -> None:
    """Route to TUI (no args) or headless CLI (barcode provided)."""
    parser = _build_parser()
    args = parser.parse_args()

    log_file = setup_logging(interactive=args.barcode is None)
    logger.info("price_banner starting, log file: %s", log_file)

    try:
        if args.barcode is None:
            _run_tui()
        else:
            _run_cli(args)
    except MissingAPIKeyError as exc:
        logger.error("%s", exc)
        sys.stderr.write(f"{exc}\n")
        sys.exit(2)


if __name__ == "__main__":
    main()
