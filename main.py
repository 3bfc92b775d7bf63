import argparse
import asyncio
import logging
import sys

from config import config
from wikelo_catalog.crawler import CatalogCrawler, DiscoveryConfig, FetchError, PageParser, WikiClient
from wikelo_catalog.extraction import UNAVAILABLE

logger = logging.getLogger("wikelo_catalog")


async def build_catalog(args: argparse.Namespace) -> None:
    """Builds the Wikelo catalog and saves it as JSON."""
    discovery_config = DiscoveryConfig.from_config()
    if args.mode:
        discovery_config.discovery_mode = args.mode
    if args.landing_page:
        discovery_config.landing_page = args.landing_page

    async with WikiClient() as client:
        crawler = CatalogCrawler(client, discovery_config=discovery_config)
        items = await crawler.build_catalog()
        filepath = await crawler.save_catalog(items, args.output_dir)

    degraded = sum(1 for item in items if item.cost == UNAVAILABLE)
    logger.info(f"Catalog complete: {len(items)} items ({degraded} degraded) -> {filepath}")


async def parse_page(args: argparse.Namespace) -> None:
    """Parses one wiki page into plain structured data and saves it as JSON."""
    discovery_config = DiscoveryConfig.from_config()

    async with WikiClient() as client:
        parser = PageParser(client, excluded_sections=discovery_config.excluded_sections)
        result = await parser.parse_page(args.page)
        filepath = await parser.save_result(result, args.output_dir)

    logger.info(f"Parsed {len(result.sections)} sections of {args.page} -> {filepath}")


async def main(argv=None) -> int:
    """Main entry point for the Wikelo catalog scraper."""
    parser = argparse.ArgumentParser(description="Scrape Wikelo items and wiki pages into structured JSON")
    parser.add_argument("--output-dir", default=config.OUTPUT_DIR,
                        help="Directory for JSON output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    catalog_parser = subparsers.add_parser("catalog", help="Build the Wikelo item catalog")
    catalog_parser.add_argument("--mode", choices=["landing", "category"], default=None,
                                help="Discover items from the landing page tables or the category")
    catalog_parser.add_argument("--landing-page", default=None,
                                help="Landing page title")

    page_parser = subparsers.add_parser("parse", help="Parse any wiki page into plain data")
    page_parser.add_argument("page", help="Page title")

    args = parser.parse_args(argv)

    # Set up logging
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger.info(f"Configuration: {config.to_dict()}")

    try:
        if args.command == "catalog":
            await build_catalog(args)
        else:
            await parse_page(args)
    except FetchError as e:
        logger.error(f"Could not reach the wiki: {e}")
        return 1

    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
