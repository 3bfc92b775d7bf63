import asyncio
import logging
import os
from datetime import datetime
from typing import List, Optional

from wikelo_catalog.crawler.discovery_config import DiscoveryConfig
from wikelo_catalog.crawler.discovery_strategy import (
    CategoryDiscoveryStrategy,
    DiscoveryStrategy,
    LandingPageDiscoveryStrategy,
    strategy_for,
)
from wikelo_catalog.crawler.output_writer import write_json
from wikelo_catalog.extraction.data_models import ItemRecord
from wikelo_catalog.extraction.extractor import CatalogExtractor

logger = logging.getLogger(__name__)


class CatalogCrawler:
    """Discovers Wikelo items and refines each one from its own page."""

    def __init__(self,
                 client,
                 discovery_strategy: Optional[DiscoveryStrategy] = None,
                 discovery_config: Optional[DiscoveryConfig] = None):
        """
        :param client: WikiClient or an object with the same interface
        :param discovery_strategy: How stubs are found; chosen from the config when omitted
        :param discovery_config: Wiki-specific settings
        """
        self.client = client
        self.config = discovery_config or DiscoveryConfig()
        self.discovery_strategy = discovery_strategy or strategy_for(self.config)
        self.extractor = CatalogExtractor(
            origin=self.config.origin,
            placeholder_image=self.config.placeholder_image,
            requirement_hints=self.config.requirement_hints
        )

    async def list_landing_stubs(self, landing_page: Optional[str] = None) -> List[ItemRecord]:
        """
        Derives item stubs from the tables of a landing page.

        :param landing_page: Page title, defaults to the configured landing page
        :return: Stubs in discovery order
        :raises FetchError: If the landing page cannot be fetched
        """
        strategy = LandingPageDiscoveryStrategy(self.config)
        return await strategy.discover_stubs(self.client, landing_page)

    async def list_category_stubs(self, category: Optional[str] = None) -> List[ItemRecord]:
        """
        Derives bare item stubs from the members of a category.

        :param category: Category title, defaults to the configured category
        :return: Stubs in listing order
        :raises FetchError: If the category listing cannot be fetched
        """
        strategy = CategoryDiscoveryStrategy(self.config)
        return await strategy.discover_stubs(self.client, category)

    async def get_item_detail(self, stub: ItemRecord) -> ItemRecord:
        """
        Refines a stub from the item's own page.

        Any failure degrades this item only: the record is then built from
        the stub alone.

        :param stub: Stub from discovery
        :return: Final catalog record
        """
        try:
            page = await self.client.fetch_page(title=stub.title)
            detail = self.extractor.extract_item_detail(page.html, page.pageid, page.displaytitle)
            return self.extractor.merge(stub, detail)
        except Exception as e:
            logger.warning(f"Failed to build item {stub.title}: {e}")
            return self.extractor.degraded(stub)

    async def build_catalog(self) -> List[ItemRecord]:
        """
        Discovers stubs and fetches every item's page concurrently.

        :return: Final records in stub discovery order
        :raises FetchError: If discovery itself fails
        """
        stubs = await self.discovery_strategy.discover_stubs(self.client)
        logger.info(f"Fetching details for {len(stubs)} items")

        semaphore = asyncio.Semaphore(self.config.max_concurrency) if self.config.max_concurrency else None

        async def fetch(stub: ItemRecord) -> ItemRecord:
            if semaphore is None:
                return await self.get_item_detail(stub)
            async with semaphore:
                return await self.get_item_detail(stub)

        items = await asyncio.gather(*(fetch(stub) for stub in stubs))

        logger.info(f"Built catalog of {len(items)} items")
        return list(items)

    async def save_catalog(self, items: List[ItemRecord], output_dir: str) -> str:
        """Saves the catalog as a timestamped JSON file in ``output_dir``."""
        filename = f"catalog_{datetime.utcnow().strftime('%Y%m%d%H%M%S')}.json"
        filepath = os.path.join(output_dir, filename)
        await write_json([item.model_dump() for item in items], filepath)
        logger.info(f"Saved {len(items)} items to {filepath}")
        return filepath
