import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from wikelo_catalog.crawler.discovery_config import DiscoveryConfig
from wikelo_catalog.extraction.data_models import ItemRecord
from wikelo_catalog.extraction.extractor import CatalogExtractor

logger = logging.getLogger(__name__)


class DiscoveryStrategy(ABC):
    """Base class for item stub discovery strategies."""

    def __init__(self, discovery_config: Optional[DiscoveryConfig] = None):
        self.config = discovery_config or DiscoveryConfig()
        self.extractor = CatalogExtractor(
            origin=self.config.origin,
            placeholder_image=self.config.placeholder_image,
            requirement_hints=self.config.requirement_hints
        )

    @abstractmethod
    async def discover_stubs(self, client) -> List[ItemRecord]:
        """Discover item stubs using the given wiki client."""
        pass


class LandingPageDiscoveryStrategy(DiscoveryStrategy):
    """Discovers items from the tables of a landing page."""

    async def discover_stubs(self, client, landing_page: Optional[str] = None) -> List[ItemRecord]:
        """
        Fetches the landing page and derives one stub per item row.

        :param client: WikiClient or an object with the same interface
        :param landing_page: Page title, defaults to the configured landing page
        :return: Stubs in discovery order
        """
        title = landing_page or self.config.landing_page
        logger.info(f"Discovering items on landing page: {title}")

        page = await client.fetch_page(title=title)
        stubs = self.extractor.extract_landing_stubs(page.html)

        logger.info(f"Discovered {len(stubs)} items on {title}")
        return stubs


class CategoryDiscoveryStrategy(DiscoveryStrategy):
    """Discovers items from the members of a category."""

    async def discover_stubs(self, client, category: Optional[str] = None) -> List[ItemRecord]:
        """
        Lists the category and derives one bare stub per member page.

        :param client: WikiClient or an object with the same interface
        :param category: Category title, defaults to the configured category
        :return: Stubs in listing order
        """
        title = category or self.config.category
        logger.info(f"Discovering items in category: {title}")

        members = await client.list_category_members(title)
        return [self.extractor.stub_from_member(member.pageid, member.title) for member in members]


def strategy_for(discovery_config: DiscoveryConfig) -> DiscoveryStrategy:
    """Pick the discovery strategy named by the configuration."""
    if discovery_config.discovery_mode == "category":
        return CategoryDiscoveryStrategy(discovery_config)
    if discovery_config.discovery_mode != "landing":
        logger.warning(f"Unknown discovery mode '{discovery_config.discovery_mode}', using landing page")
    return LandingPageDiscoveryStrategy(discovery_config)
