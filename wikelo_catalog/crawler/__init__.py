from .wiki_client import WikiClient, FetchError
from .discovery_config import DiscoveryConfig
from .discovery_strategy import (
    DiscoveryStrategy,
    LandingPageDiscoveryStrategy,
    CategoryDiscoveryStrategy,
)
from .catalog_crawler import CatalogCrawler
from .page_parser import PageParser

__all__ = [
    'WikiClient',
    'FetchError',
    'DiscoveryConfig',
    'DiscoveryStrategy',
    'LandingPageDiscoveryStrategy',
    'CategoryDiscoveryStrategy',
    'CatalogCrawler',
    'PageParser'
]
