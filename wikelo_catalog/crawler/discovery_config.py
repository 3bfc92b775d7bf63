from typing import List, Optional
from pydantic import BaseModel

from config import config
from wikelo_catalog.extraction.extractor import DEFAULT_REQUIREMENT_HINTS


class DiscoveryConfig(BaseModel):
    """Configuration for catalog discovery and page parsing on a specific wiki."""

    # Where item stubs come from: "landing" (page tables) or "category" (members)
    discovery_mode: str = "landing"
    landing_page: str = "Wikelo"
    category: str = "Category:Wikelo"

    # Header substrings identifying the requirements column of landing tables
    requirement_hints: List[str] = list(DEFAULT_REQUIREMENT_HINTS)

    # Sections skipped by the generic page parser
    excluded_sections: List[str] = [
        "References",
        "External links",
        "See also",
        "Notes"
    ]

    # URL building
    origin: str = "https://starcitizen.tools"
    placeholder_image: str = (
        "https://images.unsplash.com/photo-1523961131990-5ea7c61b2107?auto=format&fit=crop&w=800&q=60"
    )

    # Optional bound on concurrent detail-page fetches; None means unbounded
    max_concurrency: Optional[int] = None

    @classmethod
    def from_config(cls) -> "DiscoveryConfig":
        """Build a DiscoveryConfig from the environment-driven settings."""
        return cls(
            discovery_mode=config.DISCOVERY_MODE,
            landing_page=config.LANDING_PAGE,
            category=config.CATEGORY,
            origin=config.WIKI_ORIGIN,
            placeholder_image=config.PLACEHOLDER_IMAGE,
            max_concurrency=config.MAX_CONCURRENCY or None
        )
