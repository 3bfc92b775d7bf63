import os
from dotenv import load_dotenv
from typing import Dict, Any

# Load environment variables from .env file
load_dotenv()

class Config:
    """Central configuration management for the Wikelo catalog scraper."""

    # Wiki endpoints
    WIKI_API_URL: str = os.getenv("WIKI_API_URL", "https://starcitizen.tools/api.php")
    WIKI_ORIGIN: str = os.getenv("WIKI_ORIGIN", "https://starcitizen.tools")

    # Catalog discovery
    LANDING_PAGE: str = os.getenv("WIKI_LANDING_PAGE", "Wikelo")
    CATEGORY: str = os.getenv("WIKI_CATEGORY", "Category:Wikelo")
    DISCOVERY_MODE: str = os.getenv("DISCOVERY_MODE", "landing")
    PLACEHOLDER_IMAGE: str = os.getenv(
        "PLACEHOLDER_IMAGE",
        "https://images.unsplash.com/photo-1523961131990-5ea7c61b2107?auto=format&fit=crop&w=800&q=60"
    )

    # HTTP settings
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "30"))
    MAX_CONCURRENCY: int = int(os.getenv("MAX_CONCURRENCY", "0"))
    USER_AGENT: str = os.getenv("USER_AGENT", "WikeloCatalog/0.1 (catalog scraper)")

    # Output
    OUTPUT_DIR: str = os.getenv("OUTPUT_DIR", "process/catalog")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def to_dict(cls) -> Dict[str, Any]:
        """Return configuration as a dictionary for logging/debugging."""
        return {
            "WIKI_API_URL": cls.WIKI_API_URL,
            "WIKI_ORIGIN": cls.WIKI_ORIGIN,
            "LANDING_PAGE": cls.LANDING_PAGE,
            "CATEGORY": cls.CATEGORY,
            "DISCOVERY_MODE": cls.DISCOVERY_MODE,
            "REQUEST_TIMEOUT": cls.REQUEST_TIMEOUT,
            "MAX_CONCURRENCY": cls.MAX_CONCURRENCY,
            "OUTPUT_DIR": cls.OUTPUT_DIR,
            "LOG_LEVEL": cls.LOG_LEVEL
        }

# Initialize on import
config = Config()
