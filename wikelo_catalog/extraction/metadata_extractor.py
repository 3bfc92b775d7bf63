"""
Metadata extractor for catalog items.

Resolves item titles from links, image URLs from <img> elements and page
URLs from titles, relative to the wiki's origin.
"""

from typing import Optional
from urllib.parse import quote, urljoin
from bs4 import BeautifulSoup, Tag

from .cell_normalizer import CellNormalizer


class MetadataExtractor:
    """Extracts item titles, images and URLs."""

    # Links into these namespaces never name an item
    NON_ARTICLE_PREFIXES = (
        "File:", "Image:", "Category:", "Template:", "Help:", "Special:",
        "User:", "Talk:", "Module:", "MediaWiki:",
    )

    DETAIL_IMAGE_SELECTORS = [".infobox img", "figure img", "img"]

    def __init__(self, origin: str, placeholder_image: str):
        """
        Args:
            origin: Scheme and host of the wiki, e.g. https://starcitizen.tools
            placeholder_image: Absolute URL used when no image is available
        """
        self.origin = origin.rstrip('/')
        self.placeholder_image = placeholder_image

    def normalize_image_url(self, url: Optional[str]) -> str:
        """Make an image URL absolute, substituting the placeholder when missing."""
        url = (url or '').strip()
        if not url:
            return self.placeholder_image
        if url.startswith('http'):
            return url
        if url.startswith('//'):
            return f"https:{url}"
        if url.startswith('/'):
            return f"{self.origin}{url}"
        return urljoin(f"{self.origin}/", url)

    def page_url(self, title: str) -> str:
        return f"{self.origin}/{quote(title.replace(' ', '_'), safe='')}"

    @staticmethod
    def image_src(element: Optional[Tag]) -> str:
        """Source of the first image in ``element``, or "" when there is none."""
        if element is None:
            return ""
        img = element if element.name == 'img' else element.find('img')
        if img is None:
            return ""
        return (img.get('src') or img.get('data-src') or '').strip()

    def detail_image(self, soup: Tag) -> Optional[str]:
        """Absolute URL of the lead image of an item page, if it has one."""
        for selector in self.DETAIL_IMAGE_SELECTORS:
            img = soup.select_one(selector)
            if img is not None:
                src = self.image_src(img)
                if src:
                    return self.normalize_image_url(src)
        return None

    @staticmethod
    def link_title(row: Tag) -> Optional[str]:
        """Title of the first article link in ``row``."""
        for link in row.find_all('a', title=True):
            title = CellNormalizer.normalize(link['title'])
            if title and not title.startswith(MetadataExtractor.NON_ARTICLE_PREFIXES):
                return title
        return None

    @staticmethod
    def display_title(value: Optional[str]) -> str:
        """Plain text of a MediaWiki display title, which may contain markup."""
        if not value:
            return ""
        return CellNormalizer.normalize(BeautifulSoup(value, 'html.parser').get_text())
