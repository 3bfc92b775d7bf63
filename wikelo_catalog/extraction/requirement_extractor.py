"""
Requirement extractor for crafting ingredients.

Wiki editors write requirements in several ways ("3 Iron Ore", "Titanium × 4",
"Gold"), as list items, <br>-separated lines or delimited text. Every fragment
becomes an IngredientRequirement; nothing is rejected for being irregular.
"""

import re
import logging
from typing import Callable, List, Optional
from bs4 import BeautifulSoup, Tag

from .cell_normalizer import CellNormalizer
from .data_models import IngredientRequirement

logger = logging.getLogger(__name__)


class RequirementExtractor:
    """Extracts {name, quantity} requirements from cells and page sections."""

    CITATION_PATTERN = re.compile(r'\[\d+\]')

    # Delimiters for requirement text without list or line-break markup
    DELIMITER_PATTERN = re.compile(r'[\n•;,]')

    # "3 Iron Ore", "2x Bolt", "2xBolt", "4 × Titanium"
    QUANTITY_FIRST_PATTERN = re.compile(r'^(\d[\d,]*(?:\.\d+)?)(?![\d.,])\s*(?:×|[xX*](?=\s)|[xX](?=[A-Z]))?\s*(.+)$')

    # "Titanium × 4", "Titanium x4", "Gold 3"
    QUANTITY_LAST_PATTERN = re.compile(r'^(.+?)(?:\s*×\s*|\s+[xX*]\s*|\s+)(\d[\d,]*)$')

    HEADING_TAGS = ['h2', 'h3', 'h4']
    HEADING_KEYWORDS = re.compile(r'ingredient|recipe|required|craft', re.IGNORECASE)

    # Looser patterns for list items under a requirements heading
    HEADING_ITEM_PATTERNS = [
        re.compile(r'^(.+?)\s*(?:×|\*|\s[xX])\s*(\d+)'),
        re.compile(r'^(.+?)\s*(\d+)\s*[xX×]'),
    ]

    @staticmethod
    def parse_quantity(text: Optional[str]) -> int:
        """Parse a quantity, defaulting to 1 when missing or unusable."""
        try:
            quantity = int(float((text or '').replace(',', '')))
        except ValueError:
            return 1
        return quantity if quantity > 0 else 1

    @staticmethod
    def strip_citations(text: str) -> str:
        return CellNormalizer.normalize(RequirementExtractor.CITATION_PATTERN.sub('', text or ''))

    @staticmethod
    def parse_fragment(text: str) -> Optional[IngredientRequirement]:
        """
        Parse one requirement fragment.

        Tries quantity-before-name, then name-before-quantity; anything else
        is taken whole as the name with quantity 1.

        Args:
            text: Fragment such as "3 Iron Ore" or "Titanium × 4"

        Returns:
            IngredientRequirement, or None for an empty fragment
        """
        fragment = RequirementExtractor.strip_citations(text)
        if not fragment:
            return None

        match = RequirementExtractor.QUANTITY_FIRST_PATTERN.match(fragment)
        if match:
            return IngredientRequirement(
                name=match.group(2).strip(),
                quantity=RequirementExtractor.parse_quantity(match.group(1))
            )

        match = RequirementExtractor.QUANTITY_LAST_PATTERN.match(fragment)
        if match:
            return IngredientRequirement(
                name=match.group(1).strip(),
                quantity=RequirementExtractor.parse_quantity(match.group(2))
            )

        return IngredientRequirement(name=fragment, quantity=1)

    @staticmethod
    def split_fragments(element: Tag) -> List[str]:
        """Split an element into requirement fragments by its markup."""
        if element.find('li') is not None:
            return [li.get_text() for li in element.find_all('li')]

        if element.find('br') is not None:
            return CellNormalizer.split_on_breaks(element)

        return RequirementExtractor.DELIMITER_PATTERN.split(element.get_text())

    @staticmethod
    def extract_from_element(element: Optional[Tag],
                             exclude: Optional[Callable[[str], bool]] = None) -> List[IngredientRequirement]:
        """
        Extract requirements from a cell or other element.

        Args:
            element: Cell presumed to list required items and quantities
            exclude: Predicate for fragments that are not requirements

        Returns:
            Requirements in the order they appear
        """
        if element is None:
            return []

        requirements = []
        for fragment in RequirementExtractor.split_fragments(element):
            if exclude is not None and exclude(fragment):
                continue
            requirement = RequirementExtractor.parse_fragment(fragment)
            if requirement is not None:
                requirements.append(requirement)
        return requirements

    @staticmethod
    def extract_from_text(text: str) -> List[IngredientRequirement]:
        """Extract requirements from delimited plain text."""
        soup = BeautifulSoup('', 'html.parser')
        wrapper = soup.new_tag('div')
        wrapper.string = text or ''
        return RequirementExtractor.extract_from_element(wrapper)

    @staticmethod
    def _heading_level(element: Tag) -> Optional[int]:
        """Level of a heading, looking through MediaWiki's heading wrappers."""
        if element.name and re.fullmatch(r'h[1-6]', element.name):
            return int(element.name[1])
        if element.name == 'div' and 'mw-heading' in (element.get('class') or []):
            heading = element.find(re.compile(r'^h[1-6]$'))
            if heading is not None:
                return int(heading.name[1])
        return None

    @staticmethod
    def _parse_heading_item(text: str) -> IngredientRequirement:
        for pattern in RequirementExtractor.HEADING_ITEM_PATTERNS:
            match = pattern.match(text)
            if match:
                return IngredientRequirement(
                    name=match.group(1).strip(),
                    quantity=RequirementExtractor.parse_quantity(match.group(2))
                )
        return IngredientRequirement(name=text, quantity=1)

    @staticmethod
    def extract_from_headings(soup: Tag) -> List[IngredientRequirement]:
        """
        Extract requirements listed under ingredient/recipe/craft headings.

        For each matching heading, lists are read from the following siblings
        until the next heading of the same or a higher level.

        Args:
            soup: Parsed page HTML

        Returns:
            Requirements from every matching heading, in document order
        """
        requirements = []

        for heading in soup.find_all(RequirementExtractor.HEADING_TAGS):
            if not RequirementExtractor.HEADING_KEYWORDS.search(heading.get_text()):
                continue

            level = int(heading.name[1])
            # Newer MediaWiki wraps headings in <div class="mw-heading">
            anchor = heading
            if heading.parent is not None and 'mw-heading' in (heading.parent.get('class') or []):
                anchor = heading.parent

            for node in anchor.find_next_siblings():
                node_level = RequirementExtractor._heading_level(node)
                if node_level is not None and node_level <= level:
                    break

                for li in node.find_all('li'):
                    text = RequirementExtractor.strip_citations(li.get_text())
                    if text:
                        requirements.append(RequirementExtractor._parse_heading_item(text))

        logger.debug(f"Found {len(requirements)} requirements under headings")
        return requirements
