"""
Cost extractor for item prices.

Item pages state a price in a labelled infobox row, while landing-page tables
mention it somewhere in free text ("120 aUEC"). Both are reduced to the
first plausible value or the "N/A" sentinel.
"""

import re
from typing import Iterable, Optional
from bs4 import Tag

from .cell_normalizer import CellNormalizer
from .data_models import NOT_AVAILABLE


class CostExtractor:
    """Finds item costs in tables and free text."""

    HEADER_PATTERN = re.compile(r'price|cost|buy', re.IGNORECASE)

    # A number, optionally with thousands separators (comma, dot, no-break or
    # narrow no-break space), followed by a unit
    CURRENCY_PATTERN = re.compile(
        r'(?:\d{1,3}(?:[,.\u00a0\u202f]\d{3})+|\d+)(?:\.\d+)?\s*(?:aUEC|UEC|SCU)\b',
        re.IGNORECASE
    )

    CITATION_PATTERN = re.compile(r'\[\d+\]')

    @staticmethod
    def from_header_rows(soup: Tag) -> str:
        """
        Return the value of the first table row labelled price, cost or buy.

        Args:
            soup: Parsed page HTML

        Returns:
            Trimmed text of the paired data cell, or "N/A"
        """
        for row in soup.select('table tr'):
            header = row.find('th')
            cell = row.find('td')
            if header is None or cell is None:
                continue
            if CostExtractor.HEADER_PATTERN.search(header.get_text()):
                return CellNormalizer.normalize(cell.get_text())

        return NOT_AVAILABLE

    @staticmethod
    def from_text(text: Optional[str]) -> Optional[str]:
        """First currency-like token in ``text``, citations removed."""
        # Searched before normalizing, which would turn no-break separators
        # into plain spaces
        cleaned = CostExtractor.CITATION_PATTERN.sub('', text or '')
        match = CostExtractor.CURRENCY_PATTERN.search(cleaned)
        return CellNormalizer.normalize(match.group(0)) if match else None

    @staticmethod
    def is_cost(text: Optional[str]) -> bool:
        """Whether ``text`` is nothing but a currency-like token."""
        cleaned = CostExtractor.CITATION_PATTERN.sub('', text or '').strip()
        return bool(cleaned) and CostExtractor.CURRENCY_PATTERN.fullmatch(cleaned) is not None

    @staticmethod
    def from_cells(cells: Iterable[Tag]) -> str:
        """
        Return the first currency-like token across ``cells``.

        Args:
            cells: Candidate cells in priority order

        Returns:
            The matched token, such as "120 aUEC", or "N/A"
        """
        for cell in cells:
            token = CostExtractor.from_text(cell.get_text(' '))
            if token:
                return token
        return NOT_AVAILABLE

    @staticmethod
    def choose(detail_cost: Optional[str], stub_cost: Optional[str]) -> str:
        """Prefer a known detail-page cost, then the stub cost, then "N/A"."""
        if detail_cost and detail_cost != NOT_AVAILABLE:
            return detail_cost
        if stub_cost:
            return stub_cost
        return NOT_AVAILABLE
