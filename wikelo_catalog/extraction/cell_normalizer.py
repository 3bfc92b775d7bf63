"""
Cell normalizer for flattening table cells into single text values.

Wiki tables list several values inside one cell either as a bulleted list or
separated by line breaks; both are flattened to ``"; "``-separated text.
"""

import copy
import re
from typing import List, Optional

from bs4 import Tag

# Stands in for <br> while the cell text is collected. Rendered wiki HTML
# never contains it.
LINE_BREAK = "\x1e"

VALUE_SEPARATOR = "; "


class CellNormalizer:
    """Turns table cells and other elements into normalized text."""

    @staticmethod
    def normalize(text: Optional[str]) -> str:
        """Replace non-breaking spaces, collapse whitespace runs and trim."""
        if not text:
            return ""
        return re.sub(r'\s+', ' ', text.replace('\u00a0', ' ')).strip()

    @staticmethod
    def list_item_texts(element: Tag) -> List[str]:
        """Normalized text of every list item under ``element``, empties dropped."""
        texts = (CellNormalizer.normalize(li.get_text()) for li in element.find_all('li'))
        return [text for text in texts if text]

    @staticmethod
    def split_on_breaks(element: Tag) -> List[str]:
        """
        Split the text of an element on its <br> tags.

        The element itself is left untouched.

        Args:
            element: Element that may contain <br> tags

        Returns:
            Normalized text of each line, empty lines dropped
        """
        clone = copy.copy(element)
        for br in clone.find_all('br'):
            br.replace_with(LINE_BREAK)

        lines = (CellNormalizer.normalize(part) for part in clone.get_text().split(LINE_BREAK))
        return [line for line in lines if line]

    @staticmethod
    def cell_to_text(cell: Tag) -> str:
        """
        Flatten one table cell into a single string.

        List items are joined with ``"; "``; failing that, lines separated by
        <br> are joined the same way; otherwise the flat text is returned.
        """
        if cell.find('li') is not None:
            return VALUE_SEPARATOR.join(CellNormalizer.list_item_texts(cell))

        if cell.find('br') is not None:
            return VALUE_SEPARATOR.join(CellNormalizer.split_on_breaks(cell))

        return CellNormalizer.normalize(cell.get_text())
