"""
Content parser for turning section HTML into plain structured data.

Combines the table parser with prose "Key: Value" extraction and plain list
collection, producing one SectionData per rendered wiki section.
"""

import logging
from typing import List
from bs4 import BeautifulSoup, Tag

from .cell_normalizer import CellNormalizer
from .data_models import KVMap, SectionData
from .kv_map import add_value, fill_missing, merge_kv
from .table_parser import TableParser

logger = logging.getLogger(__name__)


class ContentParser:
    """Parses rendered wiki HTML into key/value pairs, tables and lists."""

    # Text before the colon longer than this is a sentence, not a key
    MAX_KEY_LENGTH = 60

    @staticmethod
    def extract_colon_kv(root: Tag) -> KVMap:
        """
        Extract "Key: Value" pairs from paragraphs and list items.

        Only the first colon of each text splits it. Pairs with an empty key,
        an empty value or an overly long key are ignored.

        Args:
            root: Element to scan

        Returns:
            KVMap of the pairs found
        """
        kv: KVMap = {}

        for node in root.find_all(['p', 'li']):
            text = CellNormalizer.normalize(node.get_text())
            key, colon, value = text.partition(':')
            if not colon:
                continue

            key = CellNormalizer.normalize(key)
            value = CellNormalizer.normalize(value)
            if not key or not value:
                continue
            if len(key) > ContentParser.MAX_KEY_LENGTH:
                continue

            add_value(kv, key, value)

        return kv

    @staticmethod
    def extract_lists(root: Tag) -> List[List[str]]:
        """Text of the direct items of every list, skipping empty lists."""
        lists = []
        for list_elem in root.find_all(['ul', 'ol']):
            items = [CellNormalizer.normalize(li.get_text()) for li in list_elem.find_all('li', recursive=False)]
            items = [item for item in items if item]
            if items:
                lists.append(items)
        return lists

    @staticmethod
    def section_html_to_plain_data(html_content: str) -> SectionData:
        """
        Parse the HTML of one section.

        Two-column tables contribute key/value pairs, every table with data
        rows is kept as row objects, prose pairs fill in keys the tables did
        not provide, and lists are collected as plain text.

        Args:
            html_content: Rendered section HTML

        Returns:
            SectionData for the section
        """
        soup = BeautifulSoup(html_content or "", 'html.parser')

        kv: KVMap = {}
        tables = []

        for table in soup.find_all('table'):
            matrix = TableParser.to_matrix(table)
            merge_kv(kv, TableParser.extract_kv_from_two_col_table(matrix))

            result = TableParser.parse_table(table, matrix)
            if result.rows:
                tables.append(result)

        fill_missing(kv, ContentParser.extract_colon_kv(soup))
        lists = ContentParser.extract_lists(soup)

        logger.debug(f"Parsed section: {len(kv)} keys, {len(tables)} tables, {len(lists)} lists")
        return SectionData(kv=kv, tables=tables, lists=lists)
