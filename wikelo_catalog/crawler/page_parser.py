import logging
import os
import re
from typing import Iterable, Optional

from wikelo_catalog.crawler.output_writer import write_json
from wikelo_catalog.extraction.content_parser import ContentParser
from wikelo_catalog.extraction.data_models import PageParseResult, SectionTableResult
from wikelo_catalog.extraction.kv_map import merge_kv

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDED_SECTIONS = ("References", "External links", "See also", "Notes")


class PageParser:
    """Parses any wiki page, section by section, into plain structured data."""

    def __init__(self, client, excluded_sections: Optional[Iterable[str]] = None):
        """
        :param client: WikiClient or an object with the same interface
        :param excluded_sections: Section names to skip
        """
        self.client = client
        self.excluded_sections = set(DEFAULT_EXCLUDED_SECTIONS if excluded_sections is None else excluded_sections)

    async def parse_page(self, page: str) -> PageParseResult:
        """
        Parses every section of ``page`` that is not excluded.

        Sections are processed in listing order, which fixes the order in
        which values accumulate in the flattened key/value map.

        :param page: Page title
        :return: PageParseResult with per-section and flattened data
        :raises FetchError: If the section list or any section HTML cannot be fetched
        """
        sections = await self.client.list_sections(page)
        logger.info(f"Parsing {page}: {len(sections)} sections")

        result = PageParseResult(page=page)

        for section in sections:
            if section.name in self.excluded_sections:
                logger.debug(f"Skipping excluded section: {section.name}")
                continue

            html_content = await self.client.fetch_section_html(page, section.index)
            data = ContentParser.section_html_to_plain_data(html_content)

            result.sections[section.name] = data
            merge_kv(result.kv, data.kv)
            result.tables.extend(
                SectionTableResult(section=section.name, **table.model_dump())
                for table in data.tables
            )

        logger.info(f"Parsed {page}: {len(result.kv)} keys, {len(result.tables)} tables")
        return result

    async def save_result(self, result: PageParseResult, output_dir: str) -> str:
        """Saves a page result as JSON named after the page."""
        safe_name = re.sub(r'[^0-9A-Za-z]+', '_', result.page).strip('_') or "page"
        filepath = os.path.join(output_dir, f"{safe_name}_parsed.json")
        await write_json(result.model_dump(), filepath)
        logger.info(f"Saved parse result to {filepath}")
        return filepath
