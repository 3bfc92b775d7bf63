"""
Catalog extraction for Wikelo items.

Turns the rendered landing page into item stubs, turns an item's own page
into refined detail, and merges the two into final catalog records. Nothing
here performs I/O; the crawler feeds it HTML.
"""

import logging
from typing import List, Dict, Optional, Sequence, Union
from bs4 import BeautifulSoup, Tag

from .cell_normalizer import CellNormalizer
from .cost_extractor import CostExtractor
from .data_models import ItemDetail, ItemRecord, NOT_AVAILABLE, UNAVAILABLE
from .metadata_extractor import MetadataExtractor
from .requirement_extractor import RequirementExtractor
from .table_parser import TableParser

logger = logging.getLogger(__name__)

# Header substrings marking the column that lists what an item requires,
# highest priority first
DEFAULT_REQUIREMENT_HINTS = ("ingredient", "require", "material", "need", "depend", "reward")


class CatalogExtractor:
    """Builds catalog records from landing-page and item-page HTML."""

    def __init__(self,
                 origin: str,
                 placeholder_image: str,
                 requirement_hints: Sequence[str] = DEFAULT_REQUIREMENT_HINTS):
        """
        Initialize the catalog extractor.

        Args:
            origin: Scheme and host of the wiki
            placeholder_image: Image URL used when an item has none
            requirement_hints: Header substrings identifying the requirements column
        """
        self.metadata = MetadataExtractor(origin, placeholder_image)
        self.requirement_hints = [hint.lower() for hint in requirement_hints]

    def requirement_column(self, headers: List[str]) -> Optional[int]:
        """Index of the requirements column, if any header names one."""
        lowered = [header.lower() for header in headers]
        for hint in self.requirement_hints:
            for index, header in enumerate(lowered):
                if hint in header:
                    return index
        return None

    def extract_landing_stubs(self, html_content: str) -> List[ItemRecord]:
        """
        Derive item stubs from every table of the landing page.

        A first row with header cells names the columns and is not data.
        Stubs are keyed by title, so a title seen twice keeps the data of its
        last row at the position of its first.

        Args:
            html_content: Rendered landing page HTML

        Returns:
            Stubs in discovery order
        """
        soup = BeautifulSoup(html_content or "", 'html.parser')
        content = soup.select_one('.mw-parser-output') or soup

        stubs: Dict[str, ItemRecord] = {}

        for table in content.find_all('table'):
            rows = TableParser.table_rows(table)
            if not rows:
                continue

            # Positions are resolved on the expanded grid so that spanned
            # cells do not shift later columns
            grid = TableParser.cell_grid(table)

            headers: List[str] = []
            if TableParser.first_row_has_headers(table):
                headers = [CellNormalizer.cell_to_text(cell) for cell in grid[0]]
                rows, grid = rows[1:], grid[1:]

            requirement_index = self.requirement_column(headers)

            for row, grid_row in zip(rows, grid):
                stub = self.row_to_stub(row, requirement_index, grid_row)
                if stub is not None:
                    stubs[stub.title] = stub

        logger.debug(f"Extracted {len(stubs)} stubs from landing page")
        return list(stubs.values())

    def row_to_stub(self,
                    row: Tag,
                    requirement_index: Optional[int] = None,
                    grid_row: Optional[List[Tag]] = None) -> Optional[ItemRecord]:
        """
        Build a stub from one landing-page table row.

        Args:
            row: The <tr> element
            requirement_index: Grid column of the requirements cell, if known
            grid_row: Cells covering each column of this row, spans included;
                the row's own cells when omitted

        Returns:
            ItemRecord stub, or None when the row has no data cell or no item link
        """
        cells = TableParser.row_cells(row)
        data_cells = [cell for cell in cells if cell.name == 'td']
        if not data_cells:
            return None

        title = MetadataExtractor.link_title(row)
        if not title:
            logger.debug(f"Skipping row without an item link: {CellNormalizer.normalize(row.get_text())[:80]}")
            return None

        if grid_row is None:
            grid_row = cells

        requirement_cell = None
        if requirement_index is not None and requirement_index < len(grid_row):
            requirement_cell = grid_row[requirement_index]

        cost_candidates = ([requirement_cell] if requirement_cell is not None else []) + data_cells
        image = MetadataExtractor.image_src(row)

        return ItemRecord(
            id=title,
            title=title,
            image=self.metadata.normalize_image_url(image) if image else "",
            cost=CostExtractor.from_cells(cost_candidates),
            ingredients=RequirementExtractor.extract_from_element(requirement_cell, exclude=CostExtractor.is_cost),
            url=self.metadata.page_url(title)
        )

    def stub_from_member(self, pageid: Union[int, str], title: str) -> ItemRecord:
        """Stub for a page listed as a category member."""
        return ItemRecord(id=pageid, title=title, url=self.metadata.page_url(title))

    def extract_item_detail(self,
                            html_content: str,
                            pageid: Optional[int] = None,
                            displaytitle: Optional[str] = None) -> ItemDetail:
        """
        Extract refined fields from an item's own page.

        Args:
            html_content: Rendered item page HTML
            pageid: Page id reported by the wiki
            displaytitle: Display title reported by the wiki, may contain markup

        Returns:
            ItemDetail with whatever the page provides
        """
        soup = BeautifulSoup(html_content or "", 'html.parser')

        return ItemDetail(
            pageid=pageid,
            title=MetadataExtractor.display_title(displaytitle) or None,
            image=self.metadata.detail_image(soup),
            cost=CostExtractor.from_header_rows(soup),
            ingredients=RequirementExtractor.extract_from_headings(soup)
        )

    def merge(self, stub: ItemRecord, detail: ItemDetail) -> ItemRecord:
        """
        Merge detail-page fields over a stub.

        A detail value wins only when it is known; otherwise the stub value
        is kept.
        """
        return ItemRecord(
            id=detail.pageid if detail.pageid is not None else stub.id,
            title=detail.title or stub.title,
            image=detail.image or self.metadata.normalize_image_url(stub.image),
            cost=CostExtractor.choose(detail.cost, stub.cost),
            ingredients=list(detail.ingredients or stub.ingredients),
            url=stub.url or self.metadata.page_url(stub.title)
        )

    def degraded(self, stub: ItemRecord) -> ItemRecord:
        """Final record for an item whose own page could not be read."""
        cost = stub.cost if stub.cost and stub.cost != NOT_AVAILABLE else UNAVAILABLE
        return ItemRecord(
            id=stub.id,
            title=stub.title,
            image=self.metadata.normalize_image_url(stub.image),
            cost=cost,
            ingredients=[],
            url=stub.url or self.metadata.page_url(stub.title)
        )
