"""
Table parser for wiki tables.

Expands tables with merged cells into dense rectangular matrices and
interprets those matrices either as row objects keyed by header or, for
two-column tables, as key/value pairs.
"""

import re
from typing import List, Dict, Any, Optional, Tuple
from bs4 import Tag

from .cell_normalizer import CellNormalizer
from .data_models import KVMap, TableResult
from .kv_map import add_value

Matrix = List[List[str]]


class TableParser:
    """Parses HTML tables into matrices, row objects and key/value maps."""

    # First-column values of two-column tables that label the columns
    # rather than carry data
    HEADER_KEY_PATTERN = re.compile(r'^(key|value|name|description)$', re.IGNORECASE)

    @staticmethod
    def table_rows(table: Tag) -> List[Tag]:
        """Rows belonging to ``table`` itself, skipping rows of nested tables."""
        return [row for row in table.find_all('tr') if row.find_parent('table') is table]

    @staticmethod
    def row_cells(row: Tag) -> List[Tag]:
        """Header and data cells of a row, in document order."""
        return row.find_all(['th', 'td'], recursive=False)

    @staticmethod
    def _span(cell: Tag, attribute: str) -> int:
        """Read a rowspan/colspan attribute, defaulting to 1."""
        match = re.match(r'\s*(\d+)', str(cell.get(attribute) or ''))
        if not match:
            return 1
        return max(1, int(match.group(1)))

    @staticmethod
    def cell_grid(table: Tag) -> List[List[Tag]]:
        """
        Expand a table into rows of the cells covering each grid position.

        A cell spanning several rows or columns appears at every position it
        covers. Rows are not padded.

        Args:
            table: The <table> element

        Returns:
            List of rows, each a list of <th>/<td> elements by column
        """
        grid: List[List[Tag]] = []
        # column index -> [rows still to fill, cell]
        carry: Dict[int, List[Any]] = {}

        def fill_carried(row: List[Tag], col: int) -> int:
            while col in carry and carry[col][0] > 0:
                row.append(carry[col][1])
                carry[col][0] -= 1
                col += 1
            return col

        for tr in TableParser.table_rows(table):
            row: List[Tag] = []
            col = fill_carried(row, 0)

            for cell in TableParser.row_cells(tr):
                col = fill_carried(row, col)

                rowspan = TableParser._span(cell, 'rowspan')
                colspan = TableParser._span(cell, 'colspan')

                for offset in range(colspan):
                    row.append(cell)
                    if rowspan > 1:
                        carry[col + offset] = [rowspan - 1, cell]
                col += colspan

            fill_carried(row, col)
            grid.append(row)

        return grid

    @staticmethod
    def to_matrix(table: Tag) -> Matrix:
        """
        Expand a table into a dense grid of normalized cell strings.

        A cell spanning several rows or columns is copied into every grid
        position it covers, and every row is padded to the same width.

        Args:
            table: The <table> element

        Returns:
            List of rows, each a list of strings of equal length
        """
        grid = TableParser.cell_grid(table)
        texts: Dict[int, str] = {}

        def text_of(cell: Tag) -> str:
            if id(cell) not in texts:
                texts[id(cell)] = CellNormalizer.cell_to_text(cell)
            return texts[id(cell)]

        width = max((len(row) for row in grid), default=0)
        return [
            [text_of(cell) for cell in row] + [''] * (width - len(row))
            for row in grid
        ]

    @staticmethod
    def first_row_has_headers(table: Tag) -> bool:
        rows = TableParser.table_rows(table)
        return bool(rows) and rows[0].find('th', recursive=False) is not None

    @staticmethod
    def matrix_to_objects(table: Tag, matrix: Matrix) -> Tuple[List[str], List[Dict[str, str]]]:
        """
        Interpret a matrix as row objects keyed by header.

        When the first row of the table carries header cells its text is used
        as headers (``col<N>`` for any empty one) and the row is not data.
        Otherwise every header is ``col<N>`` and every row is data. Rows with
        no text at all are dropped.

        Returns:
            Tuple of (headers, rows)
        """
        if not matrix:
            return [], []

        has_headers = TableParser.first_row_has_headers(table)
        if has_headers:
            headers = [text or f"col{i + 1}" for i, text in enumerate(matrix[0])]
        else:
            headers = [f"col{i + 1}" for i in range(len(matrix[0]))]

        rows = []
        for values in matrix[1 if has_headers else 0:]:
            if not any(values):
                continue
            rows.append({header: values[i] if i < len(values) else '' for i, header in enumerate(headers)})

        return headers, rows

    @staticmethod
    def extract_kv_from_two_col_table(matrix: Matrix) -> KVMap:
        """
        Read a two-column matrix as key/value pairs.

        Matrices of any other width yield an empty map. Rows with an empty key
        or value, and rows labelling the columns (Key, Value, Name,
        Description), are skipped.
        """
        kv: KVMap = {}
        if not matrix or len(matrix[0]) != 2:
            return kv

        for row in matrix:
            key = CellNormalizer.normalize(row[0])
            value = CellNormalizer.normalize(row[1])
            if not key or not value:
                continue
            if TableParser.HEADER_KEY_PATTERN.match(key):
                continue
            add_value(kv, key, value)

        return kv

    @staticmethod
    def caption(table: Tag) -> str:
        caption = table.find('caption', recursive=False)
        return CellNormalizer.normalize(caption.get_text()) if caption else ""

    @staticmethod
    def parse_table(table: Tag, matrix: Optional[Matrix] = None) -> TableResult:
        """Build the row-object view of a table."""
        if matrix is None:
            matrix = TableParser.to_matrix(table)
        headers, rows = TableParser.matrix_to_objects(table, matrix)
        return TableResult(caption=TableParser.caption(table), headers=headers, rows=rows)
