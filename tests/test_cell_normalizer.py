from bs4 import BeautifulSoup

from wikelo_catalog.extraction.cell_normalizer import CellNormalizer


def make_cell(html):
    return BeautifulSoup(html, 'html.parser').find(['td', 'th'])


def test_normalize_collapses_whitespace_and_nbsp():
    assert CellNormalizer.normalize("  Iron  Ore \n\t x ") == "Iron Ore x"
    assert CellNormalizer.normalize("Iron\u00a0Ore") == "Iron Ore"
    assert CellNormalizer.normalize(None) == ""
    assert CellNormalizer.normalize("") == ""


def test_list_items_are_joined():
    cell = make_cell("<td><ul><li>Gold</li><li>  </li><li>Iron\n   Ore</li></ul></td>")
    assert CellNormalizer.cell_to_text(cell) == "Gold; Iron Ore"


def test_line_breaks_become_separators():
    cell = make_cell("<td>Iron<br/>Gold<br><br/> Copper </td>")
    assert CellNormalizer.cell_to_text(cell) == "Iron; Gold; Copper"


def test_source_newlines_are_plain_whitespace():
    cell = make_cell("<td>Iron\nOre<br>Gold\n</td>")
    assert CellNormalizer.cell_to_text(cell) == "Iron Ore; Gold"


def test_plain_cell_text():
    cell = make_cell("<td> <b>Titanium</b>   ingot </td>")
    assert CellNormalizer.cell_to_text(cell) == "Titanium ingot"


def test_split_on_breaks_leaves_cell_untouched():
    cell = make_cell("<td>a<br>b</td>")
    assert CellNormalizer.split_on_breaks(cell) == ["a", "b"]
    assert cell.find('br') is not None
