from bs4 import BeautifulSoup

from wikelo_catalog.extraction.requirement_extractor import RequirementExtractor


def as_pairs(requirements):
    return [(requirement.name, requirement.quantity) for requirement in requirements]


def make_cell(html):
    return BeautifulSoup(html, 'html.parser').find('td')


def test_fragment_patterns():
    cases = {
        "Titanium × 4": ("Titanium", 4),
        "Gold": ("Gold", 1),
        "3 Iron Ore": ("Iron Ore", 3),
        "2x Bolt": ("Bolt", 2),
        "2 x Bolt": ("Bolt", 2),
        "Titanium x4": ("Titanium", 4),
        "Carinite 12": ("Carinite", 12),
        "10 Xenon": ("Xenon", 10),
        "1,000 Scrap": ("Scrap", 1000),
        "Quantanium[1]": ("Quantanium", 1),
        "0 Gold": ("Gold", 1),
        "Box4": ("Box4", 1),
        "2xBolt": ("Bolt", 2),
        "3XGear": ("Gear", 3),
        "4xenon": ("xenon", 4),
    }
    for text, expected in cases.items():
        requirement = RequirementExtractor.parse_fragment(text)
        assert (requirement.name, requirement.quantity) == expected, text


def test_empty_fragments_produce_nothing():
    assert RequirementExtractor.parse_fragment("   ") is None
    assert RequirementExtractor.parse_fragment("[2]") is None


def test_list_items_are_parsed_independently():
    cell = make_cell("<td><ul><li>2x Bolt</li><li>Gold</li><li></li></ul></td>")
    assert as_pairs(RequirementExtractor.extract_from_element(cell)) == [("Bolt", 2), ("Gold", 1)]


def test_line_breaks_split_requirements():
    cell = make_cell("<td>3 Iron Ore<br>Titanium × 4<br/></td>")
    assert as_pairs(RequirementExtractor.extract_from_element(cell)) == [("Iron Ore", 3), ("Titanium", 4)]


def test_delimited_text_is_split():
    requirements = RequirementExtractor.extract_from_text("5 Wikelo Favor, 2 Carinite; Gold • Silver\nCopper x 2,, ;")
    assert as_pairs(requirements) == [
        ("Wikelo Favor", 5),
        ("Carinite", 2),
        ("Gold", 1),
        ("Silver", 1),
        ("Copper", 2),
    ]


def test_missing_element_gives_no_requirements():
    assert RequirementExtractor.extract_from_element(None) == []


def test_heading_anchored_lists():
    soup = BeautifulSoup("""
    <h2>Overview</h2>
    <ul><li>Not an ingredient × 7</li></ul>
    <h2>Crafting recipe</h2>
    <p>Bring the following:</p>
    <ul><li>Titanium × 4</li><li>Gold 3x</li><li>Quantanium[1]</li></ul>
    <h3>Optional</h3>
    <ul><li>Copper x2</li></ul>
    <h2>Trivia</h2>
    <ul><li>Ignored × 9</li></ul>
    """, 'html.parser')
    assert as_pairs(RequirementExtractor.extract_from_headings(soup)) == [
        ("Titanium", 4),
        ("Gold", 3),
        ("Quantanium", 1),
        ("Copper", 2),
    ]


def test_heading_anchored_lists_inside_heading_wrappers():
    soup = BeautifulSoup("""
    <div class="mw-parser-output">
      <div class="mw-heading mw-heading2"><h2 id="Ingredients">Ingredients</h2><span class="mw-editsection">edit</span></div>
      <ul><li>Bolt × 2</li></ul>
      <div class="mw-heading mw-heading2"><h2 id="Lore">Lore</h2></div>
      <ul><li>Nope × 3</li></ul>
    </div>
    """, 'html.parser')
    assert as_pairs(RequirementExtractor.extract_from_headings(soup)) == [("Bolt", 2)]


def test_no_matching_heading_gives_no_requirements():
    soup = BeautifulSoup("<h2>History</h2><ul><li>Gold × 2</li></ul>", 'html.parser')
    assert RequirementExtractor.extract_from_headings(soup) == []


def test_excluded_fragments_are_skipped():
    cell = make_cell("<td>2x Bolt<br>40 aUEC<br>Gold</td>")
    requirements = RequirementExtractor.extract_from_element(cell, exclude=lambda text: "aUEC" in text)
    assert as_pairs(requirements) == [("Bolt", 2), ("Gold", 1)]
