import asyncio

import pytest

from fake_wiki import FakeWikiClient
from wikelo_catalog.crawler.api_models import WikiPage
from wikelo_catalog.crawler.catalog_crawler import CatalogCrawler
from wikelo_catalog.crawler.discovery_config import DiscoveryConfig
from wikelo_catalog.crawler.discovery_strategy import (
    CategoryDiscoveryStrategy,
    LandingPageDiscoveryStrategy,
    strategy_for,
)
from wikelo_catalog.crawler.wiki_client import FetchError

PLACEHOLDER = "https://example.org/placeholder.png"


def landing_page(*titles):
    rows = "".join(
        f'<tr><td><a href="/{title}" title="{title}">{title}</a></td><td>2x Bolt</td></tr>'
        for title in titles
    )
    return f"<table><tr><th>Item</th><th>Ingredients</th></tr>{rows}</table>"


def detail_page(cost):
    return f'<table class="infobox"><tr><th>Cost</th><td>{cost}</td></tr></table>'


def make_config(**overrides):
    return DiscoveryConfig(landing_page="Wikelo", placeholder_image=PLACEHOLDER, **overrides)


def test_failed_detail_fetch_degrades_the_item():
    client = FakeWikiClient(pages={"Wikelo": landing_page("Widget")})
    crawler = CatalogCrawler(client, discovery_config=make_config())

    items = asyncio.run(crawler.build_catalog())

    assert len(items) == 1
    assert items[0].title == "Widget"
    assert items[0].cost == "Unavailable"
    assert items[0].ingredients == []
    assert items[0].image == PLACEHOLDER


def test_one_failure_does_not_abort_the_batch():
    client = FakeWikiClient(pages={
        "Wikelo": landing_page("Widget", "Gadget", "Gizmo"),
        "Widget": detail_page("5 UEC"),
        "Gizmo": detail_page("7 UEC"),
    })
    crawler = CatalogCrawler(client, discovery_config=make_config())

    items = asyncio.run(crawler.build_catalog())

    assert [(item.title, item.cost) for item in items] == [
        ("Widget", "5 UEC"),
        ("Gadget", "Unavailable"),
        ("Gizmo", "7 UEC"),
    ]
    # Stub ingredients survive where the detail page lists none
    assert items[0].ingredients[0].name == "Bolt"


def test_results_follow_discovery_order_not_completion_order():
    client = FakeWikiClient(
        pages={
            "Wikelo": landing_page("Slow", "Fast", "Medium"),
            "Slow": detail_page("1 UEC"),
            "Fast": detail_page("2 UEC"),
            "Medium": detail_page("3 UEC"),
        },
        delays={"Slow": 0.05, "Fast": 0, "Medium": 0.02}
    )
    crawler = CatalogCrawler(client, discovery_config=make_config())

    items = asyncio.run(crawler.build_catalog())

    assert [item.title for item in items] == ["Slow", "Fast", "Medium"]
    assert [item.cost for item in items] == ["1 UEC", "2 UEC", "3 UEC"]


def test_detail_fetches_run_concurrently():
    titles = ["A", "B", "C"]
    client = FakeWikiClient(
        pages={"Wikelo": landing_page(*titles), **{title: detail_page("1 UEC") for title in titles}},
        delays={title: 0.01 for title in titles}
    )
    crawler = CatalogCrawler(client, discovery_config=make_config())

    asyncio.run(crawler.build_catalog())

    assert client.max_in_flight == 3


def test_max_concurrency_bounds_detail_fetches():
    titles = ["A", "B", "C"]
    client = FakeWikiClient(
        pages={"Wikelo": landing_page(*titles), **{title: detail_page("1 UEC") for title in titles}},
        delays={title: 0.01 for title in titles}
    )
    crawler = CatalogCrawler(client, discovery_config=make_config(max_concurrency=1))

    items = asyncio.run(crawler.build_catalog())

    assert client.max_in_flight == 1
    assert len(items) == 3


def test_landing_page_failure_propagates():
    crawler = CatalogCrawler(FakeWikiClient(), discovery_config=make_config())

    with pytest.raises(FetchError):
        asyncio.run(crawler.build_catalog())


def test_category_discovery():
    client = FakeWikiClient(
        pages={"Widget": WikiPage(title="Widget", pageid=7, displaytitle="Widget", html=detail_page("5 UEC"))},
        members={"Category:Wikelo": [(7, "Widget"), (8, "Gadget")]}
    )
    config = make_config(discovery_mode="category", category="Category:Wikelo")
    crawler = CatalogCrawler(client, discovery_config=config)

    items = asyncio.run(crawler.build_catalog())

    assert [(item.id, item.title, item.cost) for item in items] == [
        (7, "Widget", "5 UEC"),
        (8, "Gadget", "Unavailable"),
    ]
    assert items[1].url == "https://starcitizen.tools/Gadget"
    assert ("category", "Category:Wikelo") in client.requests


def test_list_landing_stubs_uses_given_page():
    client = FakeWikiClient(pages={"Other": landing_page("Widget")})
    crawler = CatalogCrawler(client, discovery_config=make_config())

    stubs = asyncio.run(crawler.list_landing_stubs("Other"))

    assert [stub.title for stub in stubs] == ["Widget"]
    assert client.requests == [("page", "Other")]


def test_list_category_stubs():
    client = FakeWikiClient(members={"Category:Trades": [(3, "Widget")]})
    crawler = CatalogCrawler(client, discovery_config=make_config())

    stubs = asyncio.run(crawler.list_category_stubs("Category:Trades"))

    assert [(stub.id, stub.title) for stub in stubs] == [(3, "Widget")]


def test_strategy_selection():
    assert isinstance(strategy_for(make_config(discovery_mode="category")), CategoryDiscoveryStrategy)
    assert isinstance(strategy_for(make_config(discovery_mode="landing")), LandingPageDiscoveryStrategy)
    assert isinstance(strategy_for(make_config(discovery_mode="sitemap")), LandingPageDiscoveryStrategy)


def test_save_catalog_writes_json(tmp_path):
    client = FakeWikiClient(pages={"Wikelo": landing_page("Widget")})
    crawler = CatalogCrawler(client, discovery_config=make_config())

    async def run():
        items = await crawler.build_catalog()
        return await crawler.save_catalog(items, str(tmp_path / "out"))

    filepath = asyncio.run(run())

    with open(filepath, encoding="utf-8") as f:
        content = f.read()
    assert '"title": "Widget"' in content
    assert '"cost": "Unavailable"' in content
