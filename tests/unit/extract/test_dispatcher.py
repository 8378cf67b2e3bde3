"""
Unit tests for the product extraction dispatcher.
"""

import pytest

from productlens.core.extract import (
    AMAZON,
    FLIPKART,
    GENERIC,
    ProductExtractor,
    ProductRecord,
    extract_product_info,
)
from productlens.core.extract.locators import css
from productlens.core.extract.strategies import Strategy, default_registry


class TestProductExtractor:
    """Test cases for ProductExtractor."""

    def test_default_registry(self):
        extractor = ProductExtractor()
        assert extractor.name == "product"
        assert extractor.registry.names() == ["amazon", "flipkart", "generic"]

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://www.amazon.in/dp/B0TEST", AMAZON),
            ("HTTPS://WWW.AMAZON.COM/DP/B0TEST", AMAZON),
            ("https://www.FLIPKART.com/item", FLIPKART),
            ("https://shop.example/widget", GENERIC),
            ("", GENERIC),
            (None, GENERIC),
        ],
    )
    def test_select_strategy(self, url, expected):
        assert ProductExtractor().select_strategy(url) is expected

    def test_extract_amazon(self, amazon_html):
        record = ProductExtractor().extract(amazon_html, "https://www.amazon.in/dp/B0TEST")

        assert record == ProductRecord(
            title="Echo Dot (5th Gen)",
            price="$19.99",
            description="Better sound Smart home hub",
        )

    def test_extract_flipkart_case_insensitive_url(self, flipkart_html):
        record = ProductExtractor().extract(flipkart_html, "https://WWW.FLIPKART.COM/redmi/p/itm1")
        assert record.price == "₹17,999"

    def test_same_page_generic_url(self, flipkart_html):
        """Without the site match, the generic chains are used."""
        record = ProductExtractor().extract(flipkart_html, "https://mirror.example/redmi")

        assert record.title == "Redmi Note 13 - Buy online | Flipkart.com"
        assert record.price is None
        assert record.description == "Redmi Note 13 with 108MP camera"

    def test_generic_scenario(self, generic_html):
        record = ProductExtractor().extract(generic_html, "https://widgets.example/pro")

        assert record.title == "Widget Pro"
        assert record.description == "The best widget money can buy."
        assert record.price is None

    def test_empty_html(self):
        record = ProductExtractor().extract("", "https://www.amazon.com/dp/1")

        assert record == ProductRecord()
        assert record.is_empty

    @pytest.mark.parametrize(
        "html",
        [None, "", "<html", "<<<", "\x00", "<meta property='og:title'>", "<div class='price'>"],
    )
    @pytest.mark.parametrize("url", [None, "", "https://amazon.com", "https://flipkart.com", "ftp://x"])
    def test_never_raises(self, html, url):
        record = ProductExtractor().extract(html, url)
        assert isinstance(record, ProductRecord)

    def test_custom_registry(self):
        registry = default_registry()
        registry.register(
            Strategy(
                name="shop",
                url_fragments=("shop.example",),
                title=(css("h1.name"),),
                price=(css("p.cost"),),
                description=(),
            )
        )
        html = "<h1 class='name'>Mug</h1><p class='cost'>€8</p><div class='product-description'>x</div>"

        record = ProductExtractor(registry).extract(html, "https://Shop.Example/mug")

        assert record == ProductRecord(title="Mug", price="€8", description=None)

    def test_broken_selector_degrades(self):
        registry = default_registry()
        registry.register(
            Strategy(
                name="broken",
                url_fragments=("broken.example",),
                title=(css("h1[[["), css("h1")),
                price=(css(":::"),),
                description=(),
            )
        )

        record = ProductExtractor(registry).extract("<h1>Still here</h1>", "https://broken.example")

        assert record.title == "Still here"
        assert record.price is None


class TestExtractProductInfo:
    """Test cases for the module-level convenience function."""

    def test_uses_builtin_strategies(self, amazon_new_layout_html):
        record = extract_product_info(amazon_new_layout_html, "https://amazon.com/dp/2")
        assert record.price == "$139.99"

    def test_empty_html(self):
        assert extract_product_info("", "https://example.com").is_empty
