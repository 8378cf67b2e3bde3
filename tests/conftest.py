"""
Shared fixtures for ProductLens tests.

HTML fixtures are trimmed-down snapshots of real product page markup.
"""

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "cli: Command-line interface tests")


AMAZON_HTML = """
<html>
  <head>
    <title>Amazon.in: Echo Dot (5th Gen) : Electronics</title>
    <meta property="og:title" content="Echo Dot (5th Gen) | OG">
    <meta property="og:description" content="Smart speaker with Alexa">
  </head>
  <body>
    <span id="productTitle">
        Echo Dot (5th Gen)
    </span>
    <span id="priceblock_ourprice">  $19.99 
</span>
    <div id="feature-bullets">
      <ul>
        <li>Better sound</li>
        <li>Smart home hub</li>
      </ul>
    </div>
  </body>
</html>
"""

AMAZON_NEW_LAYOUT_HTML = """
<html>
  <head><title>Kindle Paperwhite</title></head>
  <body>
    <div class="a-section">
      <span class="a-price"><span class="a-offscreen">$139.99</span><span aria-hidden="true">$139</span></span>
    </div>
    <div data-feature-name="product-description"><p>A  waterproof
      e-reader.</p></div>
  </body>
</html>
"""

FLIPKART_HTML = """
<html>
  <head>
    <title>Redmi Note 13 - Buy online | Flipkart.com</title>
    <meta name="og:description" content="Redmi Note 13 with 108MP camera">
  </head>
  <body>
    <h1><span class="B_NuCI">Redmi Note 13 (Arctic White, 128 GB)</span></h1>
    <div class="_25b18c"><div class="_30jeq3 _16Jk6d">₹17,999</div></div>
    <div class="_1mXcCf RmoJUa"><p>Big   display,
      long battery.</p></div>
  </body>
</html>
"""

GENERIC_HTML = """
<html>
  <head>
    <title>Widget Pro</title>
    <meta property="og:description" content="  The   best widget
      money can buy. ">
  </head>
  <body><h1>Widget Pro</h1></body>
</html>
"""

MICRODATA_HTML = """
<html>
  <head>
    <meta property="og:title" content="Trail Runner 2">
    <title>Trail Runner 2 - Shoe Shop</title>
    <meta property="product:price:amount" content="89.00">
  </head>
  <body itemscope itemtype="https://schema.org/Product">
    <span itemprop="price" content="79.00"> 79.00 EUR </span>
    <div itemprop="description">Lightweight trail shoe.</div>
  </body>
</html>
"""


@pytest.fixture
def amazon_html() -> str:
    return AMAZON_HTML


@pytest.fixture
def amazon_new_layout_html() -> str:
    return AMAZON_NEW_LAYOUT_HTML


@pytest.fixture
def flipkart_html() -> str:
    return FLIPKART_HTML


@pytest.fixture
def generic_html() -> str:
    return GENERIC_HTML


@pytest.fixture
def microdata_html() -> str:
    return MICRODATA_HTML
