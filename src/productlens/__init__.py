"""
ProductLens - Product data extraction from static HTML pages.

Recovers a normalized product record (title, price, description) from a
fetched HTML document using site-specific selector strategies with
ordered fallbacks and a generic strategy for unknown sites.
"""

__version__ = "0.1.0"
__app_name__ = "productlens"
