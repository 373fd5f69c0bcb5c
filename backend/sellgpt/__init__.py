"""
SellGPT - llms.txt discovery documents for Shopify stores.
"""
__version__ = "1.0.0"
