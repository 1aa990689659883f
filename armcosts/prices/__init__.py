# armcosts/prices/__init__.py
from .catalog import CatalogItem, CatalogResponse
from .query import RetailPricesClient, base_query

__all__ = ["CatalogItem", "CatalogResponse", "RetailPricesClient", "base_query"]
