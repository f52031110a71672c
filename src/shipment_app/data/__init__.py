from .catalog_repo import load_catalog, load_catalog_document
from .cache import clear_catalog_cache

__all__ = ["load_catalog", "load_catalog_document", "clear_catalog_cache"]
