def clear_catalog_cache() -> None:
    from .catalog_repo import _cached_document, load_catalog

    load_catalog.cache_clear()
    _cached_document.cache_clear()
