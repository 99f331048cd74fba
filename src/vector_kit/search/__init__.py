from .service import TEXT_METADATA_KEY, TextSearchService

__all__ = [
    "TEXT_METADATA_KEY",
    "TextSearchService",
]
