"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.search import ColorCount, SearchOptions, SearchResults, SizeCount
from models.shirt import Shirt, from_raw_metadata

__all__ = ["Shirt", "from_raw_metadata", "SearchOptions", "SearchResults", "SizeCount", "ColorCount"]
