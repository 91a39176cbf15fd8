"""
LangGraph state for one fetch cycle: location, relay payload, and the final result.
"""
from typing import Any, Optional, TypedDict

from tools.base import FetchResult, LocationQuery


class FetchState(TypedDict, total=False):
    """State passed between nodes. A node that fails sets result and the graph ends."""
    source: str
    location: Optional[LocationQuery]
    weather_data: Optional[dict[str, Any]]
    daily_description: Optional[str]
    city: Optional[str]
    result: Optional[FetchResult]
