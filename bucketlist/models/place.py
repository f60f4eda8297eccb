"""
Nearby place models and the geosearch response schema.

The response models mirror the JSON the geosearch endpoint returns; any
deviation from that shape fails validation and counts as a decode failure.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

NO_FURTHER_INFORMATION = "No further information"


class LoadingState(str, Enum):
    """Progress of one nearby-places lookup"""
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class NearbyPlace(BaseModel):
    """A point of interest near a bookmark, as shown while editing it."""

    model_config = ConfigDict(frozen=True)

    page_id: int
    title: str
    description: str = NO_FURTHER_INFORMATION


class GeosearchPage(BaseModel):
    pageid: int
    title: str
    terms: Optional[Dict[str, List[str]]] = None

    @property
    def description(self) -> str:
        """First description term, or the sentinel when there is none."""
        if self.terms:
            entries = self.terms.get("description")
            if entries:
                return entries[0]
        return NO_FURTHER_INFORMATION

    def to_place(self) -> NearbyPlace:
        return NearbyPlace(page_id=self.pageid, title=self.title, description=self.description)


class GeosearchQuery(BaseModel):
    pages: Dict[int, GeosearchPage]


class GeosearchResponse(BaseModel):
    """Top level of a geosearch reply: ``{"query": {"pages": {...}}}``"""
    query: GeosearchQuery

    def sorted_places(self) -> List[NearbyPlace]:
        """Page values ordered by title; the map keys are dropped."""
        pages = sorted(self.query.pages.values(), key=lambda page: page.title)
        return [page.to_place() for page in pages]
