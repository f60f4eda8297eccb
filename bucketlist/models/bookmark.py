"""
Bookmark domain model.

A bookmark is identified by its ``id`` alone: two bookmarks with the same name
and coordinate but different ids are different places, and editing a bookmark
produces a new id.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BOOKMARK_NAME = "New location"


class Coordinate(BaseModel):
    """A WGS84 point."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class Bookmark(BaseModel):
    """A saved point of interest."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str = DEFAULT_BOOKMARK_NAME
    description: str = ""
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)

    @classmethod
    def at(cls, coordinate: Coordinate) -> "Bookmark":
        """New bookmark with a fresh id and default name at ``coordinate``."""
        return cls(latitude=coordinate.latitude, longitude=coordinate.longitude)

    def revised(
        self,
        name: str,
        description: str,
        coordinate: Optional[Coordinate] = None,
    ) -> "Bookmark":
        """
        Copy of this bookmark carrying new details under a freshly minted id.

        The coordinate is kept unless a new one is given.
        """
        point = coordinate or self.coordinate
        return Bookmark(
            name=name,
            description=description,
            latitude=point.latitude,
            longitude=point.longitude,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Bookmark):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
