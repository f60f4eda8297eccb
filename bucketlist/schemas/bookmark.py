from uuid import UUID
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from bucketlist.models.bookmark import Bookmark, Coordinate


class BookmarkCreate(BaseModel):
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class BookmarkUpdate(BaseModel):
    name: str
    description: str = ""
    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)

    @model_validator(mode="after")
    def check_coordinate_pair(self) -> "BookmarkUpdate":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be given together")
        return self

    def coordinate(self) -> Optional[Coordinate]:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class BookmarkRead(BaseModel):
    id: UUID
    name: str
    description: str
    latitude: float
    longitude: float

    @classmethod
    def from_bookmark(cls, bookmark: Bookmark) -> "BookmarkRead":
        return cls(**bookmark.model_dump())


class BookmarkListResponse(BaseModel):
    bookmarks: list[BookmarkRead]
