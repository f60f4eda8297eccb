from uuid import UUID
from typing import Optional

from pydantic import BaseModel

from bucketlist.models.place import LoadingState, NearbyPlace
from bucketlist.schemas.bookmark import BookmarkRead
from bucketlist.services.edit_session import EditSession


class EditSessionRead(BaseModel):
    id: UUID
    bookmark: BookmarkRead
    name: str
    description: str
    state: LoadingState
    places: list[NearbyPlace]
    error: Optional[str] = None

    @classmethod
    def from_session(cls, session: EditSession) -> "EditSessionRead":
        return cls(
            id=session.id,
            bookmark=BookmarkRead.from_bookmark(session.bookmark),
            name=session.name,
            description=session.description,
            state=session.state,
            places=session.places,
            error=session.error,
        )


class EditSessionSave(BaseModel):
    name: str
    description: str = ""
