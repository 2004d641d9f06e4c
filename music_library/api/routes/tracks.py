from typing import Annotated, List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from music_library.core.errors import NotFoundError, storage_errors
from music_library.db.models.track import INT64_MAX
from music_library.db.session import get_db
from music_library.schemas.track import MessageOut, TrackCreate, TrackOut, TrackUpdate
from music_library.services import tracks as track_service

router = APIRouter()

# 범위 밖 id 는 어떤 레코드와도 매칭될 수 없음 → 검증 단계에서 404
TrackId = Annotated[int, Path(ge=1, le=INT64_MAX)]


def _not_found(track_id: int) -> NotFoundError:
    return NotFoundError(f"Track with id: {track_id} not found")


# ------- endpoint -------
@router.get("", response_model=List[TrackOut])
async def list_tracks(db: AsyncSession = Depends(get_db)):
    with storage_errors("Failed to fetch tracks"):
        return await track_service.list_tracks(db)


@router.get("/{track_id}", response_model=TrackOut)
async def get_track(track_id: TrackId, db: AsyncSession = Depends(get_db)):
    with storage_errors("Failed to fetch track"):
        track = await track_service.get_track(db, track_id)
    if track is None:
        raise NotFoundError("Track not found")
    return track


@router.post("", response_model=TrackOut, status_code=HTTP_201_CREATED)
async def create_track(payload: TrackCreate, db: AsyncSession = Depends(get_db)):
    with storage_errors("Error creating track"):
        return await track_service.create_track(db, payload.model_dump())


@router.put("/{track_id}", response_model=TrackOut)
async def update_track(track_id: TrackId, payload: TrackUpdate, db: AsyncSession = Depends(get_db)):
    with storage_errors("Error updating track"):
        track = await track_service.update_track(db, track_id, payload.changes())
    if track is None:
        raise _not_found(track_id)
    return track


@router.delete("/{track_id}", response_model=MessageOut)
async def delete_track(track_id: TrackId, db: AsyncSession = Depends(get_db)):
    with storage_errors("Error deleting track"):
        deleted = await track_service.delete_track(db, track_id)
    if not deleted:
        raise _not_found(track_id)
    return {"message": "Track deleted successfully"}
