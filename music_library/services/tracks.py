from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from music_library.core.logging import logger
from music_library.db.models.track import Track


async def list_tracks(db: AsyncSession) -> List[Track]:
    res = await db.execute(select(Track).order_by(Track.track_id))
    return list(res.scalars().all())


async def get_track(db: AsyncSession, track_id: int) -> Optional[Track]:
    return await db.get(Track, track_id)


async def create_track(db: AsyncSession, values: dict) -> Track:
    track = Track(**values)
    db.add(track)
    await db.commit()
    # createdAt/updatedAt 는 DB 기본값 → 재조회
    await db.refresh(track)
    logger.info(f"[tracks] created id={track.track_id}")
    return track


async def update_track(db: AsyncSession, track_id: int, changes: dict) -> Optional[Track]:
    """
    키로 조회 후 전달된 필드만 수정.
    대상이 없으면 None 반환 (호출 측에서 404 처리).
    """
    track = await db.get(Track, track_id)
    if track is None:
        return None
    if not changes:
        return track

    for key, value in changes.items():
        setattr(track, key, value)
    await db.commit()
    await db.refresh(track)
    logger.info(f"[tracks] updated id={track_id} fields={sorted(changes)}")
    return track


async def delete_track(db: AsyncSession, track_id: int) -> bool:
    res = await db.execute(delete(Track).where(Track.track_id == track_id))
    await db.commit()
    deleted = res.rowcount > 0
    if deleted:
        logger.info(f"[tracks] deleted id={track_id}")
    return deleted
