from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from signage.api.common import normalize_entity_id
from signage.db import get_db
from signage.models.content import Content
from signage.models.playlist import Playlist, PlaylistItem
from signage.schemas.playlist import PlaylistItemOut, PlaylistOut, RequiredDurationOut
from signage.services import schedules
from signage.services.realtime import hub

router = APIRouter(prefix="/playlists", tags=["playlists"])

SEQUENCE_STEP = 10


def _find_playlist(db: Session, playlist_id: str) -> Playlist:
    playlist = db.get(Playlist, normalize_entity_id(playlist_id, "playlist_id"))
    if not playlist:
        raise HTTPException(status_code=404, detail="Playlist not found")
    return playlist


def _validate_positive(value: int, field_name: str) -> int:
    if value <= 0:
        raise HTTPException(status_code=400, detail=f"{field_name} must be a positive integer")
    return value


def _next_sequence(db: Session, playlist_id: str) -> int:
    current = db.query(func.max(PlaylistItem.sequence)).filter(PlaylistItem.playlist_id == playlist_id).scalar()
    return (current or 0) + SEQUENCE_STEP


def _playlist_summary(db: Session, playlist: Playlist) -> dict:
    items_count, total_duration = (
        db.query(func.count(PlaylistItem.id), func.coalesce(func.sum(PlaylistItem.duration), 0))
        .filter(PlaylistItem.playlist_id == playlist.id)
        .one()
    )
    summary = PlaylistOut.model_validate(playlist).model_dump()
    summary["items_count"] = items_count
    summary["total_duration"] = total_duration
    return summary


@router.post("", status_code=201)
def create_playlist(name: str, description: str | None = None, db: Session = Depends(get_db)):
    cleaned = (name or "").strip()
    if not cleaned:
        raise HTTPException(status_code=400, detail="Playlist name cannot be empty")
    playlist = Playlist(name=cleaned, description=(description or "").strip() or None)
    db.add(playlist)
    db.commit()
    db.refresh(playlist)
    return _playlist_summary(db, playlist)


@router.get("")
def list_playlists(status: str | None = None, db: Session = Depends(get_db)):
    query = db.query(Playlist)
    if status:
        query = query.filter(Playlist.status == status.strip().upper())
    return [_playlist_summary(db, playlist) for playlist in query.order_by(Playlist.name.asc()).all()]


@router.get("/{playlist_id}")
def get_playlist(playlist_id: str, db: Session = Depends(get_db)):
    playlist = _find_playlist(db, playlist_id)
    summary = _playlist_summary(db, playlist)
    summary["items"] = [PlaylistItemOut.model_validate(item) for item in _ordered_items(db, playlist.id)]
    return summary


@router.put("/{playlist_id}")
def update_playlist(
    playlist_id: str,
    name: str | None = None,
    description: str | None = None,
    db: Session = Depends(get_db),
):
    playlist = _find_playlist(db, playlist_id)
    if name is not None:
        cleaned = name.strip()
        if not cleaned:
            raise HTTPException(status_code=400, detail="Playlist name cannot be empty")
        playlist.name = cleaned
    if description is not None:
        playlist.description = description.strip() or None
    db.commit()
    db.refresh(playlist)
    return _playlist_summary(db, playlist)


@router.delete("/{playlist_id}")
def delete_playlist(playlist_id: str, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    playlist = _find_playlist(db, playlist_id)
    for removed in schedules.delete_schedules(db, playlist_id=playlist.id):
        background_tasks.add_task(hub.schedule_changed, removed["display_id"], removed["id"], "deleted")
    db.query(PlaylistItem).filter(PlaylistItem.playlist_id == playlist.id).delete(synchronize_session=False)
    db.delete(playlist)
    db.commit()
    return {"ok": True}


@router.get("/{playlist_id}/required-duration", response_model=RequiredDurationOut)
def required_duration(playlist_id: str, display_id: str, db: Session = Depends(get_db)):
    return schedules.preview_required_duration(
        db,
        normalize_entity_id(playlist_id, "playlist_id"),
        normalize_entity_id(display_id, "display_id"),
    )


def _ordered_items(db: Session, playlist_id: str) -> list[PlaylistItem]:
    return (
        db.query(PlaylistItem)
        .filter(PlaylistItem.playlist_id == playlist_id)
        .order_by(PlaylistItem.sequence.asc(), PlaylistItem.id.asc())
        .all()
    )


@router.post("/{playlist_id}/items", status_code=201, response_model=PlaylistItemOut)
def add_item(
    playlist_id: str,
    content_id: str,
    duration: int,
    sequence: int | None = None,
    db: Session = Depends(get_db),
):
    playlist = _find_playlist(db, playlist_id)
    content_id = normalize_entity_id(content_id, "content_id")
    if not db.get(Content, content_id):
        raise HTTPException(status_code=404, detail="Content not found")
    item = PlaylistItem(
        playlist_id=playlist.id,
        content_id=content_id,
        sequence=_validate_positive(sequence, "sequence") if sequence is not None else _next_sequence(db, playlist.id),
        duration=_validate_positive(duration, "duration"),
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.get("/{playlist_id}/items", response_model=list[PlaylistItemOut])
def list_items(playlist_id: str, db: Session = Depends(get_db)):
    playlist = _find_playlist(db, playlist_id)
    return _ordered_items(db, playlist.id)


@router.put("/items/{item_id}", response_model=PlaylistItemOut)
def update_item(
    item_id: str,
    sequence: int | None = None,
    duration: int | None = None,
    db: Session = Depends(get_db),
):
    item = db.get(PlaylistItem, normalize_entity_id(item_id, "item_id"))
    if not item:
        raise HTTPException(status_code=404, detail="Playlist item not found")
    if sequence is not None:
        item.sequence = _validate_positive(sequence, "sequence")
    if duration is not None:
        item.duration = _validate_positive(duration, "duration")
    db.commit()
    db.refresh(item)
    return item


@router.delete("/items/{item_id}")
def delete_item(item_id: str, db: Session = Depends(get_db)):
    item = db.get(PlaylistItem, normalize_entity_id(item_id, "item_id"))
    if not item:
        raise HTTPException(status_code=404, detail="Playlist item not found")
    db.delete(item)
    db.commit()
    return {"ok": True}
