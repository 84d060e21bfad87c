from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from signage.api.common import normalize_entity_id
from signage.db import get_db
from signage.models.content import CONTENT_TYPES, Content
from signage.models.playlist import PlaylistItem
from signage.schemas.content import ContentIn, ContentOut

router = APIRouter(prefix="/content", tags=["content"])


def _normalized_content_type(raw: str | None) -> str:
    content_type = (raw or "").strip().upper()
    if content_type not in CONTENT_TYPES:
        raise HTTPException(status_code=400, detail="Unsupported content type. Use IMAGE, VIDEO or PDF.")
    return content_type


def _find_content(db: Session, content_id: str) -> Content:
    content = db.get(Content, normalize_entity_id(content_id, "content_id"))
    if not content:
        raise HTTPException(status_code=404, detail="Content not found")
    return content


@router.post("", status_code=201, response_model=ContentOut)
def create_content(payload: ContentIn, db: Session = Depends(get_db)):
    content = Content(
        title=payload.title.strip(),
        type=_normalized_content_type(payload.type),
        mime_type=payload.mime_type,
        file_key=payload.file_key,
        file_size=payload.file_size,
        width=payload.width,
        height=payload.height,
        duration=payload.duration,
    )
    db.add(content)
    db.commit()
    db.refresh(content)
    return content


@router.get("")
def list_content(
    offset: int = 0,
    limit: int = 100,
    q: str | None = None,
    type: str | None = None,
    db: Session = Depends(get_db),
):
    safe_offset = max(0, offset)
    safe_limit = max(1, min(limit, 500))

    query = db.query(Content)
    if type:
        normalized_type = type.strip().upper()
        if normalized_type in CONTENT_TYPES:
            query = query.filter(Content.type == normalized_type)
    if q:
        keyword = f"%{q.strip().lower()}%"
        if keyword != "%%":
            query = query.filter(func.lower(Content.title).like(keyword))

    total = query.count()
    items = (
        query.order_by(Content.created_at.desc(), Content.id.desc())
        .offset(safe_offset)
        .limit(safe_limit)
        .all()
    )
    return {
        "items": [ContentOut.model_validate(item) for item in items],
        "total": total,
        "offset": safe_offset,
        "limit": safe_limit,
    }


@router.get("/{content_id}", response_model=ContentOut)
def get_content(content_id: str, db: Session = Depends(get_db)):
    return _find_content(db, content_id)


@router.delete("/{content_id}")
def delete_content(content_id: str, db: Session = Depends(get_db)):
    content = _find_content(db, content_id)
    references = db.query(PlaylistItem).filter(PlaylistItem.content_id == content.id).count()
    if references:
        raise HTTPException(status_code=409, detail="Content is used by a playlist and cannot be deleted")
    db.delete(content)
    db.commit()
    return {"ok": True}
