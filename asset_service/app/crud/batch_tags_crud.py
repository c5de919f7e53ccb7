import logging
from datetime import datetime, timezone
from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core.exceptions import NotFoundError
from ..enum.asset_enum import PrintStatus
from ..models.batch_tags import BatchTag
from ..schemas.batch_tag_schemas import BatchTagCreate
from ..services.tag_renderer import TagRenderer, read_tag, tag_file_path, write_tag
from .asset_codes_crud import get_live_code

logger = logging.getLogger(__name__)


def get_batch_tags(db: Session):
    return (
        db.query(BatchTag)
        .filter(BatchTag.is_deleted == False)
        .order_by(BatchTag.created_at.desc())
        .all()
    )


def get_live_tag(db: Session, unique_code: str, for_update: bool = False):
    query = db.query(BatchTag).filter(
        BatchTag.unique_code == unique_code,
        BatchTag.is_deleted == False
    )
    if for_update:
        query = query.with_for_update()
    return query.first()


def archive_tag(db: Session, payload: BatchTagCreate, renderer: TagRenderer):
    """Render and store the tag for a code. Returns (record, created)."""
    db_code = get_live_code(db, payload.unique_code)
    asset_id, unique_code = db_code.asset_id, db_code.unique_code
    file_path = tag_file_path(unique_code)

    write_tag(file_path, renderer.render(unique_code))

    db_tag = BatchTag(
        asset_id=asset_id,
        unique_code=unique_code,
        file_path=file_path,
        print_status=PrintStatus.not_printed.value,
    )
    db.add(db_tag)
    try:
        db.commit()
        created = True
    except IntegrityError:
        # a live tag already holds this code, reset it instead
        db.rollback()
        db_tag = get_live_tag(db, unique_code, for_update=True)
        if db_tag is None:
            raise
        db_tag.asset_id = asset_id
        db_tag.file_path = file_path
        db_tag.print_status = PrintStatus.not_printed.value
        db.commit()
        created = False

    db.refresh(db_tag)
    logger.info("Tag for %s archived at %s", db_tag.unique_code, file_path)
    return db_tag, created


def mark_all_printed(db: Session) -> int:
    updated = (
        db.query(BatchTag)
        .filter(BatchTag.is_deleted == False,
                BatchTag.print_status == PrintStatus.not_printed.value)
        .update({"print_status": PrintStatus.printed.value}, synchronize_session=False)
    )
    db.commit()
    return updated


def delete_batch_tag(db: Session, tag_id: UUID):
    db_tag = db.query(BatchTag).filter(
        BatchTag.id == tag_id, BatchTag.is_deleted == False).first()
    if not db_tag:
        raise NotFoundError("Batch tag not found")
    db_tag.is_deleted = True
    db_tag.deleted_at = datetime.now(timezone.utc)
    db.commit()
    return db_tag


def download_tag(db: Session, unique_code: str, renderer: TagRenderer) -> bytes:
    db_code = get_live_code(db, unique_code)

    # only a live tag record vouches for the archived file
    db_tag = get_live_tag(db, db_code.unique_code)
    image = read_tag(db_tag.file_path) if db_tag else None
    if image is None:
        image = renderer.render(db_code.unique_code)
    return image
