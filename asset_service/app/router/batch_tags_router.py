from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, allow_any_user
from shared.core.database import get_asset_db as get_db
from shared.core.schemas import JsonOutResult
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..crud import batch_tags_crud as crud
from ..schemas.batch_tag_schemas import BatchTagCreate, BatchTagOut, MarkPrintedOut
from ..services.tag_renderer import TagRenderer, get_tag_renderer

router = APIRouter(
    prefix="/api/batch-tags",
    tags=["batch tags"],
    dependencies=[Depends(allow_any_user)]
)


@router.get("", response_model=List[BatchTagOut])
def get_batch_tags(db: Session = Depends(get_db)):
    return crud.get_batch_tags(db)


@router.post("", response_model=BatchTagOut, status_code=status.HTTP_201_CREATED)
def archive_tag(
        payload: BatchTagCreate,
        response: Response,
        db: Session = Depends(get_db),
        renderer: TagRenderer = Depends(get_tag_renderer)):
    tag, created = crud.archive_tag(db, payload, renderer)
    if not created:
        response.status_code = status.HTTP_200_OK
    return tag


@router.post("/mark-printed", response_model=JsonOutResult[MarkPrintedOut])
def mark_printed(db: Session = Depends(get_db)):
    updated = crud.mark_all_printed(db)
    return success_response(
        data={"updated": updated},
        message=f"{updated} tag(s) marked as printed",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY
    )


@router.delete("/{tag_id}", response_model=BatchTagOut, dependencies=[Depends(allow_admin)])
def delete_batch_tag(tag_id: UUID, db: Session = Depends(get_db)):
    return crud.delete_batch_tag(db, tag_id)
