# app/routers/assets_router.py
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin, allow_any_user
from shared.core.database import get_asset_db as get_db
from ..crud import asset_codes_crud, assets_crud as crud, batch_tags_crud
from ..schemas.asset_code_schemas import AssetByCodeOut, UniqueCodeCreate, UniqueCodeOut
from ..schemas.assets_schemas import (
    AssetCreate, AssetListItem, AssetListResponse, AssetOut, AssetsRequest, AssetUpdate
)
from ..services.tag_renderer import TagRenderer, get_tag_renderer

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}

router = APIRouter(
    prefix="/api",
    tags=["assets"],
    dependencies=[Depends(allow_any_user)]
)


@router.get("/assets", response_model=AssetListResponse)
def get_assets(params: AssetsRequest = Depends(), db: Session = Depends(get_db)):
    return crud.get_assets(db, params)


@router.post("/assets", response_model=AssetOut, status_code=status.HTTP_201_CREATED)
def create_asset(asset: AssetCreate, db: Session = Depends(get_db)):
    return crud.create_asset(db, asset)


# ---------------- Unique codes (static paths before /assets/{asset_id}) ----------------
@router.post("/assets/unique-code", response_model=UniqueCodeOut,
             status_code=status.HTTP_201_CREATED)
def save_unique_code(payload: UniqueCodeCreate, db: Session = Depends(get_db)):
    return asset_codes_crud.save_unique_code(db, payload)


@router.get("/assets/by-unique-code", response_model=AssetByCodeOut)
def get_asset_by_unique_code(
        unique_code: str = Query(..., min_length=1, max_length=50),
        db: Session = Depends(get_db)):
    return asset_codes_crud.get_asset_by_unique_code(db, unique_code)


@router.get("/assets/unique-code-suggestions", response_model=List[str])
def suggest_unique_codes(q: Optional[str] = None, db: Session = Depends(get_db)):
    return asset_codes_crud.suggest_unique_codes(db, q.strip() if q else None)


@router.get("/assets/{unique_code}/download-tag")
def download_tag(
        unique_code: str,
        db: Session = Depends(get_db),
        renderer: TagRenderer = Depends(get_tag_renderer)):
    image = batch_tags_crud.download_tag(db, unique_code, renderer)
    filename = unique_code.replace('"', "")
    return Response(
        content=image,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}.png"'}
    )


# ---------------- Single asset ----------------
@router.get("/assets/{asset_id}", response_model=AssetOut)
def get_asset(asset_id: UUID, db: Session = Depends(get_db)):
    return crud.get_asset_by_id(db, asset_id)


@router.put("/assets/{asset_id}", response_model=AssetOut)
@router.patch("/assets/{asset_id}", response_model=AssetOut)
def update_asset(asset_id: UUID, asset: AssetUpdate, db: Session = Depends(get_db)):
    return crud.update_asset(db, asset_id, asset)


@router.delete("/assets/{asset_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(allow_admin)])
def delete_asset(asset_id: UUID, db: Session = Depends(get_db)):
    crud.delete_asset(db, asset_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------- Projections ----------------
@router.get("/asset_list", response_model=List[AssetListItem])
def asset_list(response: Response, db: Session = Depends(get_db)):
    response.headers.update(NO_CACHE_HEADERS)
    return crud.get_asset_list(db)


@router.get("/asset_list_all", response_model=List[AssetListItem])
def asset_list_all(response: Response, db: Session = Depends(get_db)):
    response.headers.update(NO_CACHE_HEADERS)
    return crud.get_asset_list(db, include_inactive=True)
