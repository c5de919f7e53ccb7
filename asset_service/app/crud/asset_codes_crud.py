import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from shared.core.exceptions import ConflictError, NotFoundError
from shared.utils.app_status_code import AppStatusCode
from ..models.asset_codes import AssetCode
from ..models.assets import Asset
from ..schemas.asset_code_schemas import UniqueCodeCreate
from .assets_crud import get_asset_by_id

logger = logging.getLogger(__name__)

SUGGESTION_LIMIT = 10


def save_unique_code(db: Session, payload: UniqueCodeCreate):
    asset = db.query(Asset.id).filter(
        Asset.id == payload.asset_id, Asset.is_deleted == False).first()
    if not asset:
        raise NotFoundError("Asset not found")

    db_code = AssetCode(asset_id=payload.asset_id, unique_code=payload.unique_code)
    db.add(db_code)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # the constraint decides; work out which one afterwards
        taken = db.query(AssetCode.id).filter(
            AssetCode.unique_code == payload.unique_code).first()
        if taken:
            raise ConflictError("Unique code already exists",
                                AppStatusCode.UNIQUE_CODE_ALREADY_EXISTS)
        raise ConflictError("Asset already has a unique code",
                            AppStatusCode.ASSET_ALREADY_HAS_CODE)

    db.refresh(db_code)
    logger.info("Unique code %s assigned to asset %s", db_code.unique_code, db_code.asset_id)
    return db_code


def get_live_code(db: Session, unique_code: str) -> AssetCode:
    """Resolve a code to its record, failing when the code or its asset is gone."""
    db_code = (
        db.query(AssetCode)
        .options(joinedload(AssetCode.asset))
        .filter(AssetCode.unique_code == unique_code)
        .first()
    )
    if not db_code:
        raise NotFoundError("Unique code not found")
    if not db_code.asset or db_code.asset.is_deleted:
        raise NotFoundError("Asset for this unique code not found")
    return db_code


def get_asset_by_unique_code(db: Session, unique_code: str):
    db_code = get_live_code(db, unique_code)
    return {
        "asset": get_asset_by_id(db, db_code.asset_id),
        "unique_code": db_code,
    }


def suggest_unique_codes(db: Session, q: str = None):
    if not q:
        return []
    rows = (
        db.query(AssetCode.unique_code)
        .join(Asset, AssetCode.asset_id == Asset.id)
        .filter(Asset.is_deleted == False,
                AssetCode.unique_code.icontains(q, autoescape=True))
        .order_by(AssetCode.unique_code.asc())
        .limit(SUGGESTION_LIMIT)
        .all()
    )
    return [row.unique_code for row in rows]
