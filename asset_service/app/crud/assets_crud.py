# app/crud/assets_crud.py
import logging
from datetime import date, datetime, timezone
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from shared.core.exceptions import NotFoundError, ValidationError
from ..models.asset_codes import AssetCode
from ..models.assets import Asset
from ..models.batch_tags import BatchTag
from ..models.categories import Category
from ..models.companies import Company
from ..schemas.assets_schemas import AssetCreate, AssetsRequest, AssetUpdate

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# LIFECYCLE
# ----------------------------------------------------------------------

def apply_active_transition(asset: Asset, was_active: bool, today: date):
    """Keep date_returned consistent with an explicit change of is_active."""
    if not asset.is_active:
        if asset.date_returned is None:
            asset.date_returned = today
    elif not was_active:
        asset.date_returned = None


# ----------------------------------------------------------------------
# CRUD OPERATIONS
# ----------------------------------------------------------------------

def _with_relations(query):
    return query.options(
        joinedload(Asset.company),
        joinedload(Asset.category),
        joinedload(Asset.asset_code),
    )


def _check_references(db: Session, company_id=None, category_id=None):
    errors = {}
    if company_id is not None:
        exists = db.query(Company.id).filter(
            Company.id == company_id, Company.is_deleted == False).first()
        if not exists:
            errors["company_id"] = ["Selected company does not exist"]
    if category_id is not None:
        exists = db.query(Category.id).filter(
            Category.id == category_id, Category.is_deleted == False).first()
        if not exists:
            errors["category_id"] = ["Selected category does not exist"]
    if errors:
        first_message = next(iter(errors.values()))[0]
        raise ValidationError(first_message, data={"errors": errors})


def build_asset_filters(params: AssetsRequest):
    filters = [Asset.is_deleted == False]

    if params.has_unique_code is True:
        filters.append(Asset.asset_code.has())
    elif params.has_unique_code is False:
        filters.append(~Asset.asset_code.has())

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(or_(
            Asset.person_in_charge.ilike(search_term),
            Asset.department.ilike(search_term),
            Asset.model_number.ilike(search_term),
            Asset.supplier.ilike(search_term),
            Asset.invoice_number.ilike(search_term),
        ))

    return filters


def get_assets(db: Session, params: AssetsRequest):
    base_query = db.query(Asset).filter(*build_asset_filters(params))
    total = base_query.count()

    query = _with_relations(base_query).order_by(
        Asset.created_at.desc(), Asset.id.desc()).offset(params.skip or 0)
    if params.limit:
        query = query.limit(params.limit)

    return {"assets": query.all(), "total": total}


def get_asset_by_id(db: Session, asset_id: UUID):
    # soft deleted rows stay readable for audit
    asset = _with_relations(db.query(Asset)).filter(Asset.id == asset_id).first()
    if not asset:
        raise NotFoundError("Asset not found")
    return asset


def create_asset(db: Session, asset: AssetCreate):
    _check_references(db, asset.company_id, asset.category_id)

    db_asset = Asset(**asset.model_dump(), is_active=True)
    db.add(db_asset)
    db.commit()
    logger.info("Asset %s created for %s", db_asset.id, db_asset.person_in_charge)
    return get_asset_by_id(db, db_asset.id)


def update_asset(db: Session, asset_id: UUID, asset: AssetUpdate, today: date = None):
    db_asset = (
        db.query(Asset)
        .filter(Asset.id == asset_id, Asset.is_deleted == False)
        .with_for_update()
        .first()
    )
    if not db_asset:
        raise NotFoundError("Asset not found")

    update_data = asset.model_dump(exclude_unset=True)
    _check_references(db, update_data.get("company_id"), update_data.get("category_id"))

    was_active = db_asset.is_active
    for key, value in update_data.items():
        setattr(db_asset, key, value)

    if "is_active" in update_data:
        apply_active_transition(db_asset, was_active, today or date.today())
        if was_active != db_asset.is_active:
            logger.info("Asset %s is_active %s -> %s", db_asset.id, was_active, db_asset.is_active)

    db.commit()
    return get_asset_by_id(db, db_asset.id)


def delete_asset(db: Session, asset_id: UUID):
    db_asset = db.query(Asset).filter(
        Asset.id == asset_id, Asset.is_deleted == False).first()
    if not db_asset:
        raise NotFoundError("Asset not found")

    now = datetime.now(timezone.utc)
    db_asset.is_deleted = True
    db_asset.deleted_at = now
    db.query(BatchTag).filter(
        BatchTag.asset_id == db_asset.id, BatchTag.is_deleted == False
    ).update({"is_deleted": True, "deleted_at": now}, synchronize_session=False)
    db.commit()


def get_asset_list(db: Session, include_inactive: bool = False):
    query = (
        db.query(Asset.id, Asset.person_in_charge, Asset.is_active,
                 Company.name.label("company_name"))
        .outerjoin(Company, Asset.company_id == Company.id)
        .filter(Asset.is_deleted == False)
    )
    if not include_inactive:
        query = query.filter(Asset.is_active == True)

    rows = query.order_by(Asset.created_at.desc(), Asset.id.desc()).all()
    return [
        {
            "id": row.id,
            "person_in_charge": row.person_in_charge,
            "company_name": row.company_name,
            "is_active": row.is_active,
        }
        for row in rows
    ]
