from datetime import datetime, timezone
from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core.exceptions import ConflictError, NotFoundError
from ..models.assets import Asset
from ..models.batch_tags import BatchTag
from ..models.companies import Company
from ..schemas.company_schemas import CompanyCreate, CompanyUpdate


def get_companies(db: Session):
    return (
        db.query(Company)
        .filter(Company.is_deleted == False)
        .order_by(Company.name.asc())
        .all()
    )


def get_company_by_id(db: Session, company_id: UUID, include_deleted: bool = True):
    query = db.query(Company).filter(Company.id == company_id)
    if not include_deleted:
        query = query.filter(Company.is_deleted == False)
    company = query.first()
    if not company:
        raise NotFoundError("Company not found")
    return company


def _commit_or_conflict(db: Session):
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Company name or code already exists")


def create_company(db: Session, company: CompanyCreate):
    db_company = Company(**company.model_dump())
    db.add(db_company)
    _commit_or_conflict(db)
    db.refresh(db_company)
    return db_company


def update_company(db: Session, company_id: UUID, company: CompanyUpdate):
    db_company = get_company_by_id(db, company_id, include_deleted=False)
    for key, value in company.model_dump(exclude_unset=True).items():
        if value is None and key != "logo":
            continue
        setattr(db_company, key, value)
    _commit_or_conflict(db)
    db.refresh(db_company)
    return db_company


def soft_delete_assets(db: Session, *criteria):
    """Soft delete the live assets matching criteria along with their tag images."""
    now = datetime.now(timezone.utc)
    asset_ids = [
        row.id for row in db.query(Asset.id).filter(Asset.is_deleted == False, *criteria)
    ]
    if not asset_ids:
        return 0
    db.query(BatchTag).filter(
        BatchTag.asset_id.in_(asset_ids), BatchTag.is_deleted == False
    ).update({"is_deleted": True, "deleted_at": now}, synchronize_session=False)
    db.query(Asset).filter(Asset.id.in_(asset_ids)).update(
        {"is_deleted": True, "deleted_at": now}, synchronize_session=False)
    return len(asset_ids)


def delete_company(db: Session, company_id: UUID):
    db_company = get_company_by_id(db, company_id, include_deleted=False)
    db_company.is_deleted = True
    db_company.deleted_at = datetime.now(timezone.utc)
    soft_delete_assets(db, Asset.company_id == db_company.id)
    db.commit()
    return db_company
