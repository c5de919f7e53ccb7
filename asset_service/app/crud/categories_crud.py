from datetime import datetime, timezone
from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core.exceptions import ConflictError, NotFoundError, ValidationError
from shared.helpers.text_helper import slugify
from ..models.assets import Asset
from ..models.categories import Category
from ..schemas.category_schemas import CategoryCreate, CategoryUpdate
from .companies_crud import soft_delete_assets


def get_categories(db: Session):
    return (
        db.query(Category)
        .filter(Category.is_deleted == False)
        .order_by(Category.name.asc())
        .all()
    )


def get_category_by_id(db: Session, category_id: UUID, include_deleted: bool = True):
    query = db.query(Category).filter(Category.id == category_id)
    if not include_deleted:
        query = query.filter(Category.is_deleted == False)
    category = query.first()
    if not category:
        raise NotFoundError("Category not found")
    return category


def _build_slug(value: str) -> str:
    slug = slugify(value)
    if not slug:
        raise ValidationError(
            "Slug must contain at least one letter or digit",
            data={"errors": {"slug": ["Slug must contain at least one letter or digit"]}}
        )
    return slug


def _commit_or_conflict(db: Session):
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Category name or slug already exists")


def create_category(db: Session, category: CategoryCreate):
    db_category = Category(
        name=category.name,
        slug=_build_slug(category.slug or category.name)
    )
    db.add(db_category)
    _commit_or_conflict(db)
    db.refresh(db_category)
    return db_category


def update_category(db: Session, category_id: UUID, category: CategoryUpdate):
    db_category = get_category_by_id(db, category_id, include_deleted=False)
    data = category.model_dump(exclude_unset=True)
    if data.get("name"):
        db_category.name = data["name"]
    if data.get("slug"):
        db_category.slug = _build_slug(data["slug"])
    _commit_or_conflict(db)
    db.refresh(db_category)
    return db_category


def delete_category(db: Session, category_id: UUID):
    db_category = get_category_by_id(db, category_id, include_deleted=False)
    db_category.is_deleted = True
    db_category.deleted_at = datetime.now(timezone.utc)
    soft_delete_assets(db, Asset.category_id == db_category.id)
    db.commit()
    return db_category
