import logging
from datetime import datetime, timezone
from uuid import UUID
from sqlalchemy.orm import Session, joinedload

from shared.core.exceptions import NotFoundError, ValidationError
from shared.helpers.encryption_helper import encryption_service
from ..models.companies import Company
from ..models.server_accounts import ServerAccount
from ..schemas.server_account_schemas import (
    ServerAccountCreate, ServerAccountOut, ServerAccountUpdate
)

logger = logging.getLogger(__name__)


def to_out(account: ServerAccount) -> ServerAccountOut:
    try:
        password = encryption_service.decrypt(account.server_password)
    except ValueError:
        logger.warning("Stored password for server account %s cannot be decrypted", account.id)
        password = None

    return ServerAccountOut.model_validate({
        **{c.name: getattr(account, c.name) for c in ServerAccount.__table__.columns},
        "server_password": password,
        "company_name": account.company.name if account.company else None,
    })


def _check_company(db: Session, company_id):
    if company_id is None:
        return
    exists = db.query(Company.id).filter(
        Company.id == company_id, Company.is_deleted == False).first()
    if not exists:
        raise ValidationError(
            "Selected company does not exist",
            data={"errors": {"company_id": ["Selected company does not exist"]}}
        )


def get_server_accounts(db: Session):
    accounts = (
        db.query(ServerAccount)
        .options(joinedload(ServerAccount.company))
        .filter(ServerAccount.is_deleted == False)
        .order_by(ServerAccount.created_at.desc())
        .all()
    )
    return [to_out(account) for account in accounts]


def get_server_account_by_id(db: Session, account_id: UUID, include_deleted: bool = True):
    query = db.query(ServerAccount).filter(ServerAccount.id == account_id)
    if not include_deleted:
        query = query.filter(ServerAccount.is_deleted == False)
    account = query.first()
    if not account:
        raise NotFoundError("Server account not found")
    return account


def create_server_account(db: Session, account: ServerAccountCreate):
    _check_company(db, account.company_id)
    data = account.model_dump()
    data["server_password"] = encryption_service.encrypt(data.get("server_password"))
    db_account = ServerAccount(**data)
    db.add(db_account)
    db.commit()
    db.refresh(db_account)
    return to_out(db_account)


def update_server_account(db: Session, account_id: UUID, account: ServerAccountUpdate):
    db_account = get_server_account_by_id(db, account_id, include_deleted=False)
    data = account.model_dump(exclude_unset=True)

    if "company_id" in data:
        _check_company(db, data["company_id"])

    password = data.pop("server_password", None)
    if password:
        db_account.server_password = encryption_service.encrypt(password)

    for key, value in data.items():
        if value is None and key not in ("remarks", "company_id"):
            continue
        setattr(db_account, key, value)

    db.commit()
    db.refresh(db_account)
    return to_out(db_account)


def delete_server_account(db: Session, account_id: UUID):
    db_account = get_server_account_by_id(db, account_id, include_deleted=False)
    db_account.is_deleted = True
    db_account.deleted_at = datetime.now(timezone.utc)
    db.commit()
    return to_out(db_account)
