# app/models/assets.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Boolean, CheckConstraint, Column, Date, ForeignKey, Numeric, String, Text, TIMESTAMP, func
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from shared.core.database import Base


def utcnow():
    return datetime.now(timezone.utc)


class Asset(Base):
    __tablename__ = "assets"
    __table_args__ = (
        CheckConstraint("cost IS NULL OR cost >= 0", name="ck_assets_cost_non_negative"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    person_in_charge = Column(String(255), nullable=False)
    department = Column(String(255), nullable=False)
    company_id = Column(UUID(as_uuid=True), ForeignKey(
        "companies.id", ondelete="RESTRICT"), nullable=False, index=True)
    category_id = Column(UUID(as_uuid=True), ForeignKey(
        "categories.id", ondelete="RESTRICT"), nullable=False, index=True)
    cost = Column(Numeric(14, 2), nullable=True)
    supplier = Column(String(255))
    model_number = Column(String(255))
    asset_info = Column(Text)
    specs = Column(Text)
    remarks = Column(Text)
    invoice_date = Column(Date)
    invoice_number = Column(String(255))
    date_deployed = Column(Date)
    date_returned = Column(Date)
    is_active = Column(Boolean, default=True, nullable=False)
    # microsecond precision keeps insertion order stable for the dashboard
    created_at = Column(TIMESTAMP(timezone=True), default=utcnow,
                        server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), default=utcnow,
                        onupdate=utcnow, nullable=False)
    # ✅ soft delete
    is_deleted = Column(Boolean, default=False, nullable=False)
    deleted_at = Column(TIMESTAMP(timezone=True), nullable=True)

    company = relationship("Company", back_populates="assets")
    category = relationship("Category", back_populates="assets")
    asset_code = relationship(
        "AssetCode", back_populates="asset", uselist=False, cascade="all, delete-orphan")
    batch_tags = relationship(
        "BatchTag", back_populates="asset", cascade="all, delete-orphan")

    @property
    def unique_code(self):
        return self.asset_code.unique_code if self.asset_code else None
