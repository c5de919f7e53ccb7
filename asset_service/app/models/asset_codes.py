import uuid
from sqlalchemy import Column, ForeignKey, String, TIMESTAMP, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from shared.core.database import Base


class AssetCode(Base):
    __tablename__ = "asset_codes"
    # both enforced by the database, no application level pre-check
    __table_args__ = (
        UniqueConstraint("unique_code", name="uix_asset_codes_unique_code"),
        UniqueConstraint("asset_id", name="uix_asset_codes_asset_id"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    asset_id = Column(UUID(as_uuid=True), ForeignKey(
        "assets.id", ondelete="CASCADE"), nullable=False)
    unique_code = Column(String(50), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    asset = relationship("Asset", back_populates="asset_code")
