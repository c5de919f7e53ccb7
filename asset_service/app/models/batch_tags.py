import uuid
from sqlalchemy import Boolean, Column, ForeignKey, Index, String, TIMESTAMP, func, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from shared.core.config import settings
from shared.core.database import Base
from ..enum.asset_enum import PrintStatus


class BatchTag(Base):
    __tablename__ = "batch_tags"
    # at most one live tag per code, deleted rows are kept for history
    __table_args__ = (
        Index(
            "uix_batch_tags_live_code", "unique_code", unique=True,
            postgresql_where=text("is_deleted = false"),
            sqlite_where=text("is_deleted = 0"),
        ),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    asset_id = Column(UUID(as_uuid=True), ForeignKey(
        "assets.id", ondelete="CASCADE"), nullable=False, index=True)
    unique_code = Column(String(50), nullable=False)
    file_path = Column(String(255), nullable=False)
    print_status = Column(String(16), nullable=False,
                          default=PrintStatus.not_printed.value)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    is_deleted = Column(Boolean, default=False, nullable=False)
    deleted_at = Column(TIMESTAMP(timezone=True), nullable=True)

    asset = relationship("Asset", back_populates="batch_tags")

    @property
    def url(self):
        return f"{settings.TAG_PUBLIC_URL.rstrip('/')}/{self.file_path}"
