import uuid
from sqlalchemy import Boolean, Column, ForeignKey, String, Text, TIMESTAMP, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from shared.core.database import Base


class ServerAccount(Base):
    __tablename__ = "server_accounts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    department = Column(String(255), nullable=False)
    server_user = Column(String(255), nullable=False)
    # Fernet token, never the plain password
    server_password = Column(Text, nullable=True)
    status = Column(String(50), nullable=False)
    remarks = Column(Text, nullable=True)
    company_id = Column(UUID(as_uuid=True), ForeignKey(
        "companies.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())
    is_deleted = Column(Boolean, default=False, nullable=False)
    deleted_at = Column(TIMESTAMP(timezone=True), nullable=True)

    company = relationship("Company", back_populates="server_accounts")
