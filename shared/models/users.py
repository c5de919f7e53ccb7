import uuid
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy import TIMESTAMP, Boolean, Column, Enum, String, func
from sqlalchemy.orm import relationship
from passlib.context import CryptContext

from ..core.database import AuthBase
from ..utils.enums import UserRole, UserStatus

bcrypt_context = CryptContext(schemes=['bcrypt'], deprecated='auto')


class Users(AuthBase):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    full_name = Column(String(200), nullable=False)

    # unique index closes the race between concurrent registrations
    username = Column(String(100), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)

    email = Column(String(200), nullable=True)
    role = Column(Enum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
                  nullable=False, default=UserRole.STAFF)
    status = Column(String(16), nullable=False, default=UserStatus.ACTIVE.value)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())
    is_deleted = Column(Boolean, default=False, nullable=False)

    login_sessions = relationship(
        "UserLoginSession", back_populates="user", cascade="all, delete-orphan")

    def set_password(self, password: str):
        self.password = bcrypt_context.hash(password)

    def verify_password(self, password: str) -> bool:
        return bcrypt_context.verify(password, self.password)

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE.value and not self.is_deleted
