from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
