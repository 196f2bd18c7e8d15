"""User model with local and LDAP authentication"""
import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum as SQLEnum
from ..database import Base


class UserRole(str, enum.Enum):
    """Maker/checker roles"""
    MAKER = "maker"
    AUTHORIZER = "authorizer"
    ADMIN = "admin"


class AuthType(str, enum.Enum):
    """Where a user's credentials are checked"""
    LDAP = "ldap"
    LOCAL = "local"


class User(Base):
    """
    Application user.

    LDAP users authenticate against the directory with ldap_username and
    carry no local password, which is why password is nullable.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True)
    email = Column(String(100), nullable=False, unique=True)
    password = Column(String(255), nullable=True)  # bcrypt hash, NULL for LDAP users
    role = Column(
        SQLEnum(*[r.value for r in UserRole], name="enum_users_role", validate_strings=True),
        nullable=False,
        default=UserRole.MAKER.value
    )
    full_name = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=True)
    last_login = Column(DateTime, nullable=True)

    # Column names match the deployed schema
    auth_type = Column(
        "authType",
        SQLEnum(*[a.value for a in AuthType], name="enum_users_authType", validate_strings=True),
        nullable=False,
        default=AuthType.LOCAL.value,
        server_default=AuthType.LOCAL.value
    )
    ldap_username = Column("ldapUsername", String(100), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<User {self.username} ({self.auth_type})>"

    @property
    def uses_ldap(self) -> bool:
        return self.auth_type == AuthType.LDAP.value
