import enum
import uuid
from datetime import timedelta

from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Enum as SQLEnum

from careers.database import Base
from careers.database_types import GUID, utcnow


class UserRole(str, enum.Enum):
    """User role for role-based access control (RBAC)."""
    ADMIN = "admin"  # Manages company settings, users and API keys
    DIRECTOR = "director"  # Reviews headcount and job approvals
    MANAGER = "manager"  # Requests headcount for own teams
    RECRUITER = "recruiter"  # Manages jobs and candidates
    USER = "user"


# Roles allowed to review headcount requests and job approvals
APPROVER_ROLES = (UserRole.ADMIN, UserRole.DIRECTOR)


class User(Base):
    __tablename__ = "users"

    id = Column(GUID, primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=True)
    company_id = Column(GUID, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)

    role = Column(
        SQLEnum(UserRole, name="user_role", create_type=True),
        nullable=False,
        default=UserRole.USER,
        index=True
    )

    # Magic link authentication
    magic_link_token = Column(String, nullable=True, index=True)
    magic_link_expires_at = Column(DateTime, nullable=True)

    # Bearer session token issued after magic link verification
    access_token = Column(String, nullable=True, unique=True, index=True)
    access_token_expires_at = Column(DateTime, nullable=True)

    # Security & audit fields
    last_login_at = Column(DateTime, nullable=True)
    last_login_ip = Column(String(45), nullable=True)  # IPv4 or IPv6
    failed_login_attempts = Column(Integer, default=0, nullable=False)
    account_locked_until = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def is_approver(self) -> bool:
        """Admins and directors review headcount and job approvals."""
        return self.role in APPROVER_ROLES

    def is_account_locked(self) -> bool:
        """Check if account is currently locked due to failed login attempts."""
        if not self.account_locked_until:
            return False
        return utcnow() < self.account_locked_until

    def magic_link_expired(self) -> bool:
        return not self.magic_link_expires_at or self.magic_link_expires_at < utcnow()

    def clear_magic_link(self) -> None:
        self.magic_link_token = None
        self.magic_link_expires_at = None

    def record_failed_login(self, max_attempts: int, lock_minutes: int) -> bool:
        """Count a failed attempt and lock the account at the limit. Returns True when it locked."""
        self.failed_login_attempts = (self.failed_login_attempts or 0) + 1
        if self.failed_login_attempts < max_attempts:
            return False
        self.account_locked_until = utcnow() + timedelta(minutes=lock_minutes)
        return True

    def start_session(self, token: str, ttl_hours: int, ip: str) -> None:
        """Consume the magic link and issue a bearer token."""
        self.clear_magic_link()
        self.access_token = token
        self.access_token_expires_at = utcnow() + timedelta(hours=ttl_hours)
        self.last_login_at = utcnow()
        self.last_login_ip = ip
        self.failed_login_attempts = 0
        self.account_locked_until = None

    def end_session(self) -> None:
        self.access_token = None
        self.access_token_expires_at = None
