from sqlalchemy import Column, Integer, String, ForeignKey, JSON
from sqlalchemy.orm import relationship
from translatable.database import Base
from translatable.permissions_config.permissions import ROLE_PERMISSIONS, get_role_permissions
import enum


# Enum for predefined roles
class RoleEnum(str, enum.Enum):
    user = "user"
    translator = "translator"
    editor = "editor"
    admin = "admin"
    superadmin = "superadmin"


# Role model
class Role(Base):
    __tablename__ = "roles"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    permissions = Column(JSON, nullable=False, default=list)  # Store permissions in JSON format
    users = relationship("User", back_populates="role")

    def effective_permissions(self) -> set[str]:
        """Permissions stored on the row plus the built-in grants of the role name."""
        granted = set(self.permissions or [])
        if self.name in ROLE_PERMISSIONS:
            granted.update(get_role_permissions(self.name))
        return granted


# User model
class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, index=True)
    email = Column(String, unique=True, nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=True)
    role = relationship("Role", back_populates="users", lazy="joined")

    def has_permission(self, code: str) -> bool:
        if self.role is None:
            return False
        granted = self.role.effective_permissions()
        return "*" in granted or code in granted
