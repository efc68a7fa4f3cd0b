from .article import Article
from .media import File, MediaFile
from .user import Role, RoleEnum, User

__all__ = [
    "Article",
    "File",
    "MediaFile",
    "Role",
    "RoleEnum",
    "User",
]
