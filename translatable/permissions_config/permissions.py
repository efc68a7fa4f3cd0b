# Translation permission codes
TRANSLATE_ALL = "TRANSLATE_ALL"
TRANSLATE_PREFIX = "TRANSLATE_"


def translate_permission(locale: str) -> str:
    """Permission code granting edit access to a single locale, e.g. TRANSLATE_fr_FR."""
    return f"{TRANSLATE_PREFIX}{locale}"


# Role permissions with inheritance support
ROLE_PERMISSIONS = {
    "user": [],
    "translator": [],  # Locale grants are assigned per role row, e.g. TRANSLATE_fr_FR
    "editor": ["view_content", "edit_content"],
    "admin": [TRANSLATE_ALL],  # Admin extends editor permissions
    "superadmin": ["*"],  # Superadmin has unrestricted access
}

ROLE_INHERITANCE = {
    "admin": ["editor"],
}


def get_role_permissions(role: str) -> list:
    """
    Returns the permissions for a given role, including inherited permissions.
    """
    if role not in ROLE_PERMISSIONS:
        raise ValueError(f"Invalid role: {role}")

    permissions = set(ROLE_PERMISSIONS[role])
    for parent in ROLE_INHERITANCE.get(role, []):
        permissions.update(get_role_permissions(parent))

    return sorted(permissions)
