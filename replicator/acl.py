"""Permission presets for replicated nodes."""

from typing import List

from kazoo.security import ACL, OPEN_ACL_UNSAFE, Permissions

# Leaf/data nodes
PERM_FILE = Permissions.ADMIN | Permissions.READ | Permissions.WRITE

# Intermediate scaffolding nodes
PERM_DIRECTORY = (
    Permissions.ADMIN | Permissions.CREATE | Permissions.DELETE |
    Permissions.READ | Permissions.WRITE
)

DEFAULT_ACL: List[ACL] = list(OPEN_ACL_UNSAFE)


def with_permissions(acl: List[ACL], perms: int) -> List[ACL]:
    """
    Copy an ACL, replacing the permission mask of every entry.

    Args:
        acl: Source ACL entries
        perms: Permission bitmask applied to each copied entry

    Returns:
        New ACL list with the same identities
    """
    return [ACL(perms, entry.id) for entry in acl]


def directory_acl(acl: List[ACL]) -> List[ACL]:
    """ACL used for parents materialized on the way to a node."""
    return with_permissions(acl, PERM_DIRECTORY)


def file_acl(acl: List[ACL]) -> List[ACL]:
    """ACL restricted to file-level permissions."""
    return with_permissions(acl, PERM_FILE)
