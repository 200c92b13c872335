"""Custom exception classes for zk-treecopy."""

from typing import Optional


class TreeCopyError(Exception):
    """
    Base exception class for all tree copy errors.
    """
    pass


class ConfigurationError(TreeCopyError):
    """
    Raised when the run configuration is missing or invalid.
    """
    pass


class AddressResolutionError(TreeCopyError):
    """
    Raised when an endpoint list yields no usable IPv4 address.
    """
    pass


class SessionError(TreeCopyError):
    """
    Raised when a session to a cluster cannot be established.
    """
    pass


class ReplicationError(TreeCopyError):
    """
    Raised when listing, reading or creating a node fails.

    Attributes:
        path: Node path the failing operation was issued for
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
