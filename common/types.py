"""Shared data type definitions (NodeSnapshot, ReplicationStats)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NodeSnapshot:
    """
    A node as read from the source tree.
    """
    path: str
    data: bytes
    ephemeral: bool


@dataclass
class ReplicationStats:
    """
    Counters collected during a single replication run.
    """
    visited: int = 0
    replicated: int = 0
    skipped_ephemeral: int = 0
    excluded: int = 0
