"""
Replication engine: sessions, exclusion, and depth-first copying of a
ZooKeeper subtree into another cluster.
"""

from replicator.exclusion import PathExclusionFilter
from replicator.session import establish_session, release_session
from replicator.tree_replicator import TreeReplicator

__all__ = [
    "PathExclusionFilter",
    "TreeReplicator",
    "establish_session",
    "release_session",
]
