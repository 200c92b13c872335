"""
Depth-first replication of a ZooKeeper subtree into another cluster.

Nodes are visited in pre-order, children in the order the source returns
them. Ephemeral nodes are not copied but their children are. Every remote
failure aborts the run with ReplicationError; nodes copied before the
failure stay in the target.
"""

import posixpath
from typing import Iterator, List, Optional, Tuple

from kazoo.client import KazooClient
from kazoo.exceptions import KazooException
from kazoo.security import ACL

from common.exceptions import ReplicationError
from common.logging_config import get_logger
from common.types import NodeSnapshot, ReplicationStats
from replicator.acl import DEFAULT_ACL
from replicator.exclusion import PathExclusionFilter
from replicator.recursive_create import create_recursive

logger = get_logger(__name__)


class TreeReplicator:
    """
    Copies persistent nodes below a root path from source to target.
    """

    def __init__(
        self,
        source: KazooClient,
        target: KazooClient,
        exclusion_filter: PathExclusionFilter,
        stop_at_excluded: bool = True,
        acl: Optional[List[ACL]] = None
    ):
        """
        Args:
            source: Started client for the cluster being read
            target: Started client for the cluster being written
            exclusion_filter: Predicate for paths that must not be copied
            stop_at_excluded: When True, meeting an excluded child ends the
                walk of all its remaining siblings; when False only the
                excluded node and its subtree are skipped
            acl: ACL given to every copied node (default: world, all permissions)
        """
        self.source = source
        self.target = target
        self.exclusion_filter = exclusion_filter
        self.stop_at_excluded = stop_at_excluded
        self.acl = list(acl) if acl is not None else DEFAULT_ACL

    def replicate(self, root: str) -> ReplicationStats:
        """
        Replicate every node below root. The root node itself is not copied;
        it is created in the target as a parent of its first copied child.

        Args:
            root: Absolute path of the subtree to copy

        Returns:
            Counters for the run

        Raises:
            ReplicationError: If listing, reading or creating any node fails
        """
        stats = ReplicationStats()
        stack: List[Tuple[str, Iterator[str]]] = [(root, self._children(root))]

        while stack:
            parent, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                continue

            path = posixpath.join(parent, child)
            if self.exclusion_filter.is_excluded(path):
                stats.excluded += 1
                if self.stop_at_excluded:
                    logger.info(f"{path} is excluded, remaining children of {parent} are not visited")
                    stack.pop()
                else:
                    logger.info(f"{path} is excluded, skipping")
                continue

            node = self._read(path)
            stats.visited += 1

            if node.ephemeral:
                stats.skipped_ephemeral += 1
                logger.debug(f"{path} is ephemeral, not copied")
            else:
                self._copy(node)
                stats.replicated += 1
                logger.info(f"{path} backup success")

            stack.append((path, self._children(path)))

        return stats

    def _children(self, path: str) -> Iterator[str]:
        try:
            children = self.source.get_children(path)
        except KazooException as e:
            raise ReplicationError(f"error, when get children of {path}: {e!r}", path) from e
        return iter(children)

    def _read(self, path: str) -> NodeSnapshot:
        try:
            data, stat = self.source.get(path)
        except KazooException as e:
            raise ReplicationError(f"error, when read node {path}: {e!r}", path) from e
        return NodeSnapshot(
            path=path,
            data=data or b"",
            ephemeral=stat.ephemeralOwner != 0
        )

    def _copy(self, node: NodeSnapshot) -> None:
        try:
            create_recursive(self.target, node.path, node.data, 0, self.acl)
        except KazooException as e:
            raise ReplicationError(
                f"error, when create node {node.path} in target zk: {e!r}", node.path
            ) from e
