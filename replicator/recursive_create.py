"""Idempotent node creation with parent materialization."""

import posixpath
from typing import List

from kazoo.client import KazooClient
from kazoo.exceptions import NoNodeError, NodeExistsError, NotEmptyError
from kazoo.security import ACL

from common.constants import CREATE_FLAG_EPHEMERAL, CREATE_FLAG_SEQUENCE
from common.logging_config import get_logger
from replicator.acl import directory_acl

logger = get_logger(__name__)


def create_recursive(
    client: KazooClient,
    path: str,
    value: bytes,
    flags: int,
    acl: List[ACL]
) -> str:
    """
    Create a node, replacing any existing one and creating missing parents.

    An existing node at path is deleted first, so the final node carries
    exactly the given payload and ACL. A node that cannot be deleted because
    it has children is overwritten in place instead. Missing parents are
    created with an empty payload and directory-level permissions derived
    from acl.

    Args:
        client: Started client for the target cluster
        path: Absolute node path
        value: Node payload
        flags: ZooKeeper CreateMode bits (1 ephemeral, 2 sequential)
        acl: ACL for the node itself

    Returns:
        Path actually created

    Raises:
        kazoo.exceptions.KazooException: If any ZooKeeper call fails
    """
    if client.exists(path):
        try:
            client.delete(path, version=-1)
        except NoNodeError:
            pass
        except NotEmptyError:
            logger.debug(f"{path} has children in target, overwriting in place")
            client.set(path, value)
            client.set_acls(path, acl)
            return path

    try:
        return _create(client, path, value, flags, acl)
    except NoNodeError:
        pass

    parent = posixpath.dirname(path)
    try:
        create_recursive(client, parent, b"", flags, directory_acl(acl))
    except NodeExistsError:
        pass

    return _create(client, path, value, flags, acl)


def _create(client: KazooClient, path: str, value: bytes, flags: int, acl: List[ACL]) -> str:
    return client.create(
        path,
        value,
        acl=acl,
        ephemeral=bool(flags & CREATE_FLAG_EPHEMERAL),
        sequence=bool(flags & CREATE_FLAG_SEQUENCE),
    )
