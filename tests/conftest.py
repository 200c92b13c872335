"""Shared pytest fixtures for all tests."""

import logging
import posixpath

import pytest
from kazoo.exceptions import NoNodeError, NodeExistsError, NotEmptyError
from kazoo.protocol.states import ZnodeStat

from common.constants import APP_NAME


class FakeNode:
    """A single node held by FakeZooKeeper."""

    def __init__(self, data=b"", acl=None, ephemeral_owner=0):
        self.data = data
        self.acl = list(acl or [])
        self.ephemeral_owner = ephemeral_owner
        self.version = 0


class FakeZooKeeper:
    """
    In-memory stand-in for a started KazooClient.

    Implements the calls the replicator issues and raises the same kazoo
    exceptions a real server would. Failures can be injected per call with
    fail(method, path, exc).
    """

    def __init__(self):
        self.nodes = {'/': FakeNode()}
        self.failures = {}
        self.calls = []

    def seed(self, path, data=b"", ephemeral=False, acl=None):
        """Add a node, creating missing parents with empty payloads."""
        parent = posixpath.dirname(path)
        if parent not in self.nodes:
            self.seed(parent)
        self.nodes[path] = FakeNode(data, acl, ephemeral_owner=0x1234 if ephemeral else 0)

    def fail(self, method, path, exc, effect=None):
        """Make method(path) raise exc, running effect() first when given."""
        self.failures[(method, path)] = (exc, effect)

    def _check(self, method, path):
        self.calls.append((method, path))
        failure = self.failures.get((method, path))
        if failure is not None:
            exc, effect = failure
            if effect is not None:
                effect()
            raise exc

    def _children_of(self, path):
        return [
            posixpath.basename(p) for p in self.nodes
            if p != '/' and posixpath.dirname(p) == path
        ]

    def _stat(self, path):
        node = self.nodes[path]
        return ZnodeStat(
            0, 0, 0, 0, node.version, 0, 0, node.ephemeral_owner,
            len(node.data), len(self._children_of(path)), 0
        )

    def exists(self, path):
        self._check('exists', path)
        if path not in self.nodes:
            return None
        return self._stat(path)

    def get(self, path):
        self._check('get', path)
        if path not in self.nodes:
            raise NoNodeError()
        return self.nodes[path].data, self._stat(path)

    def get_children(self, path):
        self._check('get_children', path)
        if path not in self.nodes:
            raise NoNodeError()
        return self._children_of(path)

    def delete(self, path, version=-1):
        self._check('delete', path)
        if path not in self.nodes:
            raise NoNodeError()
        if self._children_of(path):
            raise NotEmptyError()
        del self.nodes[path]

    def create(self, path, value=b"", acl=None, ephemeral=False, sequence=False):
        self._check('create', path)
        if path in self.nodes:
            raise NodeExistsError()
        if posixpath.dirname(path) not in self.nodes:
            raise NoNodeError()
        self.nodes[path] = FakeNode(value, acl, ephemeral_owner=0x99 if ephemeral else 0)
        return path

    def set(self, path, value, version=-1):
        self._check('set', path)
        if path not in self.nodes:
            raise NoNodeError()
        self.nodes[path].data = value
        self.nodes[path].version += 1
        return self._stat(path)

    def set_acls(self, path, acls, version=-1):
        self._check('set_acls', path)
        if path not in self.nodes:
            raise NoNodeError()
        self.nodes[path].acl = list(acls)
        return self._stat(path)


@pytest.fixture
def source_zk():
    """Empty in-memory source cluster."""
    return FakeZooKeeper()


@pytest.fixture
def target_zk():
    """Empty in-memory target cluster."""
    return FakeZooKeeper()


@pytest.fixture(autouse=True)
def reset_app_logger():
    """
    Undo setup_logging() between tests so caplog sees application records.
    """
    logger = logging.getLogger(APP_NAME)
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
