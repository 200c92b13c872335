"""Project-wide constants (default paths, timeouts, environment overrides)."""

import os

APP_NAME = "zk-treecopy"

DEFAULT_ROOT_PATH = os.getenv("ZK_TREECOPY_ROOT", "/r3")

# Historical failover bookkeeping is never copied unless asked for explicitly.
DEFAULT_EXCLUDE_PATHS = os.getenv(
    "ZK_TREECOPY_EXCLUDE_PATH",
    "/r3/failover/history,/r3/failover/doing",
)

SESSION_TIMEOUT_SECONDS: float = 5.0

CONNECT_DEADLINE_SECONDS = float(os.getenv("ZK_TREECOPY_CONNECT_DEADLINE", "30"))

SOURCE_ADDR_ENV = "ZK_TREECOPY_SOURCE_ADDR"
TARGET_ADDR_ENV = "ZK_TREECOPY_TARGET_ADDR"
EXCLUDE_PATH_ENV = "ZK_TREECOPY_EXCLUDE_PATH"
ROOT_PATH_ENV = "ZK_TREECOPY_ROOT"

# ZooKeeper CreateMode bits
CREATE_FLAG_EPHEMERAL = 1
CREATE_FLAG_SEQUENCE = 2
