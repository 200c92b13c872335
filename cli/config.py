"""Run configuration for zk-treecopy."""

from typing import List, Tuple

from kazoo.security import ACL
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from common.constants import (
    CONNECT_DEADLINE_SECONDS,
    DEFAULT_EXCLUDE_PATHS,
    DEFAULT_ROOT_PATH,
    SESSION_TIMEOUT_SECONDS,
)
from common.exceptions import ConfigurationError
from replicator.acl import DEFAULT_ACL, file_acl
from replicator.exclusion import PathExclusionFilter, parse_path_list


class ReplicationConfig(BaseModel):
    """Everything a replication run needs, validated once at startup."""

    model_config = ConfigDict(frozen=True)

    source_endpoints: str
    target_endpoints: str
    excluded_paths: Tuple[str, ...] = ()
    root_path: str = DEFAULT_ROOT_PATH
    stop_at_excluded: bool = True
    restrict_permissions: bool = False
    session_timeout: float = SESSION_TIMEOUT_SECONDS
    connect_deadline: float = CONNECT_DEADLINE_SECONDS

    @field_validator('source_endpoints', 'target_endpoints')
    @classmethod
    def _require_endpoints(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("address list must not be empty")
        return value

    @field_validator('excluded_paths')
    @classmethod
    def _require_absolute_paths(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        for path in value:
            if not path.startswith('/'):
                raise ValueError(f"excluded path must be absolute: {path!r}")
        return value

    @field_validator('root_path')
    @classmethod
    def _normalize_root(cls, value: str) -> str:
        if not value.startswith('/'):
            raise ValueError(f"root path must be absolute: {value!r}")
        if value != '/':
            value = value.rstrip('/') or '/'
        return value

    @field_validator('session_timeout', 'connect_deadline')
    @classmethod
    def _require_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @classmethod
    def from_flags(
        cls,
        sourceaddr: str,
        targetaddr: str,
        excludepath: str = DEFAULT_EXCLUDE_PATHS,
        **options
    ) -> "ReplicationConfig":
        """
        Build a configuration from raw command-line values.

        Args:
            sourceaddr: Comma-separated source endpoints
            targetaddr: Comma-separated target endpoints
            excludepath: Comma-separated excluded paths; empty excludes nothing
            **options: Any other ReplicationConfig field

        Returns:
            Validated configuration

        Raises:
            ConfigurationError: If any value is invalid
        """
        excluded = parse_path_list(excludepath)
        try:
            return cls(
                source_endpoints=sourceaddr,
                target_endpoints=targetaddr,
                excluded_paths=excluded,
                **options
            )
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigurationError(f"Invalid configuration: {errors}") from e

    def exclusion_filter(self) -> PathExclusionFilter:
        return PathExclusionFilter(self.excluded_paths)

    def node_acl(self) -> List[ACL]:
        """ACL given to copied nodes."""
        if self.restrict_permissions:
            return file_acl(DEFAULT_ACL)
        return list(DEFAULT_ACL)
