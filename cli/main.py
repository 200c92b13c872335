"""CLI entry point."""

from kazoo.client import KazooClient
from typer import Exit, Option, Typer

from cli.config import ReplicationConfig
from common.address_resolver import resolve_endpoints
from common.constants import (
    APP_NAME,
    CONNECT_DEADLINE_SECONDS,
    DEFAULT_EXCLUDE_PATHS,
    DEFAULT_ROOT_PATH,
    EXCLUDE_PATH_ENV,
    ROOT_PATH_ENV,
    SOURCE_ADDR_ENV,
    TARGET_ADDR_ENV,
)
from common.exceptions import TreeCopyError
from common.logging_config import get_logger, setup_logging
from common.types import ReplicationStats
from replicator.session import establish_session, release_session
from replicator.tree_replicator import TreeReplicator

logger = get_logger(__name__)

app = Typer(
    name=APP_NAME,
    help="Copy a ZooKeeper subtree from one cluster to another.",
    add_completion=False,
)


def open_cluster(endpoints: str, config: ReplicationConfig) -> KazooClient:
    """Resolve an endpoint list and establish a session with it."""
    resolved = resolve_endpoints(endpoints)
    return establish_session(
        resolved,
        session_timeout=config.session_timeout,
        connect_deadline=config.connect_deadline
    )


def run(config: ReplicationConfig) -> ReplicationStats:
    """
    Execute one replication run.

    Both sessions are released before returning, whether or not the run
    succeeded.

    Args:
        config: Validated run configuration

    Returns:
        Counters for the run

    Raises:
        TreeCopyError: If resolution, session establishment or replication fails
    """
    source = open_cluster(config.source_endpoints, config)
    try:
        target = open_cluster(config.target_endpoints, config)
        try:
            exclusions = config.exclusion_filter()
            logger.info(f"Copying {config.root_path} with {len(exclusions)} excluded path(s)")
            replicator = TreeReplicator(
                source,
                target,
                exclusions,
                stop_at_excluded=config.stop_at_excluded,
                acl=config.node_acl()
            )
            return replicator.replicate(config.root_path)
        finally:
            release_session(target)
    finally:
        release_session(source)


@app.command()
def copy_tree(
    sourceaddr: str = Option(
        ...,
        "--sourceaddr",
        help="Source zk cluster address, comma-separated host:port list",
        envvar=SOURCE_ADDR_ENV,
    ),
    targetaddr: str = Option(
        ...,
        "--targetaddr",
        help="Target zk cluster address, comma-separated host:port list",
        envvar=TARGET_ADDR_ENV,
    ),
    excludepath: str = Option(
        DEFAULT_EXCLUDE_PATHS,
        "--excludepath",
        help="Comma-separated absolute paths that are not copied",
        envvar=EXCLUDE_PATH_ENV,
    ),
    root: str = Option(
        DEFAULT_ROOT_PATH,
        "--root",
        help="Subtree to copy",
        envvar=ROOT_PATH_ENV,
    ),
    stop_at_excluded: bool = Option(
        True,
        "--stop-at-excluded/--skip-excluded",
        help="Stop visiting siblings after an excluded path, or skip only the excluded path",
    ),
    restrict_permissions: bool = Option(
        False,
        "--restrict-perms",
        help="Give copied nodes admin/read/write permissions instead of all",
    ),
    connect_deadline: float = Option(
        CONNECT_DEADLINE_SECONDS,
        "--connect-deadline",
        help="Seconds to wait for each cluster to accept the session",
    ),
    debug: bool = Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Copy persistent nodes below ROOT from the source to the target cluster."""
    app_logger = setup_logging(APP_NAME, log_level='DEBUG' if debug else None)
    if debug:
        app_logger.info("Debug logging enabled")

    try:
        config = ReplicationConfig.from_flags(
            sourceaddr,
            targetaddr,
            excludepath,
            root_path=root,
            stop_at_excluded=stop_at_excluded,
            restrict_permissions=restrict_permissions,
            connect_deadline=connect_deadline,
        )
        stats = run(config)
    except TreeCopyError as e:
        logger.error(f"{e}")
        raise Exit(code=1)

    logger.info(
        f"Copied {config.root_path}: {stats.replicated} replicated, "
        f"{stats.skipped_ephemeral} ephemeral skipped, {stats.excluded} excluded"
    )


def main() -> None:
    """Entry point for the zk-treecopy console script."""
    app()


if __name__ == "__main__":
    main()
