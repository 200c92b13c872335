"""Session establishment and release for ZooKeeper clusters."""

from typing import List

from kazoo.client import KazooClient, KazooState
from kazoo.exceptions import KazooException

from common.constants import CONNECT_DEADLINE_SECONDS, SESSION_TIMEOUT_SECONDS
from common.exceptions import SessionError
from common.logging_config import get_logger

logger = get_logger(__name__)

# SUSPENDED means kazoo is still (re)establishing the connection.
USABLE_STATES = (KazooState.CONNECTED, KazooState.SUSPENDED)


def establish_session(
    endpoints: List[str],
    session_timeout: float = SESSION_TIMEOUT_SECONDS,
    connect_deadline: float = CONNECT_DEADLINE_SECONDS
) -> KazooClient:
    """
    Open a session to a cluster and wait for its first connection state.

    The session is usable only if the first state reported by the client is
    connected or connecting. The wait is bounded by connect_deadline.

    Args:
        endpoints: Resolved endpoints in "IP:PORT" format
        session_timeout: ZooKeeper session timeout in seconds
        connect_deadline: Seconds to wait for the first state event

    Returns:
        Started KazooClient, owned by the caller

    Raises:
        SessionError: If no usable state is observed in time
    """
    hosts = ','.join(endpoints)
    client = KazooClient(hosts=hosts, timeout=session_timeout)

    first_state = []
    observed = client.handler.event_object()

    def on_state(state):
        if not first_state:
            first_state.append(state)
            observed.set()
        # returning True unregisters the listener
        return True

    client.add_listener(on_state)

    try:
        client.start_async()
    except (KazooException, ValueError) as e:
        release_session(client)
        raise SessionError(f"zk connect failed for {hosts}: {e}") from e

    if not observed.wait(connect_deadline):
        release_session(client)
        raise SessionError(
            f"zk connect failed for {hosts}: no connection state within {connect_deadline}s"
        )

    state = first_state[0]
    if state not in USABLE_STATES:
        release_session(client)
        raise SessionError(f"zk connect failed for {hosts}: {state}")

    logger.info(f"Session established with {hosts} (state={state})")
    return client


def release_session(client: KazooClient) -> None:
    """Stop and close a client, whatever state it is in."""
    try:
        client.stop()
        client.close()
    except Exception as e:
        logger.warning(f"Error while closing session: {e}")
