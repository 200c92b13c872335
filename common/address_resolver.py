"""IPv4 address resolution for ZooKeeper endpoint lists."""

import socket
from typing import List, Tuple

from common.exceptions import AddressResolutionError
from common.logging_config import get_logger

logger = get_logger(__name__)


def split_host_port(entry: str) -> Tuple[str, int]:
    """
    Split a "host:port" endpoint into its parts.

    Bracketed IPv6 literals ("[::1]:2181") are accepted syntactically; they
    are then filtered out by the IPv4-only lookup.

    Args:
        entry: Endpoint string

    Returns:
        (host, port) tuple

    Raises:
        ValueError: If the entry has no host, no port, or an invalid port
    """
    host, sep, port_text = entry.rpartition(':')
    if not sep:
        raise ValueError(f"missing port in address {entry!r}")

    if host.startswith('[') and host.endswith(']'):
        host = host[1:-1]
    elif ':' in host:
        raise ValueError(f"too many colons in address {entry!r}")

    if not host:
        raise ValueError(f"missing host in address {entry!r}")

    if not (port_text.isascii() and port_text.isdigit()):
        raise ValueError(f"invalid port in address {entry!r}")
    port = int(port_text)
    if port <= 0 or port > 65535:
        raise ValueError(f"Invalid port number: {port}")

    return host, port


def resolve_ipv4_endpoint(entry: str) -> str:
    """
    Resolve one "host:port" endpoint to "ip:port" using the first IPv4 address.

    Args:
        entry: Endpoint string

    Returns:
        Resolved endpoint in "IP:PORT" format

    Raises:
        AddressResolutionError: If the entry is malformed or has no IPv4 address
    """
    try:
        host, port = split_host_port(entry)
    except ValueError as e:
        raise AddressResolutionError(str(e)) from e

    try:
        results = socket.getaddrinfo(host, port, socket.AF_INET, socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError, ValueError) as e:
        raise AddressResolutionError(f"cannot resolve {host}: {e}") from e

    for family, _, _, _, sockaddr in results:
        if family == socket.AF_INET:
            return f"{sockaddr[0]}:{port}"

    raise AddressResolutionError(f"no IPv4 address for name {host}")


def resolve_endpoints(endpoints: str) -> List[str]:
    """
    Resolve a comma-separated endpoint list into IPv4 "ip:port" strings.

    The ZooKeeper wire client cannot be relied on to parse IPv6 literals, so
    only IPv4 addresses are returned. Entries that fail to resolve are
    dropped with a warning; order of the remaining entries is preserved.

    Args:
        endpoints: Comma-separated "host:port" list

    Returns:
        Non-empty list of resolved endpoints

    Raises:
        AddressResolutionError: If no entry could be resolved
    """
    resolved = []
    for entry in endpoints.split(','):
        entry = entry.strip()
        if not entry:
            logger.warning(f"Skipping empty entry in address list {endpoints!r}")
            continue
        try:
            resolved.append(resolve_ipv4_endpoint(entry))
        except AddressResolutionError as e:
            logger.warning(f"Cannot resolve {entry}, will not use it: {e}")

    if not resolved:
        raise AddressResolutionError(f"no valid address found in {endpoints!r}")

    logger.debug(f"Resolved {endpoints} -> {resolved}")
    return resolved
