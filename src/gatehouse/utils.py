from datetime import UTC, datetime


def now() -> datetime:
    return datetime.now(UTC)


def split_host_port(address: str) -> tuple[str, str]:
    """Split ``host:port`` or ``[host]:port`` into its parts.

    Raises ValueError when the address has no port, too many colons,
    or unbalanced brackets.
    """
    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise ValueError(f"missing ']' in address {address!r}")
        if address[end + 1 : end + 2] != ":":
            raise ValueError(f"missing port in address {address!r}")
        host, port = address[1:end], address[end + 2 :]
    else:
        host, sep, port = address.rpartition(":")
        if not sep:
            raise ValueError(f"missing port in address {address!r}")
        if ":" in host:
            raise ValueError(f"too many colons in address {address!r}")
    if "[" in host or "]" in host or "[" in port or "]" in port:
        raise ValueError(f"unexpected bracket in address {address!r}")
    return host, port
