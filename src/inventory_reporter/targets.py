"""Target machines and local-identity resolution."""

from __future__ import annotations

import socket
from collections.abc import Iterable
from dataclasses import dataclass, field

LOCAL_ALIASES = frozenset({"localhost", "127.0.0.1", "::1", "."})


@dataclass(frozen=True)
class Target:
    """A machine to query. Equality is by name only."""

    name: str
    local: bool = field(default=False, compare=False)

    def __str__(self) -> str:
        return self.name


def local_identity() -> str:
    return socket.gethostname()


def resolve_targets(names: Iterable[str] | None, local_name: str | None = None) -> list[Target]:
    """Resolve target names, in order, without duplicates.

    The local identity is resolved once; local aliases and the local hostname
    all map to one local Target named after the host. An empty or missing
    list means the local machine.
    """
    local = local_name or local_identity()
    cleaned = [n.strip() for n in (names or []) if n and n.strip()]
    if not cleaned:
        return [Target(local, local=True)]

    seen: set[str] = set()
    out: list[Target] = []
    for name in cleaned:
        is_local = name.lower() in LOCAL_ALIASES or name.lower() == local.lower()
        target = Target(local, local=True) if is_local else Target(name)
        if target.name in seen:
            continue
        seen.add(target.name)
        out.append(target)
    return out
