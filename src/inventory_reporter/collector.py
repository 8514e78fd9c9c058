"""Sequential per-target query execution with failure isolation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .connection import Connection
from .errors import ParameterError
from .targets import Target

logger = logging.getLogger(__name__)

T = TypeVar("T")

ConnectFn = Callable[[Target], Connection]


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Outcome of one target's query: a value or the error that stopped it."""

    target: Target
    value: T | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def collect(
    targets: Sequence[Target],
    query: Callable[[Connection], T],
    connect: ConnectFn,
) -> list[QueryResult[T]]:
    """Run *query* once per target, one target at a time, in input order.

    A failing target (unreachable, permission denied, command failure,
    unsupported feature) is logged and recorded; the batch continues.
    An empty target list is a parameter error.
    """
    if not targets:
        raise ParameterError("No targets supplied")

    results: list[QueryResult[T]] = []
    for target in targets:
        try:
            with connect(target) as conn:
                value = query(conn)
        except Exception as e:
            logger.warning("Query failed for %s: %s", target.name, e)
            results.append(QueryResult(target, error=e))
            continue
        logger.debug("Query succeeded for %s", target.name)
        results.append(QueryResult(target, value=value))
    return results


def succeeded(results: Sequence[QueryResult[Any]]) -> list[QueryResult[Any]]:
    return [r for r in results if r.ok]
