"""Static / DHCP IPv4 configuration of a network adapter via NetworkManager."""

from __future__ import annotations

import ipaddress
import logging
import shlex
from collections.abc import Sequence
from ipaddress import IPv4Address
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .collector import ConnectFn, QueryResult, collect
from .connection import Connection
from .errors import ParameterError, UnsupportedQueryError
from .reports.base import has_command
from .targets import Target

logger = logging.getLogger(__name__)


class IPConfigRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    adapter: str = Field(min_length=1)
    mode: Literal["dhcp", "static"]
    address: IPv4Address | None = None
    prefix_length: int | None = Field(default=None, ge=1, le=32)
    gateway: IPv4Address | None = None
    dns: tuple[IPv4Address, ...] = ()

    @model_validator(mode="after")
    def _check_mode(self) -> "IPConfigRequest":
        static_fields = {"address": self.address, "prefix_length": self.prefix_length, "gateway": self.gateway}
        if self.mode == "static":
            missing = [name for name, value in static_fields.items() if value is None]
            if missing:
                raise ValueError(f"static configuration requires: {', '.join(missing)}")
            network = ipaddress.ip_interface(f"{self.address}/{self.prefix_length}").network
            if self.gateway not in network:
                raise ValueError(f"gateway {self.gateway} is outside {network}")
        else:
            given = [name for name, value in static_fields.items() if value is not None]
            if given:
                raise ValueError(f"DHCP configuration does not take: {', '.join(given)}")
        return self


def make_request(**kwargs: object) -> IPConfigRequest:
    """Validate parameters; invalid combinations raise ParameterError."""
    try:
        return IPConfigRequest.model_validate(kwargs)
    except ValidationError as e:
        problems = "; ".join(err["msg"] for err in e.errors())
        raise ParameterError(f"Invalid IP configuration: {problems}") from e


def build_commands(request: IPConfigRequest) -> list[str]:
    conn_name = shlex.quote(request.adapter)
    dns = shlex.quote(",".join(str(d) for d in request.dns))
    if request.mode == "static":
        settings = [
            "ipv4.method manual",
            f"ipv4.addresses {request.address}/{request.prefix_length}",
            f"ipv4.gateway {request.gateway}",
        ]
    else:
        settings = ["ipv4.method auto", "ipv4.addresses ''", "ipv4.gateway ''"]
    settings.append(f"ipv4.dns {dns}")
    return [
        f"nmcli connection modify {conn_name} {' '.join(settings)}",
        f"nmcli connection up {conn_name}",
    ]


def _apply(commands: list[str]):
    def run(conn: Connection) -> list[str]:
        if not has_command(conn, "nmcli"):
            raise UnsupportedQueryError("nmcli is not available")
        return [conn.run(command) for command in commands]

    return run


def apply_ip_config(
    targets: Sequence[Target],
    request: IPConfigRequest,
    connect: ConnectFn,
) -> list[QueryResult[list[str]]]:
    """Apply *request* on each target in turn; a failing target does not stop the rest."""
    commands = build_commands(request)
    logger.info("Applying %s configuration to '%s' on %d target(s)", request.mode, request.adapter, len(targets))
    return collect(targets, _apply(commands), connect)
