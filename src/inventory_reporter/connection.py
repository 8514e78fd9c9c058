"""Command execution on the local machine or over SSH.

Report queries only ever call :meth:`Connection.run` and
:meth:`Connection.read_text`, so one query implementation serves local and
remote targets alike.
"""

from __future__ import annotations

import errno
import logging
import select
import subprocess
import time
from abc import ABC, abstractmethod
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING

import paramiko
from paramiko import SSHClient, SSHConfig

from .errors import CommandError, QueryError
from .targets import Target

if TYPE_CHECKING:
    from .config import SSHSettings

logger = logging.getLogger(__name__)

BUFSIZE = 32768


class Connection(ABC):
    """A session on one target."""

    hostname: str

    @abstractmethod
    def run(self, command: str) -> str:
        """Run a shell command and return its stdout.

        Raises CommandError on a non-zero exit status or timeout.
        """

    @abstractmethod
    def read_text(self, path: str) -> str | None:
        """Return a file's contents, or None if it is missing or unreadable."""

    def close(self) -> None:
        """Release the session. Local connections hold nothing."""

    def __enter__(self) -> "Connection":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} hostname={self.hostname}>"


class LocalConnection(Connection):
    def __init__(self, hostname: str, timeout: int = 60) -> None:
        self.hostname = hostname
        self.timeout = timeout

    def run(self, command: str) -> str:
        logger.debug("local: %s", command)
        try:
            result = subprocess.run(
                command,
                shell=True,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandError(command, None) from e
        if result.returncode != 0:
            raise CommandError(command, result.returncode, result.stderr)
        return result.stdout

    def read_text(self, path: str) -> str | None:
        try:
            return Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError:
            return None


class SSHConnection(Connection):
    """SSH session via paramiko, honouring ``~/.ssh/config``."""

    def __init__(self, hostname: str, settings: "SSHSettings") -> None:
        self.hostname = hostname
        self.settings = settings
        self.client = SSHClient()
        self._sftp: paramiko.SFTPClient | None = None
        self.load_keys()
        try:
            self.connect()
        except QueryError:
            self.client.close()
            raise

    def load_keys(self) -> None:
        self.client.load_system_host_keys()
        if self.settings.auto_add_host_keys:
            self.client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        else:
            self.client.set_missing_host_key_policy(paramiko.RejectPolicy())

    def _ssh_options(self) -> dict[str, str]:
        cfg = SSHConfig()
        try:
            with Path("~/.ssh/config").expanduser().open() as fd:
                cfg.parse(fd)
        except OSError as e:
            if e.errno != errno.ENOENT:
                logger.warning(e)
        return dict(cfg.lookup(self.hostname))

    def connect(self) -> None:
        opts = self._ssh_options()
        key_filename = self.settings.key_filename or opts.get("identityfile")
        logger.debug("connecting to %s:%s", self.hostname, self.settings.port)
        try:
            self.client.connect(
                hostname=opts.get("hostname", self.hostname) if "proxycommand" not in opts else self.hostname,
                port=int(opts.get("port", self.settings.port)),
                username=self.settings.username or opts.get("user"),
                key_filename=key_filename,
                timeout=self.settings.timeout,
                sock=paramiko.ProxyCommand(opts["proxycommand"]) if "proxycommand" in opts else None,
            )
        except paramiko.AuthenticationException as e:
            raise QueryError(f"authentication failed on {self.hostname}: {e}") from e
        except (paramiko.SSHException, OSError) as e:
            raise QueryError(f"cannot connect to {self.hostname}:{self.settings.port}: {e}") from e

    def run(self, command: str) -> str:
        logger.debug("%s: %s", self.hostname, command)
        transport = self.client.get_transport()
        if transport is None or not transport.is_active():
            raise QueryError(f"{self.hostname}: SSH session is not connected")
        try:
            channel = transport.open_session()
            channel.exec_command(command)
        except paramiko.SSHException as e:
            raise QueryError(f"{self.hostname}: {e}") from e
        try:
            out, err = self._drain(channel, command)
            status = channel.recv_exit_status()
        finally:
            channel.close()
        if status != 0:
            raise CommandError(command, status, err)
        return out

    def _drain(self, channel: paramiko.Channel, command: str) -> tuple[str, str]:
        """Read stdout and stderr together until the command exits."""
        stdout = b""
        stderr = b""
        deadline = time.monotonic() + self.settings.command_timeout
        while True:
            received = False
            if channel.recv_ready():
                stdout += channel.recv(BUFSIZE)
                received = True
            if channel.recv_stderr_ready():
                stderr += channel.recv_stderr(BUFSIZE)
                received = True
            if received:
                continue
            if channel.exit_status_ready():
                break
            if time.monotonic() > deadline:
                raise CommandError(command, None)
            select.select([channel], [], [], 0.5)
        return stdout.decode("utf-8", errors="replace"), stderr.decode("utf-8", errors="replace")

    def read_text(self, path: str) -> str | None:
        try:
            if self._sftp is None:
                self._sftp = self.client.open_sftp()
            with self._sftp.open(path, "r") as f:
                return f.read().decode("utf-8", errors="replace")
        except (OSError, paramiko.SSHException):
            return None

    def close(self) -> None:
        if self._sftp is not None:
            self._sftp.close()
            self._sftp = None
        self.client.close()


def connect(target: Target, settings: "SSHSettings") -> Connection:
    """Open a connection suited to *target*: in-process for local, SSH otherwise."""
    if target.local:
        return LocalConnection(target.name, timeout=settings.command_timeout)
    return SSHConnection(target.name, settings)
