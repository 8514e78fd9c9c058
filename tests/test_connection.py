"""Local and SSH transports."""

from __future__ import annotations

from unittest import mock

import paramiko
import pytest

from inventory_reporter.config import SSHSettings
from inventory_reporter.connection import LocalConnection, SSHConnection, connect
from inventory_reporter.errors import CommandError, QueryError
from inventory_reporter.targets import Target


class TestLocalConnection:
    def test_run_returns_stdout(self):
        with LocalConnection("here") as conn:
            assert conn.run("echo hello") == "hello\n"

    def test_undecodable_output_is_replaced(self):
        conn = LocalConnection("here")
        assert conn.run("printf 'ok\\377\\n'") == "ok\ufffd\n"

    def test_non_zero_exit(self):
        conn = LocalConnection("here")
        with pytest.raises(CommandError) as info:
            conn.run("echo oops >&2; exit 3")
        assert info.value.exit_status == 3
        assert "oops" in str(info.value)

    def test_timeout(self):
        conn = LocalConnection("here", timeout=1)
        with pytest.raises(CommandError, match="timed out"):
            conn.run("sleep 5")

    def test_read_text(self, tmp_path):
        path = tmp_path / "meminfo"
        path.write_text("MemTotal: 1 kB\n")
        conn = LocalConnection("here")
        assert conn.read_text(str(path)) == "MemTotal: 1 kB\n"
        assert conn.read_text(str(tmp_path / "missing")) is None


class TestConnectFactory:
    def test_local_target_runs_in_process(self):
        conn = connect(Target("myhost", local=True), SSHSettings(command_timeout=5))
        assert isinstance(conn, LocalConnection)
        assert conn.timeout == 5

    def test_remote_target_uses_ssh(self, monkeypatch):
        monkeypatch.setattr(SSHConnection, "connect", lambda self: None)
        conn = connect(Target("web01"), SSHSettings())
        assert isinstance(conn, SSHConnection)
        conn.close()


@pytest.fixture()
def ssh_client(monkeypatch):
    client = mock.MagicMock(spec=paramiko.SSHClient)
    monkeypatch.setattr("inventory_reporter.connection.SSHClient", lambda: client)
    monkeypatch.setattr(SSHConnection, "_ssh_options", lambda self: {})
    return client


class ScriptedChannel:
    """Hands out stdout/stderr chunks alternately, then reports the exit status."""

    def __init__(self, stdout: list[bytes], stderr: list[bytes], status: int) -> None:
        self.stdout = list(stdout)
        self.stderr = list(stderr)
        self.status = status
        self.command = None
        self.closed = False

    def exec_command(self, command):
        self.command = command

    def recv_ready(self):
        return bool(self.stdout)

    def recv(self, _size):
        return self.stdout.pop(0)

    def recv_stderr_ready(self):
        return bool(self.stderr)

    def recv_stderr(self, _size):
        return self.stderr.pop(0)

    def exit_status_ready(self):
        return not self.stdout and not self.stderr

    def recv_exit_status(self):
        return self.status

    def close(self):
        self.closed = True


def _open_channel(client, stdout=(), stderr=(), status=0) -> ScriptedChannel:
    channel = ScriptedChannel(list(stdout), list(stderr), status)
    client.get_transport.return_value.open_session.return_value = channel
    return channel


class TestSSHConnection:
    def test_connect_uses_settings(self, ssh_client):
        SSHConnection("web01", SSHSettings(username="ops", port=2222, timeout=7))
        kwargs = ssh_client.connect.call_args.kwargs
        assert kwargs["hostname"] == "web01"
        assert kwargs["port"] == 2222
        assert kwargs["username"] == "ops"
        assert kwargs["timeout"] == 7

    def test_host_key_policy(self, ssh_client):
        SSHConnection("web01", SSHSettings(auto_add_host_keys=False))
        (policy,), _ = ssh_client.set_missing_host_key_policy.call_args
        assert isinstance(policy, paramiko.RejectPolicy)

    def test_auth_failure_is_query_error(self, ssh_client):
        ssh_client.connect.side_effect = paramiko.AuthenticationException("bad key")
        with pytest.raises(QueryError, match="authentication failed on web01"):
            SSHConnection("web01", SSHSettings())
        ssh_client.close.assert_called_once()

    def test_unreachable_is_query_error(self, ssh_client):
        ssh_client.connect.side_effect = OSError(113, "No route to host")
        with pytest.raises(QueryError, match="cannot connect to web01:22"):
            SSHConnection("web01", SSHSettings())

    def test_run(self, ssh_client):
        channel = _open_channel(ssh_client, stdout=[b"6.8.0\n"])
        conn = SSHConnection("web01", SSHSettings())
        assert conn.run("uname -r") == "6.8.0\n"
        assert channel.command == "uname -r"
        assert channel.closed

    def test_run_non_zero(self, ssh_client):
        _open_channel(ssh_client, stderr=[b"permission denied"], status=1)
        conn = SSHConnection("web01", SSHSettings())
        with pytest.raises(CommandError, match="permission denied"):
            conn.run("cat /sys/class/dmi/id/product_serial")

    def test_run_reads_both_streams_interleaved(self, ssh_client):
        noise = [b"warning: " + b"x" * 4096 + b"\n"] * 50
        _open_channel(ssh_client, stdout=[b"part1 ", b"part2\n"], stderr=noise)
        conn = SSHConnection("web01", SSHSettings())
        assert conn.run("lspci -vmm -k") == "part1 part2\n"

    def test_run_replaces_undecodable_bytes(self, ssh_client):
        _open_channel(ssh_client, stdout=[b"ok\xff\n"])
        conn = SSHConnection("web01", SSHSettings())
        assert conn.run("cat motd") == "ok\ufffd\n"

    def test_run_on_dropped_session(self, ssh_client):
        ssh_client.get_transport.return_value = None
        conn = SSHConnection("web01", SSHSettings())
        with pytest.raises(QueryError, match="not connected"):
            conn.run("uname -r")

    def test_read_text_missing_file(self, ssh_client):
        ssh_client.open_sftp.return_value.open.side_effect = FileNotFoundError(2, "No such file")
        conn = SSHConnection("web01", SSHSettings())
        assert conn.read_text("/etc/os-release") is None

    def test_close_releases_sftp_and_client(self, ssh_client):
        sftp = ssh_client.open_sftp.return_value
        sftp.open.return_value.__enter__.return_value.read.return_value = b"ID=ubuntu\n"
        with SSHConnection("web01", SSHSettings()) as conn:
            assert conn.read_text("/etc/os-release") == "ID=ubuntu\n"
        sftp.close.assert_called_once()
        ssh_client.close.assert_called_once()
