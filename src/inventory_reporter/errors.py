"""Exception types raised by inventory_reporter."""


class InventoryError(Exception):
    """Base class for all inventory_reporter errors."""


class ParameterError(InventoryError):
    """Invalid invocation parameters. Fatal; nothing is queried or changed."""


class QueryError(InventoryError):
    """A query against one target failed."""


class CommandError(QueryError):
    """A command run on a target exited non-zero or timed out."""

    def __init__(self, command: str, exit_status: int | None, stderr: str = "") -> None:
        self.command = command
        self.exit_status = exit_status
        self.stderr = stderr.strip()
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.exit_status is None:
            return f"command timed out: {self.command!r}"
        detail = f": {self.stderr}" if self.stderr else ""
        return f"command {self.command!r} exited with status {self.exit_status}{detail}"


class UnsupportedQueryError(QueryError):
    """The target lacks the tool or interface a query needs."""


class ExportError(InventoryError):
    """The export directory could not be created or the file could not be written."""


class ConfigError(InventoryError):
    """The config file exists but is not a valid settings mapping."""
