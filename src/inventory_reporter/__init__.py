"""inventory_reporter: per-host inventory reports with console output and file export."""

__version__ = "0.1.0"
