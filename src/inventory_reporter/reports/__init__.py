"""Report type catalogue. Importing this package registers every report."""

from . import bios, cpu, disks, gpu, memory, motherboard, network, os_info, services, software  # noqa: F401
from .base import ReportType, get_report, list_reports, register

__all__ = ["ReportType", "get_report", "list_reports", "register"]
