import logging
from collections.abc import Callable
from dataclasses import dataclass, field

import click

from .aggregation import run_report
from .collector import ConnectFn
from .config import Settings, load_settings
from .connection import connect
from .console import echo_batch
from .errors import ConfigError, ExportError, ParameterError
from .export import ExportFormat, export_batch
from .netconfig import apply_ip_config, build_commands, make_request
from .reports import ReportType, list_reports
from .targets import Target, resolve_targets

logger = logging.getLogger("inventory_reporter")


@dataclass
class AppContext:
    """Shared state for subcommands. ``connect`` overrides the transport (tests)."""

    settings: Settings = field(default_factory=Settings)
    connect: ConnectFn | None = None

    def connector(self) -> ConnectFn:
        if self.connect is not None:
            return self.connect
        ssh = self.settings.ssh
        return lambda target: connect(target, ssh)

    def targets(self, names: tuple[str, ...]) -> list[Target]:
        return resolve_targets(list(names) or self.settings.targets)


pass_app = click.make_pass_decorator(AppContext)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug-level logging.")
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Settings YAML. Defaults: ./inventory_reporter.yaml, ~/.config/inventory_reporter/config.yaml, built-in.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """Inventory Reporter: per-host inventory reports with optional file export."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )
    app = ctx.ensure_object(AppContext)
    try:
        app.settings = load_settings(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


# ---------------------------------------------------------------------------
# Report commands (one per registered report type)
# ---------------------------------------------------------------------------

_target_option = click.option(
    "--target",
    "-t",
    "target_names",
    multiple=True,
    metavar="HOST",
    help="Machine to query (repeatable). Defaults to the configured targets, else this machine.",
)


def _report_command(
    app: AppContext,
    report: ReportType,
    target_names: tuple[str, ...],
    name_filter: str | None,
    export_format: str | None,
    output_dir: str | None,
) -> None:
    """Shared implementation for the per-report commands."""
    try:
        targets = app.targets(target_names)
        batch = run_report(report, targets, app.connector(), name_filter=name_filter)
    except ParameterError as e:
        raise click.ClickException(str(e)) from e

    if not batch:
        logger.warning("No %s data collected from any target", report.schema.display_name)
    echo_batch(batch)

    if export_format is None:
        return
    try:
        path = export_batch(
            batch,
            ExportFormat.parse(export_format),
            output_dir or app.settings.export_dir,
            json_depth=app.settings.json_depth,
        )
    except ExportError as e:
        logger.error("%s", e)
        raise click.ClickException(str(e)) from e
    click.echo(f"Exported to {path}")


def _make_report_command(report: ReportType) -> click.Command:
    def callback(
        app: AppContext,
        target_names: tuple[str, ...],
        export_format: str | None,
        output_dir: str | None,
        name_filter: str | None = None,
    ) -> None:
        _report_command(app, report, target_names, name_filter, export_format, output_dir)

    decorators: list[Callable[[Callable[..., None]], Callable[..., None]]] = [
        click.command(name=report.name, help=f"{report.schema.display_name}: {report.description}"),
        _target_option,
        click.option(
            "--format",
            "-f",
            "export_format",
            type=click.Choice([f.value for f in ExportFormat], case_sensitive=False),
            default=None,
            help="Also export the report in this format.",
        ),
        click.option(
            "--output-dir",
            "-o",
            type=click.Path(file_okay=False),
            default=None,
            help="Export directory. Defaults to the configured export_dir, else the system temp directory.",
        ),
    ]
    if report.schema.filter_label is not None:
        decorators.append(
            click.option(
                "--name",
                "name_filter",
                default=None,
                help=f"Only rows whose {report.schema.filter_label} contains this text (case-insensitive).",
            )
        )
    decorators.append(pass_app)

    command = callback
    for decorator in reversed(decorators):
        command = decorator(command)
    return command


for _report in list_reports():
    main.add_command(_make_report_command(_report))


# ---------------------------------------------------------------------------
# list command
# ---------------------------------------------------------------------------


@main.command("list")
def list_cmd() -> None:
    """List the available report types."""
    for report in list_reports():
        schema = report.schema
        suffix = " [--name]" if schema.filter_label else ""
        click.echo(f"{schema.name:<12} {schema.display_name:<20} {report.description}{suffix}")


# ---------------------------------------------------------------------------
# set-ip command
# ---------------------------------------------------------------------------


@main.command("set-ip")
@click.option("--adapter", "-a", required=True, help="NetworkManager connection name.")
@click.option("--dhcp", is_flag=True, default=False, help="Use DHCP instead of a static address.")
@click.option("--address", default=None, help="Static IPv4 address.")
@click.option("--prefix", "prefix_length", type=int, default=None, help="Static prefix length (1-32).")
@click.option("--gateway", default=None, help="Default gateway for the static address.")
@click.option("--dns", multiple=True, metavar="IP", help="DNS server (repeatable).")
@_target_option
@click.option("--dry-run", is_flag=True, default=False, help="Print the commands without running them.")
@pass_app
def set_ip(
    app: AppContext,
    adapter: str,
    dhcp: bool,
    address: str | None,
    prefix_length: int | None,
    gateway: str | None,
    dns: tuple[str, ...],
    target_names: tuple[str, ...],
    dry_run: bool,
) -> None:
    """Configure an adapter's IPv4 address (static or DHCP) on each target."""
    try:
        request = make_request(
            adapter=adapter,
            mode="dhcp" if dhcp else "static",
            address=address,
            prefix_length=prefix_length,
            gateway=gateway,
            dns=list(dns),
        )
    except ParameterError as e:
        logger.error("%s", e)
        raise click.ClickException(str(e)) from e

    targets = app.targets(target_names)
    if dry_run:
        for target in targets:
            for command in build_commands(request):
                click.echo(f"{target.name}: {command}")
        return

    results = apply_ip_config(targets, request, app.connector())
    for result in results:
        click.echo(f"{result.target.name}: {'applied' if result.ok else 'FAILED'}")
    failed = [r.target.name for r in results if not r.ok]
    if failed:
        raise click.ClickException(f"IP configuration failed on {len(failed)} of {len(results)} target(s): {', '.join(failed)}")


if __name__ == "__main__":
    main()
