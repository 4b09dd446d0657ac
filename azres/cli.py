"""
azres CLI entry point.
"""
import json
import os
import sys
from typing import List, Optional, Tuple

import click
import yaml
from rich.console import Console
from rich.table import Table

from azres import __version__, projection
from azres.clients import SnapshotResourceClient
from azres.config import OUTPUT_FORMATS, load_config
from azres.detect import detect_format
from azres.errors import ResourceIdError, ResourceReadError
from azres.models import resource_id
from azres.models.resource_id import ResourceIdentifier
from azres.models.state import DataSourceConfig, DataSourceState
from azres.parsers import manifest, terraform
from azres.reporters import json_reporter, markdown
from azres.services import data_source
from azres.services.data_source import ReadContext, ReadFailure

console = Console(stderr=True)


def _print_banner(no_color: bool = False) -> None:
    c = Console(stderr=True, no_color=no_color)
    c.print(f"[bold blue]azres[/bold blue]  [dim]v{__version__}[/dim]\n")


def _collect_files(paths: Tuple[str, ...]) -> List[str]:
    """Expand directories into file paths."""
    files = []
    for p in paths:
        if os.path.isfile(p):
            files.append(p)
        elif os.path.isdir(p):
            for root, _, fnames in os.walk(p):
                for fname in sorted(fnames):
                    files.append(os.path.join(root, fname))
        else:
            console.print(f"[yellow]Warning:[/yellow] '{p}' does not exist, skipping.")
    return files


def _parse_files(file_paths: List[str]) -> List[DataSourceConfig]:
    configs: List[DataSourceConfig] = []
    for fp in file_paths:
        fmt = detect_format(fp)
        if fmt == "terraform":
            configs.extend(terraform.parse_file(fp))
        elif fmt == "manifest":
            configs.extend(manifest.parse_file(fp))
        elif fmt == "snapshot":
            console.print(f"[dim]Skipping snapshot file:[/dim] {fp}")
        else:
            console.print(f"[dim]Skipping unsupported file:[/dim] {fp}")
    return configs


def _print_summary_table(
    states: List[DataSourceState], failures: List[ReadFailure], no_color: bool
) -> None:
    """Print a rich summary table to stderr."""
    tbl = Table(title="Read Summary", show_header=True, header_style="bold")
    tbl.add_column("Data Source", width=24)
    tbl.add_column("Type", width=40)
    tbl.add_column("Location", width=14)
    tbl.add_column("Result")

    for s in states:
        output = s.output if len(s.output) <= 60 else s.output[:60] + "…"
        tbl.add_row(s.label or s.name, s.type, s.location or "-", output)
    for f in failures:
        status = f"{type(f.error).__name__}: {f.error}"
        tbl.add_row(
            f.config.label or f.config.name,
            f.config.type,
            "-",
            status if no_color else f"[red]{status}[/red]",
        )

    Console(stderr=True, no_color=no_color).print(tbl)


def _print_identifier(rid: ResourceIdentifier, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(rid.to_dict(), indent=2))
        return
    for key, value in rid.to_dict().items():
        click.echo(f"{key}: {value}")


def _load_body(body_file: str):
    _, ext = os.path.splitext(body_file.lower())
    with open(body_file, encoding="utf-8") as fh:
        if ext in (".yaml", ".yml"):
            return yaml.safe_load(fh)
        return json.load(fh)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(__version__)
@click.pass_context
def cli(ctx):
    """azres: generic resource identifiers and response projection."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()


@cli.group("id")
def id_group():
    """Build and parse canonical resource identifiers."""


@id_group.command("build")
@click.option("--name", required=True, help="Resource name.")
@click.option("--parent-id", default="", help="Parent resource id (empty for root scope).")
@click.option("--type", "type_", required=True, help="Namespace/Kind@apiVersion.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print as JSON.")
def build_id(name: str, parent_id: str, type_: str, as_json: bool) -> None:
    """Build an identifier from its name, parent id and type."""
    try:
        rid = resource_id.build(name, parent_id, type_)
    except ResourceIdError as exc:
        console.print(f"[red]{type(exc).__name__}:[/red] {exc}")
        sys.exit(2)
    _print_identifier(rid, as_json)


@id_group.command("parse")
@click.argument("id_string")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print as JSON.")
def parse_id(id_string: str, as_json: bool) -> None:
    """Parse a '<resource id>?api-version=<version>' string."""
    try:
        rid = resource_id.parse(id_string)
    except ResourceIdError as exc:
        console.print(f"[red]{type(exc).__name__}:[/red] {exc}")
        sys.exit(2)
    _print_identifier(rid, as_json)


@cli.command()
@click.argument("body_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--path", "-p", "paths",
    multiple=True,
    help="Export path, e.g. properties.settings[0].value. Repeatable.",
)
@click.option("--pretty", is_flag=True, default=False, help="Indent the output.")
def project(body_file: str, paths: Tuple[str, ...], pretty: bool) -> None:
    """
    Project a JSON/YAML response body through export paths.

    Paths that do not resolve are ignored.
    """
    try:
        body = _load_body(body_file)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        console.print(f"[red]Failed to load body:[/red] {exc}")
        sys.exit(2)

    output = projection.project(body, paths)
    if pretty:
        click.echo(json.dumps(output, indent=2, sort_keys=True))
    else:
        click.echo(projection.serialize(output))


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.option(
    "--snapshot", "-s",
    type=click.Path(),
    default=None,
    help="JSON/YAML file mapping resource ids to response bodies.",
)
@click.option(
    "--config", "config_path",
    type=click.Path(),
    default=None,
    help="Settings file (default: ./azres.yaml).",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(list(OUTPUT_FORMATS), case_sensitive=False),
    default=None,
    help="Report format (default from config, else json).",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    default=None,
    help="Write report to this file (default: stdout).",
)
@click.option(
    "--summary",
    is_flag=True,
    default=False,
    help="Print terminal summary table only, do not write a full report.",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable rich terminal color output.",
)
def read(
    paths: Tuple[str, ...],
    snapshot: Optional[str],
    config_path: Optional[str],
    output_format: Optional[str],
    output: Optional[str],
    summary: bool,
    no_color: bool,
) -> None:
    """
    Read azapi_resource data sources declared in Terraform files or manifests.

    PATHS can be files or directories; multiple values accepted.
    """
    _print_banner(no_color)
    stderr = Console(stderr=True, no_color=no_color)
    source_label = ", ".join(paths)

    config = load_config(config_path)
    snapshot = snapshot or config.snapshot
    if not snapshot:
        stderr.print("[red]No snapshot given:[/red] pass --snapshot or set 'snapshot' in azres.yaml.")
        sys.exit(2)

    # 1. Collect and parse declarations
    with stderr.status("[bold]Collecting files…"):
        file_paths = _collect_files(paths)

    if not file_paths:
        stderr.print("[red]No files found.[/red]")
        sys.exit(2)

    with stderr.status(f"[bold]Parsing {len(file_paths)} file(s)…"):
        try:
            configs = _parse_files(file_paths)
        except Exception as exc:
            stderr.print(f"[red]Parse error:[/red] {exc}")
            sys.exit(2)

    if not configs:
        stderr.print("[yellow]No data source declarations found in the provided paths.[/yellow]")
        sys.exit(0)

    stderr.print(f"Found [bold]{len(configs)}[/bold] data source(s).")

    # 2. Read
    try:
        client = SnapshotResourceClient.from_file(snapshot)
    except ResourceReadError as exc:
        stderr.print(f"[red]Snapshot error:[/red] {exc}")
        sys.exit(2)

    stderr.print(f"Loaded [bold]{len(client)}[/bold] response(s) from snapshot.")

    ctx = ReadContext(client=client, timeout=config.read_timeout)
    with stderr.status("[bold]Reading data sources…"):
        states, failures = data_source.read_all(configs, ctx)

    stderr.print(
        f"Read [bold]{len(states)}[/bold] data source(s)"
        + (f", [red]{len(failures)} failed[/red]." if failures else ".")
    )

    # 3. Terminal summary when writing to file, or when --summary is requested
    if summary or output:
        _print_summary_table(states, failures, no_color)

    # 4. Report
    if not summary:
        fmt = (output_format or config.output_format).lower()
        if fmt == "markdown":
            report_content = markdown.build_report(states, failures, source_label)
        else:
            report_content = json_reporter.build_report(states, failures, source_label)

        if output:
            with open(output, "w", encoding="utf-8", newline="\n") as fh:
                fh.write(report_content)
            stderr.print(f"Report written to [bold]{output}[/bold]")
        else:
            click.echo(report_content)

    sys.exit(1 if failures else 0)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
