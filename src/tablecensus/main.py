import logging
import typer
from typing import Optional
from pathlib import Path
from .config import AppConfig
from .connectors.factory import get_catalog_connector, get_filesystem_connector, get_snapshot_connector
from .census import run_audit
from .domain.models import AuditReport, HealthStatus
from .exceptions import TableCensusException
from .persistence.snapshot import SnapshotWriter, to_frame

app = typer.Typer(help="Hive warehouse table size census")

def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

def _load_config(config: Path) -> AppConfig:
    try:
        return AppConfig.from_yaml(config)
    except TableCensusException as e:
        typer.echo(f"Error loading config: {e}", err=True)
        raise typer.Exit(code=1)

@app.command()
def run(
    config: Path = typer.Option(..., "--config", "-c", help="Path to configuration file"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Walk the catalog but do not write the snapshot"),
    to_csv: Optional[Path] = typer.Option(None, "--to-csv", help="Also export the entries to a CSV file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """
    Walks every database and table, measures their HDFS size and appends
    a dated snapshot to the persistence store.
    """
    _setup_logging(verbose)
    app_config = _load_config(config)

    writer = None
    try:
        if not dry_run:
            persistence = app_config.require_persistence()
            writer = SnapshotWriter(get_snapshot_connector(app_config), persistence.table_name)

        entries = run_audit(app_config, writer=writer)
    except TableCensusException as e:
        typer.secho(f"❌ Census failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    finally:
        if writer is not None:
            writer.connector.close()

    if to_csv:
        to_frame(entries).to_csv(to_csv, index=False)
        typer.echo(f"Exported {len(entries)} entries to {to_csv}")

    if not entries:
        typer.echo("No tables found.")
        return

    report = AuditReport.from_entries(entries, entries[0].captured_on)
    typer.echo(f"\n📦 Table Census {report.captured_on.isoformat()}")
    typer.echo("=========================")
    typer.echo(f"Tables:      {report.total_tables}")
    typer.echo(f"Measured:    {report.measured_tables} ({report.total_bytes} bytes)")
    typer.echo(f"Not on HDFS: {report.unmeasured_tables}")
    if report.failed_tables:
        typer.secho(f"Failed:      {report.failed_tables}", fg=typer.colors.YELLOW)
        if verbose:
            for entry in entries:
                if entry.failed:
                    typer.echo(f"  - {entry.database}.{entry.table}: {entry.description}")
    if dry_run:
        typer.echo("Dry run: snapshot not written.")

@app.command()
def check_conn(
    config: Path = typer.Option(..., "--config", "-c", help="Path to configuration file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """
    Connectivity check for the catalog, the filesystem and the snapshot store.
    """
    _setup_logging(verbose)
    app_config = _load_config(config)

    factories = [("hive", get_catalog_connector), ("hdfs", get_filesystem_connector)]
    if app_config.persistence is not None:
        factories.append(("snapshot-store", get_snapshot_connector))

    failed = False
    for name, factory in factories:
        try:
            connector = factory(app_config)
        except TableCensusException as e:
            typer.secho(f"⚠️ {name}: {e}", fg=typer.colors.YELLOW)
            failed = True
            continue

        try:
            health = connector.check_health()
        finally:
            connector.close()

        if health.status == HealthStatus.SUCCESS:
            typer.secho(f"✅ {name}: Connection Successful ({health.latency_ms}ms)", fg=typer.colors.GREEN)
        else:
            typer.secho(f"❌ {name}: {health.status.value}. Error: {health.error_message}", fg=typer.colors.RED)
            failed = True

    if failed:
        raise typer.Exit(code=1)

if __name__ == "__main__":
    app()
