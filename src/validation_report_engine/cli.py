"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from validation_report_engine.chart_rendering import write_svg
from validation_report_engine.configuration import (
    CHART_NAMES,
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    ReportSettings,
    default_settings,
    load_configuration,
    write_placeholder_configuration,
)
from validation_report_engine.history_tracking import (
    EmptyExportError,
    HistoryStore,
    JsonFileKeyValueStore,
)
from validation_report_engine.report_control import QuickFixAction, QuickFixError, ReportController
from validation_report_engine.result_filtering import AttributeFilter, EntityFilter
from validation_report_engine.results_writing import write_report_workbook
from validation_report_engine.snapshot_extraction import HostRecordError, load_host_records

CONFIG_OPTION_HELP = "Path to the YAML report configuration (defaults apply when omitted)"
INPUT_OPTION_HELP = "Path to the JSON host records produced by the validator"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="validation-report-engine")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Log progress details.",
)
def cli(verbose: bool) -> None:
    """Validation report engine for the walkthrough companion game data."""
    logging.getLogger().setLevel(logging.INFO if verbose else logging.WARNING)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML report configuration to write",
)
def generate_config(output_path: str) -> None:
    """Generate a commented report configuration with the default values."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="record")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help=INPUT_OPTION_HELP,
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help=CONFIG_OPTION_HELP,
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Compare against the history without storing the new snapshot.",
)
def record(input_path: str, config_path: str | None, dry_run: bool) -> None:
    """Record a validation run and print the progress since the previous run."""
    settings = _load_settings(config_path)
    controller = _build_controller(settings, persist=not dry_run)
    _load_report(controller, input_path)

    snapshot = controller.snapshot
    click.echo(
        f"Recorded {snapshot.total_entities} entities, "
        f"average completeness {snapshot.average_completeness:.2f}%, "
        f"{snapshot.total_issues} issues."
    )
    for line in controller.progress_summary().lines:
        click.echo(line)
    notable = controller.notable_changes()
    for change in notable.improvements:
        click.echo(
            f"  resolved: {change.entity_name} {change.field} "
            f"({change.previous_status.value} → {change.current_status.value})"
        )
    for change in notable.regressions:
        click.echo(
            f"  needs review: {change.entity_name} {change.field} "
            f"({change.previous_status.value} → {change.current_status.value})"
        )
    if controller.history_degraded:
        click.echo("History storage unavailable; this run was not persisted.", err=True)


@cli.command(name="browse")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help=INPUT_OPTION_HELP,
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help=CONFIG_OPTION_HELP,
)
@click.option(
    "--search",
    "search_query",
    default="",
    help="Case-insensitive name search",
)
@click.option(
    "--entity-filter",
    type=click.Choice([item.value for item in EntityFilter]),
    default=EntityFilter.ALL.value,
    show_default=True,
)
@click.option(
    "--attribute-filter",
    type=click.Choice([item.value for item in AttributeFilter]),
    default=AttributeFilter.ALL.value,
    show_default=True,
)
@click.option(
    "--scroll-offset",
    type=int,
    default=0,
    show_default=True,
    help="Scroll position of the result list in pixels",
)
@click.option(
    "--announce",
    is_flag=True,
    default=False,
    help="Echo screen-reader announcements to stderr.",
)
def browse(  # pylint: disable=too-many-arguments
    input_path: str,
    config_path: str | None,
    search_query: str,
    entity_filter: str,
    attribute_filter: str,
    scroll_offset: int,
    announce: bool,
) -> None:
    """Filter the report and print the entities inside the visible window."""
    settings = _load_settings(config_path)
    controller = _build_controller(settings, persist=False, announce=announce)
    _load_report(controller, input_path)

    controller.on_entity_filter(entity_filter)
    controller.on_attribute_filter(attribute_filter)
    if search_query:
        controller.on_search_commit(search_query)
    window = controller.on_scroll(scroll_offset)

    label = controller.search_results_label()
    if label:
        click.echo(label)
    if window.filtered_count == 0:
        click.echo("No entities match the current filters.")
        return
    click.echo(
        f"Showing entities {window.start_index}-{window.end_index} of {window.filtered_count} "
        f"({window.mode.value})"
    )
    for entity in controller.materialized_entities():
        click.echo(
            f"{entity.id}\t{entity.name}\t{entity.completeness_percent}%\t"
            f"{entity.issue_count} issues"
        )
        for field_name, status in controller.visible_fields(entity).items():
            flags = []
            if status.accepted:
                flags.append("accepted")
            if status.in_game_validated:
                flags.append("in-game")
            suffix = f" [{', '.join(flags)}]" if flags else ""
            click.echo(f"    {field_name}: {status.status.value}{suffix}")


@cli.command(name="quick-fix")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help=INPUT_OPTION_HELP,
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help=CONFIG_OPTION_HELP,
)
@click.option(
    "--action",
    required=True,
    type=click.Choice([item.value for item in QuickFixAction]),
    help="Field marker change to apply",
)
@click.option(
    "--entity-id",
    "entity_id",
    required=True,
    help="Id of the entity that owns the field",
)
@click.option(
    "--field",
    "field_name",
    required=True,
    help="Field name as listed by the browse command",
)
def quick_fix(
    input_path: str,
    config_path: str | None,
    action: str,
    entity_id: str,
    field_name: str,
) -> None:
    """Print the host command that applies a quick fix to one field."""
    settings = _load_settings(config_path)
    controller = _build_controller(settings, persist=False)
    _load_report(controller, input_path)
    try:
        command = controller.quick_fix_command(action, entity_id, field_name)
    except QuickFixError as exc:
        raise CliError(str(exc)) from exc
    click.echo(command)


@cli.command(name="render-charts")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help=INPUT_OPTION_HELP,
)
@click.option(
    "--output-dir",
    "output_dir",
    required=True,
    type=click.Path(path_type=str),
    help="Directory for the SVG chart files",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help=CONFIG_OPTION_HELP,
)
def render_charts(input_path: str, output_dir: str, config_path: str | None) -> None:
    """Render the completion, issues, levels and trend charts as SVG files."""
    settings = _load_settings(config_path)
    controller = _build_controller(settings, persist=False)
    _load_report(controller, input_path)

    surfaces = {name: settings.charts.get(name) for name in CHART_NAMES}
    renderings = controller.render_charts(surfaces)
    try:
        for name, rendering in renderings.items():
            output_path = write_svg(rendering.drawing, Path(output_dir) / f"{name}-chart.svg")
            click.echo(str(output_path))
            for entry in rendering.legend:
                click.echo(f"  {entry.text}")
    except OSError as exc:
        raise CliError(str(exc)) from exc


@cli.command(name="export-history")
@click.option(
    "--output-dir",
    "output_dir",
    required=True,
    type=click.Path(path_type=str),
    help="Directory for the exported JSON document",
)
@click.option(
    "--input",
    "input_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional host records; their comparison is included without being stored",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help=CONFIG_OPTION_HELP,
)
def export_history(output_dir: str, input_path: str | None, config_path: str | None) -> None:
    """Export the stored validation history as a JSON document."""
    settings = _load_settings(config_path)
    history_store = _build_history_store(settings, persist=False)
    controller = ReportController(settings, history_store=history_store)
    if input_path:
        _load_report(controller, input_path)
    else:
        history_store.load()
    try:
        output_path = controller.export_history(output_dir)
    except (EmptyExportError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(output_path))


@cli.command(name="export-workbook")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help=INPUT_OPTION_HELP,
)
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the xlsx report workbook to write",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help=CONFIG_OPTION_HELP,
)
def export_workbook(input_path: str, output_path: str, config_path: str | None) -> None:
    """Write the report and its comparison with the previous run to a workbook."""
    settings = _load_settings(config_path)
    controller = _build_controller(settings, persist=False)
    _load_report(controller, input_path)
    try:
        resolved = write_report_workbook(controller.snapshot, controller.diff, output_path)
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved))


def _load_settings(config_path: str | None) -> ReportSettings:
    if config_path is None:
        return default_settings()
    try:
        return load_configuration(config_path)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc


def _build_history_store(settings: ReportSettings, *, persist: bool) -> HistoryStore:
    return HistoryStore(
        JsonFileKeyValueStore(settings.history.path),
        storage_key=settings.history.storage_key,
        persist=persist,
    )


def _build_controller(
    settings: ReportSettings,
    *,
    persist: bool,
    announce: bool = False,
) -> ReportController:
    return ReportController(
        settings,
        history_store=_build_history_store(settings, persist=persist),
        announce=(lambda message: click.echo(message, err=True)) if announce else None,
    )


def _load_report(controller: ReportController, input_path: str) -> None:
    try:
        controller.load_report(load_host_records(input_path))
    except HostRecordError as exc:
        raise CliError(str(exc)) from exc


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
