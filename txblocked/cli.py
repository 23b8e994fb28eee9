# txblocked/cli.py - Command-line interface
"""
Command-line interface for the QUIC TX Blocked State analyzer.
"""

import click
import dataclasses
import sys
from pathlib import Path

from txblocked.analyzer.classifier import REASON_PRIORITY, classify, parse_flags
from txblocked.errors import InconsistentDataError, InvalidInputError
from txblocked.utils.config import Config
from txblocked.utils.logger import setup_logging


@click.group()
@click.option('--log-level', default='WARNING', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']))
@click.option('--log-file', type=click.Path(), help='Log file path')
@click.option('--no-color', is_flag=True, help='Never color log output')
@click.pass_context
def cli(ctx, log_level, log_file, no_color):
    """
    QUIC TX Blocked State analyzer

    Classifies the intervals during which QUIC connections could not send
    and weighs them against each connection's lifetime.
    """
    ctx.ensure_object(dict)

    setup_logging(level=log_level, log_file=log_file, use_colors=False if no_color else None)

    ctx.obj['log_level'] = log_level
    ctx.obj['log_file'] = log_file


@cli.command()
@click.argument('snapshot', type=click.Path())
@click.option('--config', type=click.Path(exists=True), help='Configuration file')
@click.option('--format', 'output_format', type=click.Choice(list(Config.OUTPUT_FORMATS)), help='Output format')
@click.option('--output', type=click.Path(), help='Output file (json, csv, markdown, prometheus)')
@click.option('--limit', type=int, help='Maximum rows to print (stdout)')
@click.option('--reason', 'reasons', multiple=True, help='Only keep rows with this reason (repeatable)')
@click.option('--min-duration', type=int, help='Only keep rows at least this long (ns)')
@click.pass_context
def analyze(ctx, snapshot, config, output_format, output, limit, reasons, min_duration):
    """
    Build the TX blocked table for a connection snapshot.

    Example:
        txblocked analyze connections.yaml
        txblocked analyze connections.json --format json --output table.json
        txblocked analyze connections.yaml --reason Pacing --reason App
    """
    from txblocked.analyzer.breakdown import BreakdownAnalyzer
    from txblocked.analyzer.report_generator import ReportGenerator
    from txblocked.analyzer.table import build_table
    from txblocked.collector.loader import SnapshotLoader
    from txblocked.exporters.json_exporter import JSONExporter
    from txblocked.exporters.prometheus import PrometheusExporter
    from txblocked.exporters.stdout import StdoutExporter
    from txblocked.utils.helpers import filter_rows
    import logging

    logger = logging.getLogger(__name__)

    try:
        cfg = Config(config)
    except ValueError as e:
        click.echo(f"Error: invalid configuration: {e}", err=True)
        sys.exit(1)

    # Override config with CLI options
    if output_format:
        cfg.set('output.format', output_format)
    if limit is not None:
        cfg.set('output.limit', limit)
    if reasons:
        cfg.set('filters.reasons', list(reasons))
    if min_duration is not None:
        cfg.set('filters.min_duration_ns', min_duration)

    try:
        cfg.validate()
        connections = SnapshotLoader().load_file(snapshot)
        table = build_table(connections)
    except (InvalidInputError, InconsistentDataError, ValueError) as e:
        logger.error(f"Cannot build table from {snapshot}: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    rows = filter_rows(
        table.rows,
        reasons=cfg.get('filters.reasons', []),
        min_duration_ns=cfg.get('filters.min_duration_ns', 0)
    )
    table = dataclasses.replace(table, rows=tuple(rows))

    output_format = cfg.get('output.format')
    breakdown_analyzer = BreakdownAnalyzer()

    if output_format == 'stdout':
        exporter = StdoutExporter(
            use_colors=cfg.get('output.use_colors', True),
            time_unit=cfg.get('output.time_unit', 'us')
        )
        exporter.print_rows(list(table.rows), limit=cfg.get('output.limit', 50))
        exporter.print_breakdown(breakdown_analyzer.breakdown_by_reason(table.rows))
        exporter.print_summary(breakdown_analyzer.get_summary(table.rows))
        return

    if output_format == 'json':
        if output:
            output_path = Path(output)
            exporter = JSONExporter(str(output_path.parent))
            path = exporter.export_table(table, filename=output_path.name)
        else:
            path = JSONExporter(cfg.get('output.directory')).export_table(table)
        click.echo(f"Wrote {len(table)} rows to {path}")
        return

    if output_format == 'csv':
        text = ReportGenerator().generate_csv(table)
    elif output_format == 'markdown':
        text = ReportGenerator().generate_markdown_report(
            breakdown_analyzer.get_summary(table.rows),
            breakdown_analyzer.breakdown_by_reason(table.rows)
        )
    else:
        exporter = PrometheusExporter()
        exporter.record_rows(table.rows)
        text = exporter.get_metrics_text()

    if output:
        Path(output).write_text(text + "\n")
        click.echo(f"Wrote {len(table)} rows to {output}")
    else:
        click.echo(text)


@cli.command()
def reasons():
    """
    List blocked reasons in classification priority order.
    """
    click.echo(f"{'Priority':<10} {'Flag':<8} Reason")
    for rank, (flag, reason) in enumerate(REASON_PRIORITY, 1):
        click.echo(f"{rank:<10} {'0x%02X' % flag.value:<8} {reason.value}")


@cli.command(name='classify')
@click.argument('flags')
def classify_command(flags):
    """
    Show the reason reported for a blocked-cause bitmask.

    Example:
        txblocked classify 0x06
        txblocked classify "Pacing|App"
    """
    try:
        mask = parse_flags(flags)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='FLAGS')

    click.echo(classify(mask).value)


if __name__ == '__main__':
    cli(obj={})
