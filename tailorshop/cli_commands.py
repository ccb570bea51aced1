"""
Flask CLI commands for backups.

Commands:
- flask export-data: Write all shop data to a JSON backup file
- flask import-data: Restore shop data from a JSON backup file
"""
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import click

from tailorshop.exceptions import ImportSchemaError
from tailorshop.services import backup_service


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('export-data')
    @click.option('--output', '-o', type=click.Path(dir_okay=False), default=None,
                  help='Target file (default: <prefix>-backup-YYYY-MM-DD.json)')
    def export_data(output):
        """Export customers, orders, measurements, garment types, employees and shop info."""
        store = app.extensions['tailorshop']['store']
        if not output:
            today = datetime.now(ZoneInfo(app.config.get('SHOP_TIMEZONE', 'Asia/Kolkata'))).date()
            output = backup_service.backup_filename(app.config.get('BACKUP_FILE_PREFIX', 'deepak-tailor'), today)

        Path(output).write_text(backup_service.export_backup(store.state), encoding='utf-8')
        click.echo(click.style(f'✅ Backup written to {output}', fg='green', bold=True))
        click.echo(f'   Customers: {len(store.state.customers)}')
        click.echo(f'   Orders: {len(store.state.orders)}')

    @app.cli.command('import-data')
    @click.argument('backup_file', type=click.Path(exists=True, dir_okay=False))
    @click.option('--yes', is_flag=True, help='Do not ask for confirmation')
    def import_data(backup_file, yes):
        """Replace all shop data with the contents of BACKUP_FILE."""
        if not yes:
            click.confirm('This replaces all current data. Continue?', abort=True)

        store = app.extensions['tailorshop']['store']
        text = Path(backup_file).read_text(encoding='utf-8')
        try:
            state = backup_service.import_backup(store, text)
        except ImportSchemaError as e:
            click.echo(click.style(f'❌ {e.message}', fg='red'))
            raise click.exceptions.Exit(1)

        click.echo(click.style('✅ Data restored successfully!', fg='green', bold=True))
        click.echo(f'   Customers: {len(state.customers)}')
        click.echo(f'   Orders: {len(state.orders)}')
