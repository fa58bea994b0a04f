"""Bulk import command."""

import click
from ledgerbook.cli.error_handling import handle_domain_error, require_write
from ledgerbook.cli.output import money
from ledgerbook.cli.services import journal_service
from ledgerbook.domain.access import Section
from ledgerbook.domain.bulk_import import COLUMNS, BulkImportService, write_template


@click.command("import")
@click.argument("file_path", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--dry-run", is_flag=True, help="Validate and show the transactions without saving")
@click.option(
    "--template",
    "template_path",
    type=click.Path(dir_okay=False, writable=True),
    help="Write an XLSX template with sample rows to this path and exit",
)
@click.pass_context
def import_transactions(ctx, file_path: str, dry_run: bool, template_path: str):
    """Import transactions from a CSV or XLSX file.

    The first row must hold the column names:
    Date, Description, Reference, DebitAccountCode, CreditAccountCode, Amount.
    Reference is optional. Each row becomes one transaction that debits and
    credits the given accounts for Amount. If any row is invalid nothing is
    imported and every problem is listed.

    Examples:
        ledgerbook import january.csv
        ledgerbook import january.xlsx --dry-run
        ledgerbook import --template journal-template.xlsx
    """
    if template_path:
        try:
            write_template(template_path)
        except OSError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Wrote import template to {template_path}")
        return

    if file_path is None:
        raise click.UsageError("Missing argument 'FILE_PATH'.", ctx=ctx)

    require_write(ctx, Section.TRANSACTIONS)
    service = BulkImportService(ctx.obj["db"], journal_service(ctx))

    try:
        result = service.import_file(file_path, dry_run=dry_run)
    except (ValueError, OSError) as e:
        handle_domain_error(ctx, e)

    if result.errors:
        click.echo(f"Import rejected: {len(result.errors)} problem(s) found.", err=True)
        for message in result.errors:
            click.echo(f"  {message}", err=True)
        click.echo(f"Expected columns: {', '.join(COLUMNS)}", err=True)
        ctx.exit(1)

    if dry_run:
        click.echo(f"Dry run: {len(result.payloads)} transaction(s) would be imported.")
        for payload in result.payloads:
            debit, credit = payload.entries
            click.echo(
                f"  {payload.date.isoformat()} {payload.description[:30]:30s} "
                f"Dr {debit.account_code} / Cr {credit.account_code} {money(debit.debit):>18s}"
            )
        return

    click.echo(f"Imported {result.imported} transaction(s).")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_transactions)
