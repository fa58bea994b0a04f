"""Company and tax settings commands."""

from dataclasses import fields
from decimal import Decimal

import click
from ledgerbook.cli.error_handling import handle_domain_error, require_access, require_write
from ledgerbook.domain.access import Section
from ledgerbook.domain import SettingsService
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import parse_date

BOOLEAN_SETTINGS = {"enable_income_tax", "round_tax_amount", "auto_create_tax_entry"}
DECIMAL_SETTINGS = {"corporate_tax_rate", "minimum_taxable_income"}
DATE_SETTINGS = {"period_start"}

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


def parse_setting(key: str, raw: str):
    """Convert a KEY=VALUE string value to the setting's type.

    Raises:
        ValueError: If the value does not fit the setting
    """
    if key in BOOLEAN_SETTINGS:
        text = raw.strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
        raise ValueError(f"Setting '{key}' expects yes or no, got '{raw}'")
    if key in DECIMAL_SETTINGS:
        return parse_amount(raw)
    if key in DATE_SETTINGS:
        return parse_date(raw) if raw.strip() else None
    return raw


def parse_assignments(assignments: tuple[str, ...]) -> dict:
    changes = {}
    for assignment in assignments:
        key, sep, raw = assignment.partition("=")
        key = key.strip().lower().replace("-", "_")
        if not sep or not key:
            raise ValueError(f"Invalid setting '{assignment}'; use KEY=VALUE")
        changes[key] = parse_setting(key, raw)
    return changes


def _echo_settings(title: str, settings) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * 60)
    for f in fields(settings):
        value = getattr(settings, f.name)
        if isinstance(value, bool):
            value = "yes" if value else "no"
        elif isinstance(value, Decimal):
            value = f"{value:f}"
        elif value is None:
            value = ""
        click.echo(f"{f.name:24s} {value}")


@click.group()
def settings_group():
    """View or change company and tax settings."""
    pass


@settings_group.command("company")
@click.option("--set", "assignments", multiple=True, metavar="KEY=VALUE", help="Change a setting (repeatable)")
@click.pass_context
def company(ctx, assignments: tuple[str, ...]):
    """Show or change the company profile.

    Examples:
        ledgerbook settings company
        ledgerbook settings company --set name="PT Maju Jaya" --set currency=IDR
    """
    require_access(ctx, Section.SETTINGS)
    service = SettingsService(ctx.obj["db"])

    if assignments:
        require_write(ctx, Section.SETTINGS)
        try:
            service.update_company_settings(**parse_assignments(assignments))
            click.echo("Company settings saved.")
        except ValueError as e:
            handle_domain_error(ctx, e)

    _echo_settings("Company settings", service.get_company_settings())


@settings_group.command("tax")
@click.option("--set", "assignments", multiple=True, metavar="KEY=VALUE", help="Change a setting (repeatable)")
@click.pass_context
def tax(ctx, assignments: tuple[str, ...]):
    """Show or change tax settings.

    Tax settings are recorded for reference only; no tax entries are
    posted automatically.

    Examples:
        ledgerbook settings tax --set enable_income_tax=yes --set corporate_tax_rate=22
    """
    require_access(ctx, Section.SETTINGS)
    service = SettingsService(ctx.obj["db"])

    if assignments:
        require_write(ctx, Section.SETTINGS)
        try:
            service.update_tax_settings(**parse_assignments(assignments))
            click.echo("Tax settings saved.")
        except ValueError as e:
            handle_domain_error(ctx, e)

    _echo_settings("Tax settings", service.get_tax_settings())


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
