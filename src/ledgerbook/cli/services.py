"""Service construction from the CLI context."""

import click

from ledgerbook.domain import AssetService, JournalService


def journal_service(ctx: click.Context) -> JournalService:
    return JournalService(ctx.obj["db"], id_generator=ctx.obj["id_generator"])


def asset_service(ctx: click.Context) -> AssetService:
    return AssetService(ctx.obj["db"], id_generator=ctx.obj["id_generator"])
