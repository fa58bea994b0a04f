"""Straight-line depreciation calculations.

Two proration schemes are used:

* monthly, for posting depreciation runs (:func:`depreciation_due`)
* daily, for the period depreciation schedule report (:func:`schedule_row`)

All amounts are Decimal and quantized to 0.01. Neither scheme ever takes
accumulated depreciation past ``cost - residual``.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ledgerbook.domain.entities import Asset, DepreciationMethod, DepreciationScheduleRow

ZERO = Decimal("0")
CENT = Decimal("0.01")


def _quantize(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def is_depreciable(asset: Asset) -> bool:
    """Return True if the asset takes part in straight-line depreciation."""
    return (
        asset.is_depreciable
        and asset.life is not None
        and asset.life > 0
        and asset.method == DepreciationMethod.STRAIGHT_LINE
        and asset.depreciable_base > 0
    )


def months_between(start: date, end: date) -> int:
    """Calendar-month difference, ignoring the day of month.

    Example: 2024-01-31 to 2024-02-01 is one month.
    """
    return (end.year - start.year) * 12 + (end.month - start.month)


def monthly_depreciation(asset: Asset) -> Decimal:
    """Unrounded monthly straight-line amount."""
    if not is_depreciable(asset):
        return ZERO
    return asset.depreciable_base / (asset.life * 12)


def depreciation_due(asset: Asset, as_of: date) -> Decimal:
    """Depreciation owed from the last posted date (or acquisition) up to as_of.

    Args:
        asset: Asset snapshot
        as_of: Date through which depreciation is calculated

    Returns:
        Amount to post, never negative and never more than the remaining
        depreciable base
    """
    if not is_depreciable(asset):
        return ZERO

    remaining = asset.depreciable_base - asset.accumulated_depreciation
    if remaining <= 0:
        return ZERO

    start = asset.last_depreciation_date or asset.date
    if as_of <= start:
        return ZERO

    months = months_between(start, as_of)
    if months <= 0:
        return ZERO

    amount = min(monthly_depreciation(asset) * months, remaining)
    return max(_quantize(amount), ZERO)


def daily_depreciation(asset: Asset) -> Decimal:
    """Unrounded daily straight-line amount (365-day years)."""
    if not is_depreciable(asset):
        return ZERO
    return asset.depreciable_base / (asset.life * 365)


def schedule_row(asset: Asset, start: date, end: date) -> Optional[DepreciationScheduleRow]:
    """Depreciation of one asset over the inclusive period [start, end].

    Opening accumulated depreciation is derived from the days between
    acquisition and the period start, not from the stored accumulated
    amount, so the schedule can be produced for any historic period.

    Returns:
        Schedule row, or None if the asset is not depreciable
    """
    if not is_depreciable(asset):
        return None

    base = asset.depreciable_base
    daily = daily_depreciation(asset)

    opening = ZERO
    if start > asset.date:
        opening = max(ZERO, (start - asset.date).days * daily)
    opening = min(base, opening)

    period = ZERO
    effective_start = max(start, asset.date)
    if end >= effective_start:
        days = (end - effective_start).days + 1
        period = min(base - opening, max(ZERO, days * daily))

    opening = _quantize(opening)
    period = _quantize(period)
    closing = opening + period
    return DepreciationScheduleRow(
        asset=asset,
        opening_accumulated=opening,
        period_depreciation=period,
        closing_accumulated=closing,
        book_value=asset.cost - closing,
    )
