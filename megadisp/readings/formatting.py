"""Formatting and derivation rules for generation readings."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from megadisp.models.snapshot import NO_PERCENT, AbtRow, Number

UNIT_7_CAPACITY_MW = 300
UNIT_8_CAPACITY_MW = 250
STATION_CAPACITY_MW = 550

CENT = Decimal("0.01")


def format_fixed(value: Number) -> str:
    """Render a number en-US style with exactly two fraction digits.

    Ties round away from zero on the exact binary value, so 0.125 gives
    "0.13" while 1.005 (stored just below the tie) gives "1.00".

    >>> format_fixed(1234.5)
    '1,234.50'
    """
    cents = Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    return f"{cents:,.2f}"


def format_percent(numerator: Number, denominator: Number) -> str:
    """Percentage of ``numerator`` over ``denominator``, ``"-"`` when undefined."""
    if denominator <= 0:
        return NO_PERCENT
    return format_fixed(numerator * 100 / denominator)


def format_reading_date(moment: datetime) -> str:
    return moment.strftime("%d-%m-%Y")


def format_reading_time(moment: datetime) -> str:
    return moment.strftime("%H:%M:%S")


def derive_abt_metrics(row: AbtRow, now: datetime) -> dict[str, Any]:
    """Turn a raw ``abt_flow`` row into display fields.

    Auxiliary power for a unit is what it generated minus what the
    generator transformer passed on plus what the station transformer drew
    in; it is only reported while the unit is running. Plant load factor is
    measured against fixed nameplate capacities. ``now`` stamps the
    reading, since ``abt_flow`` carries no timestamp of its own.
    """
    seven = row.unit_7
    eight = row.unit_8
    station = seven + eight

    apc_7_raw = seven - row.gt_7 + row.st_7
    apc_8_raw = eight - row.gt_8 + row.st_8
    apc_total_raw = station - row.act_sent_out

    return {
        "seven": format_fixed(seven),
        "eight": format_fixed(eight),
        "block_no": row.block_no,
        "frequency": format_fixed(row.frequency),
        "act_sent_out": format_fixed(row.act_sent_out),
        "gt_7": row.gt_7,
        "gt_8": row.gt_8,
        "st_7": row.st_7,
        "st_8": row.st_8,
        "sg_sch": format_fixed(row.sg_sch),
        "dc_sch": format_fixed(row.dc_sch),
        "total": format_fixed(station),
        "apc_7": format_fixed(apc_7_raw if seven > 0 else 0),
        "apc_8": format_fixed(apc_8_raw if eight > 0 else 0),
        "apc_total": format_fixed(apc_total_raw if station > 0 else 0),
        "apc_7_p": format_percent(apc_7_raw, seven),
        "apc_8_p": format_percent(apc_8_raw, eight),
        "apc_total_p": format_percent(apc_total_raw, station),
        "plf_7": format_fixed(seven * 100 / UNIT_7_CAPACITY_MW),
        "plf_8": format_fixed(eight * 100 / UNIT_8_CAPACITY_MW),
        "plf_stn": format_fixed(station * 100 / STATION_CAPACITY_MW),
        "reading_date": format_reading_date(now),
        "reading_time": format_reading_time(now),
    }
