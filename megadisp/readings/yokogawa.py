"""Pull a snapshot from the YOKOGAWA logger tables."""

from collections.abc import Callable

from megadisp.db.deps import ConnectionFactory
from megadisp.db.rows import fetch_one_model
from megadisp.models.snapshot import (
    DcScheduleRow,
    ExtendedReadingRow,
    SgScheduleRow,
    YokogawaSnapshot,
    default_yokogawa_snapshot,
)

from . import logger
from .blocks import current_block_no
from .formatting import format_fixed, format_reading_date, format_reading_time
from .results import PullFailure, PullResult, PullSuccess

LATEST_READING_SQL = (
    "SELECT UNIT7, UNIT8, WBSETCL, FREQUENCY, INSERTION_TIME "
    "FROM megawattdisplay_extended "
    "WHERE INSERTION_TIME = (SELECT MAX(INSERTION_TIME) FROM megawattdisplay_extended) "
    "ORDER BY rowid LIMIT 1"
)
DC_SCHEDULE_SQL = "SELECT BLOCK_NO, DCON FROM block_data_dc WHERE BLOCK_NO = ? LIMIT 1"
SG_SCHEDULE_SQL = "SELECT BLOCK_NO, SGON FROM block_data_sg WHERE BLOCK_NO = ? LIMIT 1"


def build_yokogawa_snapshot(
    reading: ExtendedReadingRow | None,
    dc_row: DcScheduleRow | None,
    sg_row: SgScheduleRow | None,
) -> YokogawaSnapshot:
    """Combine the three lookups; a missing row leaves its fields at defaults."""
    reading = reading or ExtendedReadingRow()
    dc_row = dc_row or DcScheduleRow()
    sg_row = sg_row or SgScheduleRow()
    stamp = reading.insertion_time

    return YokogawaSnapshot(
        seven=format_fixed(reading.unit7),
        eight=format_fixed(reading.unit8),
        frequency=format_fixed(reading.frequency),
        act_sent_out=format_fixed(reading.wbsetcl),
        total=format_fixed(reading.unit7 + reading.unit8),
        block_no=dc_row.block_no,
        dc_sch=dc_row.dcon,
        sg_sch=sg_row.sgon,
        reading_date=format_reading_date(stamp) if stamp else "",
        reading_time=format_reading_time(stamp) if stamp else "",
    )


def pull_yokogawa(
    connect: ConnectionFactory,
    block_no: Callable[[], int] = current_block_no,
) -> PullResult:
    """Build a YOKOGAWA snapshot from three sequential lookups on one connection.

    The latest extended reading supplies unit outputs, sent-out and
    frequency along with its own timestamp. DC and SG schedules for the
    current block pass through unformatted. A failing lookup fails the
    whole pull.
    """
    try:
        with connect() as connection:
            reading = fetch_one_model(connection, LATEST_READING_SQL, ExtendedReadingRow)
            block = block_no()
            dc_row = fetch_one_model(connection, DC_SCHEDULE_SQL, DcScheduleRow, [block])
            sg_row = fetch_one_model(connection, SG_SCHEDULE_SQL, SgScheduleRow, [block])
        if reading is None:
            logger.info("megawattdisplay_extended is empty")
        if dc_row is None or sg_row is None:
            logger.debug("Schedule incomplete for block %s (dc=%s, sg=%s)", block, dc_row, sg_row)
        snapshot = build_yokogawa_snapshot(reading, dc_row, sg_row)
    except Exception as exc:  # noqa: BLE001
        logger.error("YOKOGAWA pull failed: %s", exc, exc_info=True)
        return PullFailure(error=str(exc), default=default_yokogawa_snapshot())

    return PullSuccess(snapshot)
