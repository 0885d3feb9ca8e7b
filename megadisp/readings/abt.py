"""Pull a snapshot from the ABT flow table."""

from collections.abc import Callable
from datetime import datetime

from megadisp.db.deps import ConnectionFactory
from megadisp.db.rows import fetch_one_model
from megadisp.models.snapshot import AbtRow, AbtSnapshot, default_abt_snapshot

from . import logger
from .formatting import derive_abt_metrics
from .results import PullFailure, PullResult, PullSuccess

ABT_FLOW_SQL = (
    "SELECT UNIT_7, UNIT_8, BLOCK_NO, FREQUENCY, ACT_SENT_OUT, "
    "GT_7, GT_8, ST_7, ST_8, SG_SCH, DC_SCH "
    "FROM abt_flow ORDER BY rowid LIMIT 1"
)


def pull_abt(
    connect: ConnectionFactory,
    clock: Callable[[], datetime] = datetime.now,
) -> PullResult:
    """Build an ABT snapshot from the first ``abt_flow`` row in insertion order.

    An empty ``abt_flow`` is not an error: the default snapshot comes back
    as a success. Any failure while connecting, querying or deriving yields
    a :class:`PullFailure` carrying a fresh default snapshot.
    """
    try:
        with connect() as connection:
            row = fetch_one_model(connection, ABT_FLOW_SQL, AbtRow)
        if row is None:
            logger.info("abt_flow is empty; returning default ABT snapshot")
            return PullSuccess(default_abt_snapshot())
        snapshot = AbtSnapshot(**derive_abt_metrics(row, clock()))
    except Exception as exc:  # noqa: BLE001
        logger.error("ABT pull failed: %s", exc, exc_info=True)
        return PullFailure(error=str(exc), default=default_abt_snapshot())

    return PullSuccess(snapshot)
