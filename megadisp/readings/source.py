"""Choose the upstream source the megawatt display reads from."""

from typing import Any

from megadisp.db.deps import ConnectionFactory
from megadisp.models.snapshot import Source

from . import logger

PREFERRED_SOURCE_SQL = "SELECT source FROM megadisp_source ORDER BY rowid LIMIT 1"
YOKOGAWA_EXISTS_SQL = "SELECT 1 FROM megawattdisplay_extended LIMIT 1"


def parse_source(value: Any) -> Source:
    """Map a ``megadisp_source.source`` value onto a tag; unknown text means ABT."""
    if isinstance(value, str) and value.strip().upper() == Source.YOKOGAWA.value:
        return Source.YOKOGAWA
    return Source.ABT


def resolve_source(connect: ConnectionFactory) -> Source:
    """Return the source for this request, falling back to ABT on any failure.

    An operator-set row in ``megadisp_source`` wins. Without one, YOKOGAWA is
    used as soon as its logger table holds any reading.
    """
    try:
        with connect() as connection:
            preferred = connection.execute(PREFERRED_SOURCE_SQL).fetchone()
            if preferred is not None:
                source = parse_source(preferred[0])
            elif connection.execute(YOKOGAWA_EXISTS_SQL).fetchone() is not None:
                source = Source.YOKOGAWA
            else:
                source = Source.ABT
    except Exception:  # noqa: BLE001
        logger.warning("Source lookup failed; using %s", Source.ABT.value, exc_info=True)
        return Source.ABT

    logger.info("Resolved megawatt source: %s", source.value)
    return source
