"""Schedule block numbering."""

from datetime import datetime

BLOCK_MINUTES = 15
BLOCKS_PER_DAY = 24 * 60 // BLOCK_MINUTES


def current_block_no(now: datetime | None = None) -> int:
    """Return the 1-based schedule block (1..96) containing ``now``."""
    moment = now or datetime.now()
    return (moment.hour * 60 + moment.minute) // BLOCK_MINUTES + 1
