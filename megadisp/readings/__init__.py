"""Source selection and derivation of megawatt display readings."""

import logging

logger = logging.getLogger("megadisp")
if not logger.handlers:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


__all__ = ["logger"]
