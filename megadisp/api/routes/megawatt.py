"""API route serving the megawatt display snapshot."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from megadisp.db.deps import ConnectionFactory, get_connection_factory
from megadisp.models.snapshot import Source
from megadisp.readings import logger
from megadisp.readings.abt import pull_abt
from megadisp.readings.results import degrade
from megadisp.readings.source import resolve_source
from megadisp.readings.yokogawa import pull_yokogawa

router = APIRouter()


@router.post("/")
def read_megawatt(connect: ConnectionFactory = Depends(get_connection_factory)) -> JSONResponse:
    """Return the current generation snapshot from whichever source is active.

    Data-layer problems come back as ``errorFlag="T"`` with status 200; only
    an unexpected failure while dispatching turns into a 500.
    """
    source = resolve_source(connect)

    try:
        result = pull_yokogawa(connect) if source is Source.YOKOGAWA else pull_abt(connect)
        snapshot = degrade(result).model_copy(update={"source": source})
        body = snapshot.to_response()
    except Exception as exc:  # noqa: BLE001
        logger.error("Megawatt dispatch failed: %s", exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"errorFlag": "T", "error": str(exc)},
        )

    return JSONResponse(content=body)
