"""Outcome of a pull and its translation into a response snapshot."""

from dataclasses import dataclass

from megadisp.models.snapshot import ReadingSnapshot


@dataclass(frozen=True)
class PullSuccess:
    snapshot: ReadingSnapshot


@dataclass(frozen=True)
class PullFailure:
    """A pull that gave up; ``default`` is the untouched default snapshot."""

    error: str
    default: ReadingSnapshot


PullResult = PullSuccess | PullFailure


def degrade(result: PullResult) -> ReadingSnapshot:
    """Collapse a pull result into the snapshot the endpoint returns."""
    if isinstance(result, PullSuccess):
        return result.snapshot
    return result.default.model_copy(update={"error_flag": "T", "error": result.error})
