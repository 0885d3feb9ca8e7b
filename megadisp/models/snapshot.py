"""Pydantic schemas for megawatt display readings.

Row models sit at the database boundary: they map upper-case column names
onto fields and replace NULLs with zero once, so the derivation code never
has to. Snapshot models are what the endpoint returns.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = int | float

ZERO_TEXT = "0.00"
NO_PERCENT = "-"


class Source(str, Enum):
    """Upstream telemetry source a snapshot was built from."""

    ABT = "ABT"
    YOKOGAWA = "YOKOGAWA"


def _null_to_zero(value: Any) -> Any:
    return 0 if value is None else value


class AbtRow(BaseModel):
    """One row of ``abt_flow``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    unit_7: Number = Field(0, alias="UNIT_7")
    unit_8: Number = Field(0, alias="UNIT_8")
    block_no: int = Field(0, alias="BLOCK_NO")
    frequency: Number = Field(0, alias="FREQUENCY")
    act_sent_out: Number = Field(0, alias="ACT_SENT_OUT")
    gt_7: int = Field(0, alias="GT_7")
    gt_8: int = Field(0, alias="GT_8")
    st_7: int = Field(0, alias="ST_7")
    st_8: int = Field(0, alias="ST_8")
    sg_sch: Number = Field(0, alias="SG_SCH")
    dc_sch: Number = Field(0, alias="DC_SCH")

    @field_validator("*", mode="before")
    @classmethod
    def default_nulls(cls, value: Any) -> Any:
        return _null_to_zero(value)


class ExtendedReadingRow(BaseModel):
    """Latest row of ``megawattdisplay_extended``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    unit7: Number = Field(0, alias="UNIT7")
    unit8: Number = Field(0, alias="UNIT8")
    wbsetcl: Number = Field(0, alias="WBSETCL")
    frequency: Number = Field(0, alias="FREQUENCY")
    insertion_time: datetime | None = Field(None, alias="INSERTION_TIME")

    @field_validator("unit7", "unit8", "wbsetcl", "frequency", mode="before")
    @classmethod
    def default_nulls(cls, value: Any) -> Any:
        return _null_to_zero(value)


def _schedule_text(value: Any) -> str:
    if value is None or value == "" or value == 0:
        return ZERO_TEXT
    return str(value)


class DcScheduleRow(BaseModel):
    """Row of ``block_data_dc`` for a single block."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    block_no: int = Field(0, alias="BLOCK_NO")
    dcon: str = Field(ZERO_TEXT, alias="DCON")

    @field_validator("block_no", mode="before")
    @classmethod
    def default_block(cls, value: Any) -> Any:
        return _null_to_zero(value)

    @field_validator("dcon", mode="before")
    @classmethod
    def pass_through(cls, value: Any) -> str:
        return _schedule_text(value)


class SgScheduleRow(BaseModel):
    """Row of ``block_data_sg`` for a single block."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    block_no: int = Field(0, alias="BLOCK_NO")
    sgon: str = Field(ZERO_TEXT, alias="SGON")

    @field_validator("block_no", mode="before")
    @classmethod
    def default_block(cls, value: Any) -> Any:
        return _null_to_zero(value)

    @field_validator("sgon", mode="before")
    @classmethod
    def pass_through(cls, value: Any) -> str:
        return _schedule_text(value)


class ReadingSnapshot(BaseModel):
    """Fields shared by every snapshot, whichever source produced it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    error_flag: Literal["F", "T"] = Field("F", alias="errorFlag")
    source: Source
    seven: str = ZERO_TEXT
    eight: str = ZERO_TEXT
    block_no: int = 0
    frequency: str = ZERO_TEXT
    act_sent_out: str = ZERO_TEXT
    sg_sch: str = ZERO_TEXT
    dc_sch: str = ZERO_TEXT
    total: str = ZERO_TEXT
    reading_date: str = ""
    reading_time: str = ""
    error: str | None = None

    def to_response(self) -> dict[str, Any]:
        """JSON body for the endpoint; ``error`` only appears when set."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class AbtSnapshot(ReadingSnapshot):
    """Snapshot built from ``abt_flow``, with APC and PLF figures."""

    source: Source = Source.ABT
    gt_7: int = 0
    gt_8: int = 0
    st_7: int = 0
    st_8: int = 0
    apc_7: str = ZERO_TEXT
    apc_8: str = ZERO_TEXT
    apc_total: str = ZERO_TEXT
    apc_7_p: str = NO_PERCENT
    apc_8_p: str = NO_PERCENT
    apc_total_p: str = NO_PERCENT
    plf_7: str = ZERO_TEXT
    plf_8: str = ZERO_TEXT
    plf_stn: str = ZERO_TEXT


class YokogawaSnapshot(ReadingSnapshot):
    """Snapshot built from the YOKOGAWA logger tables."""

    source: Source = Source.YOKOGAWA


def default_abt_snapshot() -> AbtSnapshot:
    return AbtSnapshot()


def default_yokogawa_snapshot() -> YokogawaSnapshot:
    return YokogawaSnapshot()
