"""Pydantic schemas for Trade API."""

import math
import re
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from backend.services.metrics import trade_result
from backend.utils.constants import MAX_ABS_RESULT

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")


class Direction(str, Enum):
    LONG = "Long"
    SHORT = "Short"


# Values older clients send for direction
_DIRECTION_ALIASES = {
    "long": Direction.LONG,
    "compra": Direction.LONG,
    "buy": Direction.LONG,
    "short": Direction.SHORT,
    "venda": Direction.SHORT,
    "sell": Direction.SHORT,
}


class TradeCreate(BaseModel):
    """Raw journal entry as submitted by the client.

    ``result_cash`` / ``result_r`` are computed server-side; if the client
    sends them they are dropped along with any other unknown key.
    """

    model_config = ConfigDict(allow_inf_nan=False, extra="ignore")

    date: date
    asset: str = Field(min_length=1, max_length=32)
    type: str = Field(default="", max_length=64)
    direction: Direction
    entry_time: str = "00:00"
    exit_time: str = "00:00"
    entry_price: float
    stop_loss: float = 0.0
    take_profit: float = 0.0
    exit_price: float
    risk_amount: float = Field(ge=0)
    lot: float = Field(gt=0)
    setup: str = Field(default="", max_length=120)
    market_condition: str = Field(default="", max_length=120)
    is_planned: bool = True
    emotion: str = Field(default="", max_length=64)
    followed_plan: bool = True
    discipline_note: int = Field(default=0, ge=0, le=10)
    what_did_right: str = ""
    what_did_wrong: str = ""

    @field_validator("asset")
    @classmethod
    def _trim_asset(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text

    @field_validator("direction", mode="before")
    @classmethod
    def _normalize_direction(cls, value):
        if isinstance(value, str):
            direction = _DIRECTION_ALIASES.get(value.strip().lower())
            if direction is None:
                raise ValueError("must be one of: Long, Short")
            return direction
        return value

    @field_validator("entry_time", "exit_time")
    @classmethod
    def _validate_time(cls, value: str) -> str:
        text = value.strip()
        if not _TIME_RE.match(text):
            raise ValueError("must be a time of day as HH:MM or HH:MM:SS")
        return text

    @model_validator(mode="after")
    def _validate_results(self):
        result_cash, result_r = trade_result(
            direction=self.direction.value,
            entry_price=self.entry_price,
            exit_price=self.exit_price,
            lot=self.lot,
            risk_amount=self.risk_amount,
        )
        for name, value in (("result_cash", result_cash), ("result_r", result_r)):
            if not math.isfinite(value) or abs(value) > MAX_ABS_RESULT:
                raise ValueError(f"{name} out of range; check prices, lot and risk_amount")
        return self


class TradeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    date: date
    asset: str
    type: str
    direction: str
    entry_time: str
    exit_time: str
    entry_price: float
    stop_loss: float
    take_profit: float
    exit_price: float
    risk_amount: float
    lot: float
    result_cash: float
    result_r: float
    setup: str
    market_condition: str
    is_planned: bool
    emotion: str
    followed_plan: bool
    discipline_note: int
    what_did_right: str
    what_did_wrong: str
    created_at: datetime


class TradeCreated(BaseModel):
    id: int
    result_cash: float
    result_r: float
