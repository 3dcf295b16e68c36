"""Trade model — one journal entry per executed trade.

``result_cash`` and ``result_r`` are derived when the row is created and are
never recomputed afterwards; trades can only be created or deleted.
"""

from datetime import date as date_type, datetime, timezone
from sqlmodel import SQLModel, Field


class Trade(SQLModel, table=True):
    __tablename__ = "trade"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True, nullable=False)

    # Timing
    date: date_type = Field(index=True)
    entry_time: str = ""  # local "HH:MM", no timezone
    exit_time: str = ""

    # Instrument / intent
    asset: str
    type: str = ""  # free-text style, e.g. "Day Trade"
    direction: str  # "Long" or "Short"

    # Price / risk
    entry_price: float
    stop_loss: float = 0.0
    take_profit: float = 0.0
    exit_price: float
    risk_amount: float
    lot: float

    # Derived at insert time
    result_cash: float
    result_r: float

    # Journal
    setup: str = ""
    market_condition: str = ""
    is_planned: bool = True
    emotion: str = ""
    followed_plan: bool = True
    discipline_note: int = 0  # 0-10
    what_did_right: str = ""
    what_did_wrong: str = ""

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
