"""Per-owner persistence for journal trades.

A ``TradeStore`` wraps one database session. Every query is scoped to the
owner, so a record belonging to someone else is never returned or touched.
"""

import logging

from sqlmodel import Session, select

from backend.models.trade import Trade
from backend.schemas.trade import TradeCreate
from backend.services.metrics import trade_result

logger = logging.getLogger(__name__)


class TradeStore:
    """Repository for ``Trade`` rows."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, owner_id: int, data: TradeCreate) -> Trade:
        """Persist a new trade, deriving ``result_cash`` and ``result_r`` once."""
        payload = data.model_dump()
        payload["direction"] = data.direction.value
        result_cash, result_r = trade_result(
            direction=payload["direction"],
            entry_price=data.entry_price,
            exit_price=data.exit_price,
            lot=data.lot,
            risk_amount=data.risk_amount,
        )
        trade = Trade(
            **payload,
            user_id=owner_id,
            result_cash=result_cash,
            result_r=result_r,
        )
        self.session.add(trade)
        self.session.commit()
        self.session.refresh(trade)
        logger.info(
            f"[user_{owner_id}] Trade {trade.id} created: {trade.asset} {trade.direction} "
            f"result={result_cash:.2f} ({result_r:.2f}R)"
        )
        return trade

    def list_by_owner(self, owner_id: int) -> list[Trade]:
        """Owner's trades, newest first (date, then entry time)."""
        stmt = (
            select(Trade)
            .where(Trade.user_id == owner_id)
            .order_by(Trade.date.desc(), Trade.entry_time.desc(), Trade.id.desc())
        )
        return list(self.session.exec(stmt).all())

    def delete_for_owner(self, trade_id: int, owner_id: int) -> bool:
        """Delete one of the owner's trades. Returns False if nothing matched."""
        trade = self.session.exec(
            select(Trade).where(Trade.id == trade_id, Trade.user_id == owner_id)
        ).first()
        if trade is None:
            logger.debug(f"[user_{owner_id}] Delete of trade {trade_id} matched nothing")
            return False

        self.session.delete(trade)
        self.session.commit()
        logger.info(f"[user_{owner_id}] Trade {trade_id} deleted")
        return True
