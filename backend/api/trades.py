"""Trade journal API."""

from fastapi import APIRouter, Depends

from backend.models.user import User
from backend.schemas.trade import TradeCreate, TradeCreated, TradeRead
from backend.services.trade_store import TradeStore
from backend.api.deps import get_current_user, get_trade_store

router = APIRouter(prefix="/api/trades", tags=["trades"])


@router.get("", response_model=list[TradeRead])
def list_trades(
    user: User = Depends(get_current_user),
    store: TradeStore = Depends(get_trade_store),
):
    return store.list_by_owner(user.id)


@router.post("", response_model=TradeCreated, status_code=201)
def create_trade(
    data: TradeCreate,
    user: User = Depends(get_current_user),
    store: TradeStore = Depends(get_trade_store),
):
    trade = store.create(user.id, data)
    return TradeCreated(id=trade.id, result_cash=trade.result_cash, result_r=trade.result_r)


@router.delete("/{trade_id}", status_code=204)
def delete_trade(
    trade_id: int,
    user: User = Depends(get_current_user),
    store: TradeStore = Depends(get_trade_store),
):
    # Unknown or foreign ids are not reported, so existence never leaks
    store.delete_for_owner(trade_id, user.id)
