"""Shared API dependencies."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from backend.database import get_session
from backend.models.user import User
from backend.services.auth import decode_access_token
from backend.services.insights import InsightNarrator
from backend.services.trade_store import TradeStore

bearer_scheme = HTTPBearer()


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User:
    """Validate JWT and return the current user."""
    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    user = session.get(User, user_id)
    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive",
        )
    return user


def get_trade_store(session: Session = Depends(get_session)) -> TradeStore:
    return TradeStore(session)


def get_narrator(request: Request) -> InsightNarrator:
    return request.app.state.narrator


def get_user_trades(
    user: User = Depends(get_current_user),
    store: TradeStore = Depends(get_trade_store),
) -> list:
    """Current user's trades, newest first.

    Declared sync so FastAPI runs the query in its threadpool, also for
    async handlers.
    """
    return store.list_by_owner(user.id)
