"""Dashboard API — performance analytics over the user's journal."""

from fastapi import APIRouter, Depends

from backend.services import metrics
from backend.api.deps import get_user_trades

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=metrics.Dashboard)
def dashboard(trades: list = Depends(get_user_trades)):
    """All aggregates in one response."""
    return metrics.build_dashboard(trades)


@router.get("/metrics", response_model=metrics.Metrics)
def summary_metrics(trades: list = Depends(get_user_trades)):
    return metrics.compute_metrics(trades)


@router.get("/equity", response_model=list[metrics.CapitalPoint])
def equity_curve(trades: list = Depends(get_user_trades)):
    return metrics.capital_curve(trades)


@router.get("/monthly", response_model=dict[str, float])
def monthly(include_year: bool = False, trades: list = Depends(get_user_trades)):
    return metrics.monthly_performance(trades, include_year=include_year)


@router.get("/r-distribution", response_model=list[metrics.RBucket])
def r_distribution(trades: list = Depends(get_user_trades)):
    return metrics.r_distribution(trades)


@router.get("/setups", response_model=list[metrics.SetupStats])
def setups(trades: list = Depends(get_user_trades)):
    return metrics.setup_performance(trades)


@router.get("/emotions", response_model=list[metrics.EmotionCount])
def emotions(trades: list = Depends(get_user_trades)):
    return metrics.emotion_distribution(trades)


@router.get("/discipline", response_model=metrics.DisciplineSummary)
def discipline(trades: list = Depends(get_user_trades)):
    return metrics.discipline_breakdown(trades)
