"""Stateless performance analytics over a trader's journal.

All functions are pure computation: no I/O, no database access, no mutation
of their inputs. They accept any sequence of objects exposing the ``Trade``
attributes they read, so ORM rows and plain namespaces both work.

Input order matters only where a timeline is walked (streaks, capital curve).
The store hands trades over newest-first, so those functions reverse by
default; pass ``newest_first=False`` for input that is already oldest-first.
"""

from dataclasses import dataclass, field
from typing import Sequence

from backend.utils.constants import MONTH_LABELS, R_BUCKETS


@dataclass
class Metrics:
    total_trades: int = 0
    win_rate: float = 0.0
    avg_gain: float = 0.0
    avg_loss: float = 0.0
    payoff: float = 0.0
    total_profit: float = 0.0
    avg_r: float = 0.0
    expectancy: float = 0.0
    max_consecutive_gain: int = 0
    max_consecutive_loss: int = 0


@dataclass
class CapitalPoint:
    index: int
    label: str
    cumulative_balance: float


@dataclass
class RBucket:
    range_label: str
    count: int


@dataclass
class SetupStats:
    setup: str
    count: int
    win_rate: float
    total_profit: float
    best_time: str  # entry time of the first trade seen for the setup


@dataclass
class EmotionCount:
    emotion: str
    count: int


@dataclass
class DisciplineSummary:
    planned_trades: int = 0
    planned_win_rate: float = 0.0
    impulsive_trades: int = 0
    impulsive_profit: float = 0.0
    avg_discipline: float = 0.0
    followed_plan_profit: float = 0.0
    broke_plan_profit: float = 0.0


@dataclass
class Dashboard:
    metrics: Metrics
    capital_curve: list[CapitalPoint] = field(default_factory=list)
    monthly_performance: dict[str, float] = field(default_factory=dict)
    r_distribution: list[RBucket] = field(default_factory=list)
    setup_performance: list[SetupStats] = field(default_factory=list)
    emotion_distribution: list[EmotionCount] = field(default_factory=list)
    discipline: DisciplineSummary = field(default_factory=DisciplineSummary)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _ratio(numerator: float, denominator: float) -> float:
    """Division that yields 0 instead of failing on a zero denominator."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def is_win(trade) -> bool:
    """A trade wins only on a strictly positive cash result."""
    return trade.result_cash > 0


def trade_result(
    direction: str,
    entry_price: float,
    exit_price: float,
    lot: float,
    risk_amount: float,
) -> tuple[float, float]:
    """Cash result and R-multiple for a closed trade.

    Returns: (result_cash, result_r). ``result_r`` is 0 when nothing was risked.
    """
    sign = 1 if direction == "Long" else -1
    result_cash = (exit_price - entry_price) * sign * lot
    result_r = result_cash / risk_amount if risk_amount > 0 else 0.0
    return result_cash, result_r


def chronological(trades: Sequence, newest_first: bool = True) -> list:
    """Return a new oldest-first list of ``trades``."""
    ordered = list(trades)
    if newest_first:
        ordered.reverse()
    return ordered


# ---------------------------------------------------------------------------
# Aggregate metrics
# ---------------------------------------------------------------------------

def compute_metrics(trades: Sequence, newest_first: bool = True) -> Metrics:
    """Headline statistics for a trade sequence. Empty input gives all zeros."""
    total_trades = len(trades)
    if total_trades == 0:
        return Metrics()

    gains = [t.result_cash for t in trades if is_win(t)]
    losses = [t.result_cash for t in trades if not is_win(t)]

    win_rate = len(gains) / total_trades
    avg_gain = _ratio(sum(gains), len(gains))
    avg_loss = abs(_ratio(sum(losses), len(losses)))
    payoff = _ratio(avg_gain, avg_loss)
    total_profit = sum(t.result_cash for t in trades)
    avg_r = sum(t.result_r for t in trades) / total_trades
    expectancy = win_rate * avg_gain - (1 - win_rate) * avg_loss

    max_gain_streak = max_loss_streak = 0
    gain_streak = loss_streak = 0
    for trade in chronological(trades, newest_first):
        if is_win(trade):
            gain_streak += 1
            loss_streak = 0
            max_gain_streak = max(max_gain_streak, gain_streak)
        else:
            loss_streak += 1
            gain_streak = 0
            max_loss_streak = max(max_loss_streak, loss_streak)

    return Metrics(
        total_trades=total_trades,
        win_rate=win_rate,
        avg_gain=avg_gain,
        avg_loss=avg_loss,
        payoff=payoff,
        total_profit=total_profit,
        avg_r=avg_r,
        expectancy=expectancy,
        max_consecutive_gain=max_gain_streak,
        max_consecutive_loss=max_loss_streak,
    )


def capital_curve(trades: Sequence, newest_first: bool = True) -> list[CapitalPoint]:
    """Running balance after each trade, oldest first, 1-based positions."""
    points = []
    balance = 0.0
    for index, trade in enumerate(chronological(trades, newest_first), start=1):
        balance += trade.result_cash
        points.append(CapitalPoint(index=index, label=f"T{index}", cumulative_balance=balance))
    return points


# ---------------------------------------------------------------------------
# Group-by transforms
# ---------------------------------------------------------------------------

def monthly_performance(trades: Sequence, include_year: bool = False) -> dict[str, float]:
    """Sum of ``result_cash`` per calendar month, in first-seen order.

    Months are keyed by short name only, so the same month of different
    years lands in one bucket unless ``include_year`` is set.
    """
    months: dict[str, float] = {}
    for trade in trades:
        label = MONTH_LABELS[trade.date.month - 1]
        if include_year:
            label = f"{label} {trade.date.year}"
        months[label] = months.get(label, 0.0) + trade.result_cash
    return months


def _r_bucket_index(result_r: float) -> int:
    for i, (_, upper) in enumerate(R_BUCKETS):
        if upper is None or result_r < upper:
            return i
    return len(R_BUCKETS) - 1


def r_distribution(trades: Sequence) -> list[RBucket]:
    """Histogram of R-multiples over fixed half-open buckets, always all six."""
    counts = [0] * len(R_BUCKETS)
    for trade in trades:
        counts[_r_bucket_index(trade.result_r)] += 1
    return [RBucket(range_label=label, count=counts[i]) for i, (label, _) in enumerate(R_BUCKETS)]


def setup_performance(trades: Sequence) -> list[SetupStats]:
    """Per-setup count, win rate and profit, most profitable setup first."""
    groups: dict[str, dict] = {}
    for trade in trades:
        group = groups.get(trade.setup)
        if group is None:
            group = {"count": 0, "wins": 0, "total_profit": 0.0, "first_time": trade.entry_time}
            groups[trade.setup] = group
        group["count"] += 1
        if is_win(trade):
            group["wins"] += 1
        group["total_profit"] += trade.result_cash

    stats = [
        SetupStats(
            setup=setup,
            count=g["count"],
            win_rate=g["wins"] / g["count"],
            total_profit=g["total_profit"],
            best_time=g["first_time"],
        )
        for setup, g in groups.items()
    ]
    stats.sort(key=lambda s: s.total_profit, reverse=True)
    return stats


def emotion_distribution(trades: Sequence) -> list[EmotionCount]:
    """Number of trades per pre-trade emotion, in first-seen order."""
    counts: dict[str, int] = {}
    for trade in trades:
        counts[trade.emotion] = counts.get(trade.emotion, 0) + 1
    return [EmotionCount(emotion=emotion, count=count) for emotion, count in counts.items()]


def discipline_breakdown(trades: Sequence) -> DisciplineSummary:
    """Planned vs impulsive trades and plan adherence."""
    if not trades:
        return DisciplineSummary()

    planned = [t for t in trades if t.is_planned]
    impulsive = [t for t in trades if not t.is_planned]

    return DisciplineSummary(
        planned_trades=len(planned),
        planned_win_rate=_ratio(sum(1 for t in planned if is_win(t)), len(planned)),
        impulsive_trades=len(impulsive),
        impulsive_profit=sum(t.result_cash for t in impulsive),
        avg_discipline=sum(t.discipline_note for t in trades) / len(trades),
        followed_plan_profit=sum(t.result_cash for t in trades if t.followed_plan),
        broke_plan_profit=sum(t.result_cash for t in trades if not t.followed_plan),
    )


def build_dashboard(trades: Sequence, newest_first: bool = True) -> Dashboard:
    """Every aggregate the dashboard shows."""
    return Dashboard(
        metrics=compute_metrics(trades, newest_first),
        capital_curve=capital_curve(trades, newest_first),
        monthly_performance=monthly_performance(trades),
        r_distribution=r_distribution(trades),
        setup_performance=setup_performance(trades),
        emotion_distribution=emotion_distribution(trades),
        discipline=discipline_breakdown(trades),
    )
