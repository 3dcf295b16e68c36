"""Tests for the metrics engine: aggregates, timeline walks and group-bys."""

import math
from dataclasses import asdict, fields
from datetime import date

import pytest

from backend.services import metrics
from backend.services.metrics import (
    Metrics,
    capital_curve,
    compute_metrics,
    discipline_breakdown,
    emotion_distribution,
    monthly_performance,
    r_distribution,
    setup_performance,
    trade_result,
)
from factories import make_trade


def _oldest_first(results: list[float]) -> list:
    return [make_trade(result_cash=r) for r in results]


# ---------------------------------------------------------------------------
# 1. Trade result derivation
# ---------------------------------------------------------------------------

class TestTradeResult:
    def test_long_profit(self):
        cash, r = trade_result("Long", entry_price=100.0, exit_price=110.0, lot=2, risk_amount=10.0)
        assert cash == 20.0
        assert r == 2.0

    def test_short_profit_when_price_falls(self):
        cash, r = trade_result("Short", entry_price=100.0, exit_price=90.0, lot=1, risk_amount=5.0)
        assert cash == 10.0
        assert r == 2.0

    def test_short_loss_when_price_rises(self):
        cash, _ = trade_result("Short", entry_price=100.0, exit_price=104.0, lot=3, risk_amount=12.0)
        assert cash == -12.0

    def test_zero_risk_gives_zero_r(self):
        cash, r = trade_result("Long", entry_price=10.0, exit_price=15.0, lot=1, risk_amount=0.0)
        assert cash == 5.0
        assert r == 0.0

    def test_single_record_cash_100_risk_50(self):
        cash, r = trade_result("Long", entry_price=0.0, exit_price=100.0, lot=1, risk_amount=50.0)
        assert (cash, r) == (100.0, 2.0)


# ---------------------------------------------------------------------------
# 2. compute_metrics
# ---------------------------------------------------------------------------

class TestComputeMetrics:
    def test_empty_is_all_zero(self):
        result = compute_metrics([])
        assert result.total_trades == 0
        for f in fields(Metrics):
            assert getattr(result, f.name) == 0

    def test_single_winner(self):
        result = compute_metrics([make_trade(result_cash=100.0, result_r=2.0)])
        assert result.total_trades == 1
        assert result.win_rate == 1
        assert result.avg_gain == 100.0
        assert result.avg_loss == 0
        assert result.payoff == 0
        assert result.avg_r == 2.0
        assert result.max_consecutive_gain == 1
        assert result.max_consecutive_loss == 0

    def test_single_breakeven_counts_as_loss(self):
        result = compute_metrics([make_trade(result_cash=0.0)])
        assert result.win_rate == 0
        assert result.avg_loss == 0
        assert result.max_consecutive_loss == 1
        assert result.max_consecutive_gain == 0

    def test_averages_payoff_and_expectancy(self):
        trades = _oldest_first([30.0, 10.0, -10.0, -10.0])
        result = compute_metrics(trades, newest_first=False)

        assert result.win_rate == 0.5
        assert result.avg_gain == 20.0
        assert result.avg_loss == 10.0
        assert result.payoff == 2.0
        assert result.total_profit == 20.0
        assert result.expectancy == pytest.approx(0.5 * 20.0 - 0.5 * 10.0)

    def test_breakeven_lowers_average_loss(self):
        result = compute_metrics(_oldest_first([10.0, -10.0, 0.0]), newest_first=False)
        assert result.avg_loss == 5.0

    def test_streaks_oldest_to_newest(self):
        trades = _oldest_first([10, 10, -5, 10, -5, -5])
        result = compute_metrics(trades, newest_first=False)
        assert result.max_consecutive_gain == 2
        assert result.max_consecutive_loss == 2

    def test_newest_first_input_is_reversed_for_streaks(self):
        oldest_first = _oldest_first([10, 10, 10, -5, -5])
        newest_first = list(reversed(oldest_first))

        a = compute_metrics(oldest_first, newest_first=False)
        b = compute_metrics(newest_first)
        assert a == b
        assert b.max_consecutive_gain == 3
        assert b.max_consecutive_loss == 2

    def test_input_is_not_mutated(self):
        trades = _oldest_first([10, -5, 3])
        snapshot = list(trades)
        compute_metrics(trades)
        capital_curve(trades)
        assert trades == snapshot

    def test_repeated_calls_are_identical(self):
        trades = _oldest_first([0.1, 0.2, -0.3, 1e-9, -7.77])
        assert asdict(compute_metrics(trades)) == asdict(compute_metrics(trades))

    def test_win_rate_bounds_and_counts(self):
        trades = _oldest_first([5, -1, 0, 7, -2, 3, 0])
        result = compute_metrics(trades)
        winners = sum(1 for t in trades if t.result_cash > 0)
        assert 0 <= result.win_rate <= 1
        assert result.total_trades == winners + (len(trades) - winners)
        assert result.win_rate == winners / len(trades)

    def test_all_losses_has_finite_values(self):
        result = compute_metrics(_oldest_first([-1, -2, -3]))
        assert result.avg_gain == 0
        assert result.payoff == 0
        for value in asdict(result).values():
            assert math.isfinite(value)


# ---------------------------------------------------------------------------
# 3. Capital curve
# ---------------------------------------------------------------------------

def test_capital_curve_accumulates_oldest_first():
    newest_first = list(reversed(_oldest_first([10, -4, 6])))
    points = capital_curve(newest_first)

    assert [p.index for p in points] == [1, 2, 3]
    assert [p.label for p in points] == ["T1", "T2", "T3"]
    assert [p.cumulative_balance for p in points] == [10, 6, 12]


def test_capital_curve_empty():
    assert capital_curve([]) == []


# ---------------------------------------------------------------------------
# 4. Monthly performance
# ---------------------------------------------------------------------------

class TestMonthlyPerformance:
    def test_sums_per_month_in_first_seen_order(self):
        trades = [
            make_trade(result_cash=5, date=date(2024, 4, 2)),
            make_trade(result_cash=10, date=date(2024, 3, 20)),
            make_trade(result_cash=-3, date=date(2024, 4, 1)),
        ]
        assert monthly_performance(trades) == {"Apr": 2, "Mar": 10}
        assert list(monthly_performance(trades)) == ["Apr", "Mar"]

    def test_same_month_of_different_years_merges(self):
        trades = [
            make_trade(result_cash=5, date=date(2024, 12, 2)),
            make_trade(result_cash=7, date=date(2023, 12, 9)),
        ]
        assert monthly_performance(trades) == {"Dec": 12}

    def test_include_year_keeps_years_apart(self):
        trades = [
            make_trade(result_cash=5, date=date(2024, 12, 2)),
            make_trade(result_cash=7, date=date(2023, 12, 9)),
        ]
        assert monthly_performance(trades, include_year=True) == {"Dec 2024": 5, "Dec 2023": 7}


# ---------------------------------------------------------------------------
# 5. R distribution
# ---------------------------------------------------------------------------

class TestRDistribution:
    def _counts(self, rs: list[float]) -> dict[str, int]:
        buckets = r_distribution([make_trade(result_r=r) for r in rs])
        return {b.range_label: b.count for b in buckets}

    def test_fixed_order_with_empty_buckets(self):
        buckets = r_distribution([])
        assert [b.range_label for b in buckets] == [
            "<-2R", "-2R to -1R", "-1R to 0R", "0R to 1R", "1R to 2R", ">2R",
        ]
        assert all(b.count == 0 for b in buckets)

    @pytest.mark.parametrize(
        "r, label",
        [
            (-2.5, "<-2R"),
            (-2.0, "-2R to -1R"),
            (-1.0, "-1R to 0R"),
            (-0.01, "-1R to 0R"),
            (0.0, "0R to 1R"),
            (1.0, "1R to 2R"),
            (2.0, ">2R"),
            (15.0, ">2R"),
        ],
    )
    def test_boundaries_are_closed_left(self, r, label):
        counts = self._counts([r])
        assert counts[label] == 1

    def test_counts_sum_to_total(self):
        rs = [-3, -1.5, -0.5, 0, 0.5, 1.5, 2, 4, -2, 1]
        trades = [make_trade(result_r=r) for r in rs]
        assert sum(b.count for b in r_distribution(trades)) == compute_metrics(trades).total_trades


# ---------------------------------------------------------------------------
# 6. Setup performance
# ---------------------------------------------------------------------------

class TestSetupPerformance:
    def test_groups_and_sorts_by_profit(self):
        trades = [
            make_trade(result_cash=-10, setup="Breakout", entry_time="10:30"),
            make_trade(result_cash=20, setup="Pullback", entry_time="09:05"),
            make_trade(result_cash=-5, setup="Pullback", entry_time="11:00"),
            make_trade(result_cash=4, setup="Breakout", entry_time="14:00"),
        ]
        stats = setup_performance(trades)

        assert [s.setup for s in stats] == ["Pullback", "Breakout"]
        pullback, breakout = stats
        assert (pullback.count, pullback.win_rate, pullback.total_profit) == (2, 0.5, 15)
        assert (breakout.count, breakout.win_rate, breakout.total_profit) == (2, 0.5, -6)

    def test_best_time_is_first_seen_entry_time(self):
        trades = [
            make_trade(result_cash=-10, setup="Reversal", entry_time="15:00"),
            make_trade(result_cash=50, setup="Reversal", entry_time="09:30"),
        ]
        assert setup_performance(trades)[0].best_time == "15:00"

    def test_setup_names_are_not_normalized(self):
        trades = [make_trade(setup="pullback"), make_trade(setup="Pullback")]
        assert {s.setup for s in setup_performance(trades)} == {"pullback", "Pullback"}

    def test_group_totals_match_overall_profit(self):
        trades = [
            make_trade(result_cash=r, setup=s)
            for r, s in [(3, "A"), (-1, "B"), (8, "C"), (-4, "A"), (2, "B")]
        ]
        stats = setup_performance(trades)
        assert sum(s.total_profit for s in stats) == compute_metrics(trades).total_profit
        profits = [s.total_profit for s in stats]
        assert profits == sorted(profits, reverse=True)


# ---------------------------------------------------------------------------
# 7. Emotions and discipline
# ---------------------------------------------------------------------------

def test_emotion_distribution_counts():
    trades = [make_trade(emotion=e) for e in ["Calm", "Anxious", "Calm", "FOMO", "Calm"]]
    counts = {e.emotion: e.count for e in emotion_distribution(trades)}
    assert counts == {"Calm": 3, "Anxious": 1, "FOMO": 1}


def test_discipline_breakdown():
    trades = [
        make_trade(result_cash=10, is_planned=True, followed_plan=True, discipline_note=9),
        make_trade(result_cash=-4, is_planned=True, followed_plan=False, discipline_note=5),
        make_trade(result_cash=-6, is_planned=False, followed_plan=False, discipline_note=1),
    ]
    summary = discipline_breakdown(trades)

    assert summary.planned_trades == 2
    assert summary.planned_win_rate == 0.5
    assert summary.impulsive_trades == 1
    assert summary.impulsive_profit == -6
    assert summary.avg_discipline == 5
    assert summary.followed_plan_profit == 10
    assert summary.broke_plan_profit == -10


def test_discipline_breakdown_empty():
    summary = discipline_breakdown([])
    assert summary.planned_trades == 0
    assert summary.avg_discipline == 0


def test_build_dashboard_bundles_every_aggregate():
    trades = [make_trade(result_cash=10, result_r=1), make_trade(result_cash=-5, result_r=-0.5)]
    board = metrics.build_dashboard(trades)

    assert board.metrics == compute_metrics(trades)
    assert len(board.capital_curve) == 2
    assert board.monthly_performance == {"Mar": 5}
    assert len(board.r_distribution) == 6
    assert board.setup_performance[0].count == 2
    assert board.emotion_distribution[0].count == 2
    assert board.discipline.planned_trades == 2
