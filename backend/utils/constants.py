"""Shared constants for the metrics engine and the insight narrator."""

# R-multiple histogram: (label, upper bound exclusive). The last bucket is open-ended.
R_BUCKETS: list[tuple[str, float | None]] = [
    ("<-2R", -2.0),
    ("-2R to -1R", -1.0),
    ("-1R to 0R", 0.0),
    ("0R to 1R", 1.0),
    ("1R to 2R", 2.0),
    (">2R", None),
]

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# Insight narrator
MIN_TRADES_FOR_INSIGHTS = 5
MAX_TRADES_FOR_INSIGHTS = 20

NOT_ENOUGH_TRADES_MESSAGE = "Add more trades to receive smart insights."
INSIGHT_FALLBACK_MESSAGE = "Could not generate insights right now."

INSIGHT_SYSTEM_INSTRUCTION = (
    "You are a professional trading mentor. Be direct, technical and encouraging."
)
INSIGHT_PROMPT_TEMPLATE = (
    "Analyze these trades from a trader and give 3 short, direct insights about "
    "their performance, focusing on patterns of mistakes or successes.\n\n"
    "Data: {data}"
)

# Largest accepted per-trade result; keeps sums over a journal finite
MAX_ABS_RESULT = 1e12
