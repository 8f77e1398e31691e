# leaderboard/core/ranking.py

import math
from numbers import Real

import pandas as pd

from leaderboard.core.metrics import MetricsRecord

# Rankable fields. Lower drawdown ranks better; everything else ranks higher-first.
METRICS = {
    "sharpe_ratio": {
        "label": "Sharpe Ratio",
        "description": "Risk-adjusted return",
        "higher_is_better": True,
    },
    "sortino_ratio": {
        "label": "Sortino Ratio",
        "description": "Downside risk-adjusted return",
        "higher_is_better": True,
    },
    "calmar_ratio": {
        "label": "Calmar Ratio",
        "description": "Return vs max drawdown",
        "higher_is_better": True,
    },
    "max_drawdown": {
        "label": "Max Drawdown",
        "description": "Largest peak-to-trough decline",
        "higher_is_better": False,
    },
    "total_return": {
        "label": "Total Return",
        "description": "Overall return percentage",
        "higher_is_better": True,
    },
}

RECORD_COLUMNS = list(MetricsRecord.__dataclass_fields__)


def rank_by_metric(records, metric: str) -> pd.DataFrame:
    """
    Orders metrics records by one of the METRICS fields.

    Args:
        records: An iterable of MetricsRecord.
        metric: Key of METRICS to sort on.

    Returns:
        A DataFrame with one row per record, the record fields plus "value"
        (the selected metric) and a 1-based "rank". Ties keep input order.

    Raises:
        ValueError: If the metric is not rankable.
    """
    if metric not in METRICS:
        raise ValueError(f"Unknown metric '{metric}'. Choose one of: {list(METRICS)}")

    df = pd.DataFrame([record.to_dict() for record in records], columns=RECORD_COLUMNS)
    df["value"] = df[metric].astype(float)
    df = df.sort_values(
        "value",
        ascending=not METRICS[metric]["higher_is_better"],
        kind="mergesort",
    ).reset_index(drop=True)
    df.insert(0, "rank", range(1, len(df) + 1))
    return df


def _portfolio_sort_value(entry) -> float:
    value = entry.get("portfolio_value")
    if isinstance(value, bool) or not isinstance(value, Real) or math.isnan(value):
        return -math.inf
    return float(value)


def sort_by_portfolio_value(entries) -> list:
    """Live standings: richest first, missing values last, ties by team_id."""
    return sorted(
        entries,
        key=lambda entry: (-_portfolio_sort_value(entry), str(entry.get("team_id", ""))),
    )
