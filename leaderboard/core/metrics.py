# leaderboard/core/metrics.py

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from leaderboard.core.performance import (
    calculate_calmar_ratio,
    calculate_max_drawdown,
    calculate_returns,
    calculate_sharpe_ratio,
    calculate_sortino_ratio,
    is_finite_number,
    sanitize,
)

logger = logging.getLogger("leaderboard")

METRIC_FIELDS = (
    "total_return",
    "max_drawdown",
    "sharpe_ratio",
    "sortino_ratio",
    "calmar_ratio",
    "current_value",
    "starting_value",
)


def _finite_or_zero(value) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


@dataclass(frozen=True)
class MetricsRecord:
    """Risk/return statistics for one team's value history.

    Attributes:
        entity_id: Team identifier.
        total_return: Signed percentage change from first to last value.
        max_drawdown: Largest peak-to-trough decline, non-negative percentage.
        sharpe_ratio: Annualized Sharpe Ratio.
        sortino_ratio: Annualized Sortino Ratio.
        calmar_ratio: Total return over max drawdown.
        current_value: Last clean value, 0 if none.
        starting_value: First clean value, 0 if none.
    """
    entity_id: str
    total_return: float = 0.0
    max_drawdown: float = 0.0
    sharpe_ratio: float = 0.0
    sortino_ratio: float = 0.0
    calmar_ratio: float = 0.0
    current_value: float = 0.0
    starting_value: float = 0.0

    def __post_init__(self):
        # Frozen, so write through object.__setattr__.
        for name in METRIC_FIELDS:
            object.__setattr__(self, name, _finite_or_zero(getattr(self, name)))

    def to_dict(self) -> dict:
        return asdict(self)


def _raw_value(point) -> float:
    if isinstance(point, dict) and is_finite_number(point.get("value")):
        return float(point["value"])
    return 0.0


def _short_circuit(entity_id: str, first: float, last: float) -> MetricsRecord:
    return MetricsRecord(entity_id=entity_id, current_value=last, starting_value=first)


def compute_metrics(entity_id: str, series) -> MetricsRecord:
    """
    Computes the full metrics record for a single team.

    Never raises. Short or fully invalid series produce a record whose ratios
    are all zero; any unexpected failure is logged and yields a record with
    every field zero.

    Args:
        entity_id: Team identifier, copied into the record.
        series: The team's ordered [{"timestamp": ..., "value": ...}] history.

    Returns:
        A MetricsRecord whose numeric fields are all finite.
    """
    try:
        if not series or len(series) < 2:
            if not series:
                return _short_circuit(entity_id, 0.0, 0.0)
            return _short_circuit(entity_id, _raw_value(series[0]), _raw_value(series[-1]))

        values = sanitize(series)
        if values.size < 2:
            if values.size == 0:
                return _short_circuit(entity_id, 0.0, 0.0)
            return _short_circuit(entity_id, values[0], values[-1])

        starting = float(values[0])
        current = float(values[-1])
        total_return = ((current - starting) / starting) * 100 if starting != 0 else 0.0

        returns = calculate_returns(values)
        max_drawdown = calculate_max_drawdown(values)

        return MetricsRecord(
            entity_id=entity_id,
            total_return=total_return,
            max_drawdown=max_drawdown,
            sharpe_ratio=calculate_sharpe_ratio(returns),
            sortino_ratio=calculate_sortino_ratio(returns),
            calmar_ratio=calculate_calmar_ratio(total_return, max_drawdown),
            current_value=current,
            starting_value=starting,
        )
    except Exception as e:
        logger.warning(f"Error calculating metrics for team {entity_id}: {e}")
        return MetricsRecord(entity_id=entity_id)


def compute_all_metrics(teams, max_workers: Optional[int] = None) -> Dict[str, MetricsRecord]:
    """
    Computes metrics for every team in a {team_id: series} mapping.

    Teams are independent, so with max_workers set they are spread over a
    thread pool. The result keeps the input's key order either way.
    """
    if not isinstance(teams, dict):
        logger.warning(f"Expected a mapping of team histories, got {type(teams).__name__}.")
        return {}

    if not max_workers or len(teams) < 2:
        return {team_id: compute_metrics(team_id, series) for team_id, series in teams.items()}

    with ThreadPoolExecutor(max_workers=min(max_workers, len(teams))) as pool:
        futures = {
            team_id: pool.submit(compute_metrics, team_id, series)
            for team_id, series in teams.items()
        }
        return {team_id: future.result() for team_id, future in futures.items()}
