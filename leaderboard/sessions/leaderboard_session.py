import time
from datetime import datetime
from pathlib import Path

from leaderboard.core.metrics import compute_all_metrics
from leaderboard.core.ranking import METRICS, rank_by_metric, sort_by_portfolio_value
from leaderboard.data.history_loader import HistoryLoader
from leaderboard.data.json_loader import JSONHistoryLoader
from leaderboard.utils.exceptions import ConfigError
from leaderboard.utils.formatting import format_number, format_pct, format_usd
from leaderboard.utils.logger import setup_logging


def build_loader(config: dict):
    """Snapshot loader when data.snapshot_file is set, otherwise the live API."""
    snapshot_file = (config.get('data') or {}).get('snapshot_file')
    if snapshot_file:
        return JSONHistoryLoader(Path(snapshot_file))

    api = config.get('api') or {}
    history = config.get('history') or {}
    if not api.get('base_url'):
        raise ConfigError("api.base_url is required when no snapshot_file is configured.")
    return HistoryLoader(
        base_url=api['base_url'],
        days=history.get('days', 7),
        limit=history.get('limit', 1000),
        timeout=api.get('timeout_seconds', 12.0),
    )


class LeaderboardSession:
    def __init__(self, config, loader=None, abort_flag_callback=None):
        self.config = config
        self.should_abort_callback = abort_flag_callback
        logging_config = config.get('logging') or {}
        self.log = setup_logging(
            'LeaderboardSession',
            level=logging_config.get('level', 'INFO'),
            log_file=logging_config.get('file'),
        )

        session_config = config.get('session') or {}
        self.poll_seconds = float(session_config.get('poll_seconds', 60))
        self.max_workers = session_config.get('max_workers')
        self.ranking_metric = session_config.get('ranking_metric', 'sharpe_ratio')
        if self.ranking_metric not in METRICS:
            raise ConfigError(
                f"session.ranking_metric '{self.ranking_metric}' is not one of {list(METRICS)}"
            )

        self.loader = loader if loader is not None else build_loader(config)
        self.last_result = None

    def should_abort(self):
        return self.should_abort_callback() if self.should_abort_callback else False

    def sleep_with_abort(self, total_seconds):
        start_time = time.time()
        while time.time() - start_time < total_seconds:
            if self.should_abort():
                return
            time.sleep(max(0.0, min(1.0, total_seconds - (time.time() - start_time))))

    def refresh(self):
        """
        Runs one load -> compute -> rank cycle.

        Returns None when the loader produced no teams, otherwise a dict with
        "metrics", "ranking", "standings" and "updated_at".
        """
        teams = self.loader.load_data()
        if not teams:
            self.log.warning("No team history available; skipping this cycle.")
            return None

        metrics = compute_all_metrics(teams, max_workers=self.max_workers)
        ranking = rank_by_metric(metrics.values(), self.ranking_metric)

        standings = []
        load_leaderboard = getattr(self.loader, 'load_leaderboard', None)
        if load_leaderboard is not None:
            standings = sort_by_portfolio_value(load_leaderboard())

        self.last_result = {
            "metrics": metrics,
            "ranking": ranking,
            "standings": standings,
            "updated_at": datetime.now(),
        }
        self.log_report(ranking, standings)
        return self.last_result

    def log_report(self, ranking, standings=None):
        label = METRICS[self.ranking_metric]['label']
        self.log.info(f"--- Leaderboard by {label} ({len(ranking)} teams) ---")
        for row in ranking.itertuples(index=False):
            self.log.info(
                f"#{row.rank} {row.entity_id} | "
                f"Value: {format_usd(row.current_value)} | "
                f"Return: {format_pct(row.total_return)} | "
                f"Max DD: {format_pct(row.max_drawdown)} | "
                f"Sharpe: {format_number(row.sharpe_ratio)} | "
                f"Sortino: {format_number(row.sortino_ratio)} | "
                f"Calmar: {format_number(row.calmar_ratio)}"
            )

        if standings:
            self.log.info("--- Live standings ---")
            for position, entry in enumerate(standings, start=1):
                self.log.info(f"#{position} {entry['team_id']} | {format_usd(entry['portfolio_value'])}")

    def run(self, max_cycles=None):
        self.log.info(
            f"Starting leaderboard session (metric={self.ranking_metric}, every {self.poll_seconds:.0f}s)"
        )
        cycles = 0
        while not self.should_abort():
            try:
                self.refresh()
            except Exception as e:
                self.log.error(f"Refresh cycle failed: {e}", exc_info=True)

            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                break
            self.sleep_with_abort(self.poll_seconds)

        self.log.info(f"Leaderboard session stopped after {cycles} cycle(s).")
        return self.last_result
