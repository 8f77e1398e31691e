# leaderboard/data/history_loader.py

import logging
from numbers import Real

import requests

from leaderboard.data.base_loader import BaseLoader

logger = logging.getLogger("leaderboard")


class HistoryLoader(BaseLoader):
    HEADERS = {"Accept": "application/json"}

    def __init__(self, base_url: str, days: int = 7, limit: int = 1000, timeout: float = 12.0):
        self.base_url = base_url.rstrip("/")
        self.days = int(days)
        self.limit = int(limit)
        self.timeout = float(timeout)
        logger.info(
            f"HistoryLoader initialized for {self.base_url} (days={self.days}, limit={self.limit})"
        )

    def _get_json(self, path: str, params: dict = None):
        url = f"{self.base_url}{path}"
        response = requests.get(url, params=params, headers=self.HEADERS, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def load_data(self) -> dict:
        try:
            data = self._get_json(
                "/api/v1/leaderboard/history",
                params={"days": self.days, "limit": self.limit},
            )
            teams = data["teams"]
            if not isinstance(teams, dict):
                logger.error(f"History payload 'teams' is a {type(teams).__name__}, expected an object.")
                return {}

            logger.info(f"Loaded portfolio history for {len(teams)} teams.")
            return teams

        except requests.exceptions.RequestException as e:
            logger.error(f"Network error occurred while loading history: {e}")
            return {}
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"History format error: {e}")
            return {}

    def load_leaderboard(self) -> list:
        """Current standings as [{"team_id": str, "portfolio_value": float | None}]."""
        try:
            data = self._get_json("/leaderboard")
            rows = data.get("leaderboard") or []
            entries = []
            for row in rows:
                value = row.get("portfolio_value")
                if isinstance(value, bool) or not isinstance(value, Real):
                    value = None
                entries.append({"team_id": row.get("team_id"), "portfolio_value": value})
            return entries

        except requests.exceptions.RequestException as e:
            logger.error(f"Network error occurred while loading leaderboard: {e}")
            return []
        except (AttributeError, TypeError, ValueError) as e:
            logger.error(f"Leaderboard format error: {e}")
            return []
