# leaderboard/data/json_loader.py

import json
from pathlib import Path

from leaderboard.data.base_loader import BaseLoader
from leaderboard.utils.exceptions import DataValidationError


class JSONHistoryLoader(BaseLoader):
    """
    Loads portfolio history from a saved /api/v1/leaderboard/history payload.
    """

    def __init__(self, json_path: Path):
        """
        Initializes the JSONHistoryLoader.

        Args:
            json_path: The path to the JSON snapshot.
        """
        json_path = Path(json_path)
        if not json_path.exists():
            raise FileNotFoundError(f"History snapshot not found at path: {json_path}")
        self.json_path = json_path

    def load_data(self) -> dict:
        """
        Loads and validates the snapshot.

        Returns:
            The snapshot's "teams" mapping.

        Raises:
            DataValidationError: If the file is not JSON or has no "teams" object.
        """
        try:
            payload = json.loads(self.json_path.read_text())
        except json.JSONDecodeError as e:
            raise DataValidationError(f"Snapshot {self.json_path} is not valid JSON: {e}") from e

        if not isinstance(payload, dict) or not isinstance(payload.get("teams"), dict):
            raise DataValidationError(
                f"Snapshot {self.json_path} must be an object with a 'teams' mapping."
            )

        return payload["teams"]
