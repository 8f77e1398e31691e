# leaderboard/utils/config_loader.py

import os
from pathlib import Path
import yaml
from dotenv import load_dotenv

from leaderboard.utils.exceptions import ConfigError

CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"


def load_config(config_path: Path = CONFIG_PATH) -> dict:
    """
    Loads configuration from YAML and .env files.

    - Loads default config from config/config.yaml.
    - Loads environment variables from a .env file.
    - LEADERBOARD_API_URL and LEADERBOARD_POLL_SECONDS override the YAML values.

    Returns:
        A dictionary containing the combined configuration.

    Raises:
        ConfigError: If the YAML file does not contain a mapping.
    """
    load_dotenv()

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ConfigError(f"Configuration at {config_path} must be a mapping.")

    if "LEADERBOARD_API_URL" in os.environ:
        config.setdefault("api", {})
        config["api"]["base_url"] = os.environ["LEADERBOARD_API_URL"]

    if "LEADERBOARD_POLL_SECONDS" in os.environ:
        config.setdefault("session", {})
        try:
            config["session"]["poll_seconds"] = float(os.environ["LEADERBOARD_POLL_SECONDS"])
        except ValueError as e:
            raise ConfigError(f"LEADERBOARD_POLL_SECONDS must be a number: {e}") from e

    return config


# Load once and export
config = load_config()
