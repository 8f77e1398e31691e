# run_leaderboard.py

from leaderboard.sessions.leaderboard_session import LeaderboardSession
from leaderboard.utils.config_loader import config
from leaderboard.utils.logger import setup_logging


def main():
    """Polls the competition API and logs the ranked team metrics."""
    logging_config = config.get("logging") or {}
    log = setup_logging(
        level=logging_config.get("level", "INFO"),
        log_file=logging_config.get("file"),
    )

    log.info("Setting up leaderboard session...")
    session = LeaderboardSession(config)

    try:
        session.run()
    except KeyboardInterrupt:
        log.info("Interrupted by user.")


if __name__ == "__main__":
    main()
