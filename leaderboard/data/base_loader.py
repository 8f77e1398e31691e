# leaderboard/data/base_loader.py

from abc import ABC, abstractmethod


class BaseLoader(ABC):
    """
    Abstract Base Class for portfolio history loaders.

    All loaders should inherit from this class and implement the
    `load_data` method, which gives the session one interface whether the
    history comes from the live API or a saved snapshot.
    """

    @abstractmethod
    def load_data(self) -> dict:
        """
        Loads every team's portfolio history.

        Returns:
            dict: Team id mapped to an ordered list of
            {"timestamp": <ISO-8601 str>, "value": <number>} points.
        """
        raise NotImplementedError
