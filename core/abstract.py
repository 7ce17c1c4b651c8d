from abc import ABC, abstractmethod

from core.config import Settings


class App(ABC):
    """Something `main.py` can build from settings and run until it exits."""

    settings: Settings

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @abstractmethod
    def run(self) -> int | None:
        raise NotImplementedError
