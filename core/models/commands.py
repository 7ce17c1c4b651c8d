from enum import Enum

from core.constants import REGISTER_MODAL_ID


class CommandName(str, Enum):
    """Slash commands the bot installs and answers."""

    REGISTER = "register"
    INFO = "info"
    STATS = "stats"
    UNREGISTER = "unregister"

    @property
    def description(self) -> str:
        return COMMAND_DESCRIPTIONS[self]

    def definition(self) -> dict:
        """Payload for Discord's application command API (CHAT_INPUT, guild only)."""
        return {
            "name": self.value,
            "description": self.description,
            "type": 1,
            "integration_types": [0],
            "contexts": [0],
        }


class ModalId(str, Enum):
    """Modal forms the bot opens, by their custom id."""

    REGISTER = REGISTER_MODAL_ID


COMMAND_DESCRIPTIONS = {
    CommandName.REGISTER: "Register your PUBG account information",
    CommandName.INFO: "Display your PUBG profile information",
    CommandName.STATS: "Show your statistics from your most recent matches",
    CommandName.UNREGISTER: "Remove your registered PUBG account",
}
