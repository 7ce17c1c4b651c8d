"""Registers the bot's slash commands with Discord."""

import asyncio
import logging

import httpx

from core.abstract import App
from core.config import Settings
from core.models.commands import CommandName

logger = logging.getLogger(__name__)


def command_definitions() -> list[dict]:
    return [command.definition() for command in CommandName]


async def install_global_commands(
    http: httpx.AsyncClient, app_id: str, commands: list[dict]
) -> list[dict]:
    """
    Overwrite the application's global commands in one bulk request.

    Raises:
        httpx.HTTPError: If Discord could not be reached or refused the commands.
    """
    response = await http.put(f"/applications/{app_id}/commands", json=commands)
    response.raise_for_status()
    return response.json()


class CommandInstallerApp(App):
    def __init__(
        self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        super().__init__(settings)
        self.transport = transport

    async def install(self) -> int:
        if not self.settings.discord_app_id or not self.settings.discord_bot_token:
            logger.error("DISCORD_APP_ID and DISCORD_BOT_TOKEN must be set to register commands")
            return 1

        commands = command_definitions()
        logger.info(f"Registering commands: {', '.join(c['name'] for c in commands)}")

        async with httpx.AsyncClient(
            base_url=self.settings.discord_api_url,
            headers={
                "Authorization": f"Bot {self.settings.discord_bot_token}",
                "User-Agent": "DiscordBot (pubg-discord-bot, 1.0.0)",
            },
            timeout=30.0,
            transport=self.transport,
        ) as http:
            try:
                installed = await install_global_commands(
                    http, self.settings.discord_app_id, commands
                )
            except httpx.HTTPStatusError as e:
                logger.error(
                    f"Discord rejected the commands ({e.response.status_code}): {e.response.text}"
                )
                return 1
            except httpx.RequestError as e:
                logger.error(f"Error registering commands: {e!s}")
                return 1

        logger.info(f"Commands registered successfully! ({len(installed)} installed)")
        return 0

    def run(self) -> int:
        return asyncio.run(self.install())
