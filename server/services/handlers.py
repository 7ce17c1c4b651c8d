import logging

from icecream import ic

from core.config import Settings
from core.constants import PLAYER_NAME_INPUT_ID
from core.models.commands import CommandName, ModalId
from core.models.discord import Interaction, InteractionResponse
from core.models.errors import ApiError
from core.models.player import PlayerRegistration
from core.models.pubg import ClanInfo
from server.services import formatters
from server.services.aggregator import StatsAggregator, summarize
from server.services.pubg import PubgClient
from server.services.storage import PlayerStore

logger = logging.getLogger(__name__)


class CommandService:
    """Answers slash commands and modal submissions."""

    def __init__(
        self,
        store: PlayerStore,
        client: PubgClient,
        aggregator: StatsAggregator,
        settings: Settings,
    ) -> None:
        self.store = store
        self.client = client
        self.aggregator = aggregator
        self.shard = settings.pubg_default_shard
        self.recent_matches_limit = settings.recent_matches_limit

    async def handle_command(
        self, command: CommandName, interaction: Interaction
    ) -> InteractionResponse:
        if command == CommandName.REGISTER:
            return formatters.registration_modal()

        user_id = self._user_id(interaction)
        if command == CommandName.INFO:
            return await self.info(user_id)
        if command == CommandName.STATS:
            return await self.stats(user_id)
        if command == CommandName.UNREGISTER:
            return await self.unregister(user_id)
        raise ValueError(f"No handler for command {command}")

    async def handle_modal(self, modal: ModalId, interaction: Interaction) -> InteractionResponse:
        user_id = self._user_id(interaction)
        if modal == ModalId.REGISTER:
            player_name = (interaction.text_input(PLAYER_NAME_INPUT_ID) or "").strip()
            return await self.register(user_id, player_name)
        raise ValueError(f"No handler for modal {modal}")

    @staticmethod
    def _user_id(interaction: Interaction) -> str:
        user_id = interaction.user_id
        if user_id is None:
            raise ValueError("Interaction carries no user")
        return user_id

    async def register(self, user_id: str, player_name: str) -> InteractionResponse:
        """Look the submitted name up on PUBG and link it to the Discord user."""
        logger.info(f"Searching PUBG player: {player_name} for Discord user: {user_id}")

        if not player_name:
            player = ApiError.not_found()
        else:
            player = await self.client.find_player_by_name(player_name, self.shard)

        if isinstance(player, ApiError):
            return formatters.registration_failed(player, player_name, self.shard)

        registration = PlayerRegistration(
            player_id=player.id, player_name=player.name, clan_id=player.clan_id
        )
        await self.store.save(user_id, registration)
        logger.info(f"Registration saved: Discord {user_id} -> PUBG {player.name} ({player.id})")
        return formatters.registration_succeeded(player)

    async def info(self, user_id: str) -> InteractionResponse:
        record = await self.store.get(user_id)
        if record is None:
            return formatters.profile_not_registered(user_id)

        player = await self.client.get_player_by_id(record.player_id, self.shard)
        profile_found = not isinstance(player, ApiError)

        clan: ClanInfo | ApiError | None = None
        if profile_found and record.clan_id:
            clan = await self.client.get_clan_info(record.clan_id, self.shard)
        ic(profile_found, clan)

        return formatters.profile(user_id, record, profile_found=profile_found, clan=clan)

    async def stats(self, user_id: str) -> InteractionResponse:
        record = await self.store.get(user_id)
        if record is None:
            return formatters.stats_not_registered(user_id)

        logger.info(f"Fetching recent match stats for player: {record.player_id}")
        stats = await self.aggregator.compute_recent_stats(
            record.player_id, self.shard, self.recent_matches_limit
        )

        if isinstance(stats, ApiError):
            return formatters.stats_failed(record, stats)
        if not stats:
            return formatters.no_recent_matches(record)
        return formatters.match_stats(record, stats, summarize(stats))

    async def unregister(self, user_id: str) -> InteractionResponse:
        removed = await self.store.delete(user_id)
        return formatters.unregistered(user_id, removed)
