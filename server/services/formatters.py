"""Builds the Discord replies (embeds and modals) for each command outcome."""

from core.constants import (
    COLOR_ERROR,
    COLOR_INFO,
    COLOR_SUCCESS,
    COLOR_WARNING,
    DEFAULT_RANK_MEDAL,
    FOOTER_TEXT,
    PLAYER_NAME_INPUT_ID,
    PLAYER_NAME_MAX_LENGTH,
    RANK_MEDALS,
    REGISTER_MODAL_TITLE,
    SPACER,
    get_map_display_name,
)
from core.models.commands import ModalId
from core.models.discord import (
    ActionRow,
    Embed,
    EmbedField,
    EmbedFooter,
    InteractionResponse,
    InteractionResponseFlags,
    InteractionResponseType,
    MessageData,
    ModalData,
    TextInput,
)
from core.models.errors import ApiError, ApiErrorKind
from core.models.player import PlayerRecord
from core.models.pubg import AggregateStats, ClanInfo, MatchStat, PlayerIdentity

PROFILE_TITLE = "🎮 PUBG Profile"
STATS_TITLE = "📊 PUBG Match Statistics"


def message(embed: Embed, ephemeral: bool = False) -> InteractionResponse:
    flags = int(InteractionResponseFlags.EPHEMERAL) if ephemeral else None
    return InteractionResponse(
        type=InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE,
        data=MessageData(embeds=[embed], flags=flags),
    )


def footer() -> EmbedFooter:
    return EmbedFooter(text=FOOTER_TEXT)


# ——— Registration ———


def registration_modal() -> InteractionResponse:
    return InteractionResponse(
        type=InteractionResponseType.MODAL,
        data=ModalData(
            title=REGISTER_MODAL_TITLE,
            custom_id=ModalId.REGISTER.value,
            components=[
                ActionRow(
                    components=[
                        TextInput(
                            custom_id=PLAYER_NAME_INPUT_ID,
                            label="PUBG Player Name",
                            placeholder="Enter your exact PUBG in-game name",
                            max_length=PLAYER_NAME_MAX_LENGTH,
                        )
                    ]
                )
            ],
        ),
    )


def registration_failed(error: ApiError, player_name: str, shard: str) -> InteractionResponse:
    platform = shard.capitalize()
    title = "Failed to find PUBG player."
    detail = error.message

    if error.kind == ApiErrorKind.NOT_FOUND:
        title = "Player not found!"
        detail = (
            f"No PUBG player found with name **{player_name}** on {platform} platform.\n\n"
            "Please check:\n"
            "• Spelling is correct\n"
            f"• Player exists on {platform} platform\n"
            "• Try with exact in-game name"
        )
    elif error.kind == ApiErrorKind.UNAUTHORIZED:
        title = "API Configuration Error"
        detail = "PUBG API key is invalid or missing. Please contact bot administrator."
    elif error.kind == ApiErrorKind.RATE_LIMITED:
        title = "Too Many Requests"
        detail = "Rate limit exceeded. Please try again in a few minutes."

    embed = Embed(title=f"❌ {title}", description=detail, color=COLOR_ERROR, footer=footer())
    return message(embed, ephemeral=True)


def registration_succeeded(player: PlayerIdentity) -> InteractionResponse:
    fields = [
        EmbedField(name="🎮 Player Name", value=player.name, inline=True),
        EmbedField(name="🆔 Player ID", value=player.id, inline=True),
        EmbedField(name="🖥️ Platform", value=player.shard.upper(), inline=True),
    ]

    if player.clan_id:
        fields.append(
            EmbedField(name="👥 Clan Status", value="Part of a clan! Use `/info` to see details.")
        )
    else:
        fields.append(EmbedField(name="🏆 Clan Status", value="No clan"))

    fields.append(
        EmbedField(name="💡 Next Step", value="Use `/info` command to view your full profile!")
    )

    embed = Embed(
        title="✅ Registration Successful!",
        description=f"Successfully registered PUBG player **{player.name}**!",
        color=COLOR_SUCCESS,
        fields=fields,
        footer=footer(),
    )
    return message(embed, ephemeral=True)


def unregistered(user_id: str, removed: bool) -> InteractionResponse:
    if removed:
        embed = Embed(
            title="🗑️ Registration Removed",
            description=f"<@{user_id}> is no longer linked to a PUBG player.",
            color=COLOR_SUCCESS,
            footer=footer(),
        )
    else:
        embed = Embed(
            title="🗑️ Nothing to Remove",
            description="You are not registered. Use `/register` to set up your profile!",
            color=COLOR_WARNING,
            footer=footer(),
        )
    return message(embed, ephemeral=True)


# ——— Profile ———


def profile_not_registered(user_id: str) -> InteractionResponse:
    embed = Embed(
        title=PROFILE_TITLE,
        description=f"Profile for <@{user_id}>",
        color=COLOR_ERROR,
        fields=[
            EmbedField(
                name="📊 Status",
                value="Not registered yet. Use `/register` to set up your profile!",
            )
        ],
    )
    return message(embed)


def profile(
    user_id: str,
    record: PlayerRecord,
    profile_found: bool,
    clan: ClanInfo | ApiError | None = None,
) -> InteractionResponse:
    """
    Profile embed for a registered user.

    Clan details are only shown when the player lookup succeeded; a clan that
    could not be fetched is silently left out.
    """
    fields = [
        EmbedField(name="🆔 Player ID", value=record.player_id, inline=True),
        EmbedField(name="🎮 Player Name", value=record.player_name or "Unknown", inline=True),
    ]

    if profile_found:
        if isinstance(clan, ClanInfo):
            fields.extend(
                [
                    EmbedField(
                        name="👥 Clan Name", value=f"{clan.name} [{clan.tag}]", inline=True
                    ),
                    EmbedField(name="🆔 Clan ID", value=clan.id, inline=True),
                    EmbedField(name="⭐ Clan Level", value=f"Level {clan.level}", inline=True),
                    EmbedField(
                        name="👥 Members", value=f"{clan.member_count} members", inline=True
                    ),
                ]
            )
        elif not record.clan_id:
            fields.append(EmbedField(name="🏆 Clan", value="No clan", inline=True))

    embed = Embed(
        title=PROFILE_TITLE,
        description=f"Profile for <@{user_id}>",
        color=COLOR_SUCCESS,
        fields=fields,
        footer=footer(),
    )
    return message(embed)


# ——— Match statistics ———


def stats_not_registered(user_id: str) -> InteractionResponse:
    embed = Embed(
        title=STATS_TITLE,
        description=f"Statistics for <@{user_id}>",
        color=COLOR_ERROR,
        fields=[
            EmbedField(
                name="⚠️ Not Registered",
                value="You need to register first! Use `/register` to set up your profile.",
            )
        ],
    )
    return message(embed)


def stats_failed(record: PlayerRecord, error: ApiError) -> InteractionResponse:
    embed = Embed(
        title="❌ Failed to Fetch Statistics",
        description=f"Could not retrieve match data for **{record.player_name}**",
        color=COLOR_ERROR,
        fields=[EmbedField(name="Error", value=error.message)],
    )
    return message(embed)


def no_recent_matches(record: PlayerRecord) -> InteractionResponse:
    embed = Embed(
        title=STATS_TITLE,
        description=f"Statistics for **{record.player_name}**",
        color=COLOR_WARNING,
        fields=[
            EmbedField(
                name="⚠️ No Recent Matches",
                value="No recent match data found. Play some games and try again!",
            )
        ],
    )
    return message(embed)


def rank_text(team_rank: int | None) -> str:
    if not team_rank:
        return "❓ Rank Unknown"
    medal = RANK_MEDALS.get(team_rank, DEFAULT_RANK_MEDAL)
    return f"{medal} Rank #{team_rank}"


def match_date(stat: MatchStat) -> str:
    if stat.created_at is None:
        return "Unknown date"
    created = stat.created_at
    return f"{created:%b} {created.day}, {created:%I:%M %p}"


def match_stats(
    record: PlayerRecord, stats: list[MatchStat], totals: AggregateStats
) -> InteractionResponse:
    fields: list[EmbedField] = []

    for index, stat in enumerate(stats):
        fields.append(
            EmbedField(
                name=f"🎮 Match {index + 1} - {stat.game_mode}",
                value=(
                    f"📍 {get_map_display_name(stat.map_name)} • 🕐 {match_date(stat)}\n"
                    f"{rank_text(stat.team_rank)}"
                ),
            )
        )
        fields.extend(
            [
                EmbedField(name="💥 Damage", value=f"{round(stat.damage_dealt)}", inline=True),
                EmbedField(name="💊 Revives", value=f"{stat.revives}", inline=True),
                EmbedField(name="💀 Kills", value=f"{stat.kills}", inline=True),
            ]
        )
        if index < len(stats) - 1:
            fields.append(EmbedField(name=SPACER, value=SPACER))

    fields.extend(
        [
            EmbedField(
                name=f"📈 Total Statistics ({totals.matches} Matches)",
                value="━━━━━━━━━━━━━━━━━━━━",
            ),
            EmbedField(
                name="💥 Total Damage", value=f"**{round(totals.damage_dealt)}**", inline=True
            ),
            EmbedField(name="💊 Total Revives", value=f"**{totals.revives}**", inline=True),
            EmbedField(name="💀 Total Kills", value=f"**{totals.kills}**", inline=True),
        ]
    )

    embed = Embed(
        title=STATS_TITLE,
        description=f"Recent performance for **{record.player_name}**",
        color=COLOR_INFO,
        fields=fields,
        footer=EmbedFooter(text=f"Statistics based on {len(stats)} most recent matches"),
    )
    return message(embed)


# ——— Failures ———


def generic_failure() -> InteractionResponse:
    embed = Embed(
        title="❌ Something went wrong",
        description="The bot could not complete this request. Please try again later.",
        color=COLOR_ERROR,
        footer=footer(),
    )
    return message(embed, ephemeral=True)
