import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from icecream import ic
from pydantic import ValidationError

from core.models.errors import ApiError
from core.models.pubg import AggregateStats, MatchRecord, MatchStat
from server.services.pubg import PubgClient

logger = logging.getLogger(__name__)


class MalformedMatchError(ValueError):
    """A match document whose participant or roster objects have the wrong shape."""


def _section(value: dict[str, Any], key: str) -> dict[str, Any]:
    """`value[key]` as a JSON object; missing or null reads as empty."""
    section = value.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise MalformedMatchError(f"'{key}' is a {type(section).__name__}, not an object")
    return section


def _participant_stats(item: dict[str, Any]) -> dict[str, Any]:
    return _section(_section(item, "attributes"), "stats")


def _roster_participant_ids(item: dict[str, Any]) -> list[str]:
    refs = _section(_section(item, "relationships"), "participants").get("data") or []
    if not isinstance(refs, list) or not all(isinstance(ref, dict) for ref in refs):
        raise MalformedMatchError("roster participants are not a list of references")
    return [ref.get("id") for ref in refs]


def _join_match_stat(match: MatchRecord, player_id: str) -> MatchStat | None:
    participant = next(
        (
            item
            for item in match.included
            if item.get("type") == "participant"
            and _participant_stats(item).get("playerId") == player_id
        ),
        None,
    )
    if participant is None:
        return None

    rosters = [item for item in match.included if item.get("type") == "roster"]
    roster = next(
        (item for item in rosters if participant.get("id") in _roster_participant_ids(item)),
        None,
    )

    team_rank = None
    team_won = False
    if roster is not None:
        roster_attributes = _section(roster, "attributes")
        team_rank = _section(roster_attributes, "stats").get("rank") or None
        # upstream sends the flag as the string "true" / "false"
        team_won = str(roster_attributes.get("won")).lower() == "true"

    stats = _participant_stats(participant)
    return MatchStat(
        match_id=match.match_id,
        game_mode=match.game_mode,
        map_name=match.map_name,
        created_at=match.created_at,
        damage_dealt=stats.get("damageDealt", 0),
        revives=stats.get("revives", 0),
        kills=stats.get("kills", 0),
        heals=stats.get("heals", 0),
        assists=stats.get("assists", 0),
        time_survived=stats.get("timeSurvived", 0),
        walk_distance=stats.get("walkDistance", 0),
        ride_distance=stats.get("rideDistance", 0),
        team_rank=team_rank,
        team_won=team_won,
    )


def extract_match_stat(match: MatchRecord, player_id: str) -> MatchStat | None:
    """
    Join one match's participant and roster objects for a single player.

    Returns None when the player has no participant entry in the match, or when
    the match's participant or roster data cannot be read.
    """
    try:
        return _join_match_stat(match, player_id)
    except ValidationError as e:
        logger.warning(
            f"Unreadable participant stats in match {match.match_id}: {e.error_count()} errors"
        )
    except MalformedMatchError as e:
        logger.warning(f"Malformed match {match.match_id}: {e}")
    return None


def summarize(stats: Iterable[MatchStat]) -> AggregateStats:
    """Totals of damage, revives and kills over a set of matches."""
    total = AggregateStats()
    for stat in stats:
        total.matches += 1
        total.damage_dealt += stat.damage_dealt
        total.revives += stat.revives
        total.kills += stat.kills
    return total


class StatsAggregator:
    """Builds per-match statistics for a player's most recent matches."""

    def __init__(self, client: PubgClient) -> None:
        self.client = client

    async def compute_recent_stats(
        self, player_id: str, shard: str | None = None, limit: int = 3
    ) -> list[MatchStat] | ApiError:
        """
        Fetch a player's latest matches and extract their stats from each.

        Matches are fetched concurrently. A match that fails to load, or in which
        the player does not appear, is left out; the rest keep the order upstream
        listed them in.

        Args:
            player_id: PUBG account id
            shard: Platform shard, the client's default when omitted
            limit: How many of the most recent matches to look at

        Returns:
            The stats in match order, or the error from the profile lookup
        """
        profile = await self.client.get_player_by_id(player_id, shard)
        if isinstance(profile, ApiError):
            return profile

        match_ids = profile.match_ids[: max(limit, 0)]
        logger.info(f"Fetching stats for {len(match_ids)} recent matches")

        results = await asyncio.gather(
            *(self.client.get_match(match_id, shard) for match_id in match_ids),
            return_exceptions=True,
        )
        ic(match_ids, [type(result).__name__ for result in results])

        stats: list[MatchStat] = []
        for match_id, result in zip(match_ids, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning(f"Failed to fetch match {match_id}: {result!r}")
                continue
            if isinstance(result, ApiError):
                logger.warning(f"Failed to fetch match {match_id}: {result.message}")
                continue

            stat = extract_match_stat(result, player_id)
            if stat is None:
                logger.warning(f"No usable stats for the player in match {match_id}")
                continue
            stats.append(stat)

        logger.info(f"Retrieved stats for {len(stats)} matches")
        return stats
