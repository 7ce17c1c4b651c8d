from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PubgModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlayerIdentity(PubgModel):
    """Result of a player search by name."""

    id: str
    name: str
    shard: str
    patch_version: str | None = None
    clan_id: str | None = None


class PlayerProfile(PubgModel):
    """A player looked up by id, with match ids in the order upstream returned them."""

    id: str
    name: str
    shard: str
    patch_version: str | None = None
    match_ids: list[str] = Field(default_factory=list)


class MatchRecord(PubgModel):
    match_id: str
    game_mode: str
    map_name: str
    duration: int | None = None
    created_at: datetime | None = None
    # participant, roster and asset objects exactly as upstream sent them
    included: list[dict[str, Any]] = Field(default_factory=list)


class ClanInfo(PubgModel):
    id: str
    name: str
    tag: str
    level: int | None = None
    member_count: int | None = None


class Season(PubgModel):
    id: str
    is_current_season: bool = False
    is_offseason: bool = False


class MatchStat(PubgModel):
    """One player's numbers for one match, joined from participant and roster data."""

    match_id: str
    game_mode: str
    map_name: str
    created_at: datetime | None = None
    damage_dealt: float = 0.0
    revives: int = 0
    kills: int = 0
    heals: int = 0
    assists: int = 0
    time_survived: float = 0.0
    walk_distance: float = 0.0
    ride_distance: float = 0.0
    team_rank: int | None = None
    team_won: bool = False


class AggregateStats(PubgModel):
    matches: int = 0
    damage_dealt: float = 0.0
    revives: int = 0
    kills: int = 0
