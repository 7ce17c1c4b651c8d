from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class StoredModel(BaseModel):
    """Persisted and reported with camelCase keys, used with snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlayerRegistration(StoredModel):
    player_id: str
    player_name: str | None = None
    clan_id: str | None = None


class PlayerRecord(StoredModel):
    """
    A Discord user's PUBG identity. The Discord user id is the key of the
    document entry, it is not repeated inside the record.
    """

    player_id: str
    player_name: str | None = None
    clan_id: str | None = None
    saved_at: datetime
    updated_at: datetime

    @field_validator("saved_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        """Timestamps written without an offset are read as UTC."""
        return value.replace(tzinfo=UTC) if value.tzinfo is None else value


class StoreStats(StoredModel):
    total_users: int = 0
    users_with_clans: int = 0
    users_without_clans: int = 0
    db_file_path: str = Field(default="")
