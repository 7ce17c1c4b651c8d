from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    server_bind: str = "0.0.0.0"
    server_port: int | None = 3000
    server_debug: bool = False

    discord_app_id: str = ""
    discord_public_key: str = ""
    discord_bot_token: str = ""
    discord_api_url: str = "https://discord.com/api/v10"

    pubg_api_key: str = ""
    pubg_base_url: str = "https://api.pubg.com"
    pubg_timeout: float = 10.0
    pubg_default_shard: str = "steam"

    recent_matches_limit: int = 3
    storage_path: Path = Path("data") / "users.json"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()


def get_settings() -> Settings:
    return settings
