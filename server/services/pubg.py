import logging
from typing import Any

import httpx
from pydantic import ValidationError

from core.config import Settings
from core.models.errors import ApiError, ApiErrorKind
from core.models.pubg import ClanInfo, MatchRecord, PlayerIdentity, PlayerProfile, Season

logger = logging.getLogger(__name__)

PUBG_ACCEPT = "application/vnd.api+json"


def create_http_client(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """
    Build the HTTP client the PUBG client sends its requests through.

    Args:
        settings: Application settings (API key, base URL, timeout)
        transport: Replacement transport, used by tests

    Returns:
        An `httpx.AsyncClient` the caller is responsible for closing
    """
    return httpx.AsyncClient(
        base_url=settings.pubg_base_url,
        headers={
            "Authorization": f"Bearer {settings.pubg_api_key}",
            "Accept": PUBG_ACCEPT,
        },
        timeout=settings.pubg_timeout,
        transport=transport,
    )


class PubgClient:
    """
    Async client for the PUBG API.

    Every call returns either the parsed entity or an `ApiError`; nothing here
    raises for an upstream failure.
    """

    def __init__(self, http: httpx.AsyncClient, api_key: str, default_shard: str = "steam") -> None:
        self.http = http
        self.api_key = api_key
        self.default_shard = default_shard

    async def _get(
        self, path: str, entity: str, context: str, params: dict[str, str] | None = None
    ) -> dict[str, Any] | ApiError:
        logger.info(f"PUBG API Request: GET {path}")
        try:
            response = await self.http.get(path, params=params)
        except httpx.TimeoutException:
            logger.error(f"PUBG API timed out for {context}")
            return ApiError.unreachable()
        except httpx.RequestError as e:
            logger.error(f"No response from PUBG API for {context}: {e!s}")
            return ApiError.unreachable()

        if not response.is_success:
            return self._classify(response, entity, context)

        logger.info(f"PUBG API Response: {response.status_code} {path}")
        try:
            body = response.json()
        except ValueError:
            logger.error(f"PUBG API returned a non-JSON body for {context}")
            return ApiError.malformed("Invalid response from server")

        if not isinstance(body, dict):
            return ApiError.malformed("Invalid response from server")
        return body

    @staticmethod
    def _classify(response: httpx.Response, entity: str, context: str) -> ApiError:
        status = response.status_code
        reason = response.reason_phrase

        if status == 404:
            logger.info(f"PUBG API 404 for {context}")
            return ApiError(ApiErrorKind.NOT_FOUND, f"{entity.capitalize()} not found", status)

        logger.error(f"PUBG API Error ({status}) for {context}: {reason}")
        if status == 401:
            return ApiError(ApiErrorKind.UNAUTHORIZED, "Invalid API key", status)
        if status == 429:
            return ApiError(ApiErrorKind.RATE_LIMITED, "Rate limit exceeded", status)
        if status == 415:
            return ApiError(ApiErrorKind.MALFORMED, "Unsupported media type", status)
        if status >= 500:
            return ApiError(ApiErrorKind.UNREACHABLE, f"API error: {reason}", status)
        return ApiError(ApiErrorKind.MALFORMED, f"API error: {reason}", status)

    @staticmethod
    def _malformed(context: str, error: Exception) -> ApiError:
        logger.error(f"Unexpected PUBG API payload for {context}: {error!r}")
        return ApiError.malformed("Unexpected response from server")

    # ——— Players ———

    async def find_player_by_name(
        self, name: str, shard: str | None = None
    ) -> PlayerIdentity | ApiError:
        shard = shard or self.default_shard
        logger.info(f"Searching PUBG player: {name} on {shard}")

        body = await self._get(
            f"/shards/{shard}/players",
            entity="player",
            context=name,
            params={"filter[playerNames]": name},
        )
        if isinstance(body, ApiError):
            return body

        players = body.get("data") or []
        if not players:
            logger.info(f"Player not found: {name}")
            return ApiError.not_found()

        try:
            player = players[0]
            attributes = player["attributes"]
            identity = PlayerIdentity(
                id=player["id"],
                name=attributes["name"],
                shard=attributes.get("shardId") or shard,
                patch_version=attributes.get("patchVersion"),
                clan_id=attributes.get("clanId") or None,
            )
        except (KeyError, TypeError, ValidationError) as e:
            return self._malformed(name, e)

        logger.info(f"Found player: {identity.name} (ID: {identity.id})")
        return identity

    async def get_player_by_id(
        self, player_id: str, shard: str | None = None
    ) -> PlayerProfile | ApiError:
        shard = shard or self.default_shard
        logger.info(f"Fetching player by ID: {player_id} on {shard}")

        body = await self._get(
            f"/shards/{shard}/players/{player_id}", entity="player", context=player_id
        )
        if isinstance(body, ApiError):
            return body

        try:
            player = body["data"]
            attributes = player["attributes"]
            matches = (player.get("relationships") or {}).get("matches") or {}
            return PlayerProfile(
                id=player["id"],
                name=attributes["name"],
                shard=attributes.get("shardId") or shard,
                patch_version=attributes.get("patchVersion"),
                match_ids=[match["id"] for match in matches.get("data") or []],
            )
        except (KeyError, TypeError, ValidationError) as e:
            return self._malformed(player_id, e)

    async def get_player_season_stats(
        self, player_id: str, season_id: str, shard: str | None = None
    ) -> dict[str, Any] | ApiError:
        """Raw season stats document for a player; its shape is left to the caller."""
        shard = shard or self.default_shard
        logger.info(f"Fetching season stats for player: {player_id}, season: {season_id}")
        return await self._get(
            f"/shards/{shard}/players/{player_id}/seasons/{season_id}",
            entity="season",
            context=f"{player_id}/{season_id}",
        )

    # ——— Matches ———

    async def get_match(self, match_id: str, shard: str | None = None) -> MatchRecord | ApiError:
        shard = shard or self.default_shard
        logger.info(f"Fetching match details: {match_id} on {shard}")

        body = await self._get(
            f"/shards/{shard}/matches/{match_id}", entity="match", context=match_id
        )
        if isinstance(body, ApiError):
            return body

        try:
            match = body["data"]
            attributes = match["attributes"]
            record = MatchRecord(
                match_id=match["id"],
                game_mode=attributes["gameMode"],
                map_name=attributes["mapName"],
                duration=attributes.get("duration"),
                created_at=attributes.get("createdAt"),
                included=body.get("included") or [],
            )
        except (KeyError, TypeError, ValidationError) as e:
            return self._malformed(match_id, e)

        logger.info(f"Match fetched: {record.match_id} - {record.game_mode}")
        return record

    # ——— Clans & seasons ———

    async def get_clan_info(self, clan_id: str, shard: str | None = None) -> ClanInfo | ApiError:
        shard = shard or self.default_shard
        logger.info(f"Fetching clan info: {clan_id} on {shard}")

        body = await self._get(f"/shards/{shard}/clans/{clan_id}", entity="clan", context=clan_id)
        if isinstance(body, ApiError):
            return body

        try:
            clan = body["data"]
            attributes = clan["attributes"]
            info = ClanInfo(
                id=clan["id"],
                name=attributes["clanName"],
                tag=attributes["clanTag"],
                level=attributes.get("clanLevel"),
                member_count=attributes.get("clanMemberCount"),
            )
        except (KeyError, TypeError, ValidationError) as e:
            return self._malformed(clan_id, e)

        logger.info(f"Found clan: {info.name} [{info.tag}]")
        return info

    async def get_seasons(self, shard: str | None = None) -> list[Season] | ApiError:
        shard = shard or self.default_shard
        logger.info(f"Fetching seasons for {shard}")

        body = await self._get(f"/shards/{shard}/seasons", entity="seasons", context=shard)
        if isinstance(body, ApiError):
            return body

        try:
            return [
                Season(
                    id=season["id"],
                    is_current_season=season["attributes"].get("isCurrentSeason", False),
                    is_offseason=season["attributes"].get("isOffseason", False),
                )
                for season in body["data"]
            ]
        except (KeyError, TypeError, ValidationError) as e:
            return self._malformed("seasons", e)

    # ——— Configuration ———

    def is_configured(self) -> bool:
        return bool(self.api_key and str(self.http.base_url))

    def config_status(self) -> dict[str, Any]:
        return {
            "configured": self.is_configured(),
            "hasApiKey": bool(self.api_key),
            "baseURL": str(self.http.base_url).rstrip("/"),
        }
