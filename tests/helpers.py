# tests/helpers.py

import asyncio
import json

import httpx
from nacl.signing import SigningKey


def player_search_payload(player_id: str, name: str, clan_id: str | None = None) -> dict:
    return {
        "data": [
            {
                "type": "player",
                "id": player_id,
                "attributes": {
                    "name": name,
                    "shardId": "steam",
                    "patchVersion": "",
                    "clanId": clan_id or "",
                },
            }
        ]
    }


def player_payload(player_id: str, name: str, match_ids: list[str]) -> dict:
    return {
        "data": {
            "type": "player",
            "id": player_id,
            "attributes": {"name": name, "shardId": "steam", "patchVersion": ""},
            "relationships": {
                "matches": {"data": [{"type": "match", "id": mid} for mid in match_ids]}
            },
        }
    }


def participant(participant_id: str, player_id: str, **stats) -> dict:
    base = {
        "playerId": player_id,
        "name": f"name-{player_id}",
        "damageDealt": 0,
        "revives": 0,
        "kills": 0,
        "heals": 0,
        "assists": 0,
        "timeSurvived": 0,
        "walkDistance": 0,
        "rideDistance": 0,
    }
    base.update(stats)
    return {"type": "participant", "id": participant_id, "attributes": {"stats": base}}


def roster(roster_id: str, participant_ids: list[str], rank: int | None, won: bool) -> dict:
    stats = {"teamId": 1}
    if rank is not None:
        stats["rank"] = rank
    return {
        "type": "roster",
        "id": roster_id,
        "attributes": {"stats": stats, "won": "true" if won else "false"},
        "relationships": {
            "participants": {"data": [{"type": "participant", "id": p} for p in participant_ids]}
        },
    }


def match_payload(
    match_id: str,
    included: list[dict],
    game_mode: str = "squad-fpp",
    map_name: str = "Baltic_Main",
    created_at: str = "2026-10-18T20:15:00Z",
) -> dict:
    return {
        "data": {
            "type": "match",
            "id": match_id,
            "attributes": {
                "gameMode": game_mode,
                "mapName": map_name,
                "duration": 1800,
                "createdAt": created_at,
            },
        },
        "included": included,
    }


def match_with_player(
    match_id: str, player_id: str, rank: int | None = 5, won: bool = False, **stats
) -> dict:
    """A match in which `player_id` plays in a two-man roster."""
    return match_payload(
        match_id,
        [
            participant(f"{match_id}-p1", player_id, **stats),
            participant(f"{match_id}-p2", "account.teammate"),
            participant(f"{match_id}-p3", "account.enemy"),
            roster(f"{match_id}-r1", [f"{match_id}-p1", f"{match_id}-p2"], rank, won),
            roster(f"{match_id}-r2", [f"{match_id}-p3"], 1, True),
            {"type": "asset", "id": f"{match_id}-telemetry", "attributes": {"URL": "https://x"}},
        ],
    )


class FakePubgApi:
    """
    In-memory stand-in for the PUBG API, served through `httpx.MockTransport`.

    Routes map a path to (status, json body); `delays` holds per-path sleeps so
    tests can make responses complete out of order.
    """

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, dict | None]] = {}
        self.delays: dict[str, float] = {}
        self.failures: dict[str, Exception] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, body: dict | None, status: int = 200, delay: float = 0.0) -> None:
        self.routes[path] = (status, body)
        if delay:
            self.delays[path] = delay

    def fail(self, path: str, error: Exception) -> None:
        self.failures[path] = error

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path in self.delays:
            await asyncio.sleep(self.delays[path])
        if path in self.failures:
            raise self.failures[path]
        if path not in self.routes:
            return httpx.Response(404, json={"errors": [{"title": "Not Found"}]})

        status, body = self.routes[path]
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def signed_headers(signing_key: SigningKey, body: bytes, timestamp: str = "1760900000") -> dict:
    signature = signing_key.sign(timestamp.encode() + body).signature.hex()
    return {
        "X-Signature-Ed25519": signature,
        "X-Signature-Timestamp": timestamp,
        "Content-Type": "application/json",
    }


def interaction_body(payload: dict) -> bytes:
    return json.dumps(payload).encode()
