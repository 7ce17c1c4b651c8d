from fastapi import APIRouter

from server.api.dependencies import PubgClientDep, StoreDep

router = APIRouter(tags=["Status"])


@router.get("/status")
async def get_status(store: StoreDep, pubg_client: PubgClientDep) -> dict:
    """Registered user counts and whether the PUBG API is configured."""
    stats = await store.stats()
    return {
        "store": stats.model_dump(by_alias=True),
        "pubg": pubg_client.config_status(),
    }
