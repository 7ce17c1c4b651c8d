from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from pydantic import ValidationError

from core.models.discord import Interaction
from server.services.handlers import CommandService
from server.services.pubg import PubgClient
from server.services.signature import SignatureVerifier
from server.services.storage import PlayerStore


def get_store(request: Request) -> PlayerStore:
    return request.app.state.store


def get_pubg_client(request: Request) -> PubgClient:
    return request.app.state.pubg_client


def get_command_service(request: Request) -> CommandService:
    return request.app.state.command_service


def get_verifier(request: Request) -> SignatureVerifier:
    return request.app.state.verifier


async def get_verified_interaction(
    request: Request,
    verifier: Annotated[SignatureVerifier, Depends(get_verifier)],
    x_signature_ed25519: Annotated[str | None, Header()] = None,
    x_signature_timestamp: Annotated[str | None, Header()] = None,
) -> Interaction:
    """
    Parses the interaction body once its Discord signature has been checked.
    """
    body = await request.body()
    if not verifier.verify(x_signature_ed25519, x_signature_timestamp, body):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Bad request signature"
        )

    try:
        return Interaction.model_validate_json(body)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid interaction payload"
        ) from e


StoreDep = Annotated[PlayerStore, Depends(get_store)]
PubgClientDep = Annotated[PubgClient, Depends(get_pubg_client)]
CommandServiceDep = Annotated[CommandService, Depends(get_command_service)]
VerifiedInteractionDep = Annotated[Interaction, Depends(get_verified_interaction)]
