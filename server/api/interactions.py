import logging
from collections.abc import Awaitable

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from core.models.commands import CommandName, ModalId
from core.models.discord import InteractionResponse, InteractionResponseType, InteractionType
from server.api.dependencies import CommandServiceDep, VerifiedInteractionDep
from server.services import formatters

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Interactions"])


def _bad_request(error: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": error})


async def _reply(pending: Awaitable[InteractionResponse]) -> dict:
    """Await a handler; whatever goes wrong, Discord still gets an answer."""
    try:
        response = await pending
    except Exception:
        logger.exception("Interaction handler failed")
        response = formatters.generic_failure()
    return response.to_payload()


@router.post("/interactions", response_model=None)
async def interactions(
    interaction: VerifiedInteractionDep, service: CommandServiceDep
) -> dict | JSONResponse:
    """Endpoint Discord delivers every interaction to."""

    if interaction.type == InteractionType.PING:
        return InteractionResponse(type=InteractionResponseType.PONG).to_payload()

    if interaction.type == InteractionType.APPLICATION_COMMAND:
        name = interaction.data.name if interaction.data else None
        logger.info(f"Command received: {name}")
        try:
            command = CommandName(name)
        except ValueError:
            logger.error(f"unknown command: {name}")
            return _bad_request("unknown command")
        return await _reply(service.handle_command(command, interaction))

    if interaction.type == InteractionType.MODAL_SUBMIT:
        custom_id = interaction.data.custom_id if interaction.data else None
        logger.info(f"Modal submitted: {custom_id}")
        if custom_id in {modal.value for modal in ModalId}:
            return await _reply(service.handle_modal(ModalId(custom_id), interaction))

    logger.error(f"unknown interaction type {interaction.type}")
    return _bad_request("unknown interaction type")
