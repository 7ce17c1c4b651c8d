from datetime import UTC, datetime
from enum import IntEnum, IntFlag
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class InteractionType(IntEnum):
    """Kinds of inbound interaction Discord can deliver"""

    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class InteractionResponseType(IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    MODAL = 9


class InteractionResponseFlags(IntFlag):
    EPHEMERAL = 1 << 6


class MessageComponentType(IntEnum):
    ACTION_ROW = 1
    INPUT_TEXT = 4


class TextInputStyle(IntEnum):
    SHORT = 1
    PARAGRAPH = 2


# ——— Inbound ———


class DiscordUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    username: str | None = None


class GuildMember(BaseModel):
    model_config = ConfigDict(extra="ignore")

    user: DiscordUser | None = None


class SubmittedComponent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: int
    custom_id: str | None = None
    value: str | None = None
    components: list["SubmittedComponent"] = Field(default_factory=list)


class InteractionData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None
    custom_id: str | None = None
    components: list[SubmittedComponent] = Field(default_factory=list)


class Interaction(BaseModel):
    """The subset of a Discord interaction payload the bot reads."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    type: int
    data: InteractionData | None = None
    member: GuildMember | None = None
    user: DiscordUser | None = None

    @property
    def user_id(self) -> str | None:
        """Guild interactions carry the user in `member`, DMs in `user`."""
        if self.member and self.member.user:
            return self.member.user.id
        if self.user:
            return self.user.id
        return None

    def text_input(self, custom_id: str) -> str | None:
        """Value of a submitted modal text input, searched through the action rows."""
        if not self.data:
            return None

        pending = list(self.data.components)
        while pending:
            component = pending.pop(0)
            if component.custom_id == custom_id:
                return component.value
            pending.extend(component.components)
        return None


# ——— Outbound ———


class EmbedField(BaseModel):
    name: str
    value: str
    inline: bool = False


class EmbedFooter(BaseModel):
    text: str


class Embed(BaseModel):
    title: str
    description: str | None = None
    color: int
    fields: list[EmbedField] = Field(default_factory=list)
    footer: EmbedFooter | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class MessageData(BaseModel):
    embeds: list[Embed] = Field(default_factory=list)
    flags: int | None = None


class TextInput(BaseModel):
    type: Literal[MessageComponentType.INPUT_TEXT] = MessageComponentType.INPUT_TEXT
    custom_id: str
    label: str
    style: TextInputStyle = TextInputStyle.SHORT
    placeholder: str | None = None
    required: bool = True
    max_length: int | None = None


class ActionRow(BaseModel):
    type: Literal[MessageComponentType.ACTION_ROW] = MessageComponentType.ACTION_ROW
    components: list[TextInput] = Field(default_factory=list)


class ModalData(BaseModel):
    title: str
    custom_id: str
    components: list[ActionRow] = Field(default_factory=list)


class InteractionResponse(BaseModel):
    type: InteractionResponseType
    data: MessageData | ModalData | None = None

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)
