from __future__ import annotations

"""Channel identifiers.

A channel is any hashable token naming a topic. Plain strings and enum members
are the common case; ``MessageChannel`` is a declared descriptor for channels
whose payload convention is worth writing down next to the name.
"""

from collections.abc import Sized
from typing import Any, Hashable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from .errors import InvalidChannelError


class MessageChannel(BaseModel):
    """Declared channel: a name plus an optional description of its payload fields."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: Optional[str] = None
    message_fields: Tuple[str, ...] = ()

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("channel name must not be blank")
        return value

    def __str__(self) -> str:
        return self.name


def validate_channel(channel: Any) -> Hashable:
    """Return ``channel`` unchanged if it can key a registry entry, else raise.

    Blank strings and bytes, and any other empty sized token such as ``()``,
    count as missing.
    """
    if channel is None:
        raise InvalidChannelError("Channel is required")
    if isinstance(channel, (str, bytes)) and not channel.strip():
        raise InvalidChannelError("Channel name must not be empty")
    if isinstance(channel, Sized) and len(channel) == 0:
        raise InvalidChannelError("Channel must not be empty")
    try:
        hash(channel)
    except TypeError as exc:
        raise InvalidChannelError(
            f"Channel must be hashable, got {type(channel).__name__}"
        ) from exc
    return channel
