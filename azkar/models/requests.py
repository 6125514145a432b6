"""
Request models for store commands
"""

from pydantic import Field

from .base import BaseModel


class AddZekrRequest(BaseModel):
    """Request parameters for adding a phrase.

    @property text - Phrase text, sent as typed (untrimmed).
    """

    text: str


class RemoveZekrRequest(BaseModel):
    """Request parameters for removing a phrase.

    @property id - The phrase ID to remove.
    """

    id: str


class UpdateZekrRequest(BaseModel):
    """Request parameters for replacing a phrase's text.

    @property id - The phrase ID.
    @property text - New text.
    """

    id: str
    text: str


class SetIntervalRequest(BaseModel):
    """Request parameters for setting the notification interval.

    @property seconds - Interval in whole seconds (>= 1).
    """

    seconds: int = Field(ge=1)


class SetAutostartRequest(BaseModel):
    """Request parameters for enabling or disabling launch at login.

    @property enable - Desired autostart state.
    """

    enable: bool
