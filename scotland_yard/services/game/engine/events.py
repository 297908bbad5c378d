"""Game event types - emitted during state transitions for spectators.

Events describe what happened during a move, in the order it happened:
- Spectator notification (each event maps to one spectator callback)
- Move logs with Mister X's concealment already applied
- Replay / audit logging via monotonically increasing seq numbers
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from scotland_yard.schemas.game_engine import AnyMove, Colour


class GameEvent(BaseModel):
    """Base class for all game events."""

    event_type: str
    seq: int = 0  # Sequence number assigned during processing


class RoundStarted(GameEvent):
    """Mister X has moved into a new round."""

    event_type: Literal["round_started"] = "round_started"
    round_number: int = Field(..., ge=1, description="1-based round number")


class MoveMade(GameEvent):
    """A player made a move.

    For Mister X the destinations are the locations that may be disclosed, not
    necessarily where he really is. The tickets are always the real ones.
    """

    event_type: Literal["move_made"] = "move_made"
    move: AnyMove


class RotationCompleted(GameEvent):
    """Every detective has acted since Mister X's last turn."""

    event_type: Literal["rotation_completed"] = "rotation_completed"


class GameEnded(GameEvent):
    """The game has finished."""

    event_type: Literal["game_ended"] = "game_ended"
    winners: set[Colour] = Field(..., description="Colours of the winning side")


# Union of all event types for type checking
AnyGameEvent = Annotated[
    RoundStarted | MoveMade | RotationCompleted | GameEnded,
    Field(discriminator="event_type"),
]
