from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt

# Location reported for Mister X while nothing about him is known
SENTINEL_LOCATION = 0


class Colour(str, Enum):
    BLACK = "black"
    BLUE = "blue"
    GREEN = "green"
    RED = "red"
    WHITE = "white"
    YELLOW = "yellow"

    @property
    def is_mrx(self) -> bool:
        return self is Colour.BLACK

    @property
    def is_detective(self) -> bool:
        return self is not Colour.BLACK


class Transport(str, Enum):
    TAXI = "taxi"
    BUS = "bus"
    UNDERGROUND = "underground"
    FERRY = "ferry"


class Ticket(str, Enum):
    TAXI = "taxi"
    BUS = "bus"
    UNDERGROUND = "underground"
    DOUBLE = "double"
    SECRET = "secret"

    @classmethod
    def from_transport(cls, transport: Transport) -> "Ticket":
        """Ticket needed to travel along an edge of the given transport.

        Ferry crossings can only be paid for with a secret ticket.
        """
        if transport == Transport.FERRY:
            return cls.SECRET
        return cls(transport.value)


# Game phases
class GamePhase(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


DEFAULT_MRX_TICKETS: dict[Ticket, int] = {
    Ticket.TAXI: 4,
    Ticket.BUS: 3,
    Ticket.UNDERGROUND: 3,
    Ticket.DOUBLE: 2,
    Ticket.SECRET: 5,
}

DEFAULT_DETECTIVE_TICKETS: dict[Ticket, int] = {
    Ticket.TAXI: 10,
    Ticket.BUS: 8,
    Ticket.UNDERGROUND: 4,
    Ticket.DOUBLE: 0,
    Ticket.SECRET: 0,
}


# Moves - frozen so they can be collected into sets and compared structurally
class PassMove(BaseModel):
    """A detective with nowhere to go skips their turn."""

    model_config = ConfigDict(frozen=True)

    move_type: Literal["pass"] = "pass"
    colour: Colour


class TicketMove(BaseModel):
    """Travel one edge, paying with a single ticket."""

    model_config = ConfigDict(frozen=True)

    move_type: Literal["ticket"] = "ticket"
    colour: Colour
    ticket: Ticket
    destination: NonNegativeInt


class DoubleMove(BaseModel):
    """Two ticket moves played as one turn by Mister X."""

    model_config = ConfigDict(frozen=True)

    move_type: Literal["double"] = "double"
    colour: Colour
    first_move: TicketMove
    second_move: TicketMove

    @property
    def final_destination(self) -> int:
        return self.second_move.destination


AnyMove = Annotated[
    PassMove | TicketMove | DoubleMove,
    Field(discriminator="move_type"),
]


# Defined pre-initialization from the game setup
class PlayerConfiguration(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    colour: Colour
    location: PositiveInt
    tickets: dict[Ticket, NonNegativeInt]
    agent: Any = Field(default=None, exclude=True, description="Chooses this player's moves")


class Player(BaseModel):
    colour: Colour
    location: NonNegativeInt
    tickets: dict[Ticket, NonNegativeInt]
    turn_order: int

    @property
    def is_mrx(self) -> bool:
        return self.colour.is_mrx

    @property
    def is_detective(self) -> bool:
        return self.colour.is_detective


# Game state for notifying spectators and driving the game flow
class GameState(BaseModel):
    """Core game state.

    Players are kept in rotation order: index 0 is Mister X, the detectives
    follow in configuration order, and each player's turn_order is its index.
    """

    phase: GamePhase
    players: list[Player]
    rounds: list[bool]
    current_turn_order: int = 0
    current_round: int = 0  # Rounds played so far; 0 before Mister X's first move
    fugitive_last_known_location: int = SENTINEL_LOCATION
    fugitive_revealed: bool = False
    legal_moves: list[AnyMove] = []  # Most recently generated set for the acting player
    winners: set[Colour] = set()
    event_seq: int = 0  # Next sequence number for events (monotonically increasing)

    @property
    def current_player(self) -> Player:
        return self.players[self.current_turn_order]

    @property
    def fugitive(self) -> Player:
        return self.players[0]

    @property
    def fugitive_location(self) -> int:
        """Mister X's true location, used for capture checks."""
        return self.fugitive.location

    @property
    def detectives(self) -> list[Player]:
        return self.players[1:]

    @property
    def rounds_remaining(self) -> int:
        return len(self.rounds) - self.current_round

    def get_player(self, colour: Colour) -> Player | None:
        return next((p for p in self.players if p.colour == colour), None)
