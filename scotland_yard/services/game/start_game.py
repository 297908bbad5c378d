import logging
from collections.abc import Sequence

from scotland_yard.config import Settings
from scotland_yard.schemas.game_engine import (
    DEFAULT_DETECTIVE_TICKETS,
    DEFAULT_MRX_TICKETS,
    Colour,
    GamePhase,
    GameState,
    Player,
    PlayerConfiguration,
    Ticket,
)

from .engine.tickets import validate_ticket_set
from .engine.win import settle_game_over
from .errors import ConfigurationError
from .graph import GraphProvider

logger = logging.getLogger(__name__)


def validate_game_settings(
    rounds: Sequence[bool],
    graph: GraphProvider,
    mrx: PlayerConfiguration,
    detectives: Sequence[PlayerConfiguration],
) -> None:
    """Validate the game setup before initializing a game."""
    if not rounds:
        raise ConfigurationError("Empty rounds")
    if graph is None or graph.is_empty():
        raise ConfigurationError("Empty graph")
    if mrx is None:
        raise ConfigurationError("Mister X configuration is required")
    if not detectives or any(d is None for d in detectives):
        raise ConfigurationError("At least one detective configuration is required")

    if not mrx.colour.is_mrx:
        raise ConfigurationError("Mister X should be black")
    for detective in detectives:
        if detective.colour.is_mrx:
            raise ConfigurationError("Detective should not be black")

    # Ensure each player has a unique colour and starting location
    colours: set[Colour] = set()
    locations: set[int] = set()
    for config in (mrx, *detectives):
        if config.colour in colours:
            raise ConfigurationError(f"Duplicate colour found: {config.colour.value}")
        if config.location in locations:
            raise ConfigurationError(f"Duplicate location found: {config.location}")
        colours.add(config.colour)
        locations.add(config.location)
        validate_ticket_set(config.colour, config.tickets)


def _initialize_players(
    mrx: PlayerConfiguration, detectives: Sequence[PlayerConfiguration]
) -> list[Player]:
    """Create players in rotation order: Mister X first, then detectives as configured."""
    return [
        Player(
            colour=config.colour,
            location=config.location,
            tickets=dict(config.tickets),
            turn_order=index,
        )
        for index, config in enumerate((mrx, *detectives))
    ]


def initialize_game(
    rounds: Sequence[bool],
    graph: GraphProvider,
    mrx: PlayerConfiguration,
    detectives: Sequence[PlayerConfiguration],
) -> GameState:
    """
    Validate the setup and return an initialized GameState.

    Args:
        rounds: Reveal schedule, one entry per round; True reveals Mister X.
        graph: Transport graph the game is played on.
        mrx: Configuration for Mister X.
        detectives: Configurations for the detectives, in turn order.

    Returns:
        A GameState ready for the first rotation. If the setup is already
        decided (e.g. no detective has a ticket), the state is FINISHED.

    Raises:
        ConfigurationError: If the setup is invalid.
    """
    validate_game_settings(rounds, graph, mrx, detectives)

    state = GameState(
        phase=GamePhase.NOT_STARTED,
        players=_initialize_players(mrx, detectives),
        rounds=list(rounds),
    )
    logger.info(
        "Game initialized: detectives=%d, rounds=%d, reveal_rounds=%s",
        len(detectives),
        len(rounds),
        [i + 1 for i, reveal in enumerate(rounds) if reveal],
    )
    return settle_game_over(state)


def build_round_schedule(total_rounds: int, reveal_rounds: Sequence[int]) -> list[bool]:
    """Build a reveal schedule from the 1-based numbers of the reveal rounds."""
    if total_rounds < 1:
        raise ConfigurationError("A game needs at least one round")
    for round_number in reveal_rounds:
        if not 1 <= round_number <= total_rounds:
            raise ConfigurationError(
                f"Reveal round {round_number} outside 1..{total_rounds}"
            )
    reveal = set(reveal_rounds)
    return [round_number in reveal for round_number in range(1, total_rounds + 1)]


def default_round_schedule(settings: Settings) -> list[bool]:
    """The schedule configured in settings (classic board: 24 rounds)."""
    return build_round_schedule(settings.DEFAULT_ROUND_COUNT, settings.DEFAULT_REVEAL_ROUNDS)


def default_tickets(colour: Colour) -> dict[Ticket, int]:
    """Standard starting tickets for a player of the given colour."""
    if colour.is_mrx:
        return dict(DEFAULT_MRX_TICKETS)
    return dict(DEFAULT_DETECTIVE_TICKETS)
