"""What the table is allowed to know about Mister X's whereabouts.

Mister X's true location is always available on the state for capture checks.
The functions here decide which location may be reported to spectators and
agents: the true one on reveal rounds, otherwise the last revealed one, or the
sentinel location while he has never been seen.
"""

import logging

logger = logging.getLogger(__name__)

from scotland_yard.schemas.game_engine import (
    SENTINEL_LOCATION,
    Colour,
    DoubleMove,
    GameState,
)


def is_reveal_round(state: GameState, round_number: int) -> bool:
    """Whether the given 1-based round shows Mister X's location."""
    if round_number < 1 or round_number > len(state.rounds):
        return False
    return state.rounds[round_number - 1]


def reveal_if_due(state: GameState) -> GameState:
    """Record Mister X's location as known if the round just played reveals him."""
    if not is_reveal_round(state, state.current_round):
        return state

    logger.info(
        "Mister X revealed: round=%d, location=%d",
        state.current_round,
        state.fugitive_location,
    )
    return state.model_copy(
        update={
            "fugitive_last_known_location": state.fugitive_location,
            "fugitive_revealed": True,
        }
    )


def _last_disclosed(state: GameState) -> int:
    if not state.fugitive_revealed:
        return SENTINEL_LOCATION
    return state.fugitive_last_known_location


def get_reportable_fugitive_location(state: GameState) -> int:
    """Location of Mister X that may be shown to everyone right now."""
    if state.current_round == 0:
        return SENTINEL_LOCATION
    if is_reveal_round(state, state.current_round):
        return state.fugitive_location
    return _last_disclosed(state)


def get_player_location(state: GameState, colour: Colour) -> int | None:
    """Public location of a player; detectives are always visible.

    Returns None if no player has the given colour.
    """
    player = state.get_player(colour)
    if player is None:
        return None
    if player.is_mrx:
        return get_reportable_fugitive_location(state)
    return player.location


def plan_double_disclosure(state: GameState, move: DoubleMove) -> tuple[int, int]:
    """Locations to report for each leg of a double move, before it is applied.

    Each leg shows its true destination when its round is a reveal round and
    otherwise the last location disclosed by then, which includes a reveal by
    the first leg. With nothing ever disclosed the sentinel location is shown.
    """
    first_round = state.current_round + 1
    second_round = state.current_round + 2

    known = _last_disclosed(state)

    if is_reveal_round(state, first_round):
        first_location = move.first_move.destination
        known = first_location
    else:
        first_location = known

    if is_reveal_round(state, second_round):
        second_location = move.second_move.destination
    else:
        second_location = known

    logger.debug(
        "Double move disclosure: rounds=(%d, %d), shown=(%d, %d)",
        first_round,
        second_round,
        first_location,
        second_location,
    )
    return first_location, second_location
