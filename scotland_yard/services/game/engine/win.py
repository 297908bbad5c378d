"""Game-over detection and winner calculation."""

import logging

logger = logging.getLogger(__name__)

from scotland_yard.schemas.game_engine import Colour, GamePhase, GameState

from .tickets import total_tickets


def _detective_colours(state: GameState) -> set[Colour]:
    return {p.colour for p in state.detectives}


def find_winners(state: GameState) -> set[Colour]:
    """Work out who has won, if anyone.

    Conditions are checked in order and the first match decides:
    1. All rounds played and Mister X is due to move again: Mister X wins.
    2. A detective stands on Mister X's true location: the detectives win.
    3. No detective has a ticket left: Mister X wins.
    4. Mister X is due to move after the game started and has no legal
       move: the detectives win.

    Args:
        state: Current game state. For condition 4 its legal_moves must be the
            set most recently generated for Mister X.

    Returns:
        The winning colours, or an empty set if the game continues.
    """
    mrx = state.fugitive
    mrx_to_move = state.current_player.is_mrx

    if mrx_to_move and state.current_round == len(state.rounds):
        logger.info("Win check: Mister X survived all %d rounds", len(state.rounds))
        return {mrx.colour}

    for detective in state.detectives:
        if detective.location == state.fugitive_location:
            logger.info(
                "Win check: Mister X caught by %s at %d",
                detective.colour.value,
                detective.location,
            )
            return _detective_colours(state)

    if all(total_tickets(d) == 0 for d in state.detectives):
        logger.info("Win check: detectives have run out of tickets")
        return {mrx.colour}

    if mrx_to_move and state.current_round != 0 and not state.legal_moves:
        logger.info("Win check: Mister X is stuck at %d", state.fugitive_location)
        return _detective_colours(state)

    return set()


def is_game_over(state: GameState) -> bool:
    if state.winners:
        return True
    return bool(find_winners(state))


def settle_game_over(state: GameState) -> GameState:
    """Record winners and finish the game if it is over.

    Idempotent: once winners are recorded they never change.
    """
    if state.winners:
        return state

    winners = find_winners(state)
    if not winners:
        return state

    logger.info("Game over: winners=%s", sorted(c.value for c in winners))
    return state.model_copy(update={"phase": GamePhase.FINISHED, "winners": winners})
