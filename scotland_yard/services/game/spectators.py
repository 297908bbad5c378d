"""Spectator registration and event fan-out."""

import logging
from collections.abc import Callable, Iterable
from typing import Protocol

from scotland_yard.schemas.game_engine import AnyMove, Colour

from .engine.events import AnyGameEvent, GameEnded, GameEvent, MoveMade, RoundStarted
from .errors import ProtocolViolation

logger = logging.getLogger(__name__)


class Spectator(Protocol):
    def on_round_started(self, round_number: int) -> None: ...

    def on_move_made(self, move: AnyMove) -> None: ...

    def on_rotation_complete(self) -> None: ...

    def on_game_over(self, winners: set[Colour]) -> None: ...


# Type alias for dispatcher functions
DispatchFunc = Callable[[Spectator, GameEvent], None]

# Dispatcher registry: maps event_type to the spectator callback invoker
_dispatchers: dict[str, DispatchFunc] = {}


def dispatcher(event_type: str) -> Callable[[DispatchFunc], DispatchFunc]:
    """Decorator to register how an event type reaches a spectator.

    Usage:
        @dispatcher("round_started")
        def _round_started(spectator: Spectator, event: RoundStarted) -> None:
            ...
    """

    def decorator(func: DispatchFunc) -> DispatchFunc:
        if event_type in _dispatchers:
            logger.warning("Overwriting existing dispatcher for %s", event_type)
        _dispatchers[event_type] = func
        logger.debug("Registered dispatcher for %s: %s", event_type, func.__name__)
        return func

    return decorator


@dispatcher("round_started")
def _round_started(spectator: Spectator, event: RoundStarted) -> None:
    spectator.on_round_started(event.round_number)


@dispatcher("move_made")
def _move_made(spectator: Spectator, event: MoveMade) -> None:
    spectator.on_move_made(event.move)


@dispatcher("rotation_completed")
def _rotation_completed(spectator: Spectator, event: GameEvent) -> None:
    spectator.on_rotation_complete()


@dispatcher("game_ended")
def _game_ended(spectator: Spectator, event: GameEnded) -> None:
    spectator.on_game_over(set(event.winners))


class SpectatorRegistry:
    """Spectators watching one game, notified in registration order."""

    def __init__(self) -> None:
        self._spectators: list[Spectator] = []

    def register(self, spectator: Spectator) -> None:
        if spectator is None:
            raise ProtocolViolation("NULL_SPECTATOR", "Spectator is missing")
        if any(s is spectator for s in self._spectators):
            logger.warning("Rejected duplicate spectator registration: %r", spectator)
            raise ProtocolViolation("DUPLICATE_SPECTATOR", "Spectator is already registered")
        self._spectators.append(spectator)
        logger.info("Spectator registered: total=%d", len(self._spectators))

    def unregister(self, spectator: Spectator) -> None:
        if spectator is None:
            raise ProtocolViolation("NULL_SPECTATOR", "Spectator is missing")
        for index, registered in enumerate(self._spectators):
            if registered is spectator:
                del self._spectators[index]
                logger.info("Spectator unregistered: total=%d", len(self._spectators))
                return
        logger.warning("Rejected unregistration of unknown spectator: %r", spectator)
        raise ProtocolViolation("UNKNOWN_SPECTATOR", "Spectator is not registered")

    def snapshot(self) -> tuple[Spectator, ...]:
        return tuple(self._spectators)

    def notify(self, events: Iterable[AnyGameEvent]) -> None:
        """Deliver events in order.

        Each event goes to the spectators registered when its delivery starts,
        so callbacks may register or unregister spectators safely.
        """
        for event in events:
            dispatch = _dispatchers.get(event.event_type)
            if dispatch is None:
                logger.error("No dispatcher registered for event type %s", event.event_type)
                continue
            spectators = self.snapshot()
            logger.debug(
                "Notifying spectators: event=%s, seq=%d, spectators=%d",
                event.event_type,
                event.seq,
                len(spectators),
            )
            for spectator in spectators:
                dispatch(spectator, event)

    def __len__(self) -> int:
        return len(self._spectators)
