"""
Table engine implementation.

This module provides the TableEngine class, which drives a
:class:`~holecard.blackjack.round.Round` on behalf of a presentation adapter:
it deals, asks the player for decisions, paces the dealer one card at a time
and announces the result. Pacing lives here, never in the round, so the
rules run at full speed under test.
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional

from holecard.adapters.base import TableAdapter
from holecard.blackjack.action import Action
from holecard.blackjack.round import DealerStep, Phase, Round, RoundResult
from holecard.common.shuffle import make_rng
from holecard.events import EngineEventType, EventEmitter, EventBus

logger = logging.getLogger("holecard.engine")

DEFAULT_CONFIG: Dict[str, Any] = {
    "seed": None,
    "step_delay": 0.0,
}


class TableEngine:
    """
    Engine that plays rounds of blackjack through a presentation adapter.

    Config keys:
        seed: Seed for a reproducible shuffle sequence (None for OS randomness)
        step_delay: Seconds to wait after each dealt card and dealer draw
    """

    def __init__(
        self,
        adapter: TableAdapter,
        config: Optional[Dict[str, Any]] = None,
        round_: Optional[Round] = None,
        emitter: Optional[EventEmitter] = None,
    ):
        """
        Initialize the table engine.

        Args:
            adapter: Adapter to use for rendering and input
            config: Configuration options, merged over DEFAULT_CONFIG
            round_: Round to drive; one is built from the config when omitted
            emitter: Event emitter shared with the round. When omitted, the given
                round's emitter, or the global bus if no round is given
        """
        self.adapter = adapter
        self.config = {**DEFAULT_CONFIG, **(config or {})}
        if self.config["step_delay"] < 0:
            raise ValueError("step_delay must not be negative")

        if emitter is not None:
            self.event_bus = emitter
        elif round_ is not None:
            self.event_bus = round_.event_bus
        else:
            self.event_bus = EventBus.get_instance()
        self.round = round_ or Round(
            rng=make_rng(self.config["seed"]), emitter=self.event_bus
        )
        self._unsubscribe = None
        self._pending_events = []

    @property
    def step_delay(self) -> float:
        return self.config["step_delay"]

    async def initialize(self) -> None:
        """Initialize the adapter and start forwarding table events to it."""
        await self.adapter.initialize()
        self._unsubscribe = self.event_bus.on_any(self._pending_events.append)
        self.event_bus.emit(
            EngineEventType.ENGINE_INIT,
            {"config": dict(self.config), "timestamp": time.time()},
        )

    async def shutdown(self) -> None:
        """Stop forwarding events and shut the adapter down."""
        self.event_bus.emit(EngineEventType.ENGINE_SHUTDOWN, {"timestamp": time.time()})
        await self._flush_events()
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None
        await self.adapter.shutdown()

    async def play_round(self) -> RoundResult:
        """
        Play one full round and return its result.
        """
        self.round.start()
        logger.debug("Dealing round %d", self.round.round_number)
        await self._render_dealing()

        while self.round.phase is Phase.PLAYER_TURN:
            action = await self.adapter.request_player_action(self.round.valid_actions())
            if action is Action.HIT:
                self.round.player_hit()
                await self._render(paced=True)
            elif action is Action.STAND:
                self.round.player_stand(auto_play=False)
                await self._render(paced=True)
            else:
                raise ValueError(f"Unsupported action: {action}")

        while self.round.phase is Phase.DEALER_TURN:
            if self.round.dealer_draw_step() is DealerStep.DREW:
                await self._render(paced=True)

        await self._render()
        result = self.round.result
        await self.adapter.announce_result(result)
        return result

    async def run(self, max_rounds: Optional[int] = None) -> int:
        """
        Play rounds until the adapter declines another or ``max_rounds`` is reached.

        Returns:
            Number of rounds played
        """
        played = 0
        await self.initialize()
        try:
            while max_rounds is None or played < max_rounds:
                await self.play_round()
                played += 1
                if max_rounds is not None and played >= max_rounds:
                    break
                if not await self.adapter.ask_play_again():
                    break
        finally:
            await self.shutdown()
        return played

    async def _render_dealing(self) -> None:
        # The opening deal reaches the adapter card by card through CARD_DEALT events
        await self._flush_events(paced=True)
        await self._render()

    async def _render(self, paced: bool = False) -> None:
        await self._flush_events()
        await self.adapter.render_table(self.round.snapshot())
        self.event_bus.emit(
            EngineEventType.UI_UPDATE_NEEDED, {"phase": self.round.phase.name}
        )
        if paced:
            await self._pause()

    async def _flush_events(self, paced: bool = False) -> None:
        while self._pending_events:
            event_type, data = self._pending_events.pop(0)
            await self.adapter.notify_game_event(event_type, data)
            if paced and event_type == EngineEventType.CARD_DEALT.name:
                await self._pause()

    async def _pause(self) -> None:
        if self.step_delay > 0:
            await asyncio.sleep(self.step_delay)
