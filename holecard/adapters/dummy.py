"""
Dummy adapter for the holecard engine, used for testing and simulation.

This module provides a non-interactive adapter that plays from a script of
actions and records everything it is shown.
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from holecard.adapters.base import TableAdapter
from holecard.blackjack.action import Action
from holecard.blackjack.round import RoundResult
from holecard.blackjack.view import TableView


class DummyAdapter(TableAdapter):
    """
    Dummy adapter for testing and simulation.

    Actions come from ``auto_actions`` in order, then from ``strategy_function``,
    and finally default to STAND.
    """

    def __init__(
        self,
        auto_actions: Optional[List[Action]] = None,
        strategy_function: Optional[Callable[[TableView, List[Action]], Action]] = None,
        rounds_to_play: int = 1,
        verbose: bool = False,
    ):
        """
        Initialize the dummy adapter.

        Args:
            auto_actions: Actions to take in sequence
            strategy_function: Takes (last view, valid_actions) and returns an action
            rounds_to_play: How many rounds to agree to play in total
            verbose: Whether to print views to stdout (useful for debugging)
        """
        self.auto_actions = list(auto_actions or [])
        self.strategy_function = strategy_function
        self.rounds_to_play = rounds_to_play
        self.verbose = verbose

        self.rendered_views: List[TableView] = []
        self.events: List[Dict[str, Any]] = []
        self.results: List[RoundResult] = []
        self.actions_taken: List[Action] = []
        self.initialized = False
        self.shut_down = False

    async def initialize(self) -> None:
        self.initialized = True

    async def shutdown(self) -> None:
        self.shut_down = True

    async def render_table(self, view: TableView) -> None:
        self.rendered_views.append(view)
        if self.verbose:
            print(
                f"[{view.phase.name}] dealer: {', '.join(map(str, view.dealer_cards))}"
                f" ({view.dealer_score}) | player: {', '.join(map(str, view.player_cards))}"
                f" ({view.player_score})"
            )

    async def request_player_action(self, valid_actions: List[Action]) -> Action:
        action = None
        if self.auto_actions:
            action = self.auto_actions.pop(0)
        elif self.strategy_function and self.rendered_views:
            action = self.strategy_function(self.rendered_views[-1], valid_actions)

        if action is None:
            action = Action.STAND
        if action not in valid_actions:
            raise ValueError(f"Scripted action {action} is not one of {valid_actions}")

        self.actions_taken.append(action)
        return action

    async def announce_result(self, result: RoundResult) -> None:
        self.results.append(result)
        if self.verbose:
            print(result.message)

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        name = event_type.name if isinstance(event_type, Enum) else event_type
        self.events.append({"type": name, "data": data})

    async def ask_play_again(self) -> bool:
        return len(self.results) < self.rounds_to_play
