"""
Base adapter interface for the holecard engine.

This module defines the interface that presentation adapters must implement
to put a round on screen and collect the player's decisions.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Union

from holecard.blackjack.action import Action
from holecard.blackjack.round import RoundResult
from holecard.blackjack.view import TableView


class TableAdapter(ABC):
    """
    Base interface for presentation adapters.

    Adapters read engine state and display it; they never decide outcomes.
    A 3D table, a plain UI and the text harness each implement this interface
    and share one :class:`~holecard.blackjack.round.Round`.
    """

    async def initialize(self) -> None:
        """Prepare the adapter. The default does nothing."""
        pass

    async def shutdown(self) -> None:
        """Release adapter resources. The default does nothing."""
        pass

    @abstractmethod
    async def render_table(self, view: TableView) -> None:
        """
        Draw the table.

        Args:
            view: Snapshot of the round, hole card face-down until revealed
        """
        pass

    @abstractmethod
    async def request_player_action(self, valid_actions: List[Action]) -> Action:
        """
        Ask the player what to do.

        Args:
            valid_actions: Actions legal in the current phase

        Returns:
            The chosen action
        """
        pass

    @abstractmethod
    async def announce_result(self, result: RoundResult) -> None:
        """Tell the player how the round ended."""
        pass

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Receive a table event. Adapters that animate individual cards override this.

        Args:
            event_type: Type of the event
            data: Event payload
        """
        pass

    async def ask_play_again(self) -> bool:
        """Whether to deal another round. The default answers no."""
        return False
