"""
Command-line interface adapter for the holecard engine.

This module provides a text harness for the table: it prints the table after
every change and reads the player's decisions from the console.
"""

from typing import List, Optional

from holecard.adapters.base import TableAdapter
from holecard.blackjack.action import Action
from holecard.blackjack.round import RoundResult
from holecard.blackjack.view import TableView
from holecard.common.io_interface import (
    AsyncIOInterfaceWrapper,
    ConsoleIOInterface,
    IOInterface,
)


def format_table(view: TableView) -> List[str]:
    """Render a table view as lines of text."""
    dealer_cards = ", ".join(str(card) for card in view.dealer_cards) or "-"
    player_cards = ", ".join(str(card) for card in view.player_cards) or "-"
    dealer_label = "Dealer" if view.dealer_hole_card_revealed else "Dealer shows"
    return [
        "",
        "=== Table ===",
        f"{dealer_label}: {dealer_cards} ({view.dealer_score})",
        f"Player: {player_cards} ({view.player_score})",
    ]


class CLIAdapter(TableAdapter):
    """
    Command-line interface adapter for the holecard engine.

    This adapter uses the standard console for input/output, providing a
    simple text-based interface to the game.
    """

    def __init__(self, io_interface: Optional[IOInterface] = None):
        """
        Initialize the CLI adapter.

        Args:
            io_interface: Optional IOInterface to use for I/O. If None, the console is used.
        """
        self.io_interface = io_interface if io_interface is not None else ConsoleIOInterface()
        self._io = AsyncIOInterfaceWrapper(self.io_interface)

    async def shutdown(self) -> None:
        self._io.close()

    async def render_table(self, view: TableView) -> None:
        for line in format_table(view):
            await self._io.output(line)

    async def request_player_action(self, valid_actions: List[Action]) -> Action:
        return await self._io.get_player_action(valid_actions)

    async def announce_result(self, result: RoundResult) -> None:
        await self._io.output(
            f"{result.message} (player {result.player_score}, dealer {result.dealer_score})"
        )

    async def ask_play_again(self) -> bool:
        return await self._io.confirm("Play another round?")
