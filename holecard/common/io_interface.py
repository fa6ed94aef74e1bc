"""
This module contains the IOInterface abstract base class and its implementations.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor

from holecard.blackjack.action import Action


class IOInterface(ABC):
    """
    Abstract base class for an IO interface.

    This class defines the interface for text input/output used by the
    command-line table.
    """

    @abstractmethod
    def output(self, message: str) -> None:
        """Output a message to the interface."""
        pass

    @abstractmethod
    def input(self, prompt: str) -> str:
        """Get input from the user with a prompt."""
        pass

    def get_player_action(self, valid_actions: list[Action], max_attempts: int = 3) -> Action:
        """
        Ask until the user types one of ``valid_actions``.

        :raises ValueError: After ``max_attempts`` unusable answers.
        """
        choices = "/".join(action.value for action in valid_actions)
        for _ in range(max_attempts):
            response = self.input(f"Action ({choices})? ")
            try:
                action = Action.parse(response)
            except ValueError:
                action = None
            if action in valid_actions:
                return action
            self.output(f"Invalid action, valid actions are: {choices}")
        raise ValueError("Too many invalid actions.")

    def confirm(self, prompt: str) -> bool:
        """Ask a yes/no question; anything but an answer starting with y is no."""
        return self.input(f"{prompt} [y/n] ").strip().lower().startswith("y")


class ConsoleIOInterface(IOInterface):
    """
    A console-based IO interface. Prints to stdout and reads from stdin.
    """

    def output(self, message: str) -> None:
        print(message)

    def input(self, prompt: str) -> str:
        return input(prompt)


class TestIOInterface(IOInterface):
    """
    A test IO interface for testing purposes. Collects output messages and
    replays queued input responses.
    """

    __test__ = False

    def __init__(self, responses: list[str] | None = None):
        self.sent_messages: list[str] = []
        self.prompts: list[str] = []
        self.input_responses: list[str] = list(responses or [])

    def output(self, message: str) -> None:
        self.sent_messages.append(message)

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.input_responses:
            return self.input_responses.pop(0)
        raise EOFError("No more input responses queued in TestIOInterface.")


class AsyncIOInterfaceWrapper:
    """
    A wrapper class to facilitate asynchronous execution of synchronous IO operations
    defined in an IOInterface implementation. Blocking calls such as ``input`` run
    in a worker thread so they can be awaited without stalling the event loop.
    """

    def __init__(self, io_interface: IOInterface):
        self.io_interface = io_interface
        self.executor = ThreadPoolExecutor(max_workers=1)

    async def output(self, message: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(self.executor, self.io_interface.output, message)

    async def get_player_action(self, valid_actions: list[Action]) -> Action:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self.executor, self.io_interface.get_player_action, valid_actions
        )

    async def confirm(self, prompt: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self.executor, self.io_interface.confirm, prompt
        )

    def close(self) -> None:
        self.executor.shutdown(wait=False)
