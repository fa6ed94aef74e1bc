"""
This module provides the round state machine for a single-player blackjack
table. A round moves through the phases:

IDLE -> DEALING -> PLAYER_TURN -> DEALER_TURN -> RESOLVED

RESOLVED is terminal until the caller starts a new round. A player bust goes
straight from PLAYER_TURN to RESOLVED without a dealer turn.

Classes:

Phase: The phases of a round.
Outcome: Who won a resolved round.
Resolution: Why the round ended, with a message for the player.
RoundResult: The outcome together with the final scores.
RoundStatus: What every command returns: the new phase and any result.
DealerStep: What a single dealer step did.
Round: Owns the deck and both hands and is their only writer.

The round is synchronous. Pacing between cards is left to the presentation
layer, which can drive the dealer one card at a time with
:meth:`Round.dealer_draw_step`.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple

from holecard.blackjack.action import Action
from holecard.blackjack.constants import BLACKJACK, DEALER_STAND_THRESHOLD
from holecard.blackjack.hand import BlackjackHand
from holecard.blackjack.view import CardView, TableView
from holecard.common.card import Card
from holecard.common.deck import Deck, DeckExhaustedError
from holecard.common.shuffle import RandomSource, make_rng
from holecard.events import EngineEventType, EventBus, EventEmitter

logger = logging.getLogger("holecard.blackjack.round")


class RoundError(Exception):
    """Base class for commands issued to a round at the wrong time."""

    pass


class InvalidPhaseError(RoundError):
    """Raised when a command is not legal in the current phase."""

    def __init__(self, action: str, phase: "Phase"):
        super().__init__(f"Cannot {action} during {phase.name}")
        self.action = action
        self.phase = phase


class RoundAlreadyInProgressError(RoundError):
    """Raised when a round is started while another is still being played."""

    def __init__(self, phase: "Phase"):
        super().__init__(f"A round is already in progress ({phase.name})")
        self.phase = phase


class Phase(Enum):
    """
    Phases of a round.
    """

    IDLE = auto()
    DEALING = auto()
    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    RESOLVED = auto()

    @property
    def in_progress(self) -> bool:
        return self in (Phase.DEALING, Phase.PLAYER_TURN, Phase.DEALER_TURN)


class Outcome(Enum):
    PLAYER_WINS = "player_wins"
    DEALER_WINS = "dealer_wins"
    PUSH = "push"


class Resolution(Enum):
    """Why a round ended."""

    PLAYER_BUST = "player_bust"
    DEALER_BUST = "dealer_bust"
    PLAYER_HIGHER = "player_higher"
    DEALER_HIGHER = "dealer_higher"
    TIE = "tie"

    @property
    def outcome(self) -> Outcome:
        return _RESOLUTION_OUTCOMES[self]

    @property
    def message(self) -> str:
        """End-of-round message for the player."""
        return _RESOLUTION_MESSAGES[self]


_RESOLUTION_OUTCOMES = {
    Resolution.PLAYER_BUST: Outcome.DEALER_WINS,
    Resolution.DEALER_BUST: Outcome.PLAYER_WINS,
    Resolution.PLAYER_HIGHER: Outcome.PLAYER_WINS,
    Resolution.DEALER_HIGHER: Outcome.DEALER_WINS,
    Resolution.TIE: Outcome.PUSH,
}

_RESOLUTION_MESSAGES = {
    Resolution.PLAYER_BUST: "Dealer wins!",
    Resolution.DEALER_BUST: "Player wins! Dealer busts!",
    Resolution.PLAYER_HIGHER: "Player wins!",
    Resolution.DEALER_HIGHER: "Dealer wins!",
    Resolution.TIE: "Push!",
}


@dataclass(frozen=True)
class RoundResult:
    """
    The result of a resolved round.

    Attributes:
        outcome: Who won
        resolution: Why the round ended
        player_score: Final player score
        dealer_score: Final dealer score (full hand, hole card included)
    """

    outcome: Outcome
    resolution: Resolution
    player_score: int
    dealer_score: int

    @property
    def message(self) -> str:
        return self.resolution.message

    def to_dict(self):
        return {
            "outcome": self.outcome.value,
            "resolution": self.resolution.name,
            "message": self.message,
            "player_score": self.player_score,
            "dealer_score": self.dealer_score,
        }


@dataclass(frozen=True)
class RoundStatus:
    """Returned by every round command."""

    phase: Phase
    result: Optional[RoundResult] = None

    @property
    def outcome(self) -> Optional[Outcome]:
        return self.result.outcome if self.result else None


class DealerStep(Enum):
    DREW = auto()
    FINISHED = auto()


def resolve_outcome(player_score: int, dealer_score: int) -> Tuple[Outcome, Resolution]:
    """
    Decide a round from the final scores.

    >>> resolve_outcome(19, 21)
    (<Outcome.DEALER_WINS: 'dealer_wins'>, <Resolution.DEALER_HIGHER: 'dealer_higher'>)
    >>> resolve_outcome(18, 18)[0]
    <Outcome.PUSH: 'push'>
    """
    if player_score > BLACKJACK:
        resolution = Resolution.PLAYER_BUST
    elif dealer_score > BLACKJACK:
        resolution = Resolution.DEALER_BUST
    elif player_score > dealer_score:
        resolution = Resolution.PLAYER_HIGHER
    elif dealer_score > player_score:
        resolution = Resolution.DEALER_HIGHER
    else:
        resolution = Resolution.TIE
    return resolution.outcome, resolution


class Round:
    """
    A single-player blackjack round.

    The round owns one deck and two hands and is the only thing that writes to
    them. Commands (:meth:`start`, :meth:`player_hit`, :meth:`player_stand`,
    :meth:`dealer_draw_step`) run to completion and return a
    :class:`RoundStatus`. A command that is not legal in the current phase
    raises before touching any state.

    >>> from holecard.common.card import Rank, Suit
    >>> from holecard.common.shuffle import FixedOrder
    >>> order = [Card(Suit.CLUBS, Rank.TEN), Card(Suit.DIAMONDS, Rank.TEN),
    ...          Card(Suit.SPADES, Rank.ACE), Card(Suit.HEARTS, Rank.NINE)]
    >>> game = Round(deck_factory=lambda: Deck.stacked(order), rng=FixedOrder())
    >>> game.start().phase
    <Phase.PLAYER_TURN: 3>
    >>> game.dealer_score, game.player_score
    (10, 19)
    >>> game.player_stand().outcome
    <Outcome.DEALER_WINS: 'dealer_wins'>
    """

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        deck_factory: Callable[[], Deck] = Deck,
        emitter: Optional[EventEmitter] = None,
    ):
        """
        Args:
            rng: Randomness for shuffling. An OS-backed source when omitted.
            deck_factory: Builds the fresh deck for each round.
            emitter: Where table events are published. The global bus when omitted.
        """
        self._rng = rng if rng is not None else make_rng()
        self._deck_factory = deck_factory
        self.event_bus = emitter if emitter is not None else EventBus.get_instance()

        self._deck: Optional[Deck] = None
        self._player_hand = BlackjackHand()
        self._dealer_hand = BlackjackHand()
        self._phase = Phase.IDLE
        self._hole_card_revealed = False
        self._result: Optional[RoundResult] = None
        self._round_number = 0

    # Queries

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def player_hand(self) -> BlackjackHand:
        return self._player_hand

    @property
    def dealer_hand(self) -> BlackjackHand:
        return self._dealer_hand

    @property
    def deck(self) -> Optional[Deck]:
        return self._deck

    @property
    def round_number(self) -> int:
        return self._round_number

    @property
    def dealer_hole_card_revealed(self) -> bool:
        return self._hole_card_revealed

    @property
    def player_score(self) -> int:
        return self._player_hand.score()

    @property
    def dealer_score(self) -> int:
        """Dealer score as the player sees it: the up card only until the hole card is revealed."""
        if self._hole_card_revealed:
            return self._dealer_hand.score()
        return self._dealer_hand.first_card_value

    @property
    def dealer_full_score(self) -> int:
        return self._dealer_hand.score()

    @property
    def result(self) -> Optional[RoundResult]:
        return self._result

    @property
    def outcome(self) -> Optional[Outcome]:
        return self._result.outcome if self._result else None

    @property
    def status(self) -> RoundStatus:
        return RoundStatus(self._phase, self._result)

    def valid_actions(self) -> List[Action]:
        """Actions the player may take right now."""
        if self._phase is Phase.PLAYER_TURN:
            return [Action.HIT, Action.STAND]
        return []

    def dealer_card_face_up(self, index: int) -> bool:
        # Only the second dealt card (the hole card) is ever hidden
        return index != 1 or self._hole_card_revealed

    def snapshot(self) -> TableView:
        """Return an immutable view of the table."""
        return TableView(
            phase=self._phase,
            player_cards=tuple(CardView(card) for card in self._player_hand),
            dealer_cards=tuple(
                CardView(card, self.dealer_card_face_up(i))
                for i, card in enumerate(self._dealer_hand)
            ),
            player_score=self.player_score,
            dealer_score=self.dealer_score,
            dealer_hole_card_revealed=self._hole_card_revealed,
            result=self._result,
        )

    # Commands

    def start(self) -> RoundStatus:
        """
        Start a new round: fresh shuffled deck, then dealer, player, dealer, player.

        The dealer's first card is the up card and the second is the hole card.

        :raises RoundAlreadyInProgressError: If a round is being played.
        """
        if self._phase.in_progress:
            raise RoundAlreadyInProgressError(self._phase)

        deck = self._deck_factory()
        deck.shuffle(self._rng)
        # Draw all four before committing so a short deck leaves the old round intact
        opening = [deck.draw() for _ in range(4)]

        self._round_number += 1
        self._deck = deck
        self._player_hand.clear()
        self._dealer_hand.clear()
        self._hole_card_revealed = False
        self._result = None
        self._phase = Phase.DEALING

        logger.debug("Round %d started", self._round_number)
        self.event_bus.emit(
            EngineEventType.ROUND_STARTED, {"round": self._round_number}
        )
        self.event_bus.emit(EngineEventType.SHUFFLE, {"cards": deck.size + 4})

        dealer_first, player_first, dealer_second, player_second = opening
        self._deal_to_dealer(dealer_first)
        self._deal_to_player(player_first)
        self._deal_to_dealer(dealer_second)
        self._deal_to_player(player_second)

        self._phase = Phase.PLAYER_TURN
        return self.status

    def player_hit(self) -> RoundStatus:
        """
        Draw one card for the player. A bust ends the round at once with the dealer winning.

        :raises InvalidPhaseError: Outside the player's turn.
        :raises DeckExhaustedError: If the deck is empty.
        """
        self._require(Phase.PLAYER_TURN, "hit")
        card = self._deck.draw()
        self.event_bus.emit(
            EngineEventType.PLAYER_ACTION, {"action": Action.HIT.value}
        )
        self._deal_to_player(card)

        if self._player_hand.is_bust:
            logger.debug("Player busts with %d", self.player_score)
            self.event_bus.emit(
                EngineEventType.HAND_BUSTED,
                {"hand": "player", "score": self.player_score},
            )
            self._resolve()
        return self.status

    def player_stand(self, auto_play: bool = True) -> RoundStatus:
        """
        End the player's turn, reveal the hole card and hand over to the dealer.

        Args:
            auto_play: Play the dealer's whole turn before returning. When False
                the round stays in DEALER_TURN and the caller advances it with
                :meth:`dealer_draw_step`; each step is then all-or-nothing on
                its own, so a step that finds the deck empty leaves the round
                in DEALER_TURN with the hole card revealed.

        :raises InvalidPhaseError: Outside the player's turn.
        :raises DeckExhaustedError: With ``auto_play``, if the deck cannot cover
            the dealer's draws. Nothing is revealed or drawn in that case.
        """
        self._require(Phase.PLAYER_TURN, "stand")
        if auto_play:
            self._check_dealer_can_finish()
        self.event_bus.emit(
            EngineEventType.PLAYER_ACTION, {"action": Action.STAND.value}
        )
        self._hole_card_revealed = True
        self._phase = Phase.DEALER_TURN
        self.event_bus.emit(
            EngineEventType.CARD_REVEALED,
            {
                "recipient": "dealer",
                "index": 1,
                "card": self._dealer_hand.cards[1].display_key,
                "score": self.dealer_score,
            },
        )

        if auto_play:
            while self.dealer_draw_step() is DealerStep.DREW:
                pass
        return self.status

    def dealer_draw_step(self) -> DealerStep:
        """
        Advance the dealer's turn by one step.

        The dealer draws while below 17 and stands on any 17 or more. Once the
        dealer stands the round is resolved and FINISHED is returned.

        :raises InvalidPhaseError: Outside the dealer's turn.
        :raises DeckExhaustedError: If the dealer must draw from an empty deck.
        """
        self._require(Phase.DEALER_TURN, "play the dealer")

        if self._dealer_hand.score() < DEALER_STAND_THRESHOLD:
            card = self._deck.draw()
            self.event_bus.emit(
                EngineEventType.DEALER_ACTION, {"action": Action.HIT.value}
            )
            self._deal_to_dealer(card)
            return DealerStep.DREW

        if self._dealer_hand.is_bust:
            self.event_bus.emit(
                EngineEventType.HAND_BUSTED,
                {"hand": "dealer", "score": self.dealer_full_score},
            )
        else:
            self.event_bus.emit(
                EngineEventType.DEALER_ACTION, {"action": Action.STAND.value}
            )
        self._resolve()
        return DealerStep.FINISHED

    def abandon(self) -> RoundStatus:
        """Discard the current round, whatever its phase, and return to IDLE."""
        if self._phase.in_progress:
            logger.debug("Round %d abandoned in %s", self._round_number, self._phase.name)
        self._deck = None
        self._player_hand.clear()
        self._dealer_hand.clear()
        self._hole_card_revealed = False
        self._result = None
        self._phase = Phase.IDLE
        return self.status

    # Internals

    def _require(self, phase: Phase, action: str) -> None:
        if self._phase is not phase:
            raise InvalidPhaseError(action, self._phase)

    def _check_dealer_can_finish(self) -> None:
        # Replay the dealer policy against the cards left in the deck
        hand = BlackjackHand()
        for card in self._dealer_hand:
            hand.add_card(card)
        remaining = list(self._deck.cards)
        while hand.score() < DEALER_STAND_THRESHOLD:
            if not remaining:
                raise DeckExhaustedError("Not enough cards left for the dealer to finish")
            hand.add_card(remaining.pop())

    def _deal_to_player(self, card: Card) -> None:
        self._player_hand.add_card(card)
        self.event_bus.emit(
            EngineEventType.CARD_DEALT,
            {
                "recipient": "player",
                "index": len(self._player_hand) - 1,
                "card": card.display_key,
                "face_up": True,
                "score": self.player_score,
            },
        )

    def _deal_to_dealer(self, card: Card) -> None:
        self._dealer_hand.add_card(card)
        index = len(self._dealer_hand) - 1
        face_up = self.dealer_card_face_up(index)
        self.event_bus.emit(
            EngineEventType.CARD_DEALT,
            {
                "recipient": "dealer",
                "index": index,
                "card": card.display_key if face_up else None,
                "face_up": face_up,
                "score": self.dealer_score,
            },
        )

    def _resolve(self) -> None:
        player_score = self.player_score
        dealer_score = self.dealer_full_score
        outcome, resolution = resolve_outcome(player_score, dealer_score)
        self._result = RoundResult(outcome, resolution, player_score, dealer_score)
        self._phase = Phase.RESOLVED

        logger.info(
            "Round %d resolved: %s (player %d, dealer %d)",
            self._round_number,
            outcome.name,
            player_score,
            dealer_score,
        )
        self.event_bus.emit(
            EngineEventType.ROUND_ENDED,
            {"round": self._round_number, **self._result.to_dict()},
        )

    def __repr__(self) -> str:
        return f"Round(phase={self._phase.name}, round={self._round_number})"
