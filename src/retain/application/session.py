"""
Review session state machine.

The transition table is a pure function so it can be exercised without a
terminal. ``ReviewSession`` owns the position in the traversal order,
applies grades to the card set and drives a ``ReviewTerminal``.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from retain.domain.constants import (
    DEFAULT_ABORT_KEYS,
    DEFAULT_CORRECT_KEYS,
    DEFAULT_INCORRECT_KEYS,
    DEFAULT_REVEAL_KEYS,
)
from retain.domain.models import Card
from retain.domain.ports import Clock, ReviewTerminal

logger = logging.getLogger(__name__)


class State(Enum):
    PROMPT = "prompt"
    SHOW_ANSWER = "show_answer"
    DONE = "done"
    ABORTED = "aborted"

    @property
    def terminal(self) -> bool:
        return self in (State.DONE, State.ABORTED)


class Action(Enum):
    REVEAL = "reveal"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    ABORT = "abort"


@dataclass(frozen=True)
class Grade:
    """Mutation to apply to the card at ``index`` of the traversal order."""

    index: int
    correct: bool


@dataclass(frozen=True)
class Transition:
    state: State
    index: int
    grade: Grade | None = None


def transition(state: State, index: int, action: Action | None, total: int) -> Transition:
    """
    Compute the next state for one input.

    Args:
        state: Current state.
        index: Position of the current card in the traversal order.
        action: Resolved input, or None for an unrecognized key.
        total: Number of cards in the traversal order.

    Returns:
        The next state and position, plus the grade to apply if the input
        graded the current card. Unrecognized input leaves everything as is.
    """
    if state.terminal or action is None:
        return Transition(state, index)

    if action is Action.ABORT:
        return Transition(State.ABORTED, index)

    if state is State.PROMPT and action is Action.REVEAL:
        return Transition(State.SHOW_ANSWER, index)

    if state is State.SHOW_ANSWER and action in (Action.CORRECT, Action.INCORRECT):
        grade = Grade(index=index, correct=action is Action.CORRECT)
        if index + 1 < total:
            return Transition(State.PROMPT, index + 1, grade)
        return Transition(State.DONE, index, grade)

    return Transition(state, index)


@dataclass
class KeyBindings:
    """Maps raw key presses to actions, per state."""

    reveal: list[str] = field(default_factory=lambda: list(DEFAULT_REVEAL_KEYS))
    correct: list[str] = field(default_factory=lambda: list(DEFAULT_CORRECT_KEYS))
    incorrect: list[str] = field(default_factory=lambda: list(DEFAULT_INCORRECT_KEYS))
    abort: list[str] = field(default_factory=lambda: list(DEFAULT_ABORT_KEYS))

    def resolve(self, state: State, key: str) -> Action | None:
        # The same key may mean different things per state (space reveals,
        # then grades correct).
        if key in self.abort:
            return Action.ABORT
        if state is State.PROMPT and key in self.reveal:
            return Action.REVEAL
        if state is State.SHOW_ANSWER:
            if key in self.correct:
                return Action.CORRECT
            if key in self.incorrect:
                return Action.INCORRECT
        return None


@dataclass(frozen=True)
class SessionResult:
    state: State
    graded: int
    correct: int

    @property
    def completed(self) -> bool:
        return self.state is State.DONE


class ReviewSession:
    """
    One pass over a fixed traversal order.

    The card set is an arena keyed by card key; the session only stores
    keys and looks the current card up on each step.
    """

    def __init__(
        self,
        cards: dict[str, Card],
        order: Iterable[str],
        clock: Clock,
        bindings: KeyBindings | None = None,
    ):
        self.cards = cards
        self.order = list(order)
        if not self.order:
            raise ValueError("A review session needs at least one due card")
        missing = [key for key in self.order if key not in cards]
        if missing:
            raise KeyError(f"Traversal order references unknown cards: {missing}")

        self.clock = clock
        self.bindings = bindings or KeyBindings()
        self.state = State.PROMPT
        self.index = 0
        self.graded = 0
        self.correct = 0

    @property
    def current_card(self) -> Card:
        return self.cards[self.order[self.index]]

    @property
    def position(self) -> int:
        """1-based position of the current card."""
        return self.index + 1

    @property
    def total(self) -> int:
        return len(self.order)

    @property
    def finished(self) -> bool:
        return self.state.terminal

    def handle_key(self, key: str) -> Transition:
        action = self.bindings.resolve(self.state, key)
        step = transition(self.state, self.index, action, self.total)

        if step.grade is not None:
            card = self.cards[self.order[step.grade.index]]
            card.grade(step.grade.correct, self.clock())
            self.graded += 1
            self.correct += int(step.grade.correct)
            logger.debug(
                f"Graded {card.key!r} {'correct' if step.grade.correct else 'incorrect'}"
                f" -> level {card.level}"
            )

        if step.state is not self.state:
            logger.debug(f"{self.state.value} -> {step.state.value} at card {step.index + 1}")

        self.state = step.state
        self.index = step.index
        return step

    def render(self, terminal: ReviewTerminal) -> None:
        if self.state is State.PROMPT:
            terminal.render_prompt(self.current_card, self.position, self.total)
        elif self.state is State.SHOW_ANSWER:
            terminal.render_answer(self.current_card, self.position, self.total)

    def result(self) -> SessionResult:
        return SessionResult(state=self.state, graded=self.graded, correct=self.correct)

    def run(self, terminal: ReviewTerminal) -> SessionResult:
        """Render, wait for a key, apply it; repeat until done or aborted."""
        while not self.finished:
            self.render(terminal)
            self.handle_key(terminal.read_key())
        return self.result()
