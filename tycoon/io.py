"""
Edges between the engine and the outside world.

The engine asks an InputProvider for human decisions and die rolls, and
pushes events one way to display sinks. Malformed answers are coerced to the
safe default (decline, pass, skip) instead of raising.
"""

import random
from abc import ABC, abstractmethod
from collections import deque
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence, TextIO

from tycoon.money import GameEvent


class PostMoveAction(Enum):
    """Actions a human player may take after moving."""

    UPGRADE = "u"
    MORTGAGE = "m"
    SKIP = "s"
    END = "e"


class InputProvider(ABC):
    """Source of die rolls and human decisions."""

    @abstractmethod
    def request_die_roll(self) -> int:
        """Return a die value in 1..6."""

    @abstractmethod
    def request_yes_no(self, prompt: str) -> bool:
        """Ask a yes/no question. Anything but a clear yes is a no."""

    @abstractmethod
    def request_bid(self, prompt: str, min_bid: int, max_bid: int) -> int:
        """Ask for a bid amount. 0 means pass."""

    @abstractmethod
    def request_property_choice(self, owned_properties: Sequence[str]) -> Optional[str]:
        """Ask which owned property to act on."""

    @abstractmethod
    def request_post_move_action(self) -> PostMoveAction:
        """Ask for the post-move action. Unknown input is SKIP."""


class RandomDice:
    """A seeded six-sided die."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random(seed)

    def __call__(self) -> int:
        return self.rng.randint(1, 6)


def parse_post_move_action(raw: Any) -> PostMoveAction:
    """Coerce free-form input to a PostMoveAction, defaulting to SKIP."""
    if isinstance(raw, PostMoveAction):
        return raw
    text = str(raw).strip().lower()[:1]
    for action in PostMoveAction:
        if action.value == text:
            return action
    return PostMoveAction.SKIP


def parse_yes_no(raw: Any) -> bool:
    """Only an explicit yes counts; anything else declines."""
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower().startswith("y")


def parse_int(raw: Any, default: int = 0) -> int:
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return default


class ConsoleInputProvider(InputProvider):
    """
    Reads answers from stdin; die rolls come from a RandomDice.

    A closed stdin reads as an empty answer, which every request maps to
    its safe default.
    """

    def __init__(self, dice: Optional[RandomDice] = None):
        self.dice = dice or RandomDice()

    def _ask(self, prompt: str) -> str:
        try:
            return input(prompt)
        except EOFError:
            return ""

    def request_die_roll(self) -> int:
        return self.dice()

    def request_yes_no(self, prompt: str) -> bool:
        return parse_yes_no(self._ask(f"{prompt} (y/n): "))

    def request_bid(self, prompt: str, min_bid: int, max_bid: int) -> int:
        return parse_int(self._ask(f"{prompt} (0 to pass, must be >= {min_bid}): "))

    def request_property_choice(self, owned_properties: Sequence[str]) -> Optional[str]:
        choice = self._ask(f"Choose a property ({', '.join(owned_properties)}): ").strip()
        return choice or None

    def request_post_move_action(self) -> PostMoveAction:
        raw = self._ask("Choose an action: (u)pgrade property, (m)ortgage property, (s)kip, (e)nd game: ")
        return parse_post_move_action(raw)


class ScriptedInputProvider(InputProvider):
    """
    Replays queued answers.

    Each request pops the next answer from its own queue. An exhausted queue
    yields the safe default (no, pass, skip); an exhausted roll queue raises,
    since a die value has no safe default.
    """

    def __init__(
        self,
        rolls: Iterable[int] = (),
        answers: Iterable[Any] = (),
        bids: Iterable[Any] = (),
        choices: Iterable[Optional[str]] = (),
        actions: Iterable[Any] = (),
    ):
        self.rolls = deque(rolls)
        self.answers = deque(answers)
        self.bids = deque(bids)
        self.choices = deque(choices)
        self.actions = deque(actions)
        self.prompts: List[str] = []

    def request_die_roll(self) -> int:
        if not self.rolls:
            raise IndexError("No scripted die rolls left")
        return self.rolls.popleft()

    def request_yes_no(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return parse_yes_no(self.answers.popleft()) if self.answers else False

    def request_bid(self, prompt: str, min_bid: int, max_bid: int) -> int:
        self.prompts.append(prompt)
        return parse_int(self.bids.popleft()) if self.bids else 0

    def request_property_choice(self, owned_properties: Sequence[str]) -> Optional[str]:
        return self.choices.popleft() if self.choices else None

    def request_post_move_action(self) -> PostMoveAction:
        if not self.actions:
            return PostMoveAction.SKIP
        return parse_post_move_action(self.actions.popleft())


class ConsoleDisplay:
    """Display sink that prints each event as a line of text."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def __call__(self, event: GameEvent) -> None:
        print(repr(event), file=self.stream)
