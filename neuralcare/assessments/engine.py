from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from .clock import Clock

SYMBOL_COUNT = 4
MAX_ERRORS = 3
FINAL_LEVEL = 7
POINTS_PER_LEVEL = 100

STEP_S = 0.8  # one playback step
PULSE_S = 0.4  # how long a symbol stays lit within its step
SETTLE_S = 0.8  # pause between the end of playback and recall
BETWEEN_LEVELS_S = 1.5  # pause before the next (or repeated) level


class Phase(str, Enum):
    INTRO = "intro"
    MEMORIZE = "memorize"
    RECALL = "recall"
    RESULT = "result"


class PendingAction(str, Enum):
    BEGIN_RECALL = "begin_recall"
    NEXT_LEVEL = "next_level"
    RETRY_LEVEL = "retry_level"


class SequenceGenerator(Protocol):
    """Source of the symbol sequences shown at each level."""

    def next_sequence(self, length: int) -> list[int]:
        ...


class RandomSequenceGenerator:
    """Uniform, independent draws from the four symbols."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def next_sequence(self, length: int) -> list[int]:
        return [self._rng.randrange(SYMBOL_COUNT) for _ in range(length)]


@dataclass(frozen=True, slots=True)
class ScheduledTransition:
    action: PendingAction
    due_at_s: float
    # Sequence for the level a NEXT_LEVEL/RETRY_LEVEL transition begins.
    next_sequence: tuple[int, ...] = ()


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """View model for the UI (pure data)."""

    phase: Phase
    level: int
    score: int
    errors: int
    max_errors: int
    sequence_length: int
    progress: int
    highlighted: int | None
    accepting_input: bool
    can_cancel: bool
    levels_completed: int
    level_reached: int
    final_score: int | None

    def as_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "level": self.level,
            "score": self.score,
            "errors": self.errors,
            "max_errors": self.max_errors,
            "sequence_length": self.sequence_length,
            "progress": self.progress,
            "highlighted": self.highlighted,
            "accepting_input": self.accepting_input,
            "can_cancel": self.can_cancel,
            "levels_completed": self.levels_completed,
            "level_reached": self.level_reached,
            "final_score": self.final_score,
        }


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def sequence_length_for(level: int) -> int:
    return level + 2


class SequenceMemoryTest:
    """One playthrough of the sequence-memory test: intro -> memorize <-> recall -> result.

    - Time is entirely via the injected Clock. Timed transitions are stored as
      a single pending deadline and applied by ``update()``; leaving a phase
      early drops the deadline.
    - Wrong answers are counted, never raised.
    - Once confirmed or cancelled the instance is discarded and ignores every
      further call.
    """

    def __init__(
        self,
        *,
        clock: Clock,
        generator: SequenceGenerator | None = None,
        on_complete: Callable[[int], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._clock = clock
        self._generator = generator if generator is not None else RandomSequenceGenerator()
        self._on_complete = on_complete
        self._on_cancel = on_cancel

        self._phase: Phase = Phase.INTRO
        self._level = 1
        self._sequence: list[int] = []
        self._user_sequence: list[int] = []
        self._score = 0
        self._errors = 0
        self._memorize_started_at_s: float | None = None
        self._pending: ScheduledTransition | None = None
        self._discarded = False

    # ─── read-only state ─────────────────────────────────────────────────────

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def level(self) -> int:
        return self._level

    @property
    def score(self) -> int:
        return self._score

    @property
    def errors(self) -> int:
        return self._errors

    @property
    def sequence(self) -> tuple[int, ...]:
        return tuple(self._sequence)

    @property
    def user_sequence(self) -> tuple[int, ...]:
        return tuple(self._user_sequence)

    @property
    def pending(self) -> ScheduledTransition | None:
        return self._pending

    @property
    def is_discarded(self) -> bool:
        return self._discarded

    def confirmation_score(self) -> int:
        """Score handed to ``on_complete``, on a 0..100 scale."""
        return min(100, round_half_up(self._score / FINAL_LEVEL))

    def accepting_input(self) -> bool:
        return not self._discarded and self._phase is Phase.RECALL and self._pending is None

    def can_cancel(self) -> bool:
        # Passive playback cannot be interrupted.
        return not self._discarded and self._phase in (Phase.INTRO, Phase.RECALL, Phase.RESULT)

    # ─── actions ─────────────────────────────────────────────────────────────

    def start(self) -> bool:
        """Leave the intro and play the first sequence. Returns True if started."""
        if self._discarded or self._phase is not Phase.INTRO:
            return False
        self._begin_level(self._clock.now(), self._draw_sequence(self._level))
        return True

    def update(self) -> None:
        """Apply every timed transition whose deadline has passed, in order.

        Deterministic given the stored state and the clock: sequences are drawn
        when a transition is scheduled, never here.
        """
        if self._discarded:
            return
        now = self._clock.now()
        while self._pending is not None and now >= self._pending.due_at_s:
            due = self._pending
            self._pending = None
            if due.action is PendingAction.BEGIN_RECALL:
                self._phase = Phase.RECALL
                self._memorize_started_at_s = None
            else:
                # NEXT_LEVEL and RETRY_LEVEL differ only in whether level moved on,
                # which press() has already decided.
                self._begin_level(due.due_at_s, list(due.next_sequence))

    def highlighted(self) -> int | None:
        """The symbol lit at this instant of memorize playback, if any."""
        self.update()
        if self._phase is not Phase.MEMORIZE or self._memorize_started_at_s is None:
            return None
        elapsed = self._clock.now() - self._memorize_started_at_s
        step = int(elapsed // STEP_S)
        index = step - 1
        if 0 <= index < len(self._sequence) and (elapsed - step * STEP_S) < PULSE_S:
            return self._sequence[index]
        return None

    def press(self, symbol: int) -> bool:
        """
        Submit one symbol during recall. Returns True if the input was accepted.

        Input is refused outside recall and while a transition is pending.
        """
        if not 0 <= symbol < SYMBOL_COUNT:
            raise ValueError(f"symbol must be in [0, {SYMBOL_COUNT - 1}]")
        self.update()
        if not self.accepting_input():
            return False

        self._user_sequence.append(symbol)
        position = len(self._user_sequence) - 1

        if symbol != self._sequence[position]:
            self._errors += 1
            if self._errors >= MAX_ERRORS:
                self._score = round_half_up((self._level - 1) * 20 + (self._score / self._level) * 10)
                self._finish()
            else:
                self._schedule(PendingAction.RETRY_LEVEL, BETWEEN_LEVELS_S, self._draw_sequence(self._level))
            return True

        if len(self._user_sequence) == len(self._sequence):
            cleared_level = self._level
            self._score += POINTS_PER_LEVEL
            self._level += 1
            if cleared_level >= FINAL_LEVEL:
                self._finish()
            else:
                self._schedule(PendingAction.NEXT_LEVEL, BETWEEN_LEVELS_S, self._draw_sequence(self._level))
        return True

    def confirm(self) -> int | None:
        """Hand the final score to ``on_complete`` and discard the engine."""
        self.update()
        if self._discarded or self._phase is not Phase.RESULT:
            return None
        final_score = self.confirmation_score()
        self._discarded = True
        if self._on_complete is not None:
            self._on_complete(final_score)
        return final_score

    def cancel(self) -> bool:
        """Abort the playthrough. Not available during memorize playback."""
        self.update()
        if not self.can_cancel():
            return False
        self._pending = None
        self._discarded = True
        if self._on_cancel is not None:
            self._on_cancel()
        return True

    def snapshot(self) -> GameSnapshot:
        highlighted = self.highlighted()
        in_result = self._phase is Phase.RESULT
        return GameSnapshot(
            phase=self._phase,
            level=self._level,
            score=self._score,
            errors=self._errors,
            max_errors=MAX_ERRORS,
            sequence_length=len(self._sequence),
            progress=len(self._user_sequence),
            highlighted=highlighted,
            accepting_input=self.accepting_input(),
            can_cancel=self.can_cancel(),
            levels_completed=self._level - 1,
            level_reached=self._level - (1 if self._errors >= MAX_ERRORS else 0),
            final_score=self.confirmation_score() if in_result else None,
        )

    # ─── persistence ─────────────────────────────────────────────────────────

    def to_state(self) -> dict:
        """JSON-safe representation; callbacks and collaborators are not included."""
        return {
            "phase": self._phase.value,
            "level": self._level,
            "sequence": list(self._sequence),
            "user_sequence": list(self._user_sequence),
            "score": self._score,
            "errors": self._errors,
            "memorize_started_at_s": self._memorize_started_at_s,
            "pending": (
                None
                if self._pending is None
                else {
                    "action": self._pending.action.value,
                    "due_at_s": self._pending.due_at_s,
                    "next_sequence": list(self._pending.next_sequence),
                }
            ),
            "discarded": self._discarded,
        }

    @classmethod
    def from_state(
        cls,
        state: dict,
        *,
        clock: Clock,
        generator: SequenceGenerator | None = None,
        on_complete: Callable[[int], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> "SequenceMemoryTest":
        engine = cls(clock=clock, generator=generator, on_complete=on_complete, on_cancel=on_cancel)
        engine._phase = Phase(state["phase"])
        engine._level = int(state["level"])
        engine._sequence = [int(s) for s in state["sequence"]]
        engine._user_sequence = [int(s) for s in state["user_sequence"]]
        engine._score = int(state["score"])
        engine._errors = int(state["errors"])
        engine._memorize_started_at_s = state.get("memorize_started_at_s")
        pending = state.get("pending")
        if pending is not None:
            engine._pending = ScheduledTransition(
                action=PendingAction(pending["action"]),
                due_at_s=float(pending["due_at_s"]),
                next_sequence=tuple(int(s) for s in pending.get("next_sequence", ())),
            )
        engine._discarded = bool(state.get("discarded", False))
        return engine

    # ─── internals ───────────────────────────────────────────────────────────

    def _draw_sequence(self, level: int) -> list[int]:
        length = sequence_length_for(level)
        sequence = list(self._generator.next_sequence(length))
        if len(sequence) != length or any(not 0 <= s < SYMBOL_COUNT for s in sequence):
            raise ValueError(f"generator returned an invalid sequence for length {length}: {sequence!r}")
        return sequence

    def _begin_level(self, started_at_s: float, sequence: list[int]) -> None:
        self._sequence = sequence
        self._user_sequence = []
        self._phase = Phase.MEMORIZE
        self._memorize_started_at_s = started_at_s
        playback_s = (len(sequence) + 1) * STEP_S
        self._pending = ScheduledTransition(PendingAction.BEGIN_RECALL, started_at_s + playback_s + SETTLE_S)

    def _schedule(self, action: PendingAction, delay_s: float, next_sequence: list[int]) -> None:
        # At most one transition is ever pending; a new one replaces the old.
        self._pending = ScheduledTransition(action, self._clock.now() + delay_s, tuple(next_sequence))

    def _finish(self) -> None:
        self._pending = None
        self._phase = Phase.RESULT
