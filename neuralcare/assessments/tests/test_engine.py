from __future__ import annotations

import json
import random

import pytest

from neuralcare.assessments.engine import (
    BETWEEN_LEVELS_S,
    FINAL_LEVEL,
    MAX_ERRORS,
    PendingAction,
    Phase,
    RandomSequenceGenerator,
    SequenceMemoryTest,
    round_half_up,
    sequence_length_for,
)
from neuralcare.assessments.tests.fakes import CyclingGenerator, FakeClock


def _build(**kwargs):
    clock = FakeClock()
    generator = CyclingGenerator()
    engine = SequenceMemoryTest(clock=clock, generator=generator, **kwargs)
    return clock, generator, engine


def _run_pending(clock: FakeClock, engine: SequenceMemoryTest) -> None:
    """Advance just past the pending deadline and apply it."""
    assert engine.pending is not None
    clock.t = engine.pending.due_at_s + 0.01
    engine.update()


def _reach_recall(clock: FakeClock, engine: SequenceMemoryTest) -> None:
    while not engine.accepting_input():
        _run_pending(clock, engine)


def _clear_level(clock: FakeClock, engine: SequenceMemoryTest) -> None:
    _reach_recall(clock, engine)
    for symbol in engine.sequence:
        assert engine.press(symbol) is True


def _wrong_symbol(engine: SequenceMemoryTest) -> int:
    expected = engine.sequence[len(engine.user_sequence)]
    return (expected + 1) % 4


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


def test_round_half_up_rounds_halves_away_from_even() -> None:
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(72.5) == 73
    assert round_half_up(72.49) == 72


def test_sequence_length_is_level_plus_two() -> None:
    assert [sequence_length_for(level) for level in (1, 2, 7)] == [3, 4, 9]


def test_random_generator_uses_four_symbols() -> None:
    generator = RandomSequenceGenerator(random.Random(3))
    sequence = generator.next_sequence(50)
    assert len(sequence) == 50
    assert set(sequence) <= {0, 1, 2, 3}


# ─────────────────────────────────────────────────────────────────────────────
# Intro and memorize
# ─────────────────────────────────────────────────────────────────────────────


def test_intro_snapshot() -> None:
    _, _, engine = _build()
    snap = engine.snapshot()
    assert snap.phase is Phase.INTRO
    assert snap.level == 1
    assert snap.score == 0
    assert snap.accepting_input is False
    assert snap.can_cancel is True
    assert snap.final_score is None


def test_start_plays_first_sequence_of_three() -> None:
    _, generator, engine = _build()
    assert engine.start() is True
    assert engine.phase is Phase.MEMORIZE
    assert engine.sequence == (0, 1, 2)
    assert generator.calls == [3]
    assert engine.pending.action is PendingAction.BEGIN_RECALL


def test_start_only_works_once() -> None:
    _, generator, engine = _build()
    engine.start()
    assert engine.start() is False
    assert generator.calls == [3]


def test_playback_lights_one_symbol_per_step() -> None:
    clock, _, engine = _build()
    engine.start()

    clock.t = 0.5
    assert engine.highlighted() is None  # lead-in step
    clock.t = 0.9
    assert engine.highlighted() == 0
    clock.t = 1.3
    assert engine.highlighted() is None  # pulse over
    clock.t = 1.7
    assert engine.highlighted() == 1
    clock.t = 2.5
    assert engine.highlighted() == 2
    clock.t = 3.3
    assert engine.highlighted() is None


def test_recall_begins_after_playback_and_settle() -> None:
    clock, _, engine = _build()
    engine.start()

    clock.t = 3.9
    engine.update()
    assert engine.phase is Phase.MEMORIZE

    clock.t = 4.1
    engine.update()
    assert engine.phase is Phase.RECALL
    assert engine.accepting_input() is True
    assert engine.pending is None


def test_input_refused_during_memorize() -> None:
    _, _, engine = _build()
    engine.start()
    assert engine.press(0) is False
    assert engine.user_sequence == ()


def test_press_rejects_unknown_symbol() -> None:
    clock, _, engine = _build()
    engine.start()
    _reach_recall(clock, engine)
    with pytest.raises(ValueError):
        engine.press(4)


def test_invalid_generator_output_raises() -> None:
    class ShortGenerator:
        def next_sequence(self, length: int) -> list[int]:
            return [0]

    engine = SequenceMemoryTest(clock=FakeClock(), generator=ShortGenerator())
    with pytest.raises(ValueError):
        engine.start()


# ─────────────────────────────────────────────────────────────────────────────
# Recall and scoring
# ─────────────────────────────────────────────────────────────────────────────


def test_partial_correct_input_keeps_accepting() -> None:
    clock, _, engine = _build()
    engine.start()
    _reach_recall(clock, engine)
    assert engine.press(0) is True
    assert engine.user_sequence == (0,)
    assert engine.accepting_input() is True


def test_clearing_a_level_scores_and_schedules_next_level() -> None:
    clock, generator, engine = _build()
    engine.start()
    _clear_level(clock, engine)

    assert engine.score == 100
    assert engine.level == 2
    assert engine.pending.action is PendingAction.NEXT_LEVEL
    assert engine.accepting_input() is False
    assert engine.press(0) is False  # between levels

    _run_pending(clock, engine)
    assert engine.phase is Phase.MEMORIZE
    assert len(engine.sequence) == 4
    assert generator.calls == [3, 4]


def test_update_catches_up_several_transitions() -> None:
    clock, _, engine = _build()
    engine.start()
    _clear_level(clock, engine)

    clock.advance(BETWEEN_LEVELS_S + 10.0)
    engine.update()
    assert engine.phase is Phase.RECALL
    assert engine.level == 2


def test_mistake_counts_error_and_retries_same_level() -> None:
    clock, generator, engine = _build()
    engine.start()
    _reach_recall(clock, engine)

    assert engine.press(_wrong_symbol(engine)) is True
    assert engine.errors == 1
    assert engine.level == 1
    assert engine.pending.action is PendingAction.RETRY_LEVEL

    _run_pending(clock, engine)
    assert engine.phase is Phase.MEMORIZE
    assert engine.level == 1
    assert engine.user_sequence == ()
    assert generator.calls == [3, 3]


def test_perfect_run_finishes_after_final_level() -> None:
    completed = []
    clock, _, engine = _build(on_complete=completed.append)
    engine.start()
    for _ in range(FINAL_LEVEL):
        _clear_level(clock, engine)
        if engine.phase is not Phase.RESULT:
            _run_pending(clock, engine)

    assert engine.phase is Phase.RESULT
    assert engine.score == 700
    assert engine.pending is None
    snap = engine.snapshot()
    assert snap.levels_completed == FINAL_LEVEL
    assert snap.final_score == 100

    assert engine.confirm() == 100
    assert completed == [100]
    assert engine.is_discarded


def test_three_errors_on_first_level_scores_zero() -> None:
    clock, _, engine = _build()
    engine.start()
    for _ in range(MAX_ERRORS):
        _reach_recall(clock, engine)
        engine.press(_wrong_symbol(engine))

    assert engine.phase is Phase.RESULT
    assert engine.errors == MAX_ERRORS
    assert engine.score == 0
    assert engine.confirmation_score() == 0


def test_game_over_score_rewards_levels_reached() -> None:
    clock, _, engine = _build()
    engine.start()
    _clear_level(clock, engine)
    _run_pending(clock, engine)
    for _ in range(MAX_ERRORS):
        _reach_recall(clock, engine)
        engine.press(_wrong_symbol(engine))

    # (2 - 1) * 20 + (100 / 2) * 10
    assert engine.score == 520
    assert engine.confirmation_score() == 74
    snap = engine.snapshot()
    assert snap.level_reached == 1
    assert snap.final_score == 74


def test_confirmation_score_is_capped_at_100() -> None:
    clock, _, engine = _build()
    engine.start()
    for _ in range(4):
        _clear_level(clock, engine)
        _run_pending(clock, engine)
    for _ in range(MAX_ERRORS):
        _reach_recall(clock, engine)
        engine.press(_wrong_symbol(engine))

    # 4 * 20 + (400 / 5) * 10 = 880; 880 / 7 rounds to 126
    assert engine.score == 880
    assert engine.confirmation_score() == 100


def test_confirm_outside_result_does_nothing() -> None:
    completed = []
    _, _, engine = _build(on_complete=completed.append)
    engine.start()
    assert engine.confirm() is None
    assert completed == []


# ─────────────────────────────────────────────────────────────────────────────
# Cancellation
# ─────────────────────────────────────────────────────────────────────────────


def test_cancel_refused_during_memorize() -> None:
    cancelled = []
    _, _, engine = _build(on_cancel=lambda: cancelled.append(True))
    engine.start()
    assert engine.cancel() is False
    assert cancelled == []
    assert not engine.is_discarded


def test_cancel_from_intro() -> None:
    cancelled = []
    _, _, engine = _build(on_cancel=lambda: cancelled.append(True))
    assert engine.cancel() is True
    assert cancelled == [True]
    assert engine.start() is False


def test_cancel_in_recall_stops_pending_retry() -> None:
    cancelled = []
    completed = []
    clock, generator, engine = _build(
        on_cancel=lambda: cancelled.append(True),
        on_complete=completed.append,
    )
    engine.start()
    _reach_recall(clock, engine)
    engine.press(_wrong_symbol(engine))
    assert engine.pending is not None

    assert engine.cancel() is True
    assert cancelled == [True]
    assert engine.pending is None

    clock.advance(60.0)
    engine.update()
    assert engine.phase is Phase.RECALL
    # The retry sequence was drawn when scheduled and never played.
    assert generator.calls == [3, 3]
    assert len(engine.user_sequence) == 1
    assert engine.press(0) is False
    assert engine.confirm() is None
    assert completed == []


# ─────────────────────────────────────────────────────────────────────────────
# Persistence
# ─────────────────────────────────────────────────────────────────────────────


def test_state_round_trip_resumes_playthrough() -> None:
    clock, generator, engine = _build()
    engine.start()
    _clear_level(clock, engine)

    state = json.loads(json.dumps(engine.to_state()))
    restored = SequenceMemoryTest.from_state(state, clock=clock, generator=generator)

    assert restored.snapshot() == engine.snapshot()
    _run_pending(clock, restored)
    assert restored.phase is Phase.MEMORIZE
    assert restored.level == 2


def test_restored_copies_agree_on_the_next_level_sequence() -> None:
    clock = FakeClock()
    engine = SequenceMemoryTest(clock=clock, generator=RandomSequenceGenerator(random.Random(11)))
    engine.start()
    _clear_level(clock, engine)
    state = json.loads(json.dumps(engine.to_state()))

    clock.advance(BETWEEN_LEVELS_S + 0.01)
    first = SequenceMemoryTest.from_state(state, clock=clock)
    second = SequenceMemoryTest.from_state(state, clock=clock)
    first.update()
    second.update()

    assert first.phase is Phase.MEMORIZE
    assert first.sequence == second.sequence
    assert len(first.sequence) == sequence_length_for(2)
