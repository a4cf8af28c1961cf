from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FakeClock:
    t: float = 0.0

    def now(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += float(dt)


@dataclass
class CyclingGenerator:
    """Deterministic sequences 0, 1, 2, 3, 0, 1, ... of the requested length."""

    calls: list[int] = field(default_factory=list)

    def next_sequence(self, length: int) -> list[int]:
        self.calls.append(length)
        return [i % 4 for i in range(length)]
