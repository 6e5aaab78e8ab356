"""
Uniform random sources for point sampling.

The sampler only ever asks for reals in [0, 1). Anything with a
``random()`` method of that shape works: ``random.Random``, a NumPy
``Generator``, or the seedable :class:`AleaPRNG` below. :class:`ReplayRandom`
feeds back a recorded sequence of draws so a sampling run can be replayed
exactly.
"""

from typing import Iterable, List, Protocol, runtime_checkable


class RandomSourceExhausted(RuntimeError):
    """Raised when a replay source has no draws left."""


@runtime_checkable
class RandomSource(Protocol):
    """A source of uniformly distributed reals in [0, 1)."""

    def random(self) -> float:
        ...


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class _Mash:
    """Alea's string hashing function, carrying its state between calls."""

    def __init__(self):
        self.n = 0xEFC8249D

    def __call__(self, data) -> float:
        for char in str(data):
            self.n += ord(char)
            h = 0.02519603282416938 * self.n
            self.n = _uint32(h)
            h -= self.n
            h *= self.n
            self.n = _uint32(h)
            h -= self.n
            self.n += h * 0x100000000  # 2^32
        return _uint32(self.n) * 2.3283064365386963e-10  # 2^-32


class AleaPRNG:
    """
    Seedable Alea generator (Johannes Baagøe's algorithm).

    Identical seeds always produce identical sequences, which is what makes
    sampling runs reproducible in tests and between sessions.
    """

    def __init__(self, seed="default"):
        """Initialize with a seed string, number, or iterable of those."""
        self.seed = seed
        self.call_count = 0

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            args = list(seed)
        else:
            args = [seed]

        mash = _Mash()
        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        for arg in args:
            self.s0 = self._wrap(self.s0 - mash(arg))
            self.s1 = self._wrap(self.s1 - mash(arg))
            self.s2 = self._wrap(self.s2 - mash(arg))

    @staticmethod
    def _wrap(value: float) -> float:
        return value + 1 if value < 0 else value

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def __repr__(self) -> str:
        return f"AleaPRNG(seed={self.seed!r}, call_count={self.call_count})"


class ReplayRandom:
    """Replays a fixed sequence of draws, in order."""

    def __init__(self, values: Iterable[float]):
        self.values: List[float] = list(values)
        for value in self.values:
            if not 0.0 <= value < 1.0:
                raise ValueError(f"Replay value {value!r} is outside [0, 1)")
        self.call_count = 0

    @classmethod
    def record(cls, source: RandomSource, count: int) -> "ReplayRandom":
        """Draw ``count`` values from ``source`` and wrap them for replay."""
        return cls(source.random() for _ in range(count))

    @property
    def remaining(self) -> int:
        return len(self.values) - self.call_count

    def random(self) -> float:
        if self.call_count >= len(self.values):
            raise RandomSourceExhausted(
                f"Replay source exhausted after {len(self.values)} draws"
            )
        value = self.values[self.call_count]
        self.call_count += 1
        return value


class RecordingRandom:
    """Wraps another source and remembers every value it hands out."""

    def __init__(self, source: RandomSource):
        self.source = source
        self.draws: List[float] = []

    def random(self) -> float:
        value = self.source.random()
        self.draws.append(value)
        return value

    def replay(self) -> ReplayRandom:
        return ReplayRandom(self.draws)


def uniform_range(source: RandomSource, low: float, high: float) -> float:
    """Return a uniform real in [low, high) drawn from ``source``."""
    return low + source.random() * (high - low)