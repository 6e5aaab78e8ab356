"""Tests for the uniform random sources."""

import random

import numpy as np
import pytest

from py_poisson.core.alea_prng import (
    AleaPRNG,
    RandomSource,
    RandomSourceExhausted,
    RecordingRandom,
    ReplayRandom,
    uniform_range,
)


class TestAleaPRNG:
    """Test the seedable Alea generator."""

    def test_same_seed_same_sequence(self):
        """Test that identical seeds give identical sequences."""
        a = AleaPRNG("test_seed")
        b = AleaPRNG("test_seed")
        assert [a.random() for _ in range(50)] == [b.random() for _ in range(50)]

    def test_different_seeds(self):
        """Test that different seeds produce different sequences."""
        a = AleaPRNG("seed1")
        b = AleaPRNG("seed2")
        assert [a.random() for _ in range(10)] != [b.random() for _ in range(10)]

    def test_unit_interval(self):
        """Test that every value lies in [0, 1)."""
        prng = AleaPRNG(12345)
        values = np.array([prng.random() for _ in range(2000)])
        assert np.all(values >= 0.0)
        assert np.all(values < 1.0)
        # Loose uniformity check
        assert 0.4 < values.mean() < 0.6

    def test_call_count(self):
        prng = AleaPRNG("count")
        for _ in range(7):
            prng.random()
        assert prng.call_count == 7

    def test_iterable_seed(self):
        """Test that a sequence of seed parts is accepted."""
        a = AleaPRNG(["map", 42])
        b = AleaPRNG(["map", 42])
        assert a.random() == b.random()


class TestReplayRandom:
    """Test replaying recorded draws."""

    def test_replays_in_order(self):
        replay = ReplayRandom([0.1, 0.5, 0.9])
        assert [replay.random() for _ in range(3)] == [0.1, 0.5, 0.9]
        assert replay.remaining == 0

    def test_exhausted(self):
        replay = ReplayRandom([0.25])
        replay.random()
        with pytest.raises(RandomSourceExhausted):
            replay.random()

    def test_rejects_values_outside_unit_interval(self):
        with pytest.raises(ValueError):
            ReplayRandom([0.5, 1.0])

    def test_record_from_source(self):
        """Test that recording a source reproduces its sequence."""
        replay = ReplayRandom.record(AleaPRNG("rec"), 5)
        source = AleaPRNG("rec")
        assert replay.values == [source.random() for _ in range(5)]

    def test_recording_wrapper(self):
        recorder = RecordingRandom(AleaPRNG("wrap"))
        first = [recorder.random() for _ in range(4)]
        replay = recorder.replay()
        assert [replay.random() for _ in range(4)] == first


class TestRandomSourceProtocol:
    """Test which objects count as random sources."""

    @pytest.mark.parametrize("source", [
        AleaPRNG("x"),
        random.Random(1),
        np.random.default_rng(1),
        ReplayRandom([0.5]),
    ])
    def test_sources(self, source):
        assert isinstance(source, RandomSource)

    def test_uniform_range(self):
        assert uniform_range(ReplayRandom([0.5]), 10, 20) == 15
        assert uniform_range(ReplayRandom([0.0]), 40.0, 60.0) == 40.0
