"""Tests for windowing and depth sampling."""

import numpy as np
import pytest

from silicoprep.exceptions import ConfigurationError, InvalidDepthConfiguration
from silicoprep.simulate.fragmenter import Fragmenter
from silicoprep.simulate.models import SequenceRecord


def _expected_draws(seed: int, depth: float, window_counts: list) -> list:
    """Replay the Fragmenter's generator calls on a fresh generator."""
    rng = np.random.default_rng(seed)
    rng.poisson(depth, size=0)
    return [rng.poisson(depth, size=n) for n in window_counts]


class TestConstruction:
    """Depth and window length validation."""

    @pytest.mark.parametrize("depth", [0, 0.0, -1.0, float("nan"), float("inf"), "x"])
    def test_invalid_depth(self, depth):
        with pytest.raises(InvalidDepthConfiguration):
            Fragmenter(depth, 4)

    def test_depth_too_large_for_poisson(self):
        with pytest.raises(InvalidDepthConfiguration):
            Fragmenter(1e30, 4)

    @pytest.mark.parametrize("length", [0, -3, 1.5, "4", True])
    def test_invalid_length(self, length):
        with pytest.raises(InvalidDepthConfiguration):
            Fragmenter(5.0, length)

    def test_depth_error_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            Fragmenter(-5.0, 150)

    def test_numpy_integer_length(self):
        fragmenter = Fragmenter(5.0, np.int64(4))
        assert fragmenter.length == 4

    def test_counter_starts_at_zero(self):
        assert Fragmenter(50.0, 150).count == 0


class TestWindows:
    """Sliding windows with step 1."""

    @pytest.mark.parametrize("n,length", [(12, 4), (150, 150), (1000, 150), (5, 1)])
    def test_window_count(self, n, length):
        fragmenter = Fragmenter(1.0, length)
        windows = list(fragmenter.windows("A" * n))
        assert len(windows) == n - length + 1
        assert fragmenter.window_count(n) == n - length + 1

    @pytest.mark.parametrize("n", [0, 1, 3])
    def test_short_sequence_has_no_windows(self, n):
        fragmenter = Fragmenter(1.0, 4)
        assert list(fragmenter.windows("A" * n)) == []
        assert fragmenter.window_count(n) == 0

    def test_window_contents(self):
        fragmenter = Fragmenter(1.0, 4)
        assert list(fragmenter.windows("AAAACC")) == ["AAAA", "AAAC", "AACC"]


class TestSampling:
    """Poisson copies per window and run-wide naming."""

    def test_copies_follow_draws(self):
        seq = "AAAACCCCGGGGTTTTACGT"
        fragmenter = Fragmenter(3.0, 4, rng=np.random.default_rng(21))
        fragments = list(fragmenter.fragment(SequenceRecord(id="chr1", seq=seq)))

        (draws,) = _expected_draws(21, 3.0, [len(seq) - 3])
        expected = [seq[i:i + 4] for i, v in enumerate(draws) for _ in range(v)]

        assert [f.seq for f in fragments] == expected
        assert len(fragments) == int(draws.sum())

    def test_ids_are_sequential_across_records(self):
        records = [
            SequenceRecord(id="chr1", seq="ACGTACGTACGT"),
            SequenceRecord(id="chr2", seq="AC"),
            SequenceRecord(id="chr3", seq="TTTTGGGGCCCCAAAA"),
        ]
        fragmenter = Fragmenter(4.0, 5, rng=np.random.default_rng(8))
        fragments = [f for r in records for f in fragmenter.fragment(r)]

        draws = _expected_draws(8, 4.0, [8, 12])
        total = sum(int(d.sum()) for d in draws)

        ids = [f.id for f in fragments]
        assert len(ids) == total
        assert ids == [f"seq_{n}" for n in range(1, total + 1)]
        assert len(set(ids)) == len(ids)
        assert fragmenter.count == total

    def test_fragments_have_no_description(self):
        fragmenter = Fragmenter(5.0, 3, rng=np.random.default_rng(1))
        fragments = list(fragmenter.fragment(SequenceRecord(id="x", seq="ACGTACGT", description="d")))
        assert fragments
        assert all(f.description is None for f in fragments)
        assert all(len(f.seq) == 3 for f in fragments)

    def test_short_record_yields_nothing(self):
        fragmenter = Fragmenter(50.0, 150, rng=np.random.default_rng(1))
        record = SequenceRecord(id="chr1", seq="AAAACCCCGGGG")
        assert list(fragmenter.fragment(record)) == []
        assert fragmenter.count == 0

    def test_mean_depth(self):
        fragmenter = Fragmenter(10.0, 50, rng=np.random.default_rng(13))
        record = SequenceRecord(id="r", seq="A" * 5049)
        n = sum(1 for _ in fragmenter.fragment(record))
        assert n / 5000 == pytest.approx(10.0, abs=0.3)

    def test_sample_depth(self):
        fragmenter = Fragmenter(2.5, 10, rng=np.random.default_rng(0))
        draws = [fragmenter.sample_depth() for _ in range(2000)]
        assert all(isinstance(v, int) and v >= 0 for v in draws)
        assert np.mean(draws) == pytest.approx(2.5, abs=0.15)

    def test_next_id(self):
        fragmenter = Fragmenter(1.0, 1)
        assert fragmenter.next_id() == "seq_1"
        assert fragmenter.next_id() == "seq_2"
        assert fragmenter.count == 2
