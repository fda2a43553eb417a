"""Tests for the BinTopology lookup tables."""

import numpy as np
import pytest

from octavescope.config import SpectrumConfig
from octavescope.core.topology import BinTopology
from octavescope.errors import ConfigurationError


class TestPartition:
    """Octave ranges must tile [0, N) exactly."""

    @pytest.mark.parametrize(
        "n_bins,n_octaves",
        [(768, 8), (96, 8), (100, 7), (8, 8), (1000, 3), (1, 1)],
    )
    def test_partition_complete(self, n_bins, n_octaves):
        topo = BinTopology(n_bins, n_octaves)

        covered = np.concatenate(
            [np.arange(topo.bottom_bin(o), topo.top_bin(o) + 1) for o in range(n_octaves)]
        )
        np.testing.assert_array_equal(covered, np.arange(n_bins))

        for o in range(n_octaves):
            assert topo.bottom_bin(o) <= topo.top_bin(o)
            if o < n_octaves - 1:
                assert topo.top_bin(o) + 1 == topo.bottom_bin(o + 1)

    def test_even_split(self, topology):
        """768 bins over 8 octaves gives 96 bins each."""
        assert all(topology.bins_in_octave(o) == 96 for o in range(8))
        assert topology.bottom_bin(4) == 384
        assert topology.top_bin(4) == 479

    def test_octave_of_bin_matches_ranges(self, topology):
        for o in range(topology.octave_count):
            for b in topology.octave_bins(o):
                assert topology.octave(b) == o


class TestAngularFraction:
    def test_range(self, topology):
        theta = topology.angular_fraction
        assert theta.min() == 0.0
        assert theta.max() < 1.0

    def test_formula(self, topology):
        o = topology.octave(400)
        expected = (400 - topology.bottom_bin(o)) / (topology.top_bin(o) - topology.bottom_bin(o) + 1)
        assert topology.angular_fraction_of(400) == expected
        assert expected == 16 / 96

    def test_octave_boundaries_restart_at_zero(self, topology):
        """The bin after each octave's top is the next octave's bottom, at theta 0."""
        for o in range(topology.octave_count - 1):
            next_bin = topology.top_bin(o) + 1
            assert next_bin == topology.bottom_bin(o + 1)
            assert topology.angular_fraction_of(next_bin) == 0.0
            assert topology.angular_fraction_of(next_bin) == topology.angular_fraction_of(
                topology.bottom_bin(o + 1)
            )

    def test_increases_within_octave(self, topology):
        for o in range(topology.octave_count):
            bins = np.array(topology.octave_bins(o))
            assert np.all(np.diff(topology.angular_fraction[bins]) > 0)

    def test_trig_tables(self, topology):
        angle = 2 * np.pi * topology.angular_fraction
        np.testing.assert_allclose(topology.sin_table, np.sin(angle))
        np.testing.assert_allclose(topology.cos_table, np.cos(angle))

    def test_tables_read_only(self, topology):
        with pytest.raises(ValueError):
            topology.angular_fraction[0] = 0.5


class TestNotes:
    def test_note_of_bin(self, topology):
        """96 bins per octave, 12 notes: 8 bins per note."""
        assert topology.note_of_bin(0) == 0
        assert topology.note_of_bin(7) == 0
        assert topology.note_of_bin(8) == 1
        assert topology.note_of_bin(95) == 11
        assert topology.note_of_bin(96) == 0


class TestConfigurationErrors:
    @pytest.mark.parametrize(
        "n_bins,n_octaves,n_notes",
        [(0, 8, 12), (768, 0, 12), (768, 8, 0), (-1, 8, 12), (4, 8, 12)],
    )
    def test_invalid_constants_fail_fast(self, n_bins, n_octaves, n_notes):
        with pytest.raises(ConfigurationError):
            BinTopology(n_bins, n_octaves, n_notes)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            BinTopology(0, 8)

    def test_from_config(self):
        topo = BinTopology.from_config(SpectrumConfig(bin_count=384, octave_count=4))
        assert topo.bin_count == 384
        assert topo.bins_in_octave(0) == 96

    def test_from_config_validates(self):
        with pytest.raises(ConfigurationError):
            BinTopology.from_config(SpectrumConfig(sample_rate=0.0))

    def test_index_errors(self, topology):
        with pytest.raises(IndexError):
            topology.octave(768)
        with pytest.raises(IndexError):
            topology.bottom_bin(8)
