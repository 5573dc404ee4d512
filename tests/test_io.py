"""Tests for trajectory I/O."""

import io

import numpy as np
import pytest

from mduniverse.errors import ResourceError
from mduniverse.io import XYZReader, XYZWriter
from mduniverse.system import Box, MDState


@pytest.fixture
def state():
    return MDState.create(
        positions=np.array([[1.0e-10, 2.0e-10, 3.0e-10], [1.5e-10, 0.0, 2.5e-9]]),
        masses=np.ones(2),
        box=Box.cubic(5e-9),
        step=7,
    )


class TestXYZWriter:
    """Test XYZ trajectory writer."""

    def test_wire_format(self, state):
        """Test the exact frame layout."""
        stream = io.StringIO()
        writer = XYZWriter(stream, ["H", "O"])
        writer.write(state, iteration=3)
        assert stream.getvalue() == (
            "2\n"
            "3\n"
            "H\t1.000000\t2.000000\t3.000000\n"
            "O\t1.500000\t0.000000\t25.000000\n"
        )
        assert writer.n_frames == 1

    def test_iteration_defaults_to_step(self, state):
        stream = io.StringIO()
        XYZWriter(stream, ["H", "O"]).write(state)
        assert stream.getvalue().splitlines()[1] == "7"

    def test_stream_not_closed(self, state):
        """Test that a caller-owned stream stays open."""
        stream = io.StringIO()
        with XYZWriter(stream, ["H", "O"]) as writer:
            writer.write(state)
        assert not stream.closed

    def test_file_round_trip(self, tmp_path, state):
        path = tmp_path / "traj.xyz"
        with XYZWriter(path, ["H", "O"]) as writer:
            writer.write(state, iteration=0)
            writer.write(state, iteration=5)

        with XYZReader(path) as reader:
            assert len(reader) == 2
            frame = reader[1]
            assert frame["iteration"] == 5
            assert frame["elements"] == ["H", "O"]
            assert np.allclose(frame["positions"][0], [1.0, 2.0, 3.0])
            assert [f["iteration"] for f in reader] == [0, 5]

    def test_flushed_per_frame(self, tmp_path, state):
        """Test that a written frame is on disk before close."""
        path = tmp_path / "traj.xyz"
        writer = XYZWriter(path, ["H", "O"])
        writer.open()
        writer.write(state)
        assert path.read_text().startswith("2\n7\n")
        writer.close()

    def test_write_without_open(self, tmp_path, state):
        writer = XYZWriter(tmp_path / "traj.xyz", ["H", "O"])
        with pytest.raises(RuntimeError):
            writer.write(state)

    def test_symbol_count_mismatch(self, state):
        with pytest.raises(ValueError):
            XYZWriter(io.StringIO(), ["H"]).write(state)

    def test_open_failure(self, tmp_path):
        writer = XYZWriter(tmp_path / "missing" / "traj.xyz", ["H"])
        with pytest.raises(ResourceError):
            writer.open()


class TestXYZReader:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ResourceError):
            XYZReader(tmp_path / "missing.xyz").open()

    def test_frame_out_of_range(self, tmp_path, state):
        path = tmp_path / "traj.xyz"
        with XYZWriter(path, ["H", "O"]) as writer:
            writer.write(state)
        with XYZReader(path) as reader:
            with pytest.raises(IndexError):
                reader.read_frame(1)
