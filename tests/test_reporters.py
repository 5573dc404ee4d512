"""Tests for simulation reporters."""

import io

import numpy as np
import pytest

from mduniverse.engines.reporters import (
    CallbackReporter,
    EnergyReporter,
    ReporterGroup,
    TrajectoryReporter,
)
from mduniverse.io import XYZWriter
from mduniverse.system import Box, MDState


def make_state(step):
    return MDState.create(
        positions=np.array([[1e-10, 1e-10, 1e-10]]),
        masses=np.array([2.0]),
        box=Box.cubic(1e-9),
        velocities=np.array([[1.0, 0.0, 0.0]]),
        step=step,
        time=step * 1e-15,
    )


class TestTrajectoryReporter:
    @pytest.mark.parametrize(
        "frameskip, expected",
        [(0, [0, 1, 2, 3, 4, 5, 6]), (2, [0, 3, 6]), (9, [0])],
    )
    def test_cadence(self, frameskip, expected):
        stream = io.StringIO()
        reporter = TrajectoryReporter(XYZWriter(stream, ["H"]), frameskip)
        assert reporter.frequency == frameskip + 1

        group = ReporterGroup([reporter])
        for step in range(7):
            group.report(make_state(step), iteration=step)

        iterations = [int(line) for line in stream.getvalue().splitlines()[1::3]]
        assert iterations == expected
        assert reporter.n_frames == len(expected)

    def test_initialize_restarts_countdown(self):
        stream = io.StringIO()
        reporter = TrajectoryReporter(XYZWriter(stream, ["H"]), 2)
        group = ReporterGroup([reporter])
        group.initialize(make_state(0))
        for step in range(2):
            group.report(make_state(step), iteration=step)
        group.initialize(make_state(2))
        for step in range(2, 6):
            group.report(make_state(step), iteration=step)

        iterations = [int(line) for line in stream.getvalue().splitlines()[1::3]]
        assert iterations == [0, 2, 5]

    def test_negative_frameskip(self):
        with pytest.raises(ValueError):
            TrajectoryReporter(XYZWriter(io.StringIO(), ["H"]), -1)


class TestEnergyReporter:
    def test_records(self):
        reporter = EnergyReporter(lambda state: -1.0, frequency=2)
        group = ReporterGroup()
        group.add(reporter)
        for step in range(5):
            group.report(make_state(step))

        assert reporter.steps.tolist() == [0, 2, 4]
        assert np.allclose(reporter.kinetic_energy, 1.0)
        assert np.allclose(reporter.potential_energy, -1.0)
        assert np.allclose(reporter.total_energy, 0.0)
        assert reporter.times == pytest.approx([0.0, 2e-15, 4e-15])

        reporter.clear()
        assert len(reporter.total_energy) == 0


class TestReporterGroup:
    def test_lifecycle(self):
        calls = []
        reporter = CallbackReporter(lambda state, kwargs: calls.append(kwargs))
        group = ReporterGroup()
        group.add(reporter)
        assert len(group) == 1

        group.initialize(make_state(0))
        group.report(make_state(0), iteration=0)
        group.finalize(make_state(1))
        assert calls == [{"iteration": 0}]

        group.remove(reporter)
        assert len(group) == 0
