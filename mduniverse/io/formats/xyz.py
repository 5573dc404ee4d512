"""XYZ-style trajectory format."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import numpy as np

from ...constants import METRES_TO_ANGSTROM
from ..base import TrajectoryReader, TrajectoryWriter

if TYPE_CHECKING:
    from ...system import MDState


class XYZWriter(TrajectoryWriter):
    """
    Trajectory writer for the engine's XYZ frames.

    Each frame is::

        <atom count>
        <iteration number>
        <symbol>\\t<x>\\t<y>\\t<z>      (one line per atom, Angstrom)

    Coordinates are written with six decimals. The stream is flushed after
    every frame so completed frames survive a later failure.
    """

    def __init__(self, target: str | Path | TextIO, symbols: Sequence[str]) -> None:
        """
        Initialize XYZ writer.

        Args:
            target: Output file path or writable text stream.
            symbols: Element symbol of each atom.
        """
        super().__init__(target)
        self.symbols = list(symbols)

    def write(self, state: MDState, iteration: int | None = None, **kwargs) -> None:
        """
        Write a single frame.

        Args:
            state: MD state to write.
            iteration: Number written on the second line; defaults to
                ``state.step``.
        """
        if not self.is_open:
            raise RuntimeError("File not open. Use context manager or call open().")
        if len(self.symbols) != state.n_atoms:
            raise ValueError(
                f"{len(self.symbols)} symbols for {state.n_atoms} atoms"
            )

        if iteration is None:
            iteration = state.step
        positions = state.positions * METRES_TO_ANGSTROM

        lines = [f"{state.n_atoms}\n", f"{iteration}\n"]
        lines.extend(
            f"{sym}\t{x:f}\t{y:f}\t{z:f}\n"
            for sym, (x, y, z) in zip(self.symbols, positions)
        )
        self._file.writelines(lines)
        self._file.flush()

        self._n_frames += 1


class XYZReader(TrajectoryReader):
    """
    Reader for frames written by XYZWriter.

    Frames are returned as dictionaries with ``n_atoms``, ``iteration``,
    ``elements`` and ``positions`` (Angstrom, shape (N, 3)).
    """

    def __init__(self, filename: str | Path) -> None:
        super().__init__(filename)
        self._frame_offsets: list[int] = []

    def open(self) -> None:
        """Open file and index frame positions."""
        super().open()
        self._index_frames()

    def _index_frames(self) -> None:
        """Build index of frame positions in file."""
        self._frame_offsets = []

        if self._file is None:
            return

        self._file.seek(0)
        while True:
            offset = self._file.tell()
            line = self._file.readline()

            if not line:
                break

            try:
                n_atoms = int(line.strip())
            except ValueError:
                break

            self._frame_offsets.append(offset)

            # Skip iteration and atom lines
            self._file.readline()
            for _ in range(n_atoms):
                self._file.readline()

    def read_frame(self, index: int) -> dict:
        """Read a specific frame (0-based)."""
        if self._file is None:
            raise RuntimeError("File not open.")

        if index < 0 or index >= len(self._frame_offsets):
            raise IndexError(f"Frame index {index} out of range")

        self._file.seek(self._frame_offsets[index])

        n_atoms = int(self._file.readline().strip())
        iteration = int(self._file.readline().strip())

        elements = []
        positions = np.zeros((n_atoms, 3))
        for i in range(n_atoms):
            parts = self._file.readline().split("\t")
            elements.append(parts[0])
            positions[i] = [float(parts[1]), float(parts[2]), float(parts[3])]

        return {
            "n_atoms": n_atoms,
            "iteration": iteration,
            "elements": elements,
            "positions": positions,
        }

    def __iter__(self) -> Iterator[dict]:
        """Iterate over all frames."""
        for i in range(len(self)):
            yield self.read_frame(i)

    def __len__(self) -> int:
        """Return number of frames."""
        return len(self._frame_offsets)

    def __getitem__(self, index: int) -> dict:
        """Get frame by index."""
        return self.read_frame(index)
