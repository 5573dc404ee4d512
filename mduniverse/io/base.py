"""Base classes for trajectory I/O."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from ..errors import ResourceError

if TYPE_CHECKING:
    from ..system import MDState


class TrajectoryWriter(ABC):
    """
    Abstract base class for trajectory writers.

    Writes either to a path, which the writer opens and closes itself, or
    to a stream owned by the caller.

    Example:
        with XYZWriter("trajectory.xyz", symbols) as writer:
            for step in simulation:
                writer.write(state, iteration=step)
    """

    def __init__(self, target: str | Path | TextIO) -> None:
        """
        Initialize trajectory writer.

        Args:
            target: Output file path or writable text stream.
        """
        if isinstance(target, (str, Path)):
            self.filename: Path | None = Path(target)
            self._file: TextIO | None = None
            self._owns_file = True
        else:
            self.filename = None
            self._file = target
            self._owns_file = False
        self._n_frames = 0

    @abstractmethod
    def write(self, state: MDState, **kwargs) -> None:
        """
        Write a single frame.

        Args:
            state: MD state to write.
            **kwargs: Format-specific options.
        """
        ...

    @property
    def is_open(self) -> bool:
        """Return True when frames can be written."""
        return self._file is not None and not self._file.closed

    def open(self) -> None:
        """Open file for writing."""
        if self.filename is None or self.is_open:
            return
        try:
            self._file = self.filename.open("w")
        except OSError as exc:
            raise ResourceError(f"cannot open {self.filename}: {exc}") from exc

    def close(self) -> None:
        """Close the file if this writer opened it."""
        if self._file is not None and self._owns_file:
            self._file.close()
        self._file = None

    def __enter__(self) -> TrajectoryWriter:
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    @property
    def n_frames(self) -> int:
        """Number of frames written."""
        return self._n_frames


class TrajectoryReader(ABC):
    """
    Abstract base class for trajectory readers.

    Example:
        with XYZReader("trajectory.xyz") as reader:
            for frame in reader:
                analyze(frame)
    """

    def __init__(self, filename: str | Path) -> None:
        """
        Initialize trajectory reader.

        Args:
            filename: Input file path.
        """
        self.filename = Path(filename)
        self._file: TextIO | None = None

    @abstractmethod
    def read_frame(self, index: int) -> dict:
        """
        Read a specific frame.

        Args:
            index: Frame index (0-based).

        Returns:
            Dictionary with frame data.
        """
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[dict]:
        """Iterate over all frames."""
        ...

    @abstractmethod
    def __len__(self) -> int:
        """Return number of frames."""
        ...

    def open(self) -> None:
        """Open file for reading."""
        try:
            self._file = self.filename.open()
        except OSError as exc:
            raise ResourceError(f"cannot open {self.filename}: {exc}") from exc

    def close(self) -> None:
        """Close file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> TrajectoryReader:
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
