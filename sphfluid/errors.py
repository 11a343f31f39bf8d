"""Error codes and the exception raised by the simulator."""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Exit codes the simulator reports."""

    WRONG_PARTICLE_NUMBER = -5
    OUTPUT_ERROR = -4
    INIT_FILE_ERROR = -3
    WRONG_TIME_STEP = -2
    WRONG_ARGS = -1
    SUCCESS = 0


class SimulationError(RuntimeError):
    """Raised when reading input, parsing arguments or writing output fails."""

    def __init__(self, message: str, code: ErrorCode | None = None) -> None:
        super().__init__(message)
        self.code = code