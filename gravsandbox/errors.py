"""
Exceptions raised by the engine. The physics hot path itself never raises;
these cover configuration mistakes made by callers.
"""


class SimulationError(Exception):
    """Base class for engine errors."""


class UnknownBodyTypeError(SimulationError, ValueError):
    def __init__(self, body_type: str, known) -> None:
        self.body_type = body_type
        self.known = sorted(known)
        super().__init__(
            f"Unknown body type {body_type!r}; expected one of {', '.join(self.known)}"
        )
