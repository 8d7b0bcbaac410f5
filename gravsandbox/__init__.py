from .body import Body
from .config import SimulationConfig
from .errors import SimulationError, UnknownBodyTypeError
from .palette import BodyColors, Palette
from .simulation import MergeEvent, Simulation
from .vector import Vector3

__all__ = [
    "Body",
    "BodyColors",
    "MergeEvent",
    "Palette",
    "Simulation",
    "SimulationConfig",
    "SimulationError",
    "UnknownBodyTypeError",
    "Vector3",
]
