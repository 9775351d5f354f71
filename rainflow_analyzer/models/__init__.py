from .options import RESIDUE_MODES, RainflowOptions, ResidueMode
from .points import Cycle, Matrix, StepEvent, TurningPoint

__all__ = [
    "RESIDUE_MODES",
    "RainflowOptions",
    "ResidueMode",
    "Cycle",
    "Matrix",
    "StepEvent",
    "TurningPoint",
]
