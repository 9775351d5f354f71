"""Rainflow options -- bundles every parameter that affects the analysis output.

RainflowOptions groups the four settings of one analysis pass into one frozen
dataclass.  It can be:

- Constructed directly (all four fields are required, there are no defaults)
- Overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict for JSON provenance and configuration files
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Literal, Tuple, Union

import numpy as np


ResidueMode = Literal["discard", "half", "close"]

RESIDUE_MODES: Tuple[str, ...] = ("discard", "half", "close")

# camelCase keys, as written by JavaScript front-ends.
_CAMEL_KEYS = {
    "useEndpointsAsReversals": "use_endpoints_as_reversals",
    "residue": "residue",
    "binsRange": "bins_range",
    "binsMean": "bins_mean",
}


def check_bin_count(name: str, value: Any) -> None:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if int(value) < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")


@dataclass(frozen=True)
class RainflowOptions:
    """Frozen configuration for one rainflow analysis pass.

    Fields
    ------
    use_endpoints_as_reversals : bool
        Inject the first and last compressed samples as turning points.
    residue : str
        How the final stack is turned into cycles: "discard", "half" or "close".
    bins_range : int
        Number of range bins of the frequency matrix (>= 1).
    bins_mean : int
        Number of mean bins of the frequency matrix (>= 1).
    """

    use_endpoints_as_reversals: bool
    residue: ResidueMode
    bins_range: int
    bins_mean: int

    def __post_init__(self) -> None:
        if self.residue not in RESIDUE_MODES:
            raise ValueError(f"Unknown residue mode {self.residue!r}; expected one of {RESIDUE_MODES}")
        check_bin_count("bins_range", self.bins_range)
        check_bin_count("bins_mean", self.bins_mean)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict."""
        d = asdict(self)
        d["use_endpoints_as_reversals"] = bool(d["use_endpoints_as_reversals"])
        d["bins_range"] = int(d["bins_range"])
        d["bins_mean"] = int(d["bins_mean"])
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> RainflowOptions:
        """Reconstruct from a dict (e.g. loaded from JSON).

        Both the snake_case field names and the camelCase keys
        (``useEndpointsAsReversals``, ``binsRange``, ...) are accepted.
        """
        d = {_CAMEL_KEYS.get(k, k): v for k, v in dict(d).items()}
        unknown = sorted(set(d) - set(_CAMEL_KEYS.values()))
        if unknown:
            raise ValueError(f"Unknown option keys: {unknown}")
        missing = [k for k in _CAMEL_KEYS.values() if k not in d]
        if missing:
            raise ValueError(f"Missing option keys: {missing}")
        return cls(**d)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> RainflowOptions:
        p = Path(path)
        with open(p, "r") as f:
            d = json.load(f)
        if not isinstance(d, dict):
            raise ValueError(f"{p.name}: expected a JSON object, got {type(d).__name__}")
        return cls.from_dict(d)
