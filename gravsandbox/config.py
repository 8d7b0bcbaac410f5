"""
Engine configuration. Unspecified options fall back to the defaults in
``constants``; ``from_env`` lets a deployment override them without code
changes.
"""

from __future__ import annotations

import os
from typing import Dict

from pydantic import BaseModel, Field

from .constants import G_DEFAULT, MAX_TRAIL_LENGTH, SOFTENING_DEFAULT, SUBSTEPS_DEFAULT

ENV_PREFIX = "GRAVSANDBOX_"
_ENV_FIELDS = {
    "G": "G",
    "SOFTENING": "softening",
    "SUBSTEPS": "substeps",
    "MAX_TRAIL": "max_trail_length",
}


class SimulationConfig(BaseModel):
    G: float = G_DEFAULT
    softening: float = Field(default=SOFTENING_DEFAULT, ge=0.0)
    substeps: int = Field(default=SUBSTEPS_DEFAULT, ge=1)
    max_trail_length: int = Field(default=MAX_TRAIL_LENGTH, ge=0)

    @classmethod
    def from_env(cls, environ=None) -> SimulationConfig:
        environ = os.environ if environ is None else environ
        overrides: Dict[str, str] = {}
        for suffix, field_name in _ENV_FIELDS.items():
            raw = environ.get(ENV_PREFIX + suffix)
            if raw is not None and raw.strip() != "":
                overrides[field_name] = raw.strip()
        return cls(**overrides)
