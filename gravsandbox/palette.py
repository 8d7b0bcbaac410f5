"""
Per-type color cycling for newly spawned bodies. This is presentation state,
so each Simulation is handed (or creates) its own Palette instead of sharing
module-level counters.
"""

from dataclasses import dataclass
from typing import Dict

from .constants import PALETTES


@dataclass(frozen=True)
class BodyColors:
    color: str
    glow: str
    trail: str


class Palette:
    def __init__(self, palettes=None):
        source = PALETTES if palettes is None else palettes
        self._entries: Dict[str, list] = {
            body_type: [BodyColors(*entry) for entry in entries]
            for body_type, entries in source.items()
        }
        self._index: Dict[str, int] = {}
        self.reset()

    def reset(self) -> None:
        self._index = {body_type: 0 for body_type in self._entries}

    def next_colors(self, body_type: str) -> BodyColors:
        entries = self._entries[body_type]
        idx = self._index[body_type]
        self._index[body_type] = idx + 1
        return entries[idx % len(entries)]

    def star_default(self) -> BodyColors:
        return self._entries["star"][0]
