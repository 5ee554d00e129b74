# polymesh/config.py
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict

from .selection import SnapSettings


@dataclass(frozen=True)
class EditorConfig:
    """
    Editor settings a shell passes in explicitly.

    Sizes are in the polygon's local units; `handle_scale` stands in for the
    screen-dependent handle size the shell knows and multiplies every size.
    """
    grid_snap: float = 1.0
    auto_snap: bool = False
    global_snap: bool = False
    click_radius: float = 0.12
    move_handle_size: float = 0.2
    rotate_handle_size: float = 0.3
    scale_handle_size: float = 0.3
    handle_scale: float = 1.0

    def __post_init__(self) -> None:
        for name in ("click_radius", "move_handle_size", "rotate_handle_size", "scale_handle_size", "handle_scale"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0 (got {getattr(self, name)})")

    def snap_settings(self, modifier: bool = False) -> SnapSettings:
        """The modifier key inverts auto snap."""
        enabled = (not modifier) if self.auto_snap else modifier
        return SnapSettings(enabled=enabled, global_snap=self.global_snap, unit=self.grid_snap)

    def size(self, name: str) -> float:
        return getattr(self, name) * self.handle_scale

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorConfig":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
