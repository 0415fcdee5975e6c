"""
Configuration for sankeysync.

Defines SankeySettings, a frozen dataclass carrying the canvas, layout and
data-source configuration. Defaults are sourced from sankeysync.core.constants
(the single source of truth).

Precedence
- environment (SANKEYSYNC_*) > TOML > defaults, via ``SankeySettings.load()``.
- TOML search order: ./sankeysync.toml (a [sankey] table or top-level keys),
  then ./pyproject.toml under [tool.sankeysync].

Import DAG discipline
- Depends only on stdlib and sankeysync.core.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from sankeysync.core.constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    DEFAULT_ACTIVE_ATTRIBUTES,
    MARGIN_BOTTOM,
    MARGIN_LEFT,
    MARGIN_RIGHT,
    MARGIN_TOP,
    MAX_OVERLAY_PATHS,
    NODE_PADDING,
    NODE_WIDTH,
)
from sankeysync.core.layout import LayoutSettings

from .errors import IoConfigError

_INT_FIELDS = (
    "width",
    "height",
    "margin_top",
    "margin_right",
    "margin_bottom",
    "margin_left",
    "max_overlay_paths",
)
_FLOAT_FIELDS = ("node_width", "node_padding")


@dataclass(frozen=True)
class SankeySettings:
    """
    Runtime settings for the diagram and its host.

    Attributes:
        width (int): Full canvas width in pixels.
        height (int): Full canvas height in pixels.
        margin_top (int): Space above the diagram.
        margin_right (int): Space right of the last column (node labels).
        margin_bottom (int): Space below the diagram (column titles).
        margin_left (int): Space left of the first column (node labels).
        node_width (float): Node rectangle width.
        node_padding (float): Vertical gap between nodes of a column.
        max_overlay_paths (int): Cap on overlay paths drawn per highlight set
            (first N records of the highlight set).
        data_path (str): CSV file with one record per row.
        default_attributes (tuple[str, ...]): Initially active attributes.

    Examples:
        >>> from sankeysync.io import SankeySettings
        >>> SankeySettings(width=800, height=400).layout_settings().width
        500
    """

    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT
    margin_top: int = MARGIN_TOP
    margin_right: int = MARGIN_RIGHT
    margin_bottom: int = MARGIN_BOTTOM
    margin_left: int = MARGIN_LEFT
    node_width: float = NODE_WIDTH
    node_padding: float = NODE_PADDING
    max_overlay_paths: int = MAX_OVERLAY_PATHS
    data_path: str = "data/Housing.csv"
    default_attributes: tuple[str, ...] = DEFAULT_ACTIVE_ATTRIBUTES

    @property
    def inner_width(self) -> int:
        return self.width - self.margin_left - self.margin_right

    @property
    def inner_height(self) -> int:
        return self.height - self.margin_top - self.margin_bottom

    def validate(self) -> SankeySettings:
        """Return self, or raise IoConfigError if the drawing area is unusable."""
        if self.inner_width <= 0 or self.inner_height <= 0:
            raise IoConfigError(
                f"canvas {self.width}x{self.height} leaves no drawing area after margins"
            )
        if self.node_width < 0 or self.node_padding < 0:
            raise IoConfigError("node_width and node_padding must be >= 0")
        if self.max_overlay_paths < 0:
            raise IoConfigError("max_overlay_paths must be >= 0")
        return self

    def layout_settings(self) -> LayoutSettings:
        return LayoutSettings(
            width=self.inner_width,
            height=self.inner_height,
            node_width=self.node_width,
            node_padding=self.node_padding,
        )

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: SankeySettings, cfg: dict[str, Any] | None) -> SankeySettings:
        """Apply a loose config mapping onto SankeySettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base
        for name in _INT_FIELDS:
            if name in cfg:
                try:
                    s = replace(s, **{name: int(cfg[name])})
                except (TypeError, ValueError):
                    pass
        for name in _FLOAT_FIELDS:
            if name in cfg:
                try:
                    s = replace(s, **{name: float(cfg[name])})
                except (TypeError, ValueError):
                    pass

        if "data_path" in cfg and isinstance(cfg["data_path"], str):
            s = replace(s, data_path=cfg["data_path"])

        attrs = cfg.get("default_attributes")
        if isinstance(attrs, str):
            attrs = [a.strip() for a in attrs.split(",") if a.strip()]
        if isinstance(attrs, (list, tuple)) and all(isinstance(a, str) for a in attrs):
            s = replace(s, default_attributes=tuple(attrs))

        return s

    @classmethod
    def from_env(
        cls, base: SankeySettings | None = None, prefix: str = "SANKEYSYNC_"
    ) -> SankeySettings:
        """
        Build SankeySettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - SANKEYSYNC_WIDTH, SANKEYSYNC_HEIGHT
            - SANKEYSYNC_MARGIN_TOP / _RIGHT / _BOTTOM / _LEFT
            - SANKEYSYNC_NODE_WIDTH, SANKEYSYNC_NODE_PADDING
            - SANKEYSYNC_MAX_OVERLAY_PATHS
            - SANKEYSYNC_DATA_PATH
            - SANKEYSYNC_DEFAULT_ATTRIBUTES (comma separated)
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        for name in (*_INT_FIELDS, *_FLOAT_FIELDS, "data_path", "default_attributes"):
            v = os.getenv(prefix + name.upper())
            if v:
                mapping[name] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> SankeySettings:
        """
        Build SankeySettings from a TOML file.

        Search order when `path` is None:
            1) ./sankeysync.toml (with either a [sankey] table or direct keys)
            2) ./pyproject.toml under [tool.sankeysync]

        Returns defaults if no file is present.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                return None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "sankeysync.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("sankeysync") if isinstance(tool, dict) else None
            elif isinstance(data.get("sankey"), dict):
                cfg = data["sankey"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> SankeySettings:
        """
        Load SankeySettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults
                (sankeysync.toml, pyproject.toml).

        Returns:
            SankeySettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
