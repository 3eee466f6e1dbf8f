"""Configuration for the digit normalization pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

Kernel = tuple[tuple[float, float, float], tuple[float, float, float], tuple[float, float, float]]

STROKE_FEATHER_KERNEL: Kernel = (
    (0.05, 0.15, 0.05),
    (0.15, 0.50, 0.15),
    (0.05, 0.15, 0.05),
)

# Weights sum to 1.0 so a solid region keeps full intensity.
CONTRAST_FEATHER_KERNEL: Kernel = (
    (0.02, 0.04, 0.02),
    (0.04, 0.76, 0.04),
    (0.02, 0.04, 0.02),
)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "configs" / "pipeline.yaml"


@dataclass(frozen=True)
class StrokeConfig:
    """Drawing canvas settings.

    Attributes:
        height: Canvas rows.
        width: Canvas columns.
        kernel: Diffusion weights added around every painted cell.
    """

    height: int = 28
    width: int = 28
    kernel: Kernel = STROKE_FEATHER_KERNEL


@dataclass(frozen=True)
class ContrastConfig:
    """Photo contrast normalization settings.

    Attributes:
        threshold: Inverted intensity above which a pixel counts as ink. Also
            the upper knee of the final remap.
        floor: Feathered values below this become background.
        kernel: Smoothing weights convolved with the binarized image.
    """

    threshold: float = 0.35
    floor: float = 0.05
    kernel: Kernel = CONTRAST_FEATHER_KERNEL


@dataclass(frozen=True)
class SegmentConfig:
    """Column projection segmentation settings.

    Attributes:
        gap_ratio: Fraction of the image height a column sum must reach to
            count as ink.
        min_gap_width: Consecutive empty columns that close a digit.
        min_segment_width: Narrower spans are dropped as noise.
    """

    gap_ratio: float = 0.05
    min_gap_width: int = 3
    min_segment_width: int = 3


@dataclass(frozen=True)
class CanonicalConfig:
    """Canonical sample layout.

    Attributes:
        target_size: Side of the square output canvas.
        margin: Empty border kept on every side of the scaled digit.
        min_scale: Lower bound for the rescale factor.
        binarize: Collapse interpolated values to hard 0/1 ink.
    """

    target_size: int = 28
    margin: int = 4
    min_scale: float = 0.1
    binarize: bool = True

    @property
    def available_size(self) -> int:
        return self.target_size - 2 * self.margin


@dataclass(frozen=True)
class PipelineConfig:
    stroke: StrokeConfig = field(default_factory=StrokeConfig)
    contrast: ContrastConfig = field(default_factory=ContrastConfig)
    segment: SegmentConfig = field(default_factory=SegmentConfig)
    canonical: CanonicalConfig = field(default_factory=CanonicalConfig)


def _as_kernel(value: Any, source: str) -> Kernel:
    rows = tuple(tuple(float(weight) for weight in row) for row in value)
    if len(rows) != 3 or any(len(row) != 3 for row in rows):
        raise ValueError(f"Kernel must be 3x3 in {source}")
    if any(weight < 0 for row in rows for weight in row):
        raise ValueError(f"Kernel weights must be non-negative in {source}")
    return rows  # type: ignore[return-value]


def _override(section: Any, values: dict[str, Any], source: str) -> Any:
    known = {item.name: item for item in fields(section)}
    updates: dict[str, Any] = {}
    for key, value in values.items():
        if key not in known:
            raise ValueError(f"Unknown option '{key}' for {type(section).__name__} in {source}")
        updates[key] = _as_kernel(value, source) if key == "kernel" else value
    return replace(section, **updates)


def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> PipelineConfig:
    """Load a pipeline config from YAML.

    Sections that are missing from the file keep their defaults.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config at {config_path}")

    config = PipelineConfig()
    updates: dict[str, Any] = {}
    for section_name, values in raw.items():
        if section_name not in {"stroke", "contrast", "segment", "canonical"}:
            raise ValueError(f"Unknown config section '{section_name}' in {config_path}")
        if values is None:
            continue
        if not isinstance(values, dict):
            raise ValueError(f"Section '{section_name}' must be a mapping in {config_path}")
        updates[section_name] = _override(getattr(config, section_name), values, str(config_path))
    return replace(config, **updates)
