"""Pydantic return models for core computation functions."""

import re
from typing import Literal

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TrackStatistics(BaseModel):
    """Return type for summarize."""
    model_config = ConfigDict(frozen=True)

    total_distance_m: float = Field(default=0.0, ge=0)
    duration_s: float = Field(default=0.0, ge=0)
    pace_min_per_km: float = Field(default=0.0, ge=0)

    @property
    def total_distance_km(self) -> float:
        return self.total_distance_m / 1000


def _decimal(value: float) -> str:
    # Plain positional digits, never exponent notation
    return np.format_float_positional(value + 0.0, trim="0")


class PathCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["M", "L"]
    x: float
    y: float

    def to_token(self) -> str:
        return f"{self.kind} {_decimal(self.x)} {_decimal(self.y)}"


class PathDescription(BaseModel):
    """Return type for project and project_to_unit_square."""
    model_config = ConfigDict(frozen=True)

    commands: list[PathCommand]
    width: float = Field(ge=0)
    height: float = Field(ge=0)

    @model_validator(mode="after")
    def commands_must_start_with_move(self) -> "PathDescription":
        for i, cmd in enumerate(self.commands):
            expected = "M" if i == 0 else "L"
            if cmd.kind != expected:
                raise ValueError(f"Command {i} must be {expected!r}, got {cmd.kind!r}")
        return self

    @model_validator(mode="after")
    def points_must_fit_canvas(self) -> "PathDescription":
        for i, cmd in enumerate(self.commands):
            if not (0 <= cmd.x <= self.width and 0 <= cmd.y <= self.height):
                raise ValueError(
                    f"Command {i} at ({cmd.x}, {cmd.y}) is outside "
                    f"{self.width}x{self.height} canvas"
                )
        return self

    def to_path_data(self) -> str:
        return " ".join(cmd.to_token() for cmd in self.commands)

    def to_vector_path(self) -> "VectorPath":
        return VectorPath(data=self.to_path_data())


class VectorPath(BaseModel):
    """Payload accepted by a drawing sink."""
    model_config = ConfigDict(frozen=True)

    winding_rule: Literal["NONZERO", "EVENODD"] = "NONZERO"
    data: str


class RouteStyle(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    stroke_color: str = "#FC5100"
    opacity: float = Field(default=1.0, ge=0, le=1)
    stroke_weight: float = Field(default=2.0, gt=0)
    stroke_cap: Literal["NONE", "ROUND", "SQUARE"] = "ROUND"
    stroke_join: Literal["MITER", "BEVEL", "ROUND"] = "ROUND"

    @field_validator("stroke_color", mode="before")
    @classmethod
    def validate_and_normalize_hex(cls, v: str) -> str:
        if not isinstance(v, str):
            raise ValueError("Color must be a string")
        v = v.strip()
        if not re.match(r'^#[0-9A-Fa-f]{6}$', v):
            raise ValueError(f"Invalid hex color '{v}'. Must be #RRGGBB format.")
        return f"#{v[1:].upper()}"

    def stroke_rgb(self) -> tuple[float, float, float]:
        """Stroke colour as 0..1 floats, the form canvas hosts expect."""
        h = self.stroke_color.lstrip("#")
        return (int(h[0:2], 16) / 255, int(h[2:4], 16) / 255, int(h[4:6], 16) / 255)
