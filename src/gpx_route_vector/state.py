"""Pipeline configuration for the gpx-route-vector MCP server.

Holds the sizing rules for the plugin window and the rendered route, the
drift threshold, the storage slot name and the route stroke style.
"""

from pydantic import BaseModel, Field, ConfigDict, model_validator

from gpx_route_vector.core.distance import MAX_JUMP_M
from gpx_route_vector.core.coords import UNIT_SQUARE_SIZE
from gpx_route_vector.core.models import RouteStyle


class PipelineConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    # route preview shown in the plugin window after parsing
    parse_base_size: float = Field(default=280.0, gt=0)
    # route inserted into the drawing surface
    render_base_size: float = Field(default=400.0, gt=0)
    unit_square_size: float = Field(default=UNIT_SQUARE_SIZE, gt=0)

    min_window_width: int = Field(default=280, gt=0)
    max_window_width: int = Field(default=400, gt=0)
    window_margin: int = Field(default=40, ge=0)
    min_window_height: int = Field(default=320, gt=0)
    chrome_reservation: int = Field(default=160, ge=0)

    max_jump_m: float = Field(default=MAX_JUMP_M, gt=0)
    storage_key: str = Field(default="gpxData", min_length=1)
    route_name: str = "Running Route"
    style: RouteStyle = Field(default_factory=RouteStyle)

    @model_validator(mode="after")
    def check_window_width_range(self) -> "PipelineConfig":
        if self.min_window_width > self.max_window_width:
            raise ValueError(
                f"min_window_width ({self.min_window_width}) must not exceed "
                f"max_window_width ({self.max_window_width})"
            )
        return self

    def window_size(self, route_width: float, route_height: float) -> tuple[int, int]:
        """Plugin window size for a route preview, leaving room for the buttons and text."""
        width = max(
            self.min_window_width,
            min(self.max_window_width, route_width + self.window_margin),
        )
        height = max(self.min_window_height, route_height + self.chrome_reservation)
        return round(width), round(height)
