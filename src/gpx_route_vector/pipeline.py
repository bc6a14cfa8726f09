"""Request dispatch for the track-to-geometry pipeline.

Requests arrive as tagged dicts from the UI channel:

    {"type": "parse-gpx", "content": "<gpx ...>"}
    {"type": "show-route", "square": false}
    {"type": "resize-window", "width": 300, "height": 400}
    {"type": "log", "message": "..."}

Each request runs to completion before the next one. Failures never escape
dispatch: they are logged, shown as a notification and posted back as
{"type": "error", "message": ...}.
"""

import logging
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from .core.coords import fit_dimensions, project, project_to_unit_square
from .core.gpx import parse_gpx_text
from .core.stats import summarize
from .errors import NoDataError
from .host import DrawingSink, HostUI, JsonFileStorage, RecordingUI, SvgCanvas, TrackStorage
from .models import Track
from .state import PipelineConfig

logger = logging.getLogger(__name__)


class ParseGpxRequest(BaseModel):
    type: Literal["parse-gpx"]
    content: Any = None


class ShowRouteRequest(BaseModel):
    type: Literal["show-route"]
    square: bool = False


class ResizeWindowRequest(BaseModel):
    type: Literal["resize-window"]
    width: int = Field(gt=0)
    height: int = Field(gt=0)


class LogRequest(BaseModel):
    type: Literal["log"]
    message: Any = None


Request = Annotated[
    Union[ParseGpxRequest, ShowRouteRequest, ResizeWindowRequest, LogRequest],
    Field(discriminator="type"),
]
_request_adapter = TypeAdapter(Request)


def _error_message(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


class RoutePipeline:
    """Sequences parsing, summarizing and projection for UI requests."""

    def __init__(
        self,
        storage: TrackStorage,
        ui: HostUI,
        canvas: DrawingSink,
        config: Optional[PipelineConfig] = None,
    ):
        self.storage = storage
        self.ui = ui
        self.canvas = canvas
        self.config = config or PipelineConfig()

    @classmethod
    def default(cls, storage_path: Optional[str] = None) -> "RoutePipeline":
        """Pipeline backed by the JSON storage file and an SVG drawing surface."""
        return cls(
            storage=JsonFileStorage(storage_path),
            ui=RecordingUI(),
            canvas=SvgCanvas(),
        )

    async def dispatch(self, message: Any) -> Optional[dict]:
        """Handle one request. Returns the response payload, or None if there is none."""
        try:
            request = _request_adapter.validate_python(message)
        except ValidationError as e:
            logger.exception("Rejected malformed request")
            details = "; ".join(err["msg"] for err in e.errors())
            return self._report_error(f"Invalid request: {details}")

        try:
            logger.debug("Received message: %s", request.type)

            if isinstance(request, LogRequest):
                logger.info("UI log: %s", request.message)
                return None
            if isinstance(request, ResizeWindowRequest):
                self.ui.resize(request.width, request.height)
                return None
            if isinstance(request, ParseGpxRequest):
                return await self.handle_parse(request.content)
            return await self.handle_show_route(square=request.square)
        except Exception as e:
            logger.exception("Error during processing")
            return self._report_error(_error_message(e))

    def _report_error(self, message: str) -> dict:
        error = {"type": "error", "message": message}
        try:
            self.ui.notify(f"Error: {message}")
            self.ui.post_message(error)
        except Exception:
            logger.exception("Could not deliver error to the UI: %s", message)
        return error

    async def handle_parse(self, content: Any) -> dict:
        cfg = self.config
        track = parse_gpx_text(content)
        logger.info("Parsed %d track points", len(track))

        route_width, route_height = fit_dimensions(track.bounds(), cfg.parse_base_size)
        self.ui.resize(*cfg.window_size(route_width, route_height))

        points = [p.model_dump(mode="json") for p in track.points]
        await self.storage.set_async(cfg.storage_key, {"points": points})

        stats = summarize(track, max_jump_m=cfg.max_jump_m)
        response = {
            "type": "parse-complete",
            "points": points,
            "routeWidth": route_width,
            "routeHeight": route_height,
            "stats": stats.model_dump(),
        }
        self.ui.post_message(response)
        return response

    async def _load_track(self) -> Track:
        data = await self.storage.get_async(self.config.storage_key)
        if not isinstance(data, dict) or not data.get("points"):
            raise NoDataError("No route data available")
        try:
            return Track.model_validate({"points": data["points"]})
        except ValidationError as e:
            raise NoDataError(
                f"Stored route data is invalid ({e.error_count()} validation error(s))"
            ) from e

    async def handle_show_route(self, square: bool = False) -> dict:
        cfg = self.config
        track = await self._load_track()

        if square:
            path = project_to_unit_square(track, cfg.unit_square_size)
        else:
            width, height = fit_dimensions(track.bounds(), cfg.render_base_size)
            path = project(track, width, height)
        logger.debug("Projected %d points into %.1fx%.1f", len(path.commands), path.width, path.height)

        center_x, center_y = self.canvas.viewport_center
        x = center_x - path.width / 2
        y = center_y - path.height / 2
        self.canvas.create_path(
            path.to_vector_path(),
            cfg.style,
            x=x,
            y=y,
            width=path.width,
            height=path.height,
            name=cfg.route_name,
        )
        self.ui.notify("Route created successfully")

        return {
            "type": "route-created",
            "name": cfg.route_name,
            "x": x,
            "y": y,
            "width": path.width,
            "height": path.height,
            "commands": len(path.commands),
        }
