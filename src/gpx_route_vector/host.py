"""Host collaborators for the route pipeline: storage, UI channel, drawing surface.

The pipeline only talks to these through the protocols below. The concrete
classes are the in-process host used by the MCP server and the tests.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol

from pydantic import BaseModel, Field

from .core.models import RouteStyle, VectorPath
from .exporters.svg import generate_route_svg

logger = logging.getLogger(__name__)


class TrackStorage(Protocol):
    async def get_async(self, key: str) -> Any: ...

    async def set_async(self, key: str, value: Any) -> None: ...


class HostUI(Protocol):
    def post_message(self, message: dict) -> None: ...

    def notify(self, text: str) -> None: ...

    def resize(self, width: int, height: int) -> None: ...


class DrawingSink(Protocol):
    viewport_center: tuple[float, float]

    def create_path(
        self,
        path: VectorPath,
        style: RouteStyle,
        x: float,
        y: float,
        width: float,
        height: float,
        name: str = "",
    ) -> Any: ...


class MemoryStorage:
    """Key/value slots held in memory for the life of the process."""

    def __init__(self):
        self._slots: dict[str, Any] = {}

    async def get_async(self, key: str) -> Any:
        return self._slots.get(key)

    async def set_async(self, key: str, value: Any) -> None:
        self._slots[key] = value


def _default_storage_path() -> Path:
    return Path.home() / ".cache" / "gpx-route-vector" / "storage.json"


class JsonFileStorage:
    """Key/value slots persisted to a JSON file, surviving server restarts."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else _default_storage_path()

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    async def get_async(self, key: str) -> Any:
        return self._load().get(key)

    async def set_async(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(data, f, indent=2)
        logger.info("Stored %r in %s", key, self.path)


class RecordingUI:
    """UI channel that records what the pipeline posts."""

    def __init__(self, width: int = 280, height: int = 320):
        self.messages: list[dict] = []
        self.notifications: list[str] = []
        self.window_size: tuple[int, int] = (width, height)

    def post_message(self, message: dict) -> None:
        self.messages.append(message)

    def notify(self, text: str) -> None:
        logger.info("notify: %s", text)
        self.notifications.append(text)

    def resize(self, width: int, height: int) -> None:
        self.window_size = (int(width), int(height))

    @property
    def last_message(self) -> Optional[dict]:
        return self.messages[-1] if self.messages else None


class VectorNode(BaseModel):
    name: str = ""
    vector_paths: list[VectorPath]
    style: RouteStyle
    x: float
    y: float
    width: float = Field(ge=0)
    height: float = Field(ge=0)


class SvgCanvas:
    """Drawing surface that keeps created vector nodes and renders them as SVG."""

    def __init__(self, viewport_center: tuple[float, float] = (0.0, 0.0)):
        self.viewport_center = viewport_center
        self.nodes: list[VectorNode] = []

    def create_path(
        self,
        path: VectorPath,
        style: RouteStyle,
        x: float,
        y: float,
        width: float,
        height: float,
        name: str = "",
    ) -> VectorNode:
        node = VectorNode(
            name=name,
            vector_paths=[path],
            style=style.model_copy(),
            x=x,
            y=y,
            width=width,
            height=height,
        )
        self.nodes.append(node)
        return node

    def to_svg(self) -> str:
        return generate_route_svg(self.nodes)
