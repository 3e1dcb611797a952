"""Frame navigation relative to the current frame."""

from typing import Any, Dict, List, Optional, Tuple, Union

from playwright.async_api import Frame

from ..core.chain import action
from ..core.errors import FrameNotFoundError
from ..dom import scripts
from .base import BaseActions

FrameTarget = Union[str, int, Tuple[float, float], Dict[str, float]]


class FrameActions(BaseActions):
    """Query child frames and move the current frame around the frame tree."""

    @action
    async def frame_name(self) -> str:
        return self._frame.name

    @action
    async def frame_count(self) -> int:
        return len(self._frame.child_frames)

    @action
    async def frame_names(self) -> List[str]:
        return [frame.name for frame in self._frame.child_frames]

    @action
    async def switch_to_frame(self, target: FrameTarget) -> None:
        """
        Make a child frame the current frame.

        Args:
            target: Frame name, child index, or a viewport point given as
                (x, y) or {"x": ..., "y": ...}

        Raises:
            FrameNotFoundError: If no frame matches ``target``
        """
        frame = await self._find_frame(target)
        if frame is None:
            raise FrameNotFoundError(str(target))
        self._tab.frame = frame
        self._log_debug("frames", f"Switched to frame '{frame.name}'", url=frame.url)

    @action
    async def switch_to_focused_frame(self) -> None:
        """Descend into the frame holding keyboard focus."""
        frame = self._tab.main_frame
        while True:
            child = await self._frame_of_element(frame, scripts.ACTIVE_ELEMENT)
            if child is None:
                break
            frame = child
        self._tab.frame = frame

    @action
    async def switch_to_main_frame(self) -> None:
        self._tab.reset_frame()

    @action
    async def switch_to_parent_frame(self) -> bool:
        """Move to the parent frame; False when already in the main frame."""
        parent = self._frame.parent_frame
        if parent is None:
            return False
        self._tab.frame = parent
        return True

    async def _find_frame(self, target: FrameTarget) -> Optional[Frame]:
        children = self._frame.child_frames

        if isinstance(target, bool):
            return None
        if isinstance(target, int):
            if 0 <= target < len(children):
                return children[target]
            return None
        if isinstance(target, str):
            for frame in children:
                if frame.name == target:
                    return frame
            return None

        point = _as_point(target)
        if point is None:
            return None
        return await self._frame_of_element(self._frame, scripts.ELEMENT_FROM_POINT, list(point))

    async def _frame_of_element(self, frame: Frame, script: str, arg: Any = None) -> Optional[Frame]:
        """Content frame of the (i)frame element returned by ``script``, if any."""
        handle = await frame.evaluate_handle(script, arg)
        try:
            element = handle.as_element()
            if element is None:
                return None
            if not await frame.evaluate(scripts.IS_FRAME_ELEMENT, element):
                return None
            return await element.content_frame()
        finally:
            await handle.dispose()


def _as_point(target: Any) -> Optional[Tuple[float, float]]:
    if isinstance(target, dict):
        if "x" in target and "y" in target:
            return float(target["x"]), float(target["y"])
        return None
    if isinstance(target, (tuple, list)) and len(target) == 2:
        return float(target[0]), float(target[1])
    return None
