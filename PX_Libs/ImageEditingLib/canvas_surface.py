"""
Binding between a PixelEditor and an external render target.

CanvasSurface queues editing operations and applies them in one batch per
frame. After a batch only the merged dirty rectangle is pushed to the render
target, so redraw cost follows the edited area rather than the image area.

Classes:
    RenderTarget: Protocol for anything that can display RGBA pixel rectangles
    ImageRenderTarget: RenderTarget backed by a Pillow image
    CanvasSurface: Operation queue and dirty-rectangle flushing

Example:
    >>> target = ImageRenderTarget()
    >>> surface = CanvasSurface(editor, target)
    >>> surface.queue(Operation(Tool.DRAW, "#ff0000", 3, 4))
    >>> surface.flush()
    DirtyRegion(left=3, top=4, right=3, bottom=4)
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple

from PX_Libs.constants import DEFAULT_BACKGROUND_COLOR
from PX_Libs.errors import PixelateError
from PX_Libs.ImageEditingLib.dirty_region import DirtyRegion
from PX_Libs.ImageEditingLib.image_models import Color, Operation
from PX_Libs.ImageEditingLib.pixel_editor import PixelEditor
from PX_Libs.pillow_compat import Image

logger = logging.getLogger(__name__)

# Called with the flush callback when a frame should be requested
FrameScheduler = Callable[[Callable[[], Optional[DirtyRegion]]], Any]


class RenderTarget(Protocol):
    def resize(self, width: int, height: int) -> None:
        ...

    def put_pixels(self, left: int, top: int, width: int, height: int, data: bytes) -> None:
        ...


class ImageRenderTarget:
    """Render target that keeps the displayed frame in a Pillow RGBA image."""

    def __init__(self, background: Color = DEFAULT_BACKGROUND_COLOR) -> None:
        self.background = background
        self.image: Optional[Any] = None
        self.updates: List[Tuple[int, int, int, int]] = []

    def resize(self, width: int, height: int) -> None:
        self.image = Image.new("RGBA", (width, height), self.background)
        self.updates.clear()

    def put_pixels(self, left: int, top: int, width: int, height: int, data: bytes) -> None:
        if self.image is None:
            raise RuntimeError("resize() must be called before put_pixels()")
        patch = Image.frombytes("RGBA", (width, height), data)
        self.image.paste(patch, (left, top))
        self.updates.append((left, top, width, height))


class CanvasSurface:
    """
    Owns a PixelEditor for its lifetime and keeps a render target in sync.

    Args:
        editor: The editor to apply operations to
        target: Where pixel rectangles are drawn
        scheduler: Optional "next frame" hook. It receives `flush` when the
                   queue goes from empty to non-empty. Without a scheduler
                   the caller invokes `flush()` itself.
    """

    def __init__(
        self,
        editor: PixelEditor,
        target: RenderTarget,
        scheduler: Optional[FrameScheduler] = None,
    ) -> None:
        self._editor = editor
        self._target = target
        self._scheduler = scheduler
        self._pending: List[Operation] = []

        self._target.resize(editor.width, editor.height)
        self.redraw()

    @property
    def editor(self) -> PixelEditor:
        return self._editor

    @property
    def width(self) -> int:
        return self._editor.width

    @property
    def height(self) -> int:
        return self._editor.height

    @property
    def pending(self) -> Tuple[Operation, ...]:
        return tuple(self._pending)

    def queue(self, operation: Operation) -> None:
        """Add an operation to the batch, dropping repeats of the newest one."""
        if self._pending and self._pending[-1] == operation:
            return

        was_empty = not self._pending
        self._pending.append(operation)
        if was_empty and self._scheduler is not None:
            self._scheduler(self.flush)

    def flush(self) -> Optional[DirtyRegion]:
        """
        Apply all pending operations and redraw their merged dirty region.

        Returns:
            The merged dirty region, or None when nothing changed

        Raises:
            PixelateError: If an operation fails. The target is redrawn in
                full first, since earlier operations in the batch were applied.
        """
        if not self._pending:
            return None

        batch, self._pending = self._pending, []
        try:
            dirty = self._editor.apply_many(batch)
        except PixelateError:
            self.redraw()
            raise
        logger.debug(f"Applied batch of {len(batch)} operations, dirty region {dirty}")

        if dirty is not None:
            self.redraw(dirty)
        return dirty

    def redraw(self, region: Optional[DirtyRegion] = None) -> None:
        if region is None:
            region = DirtyRegion(0, 0, self.width - 1, self.height - 1)
        self._target.put_pixels(
            region.left,
            region.top,
            region.width,
            region.height,
            self._editor.region_bytes(region),
        )

    def pick(self, x: int, y: int) -> Color:
        return self._editor.pick(x, y)

    def count(self) -> Dict[Color, int]:
        return self._editor.count()

    def pixels(self) -> Tuple[Tuple[Color, ...], ...]:
        return self._editor.pixels()
