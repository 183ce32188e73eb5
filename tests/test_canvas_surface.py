"""
Unit tests for canvas_surface module.

Tests operation batching, duplicate coalescing, frame scheduling and
dirty-rectangle redraws.
"""

from unittest.mock import Mock

import pytest

from PX_Libs.errors import UnknownTool
from PX_Libs.ImageEditingLib.canvas_surface import CanvasSurface, ImageRenderTarget
from PX_Libs.ImageEditingLib.dirty_region import DirtyRegion
from PX_Libs.ImageEditingLib.image_models import Operation, Tool
from PX_Libs.ImageEditingLib.pixel_editor import PixelEditor

RED = "#ff0000"
GREEN = "#00ff00"


@pytest.fixture
def editor():
    return PixelEditor.blank(10, 8, "#ffffff")


class TestConstruction:
    """Tests for CanvasSurface setup."""

    def test_resizes_and_draws_full_frame(self, editor):
        target = Mock()
        CanvasSurface(editor, target)

        target.resize.assert_called_once_with(10, 8)
        target.put_pixels.assert_called_once()
        left, top, width, height, data = target.put_pixels.call_args[0]
        assert (left, top, width, height) == (0, 0, 10, 8)
        assert len(data) == 10 * 8 * 4


class TestQueueAndFlush:
    """Tests for queue() and flush()."""

    def test_flush_pushes_only_dirty_rectangle(self, editor):
        target = Mock()
        surface = CanvasSurface(editor, target)
        target.put_pixels.reset_mock()

        surface.queue(Operation(Tool.DRAW, RED, 2, 3))
        surface.queue(Operation(Tool.DRAW, RED, 4, 5))
        dirty = surface.flush()

        assert dirty == DirtyRegion(2, 3, 4, 5)
        target.put_pixels.assert_called_once()
        left, top, width, height, data = target.put_pixels.call_args[0]
        assert (left, top, width, height) == (2, 3, 3, 3)
        assert len(data) == 3 * 3 * 4

    def test_flush_without_changes_does_not_redraw(self, editor):
        target = Mock()
        surface = CanvasSurface(editor, target)
        target.put_pixels.reset_mock()

        surface.queue(Operation(Tool.DRAW, "#ffffff", 0, 0))

        assert surface.flush() is None
        target.put_pixels.assert_not_called()

    def test_empty_flush_is_noop(self, editor):
        surface = CanvasSurface(editor, Mock())

        assert surface.flush() is None

    def test_coalesces_repeated_operation(self, editor):
        """Identical consecutive operations (drag events) should be queued once."""
        surface = CanvasSurface(editor, Mock())
        operation = Operation(Tool.DRAW, RED, 1, 1)

        surface.queue(operation)
        surface.queue(Operation(Tool.DRAW, RED, 1, 1))
        surface.queue(Operation(Tool.DRAW, GREEN, 1, 1))
        surface.queue(operation)

        assert len(surface.pending) == 3

    def test_flush_clears_queue(self, editor):
        surface = CanvasSurface(editor, Mock())
        surface.queue(Operation(Tool.FILL, RED, 0, 0))
        surface.flush()

        assert surface.pending == ()
        assert surface.count() == {RED: 80}

    def test_unknown_tool_propagates(self, editor):
        surface = CanvasSurface(editor, Mock())
        surface.queue(Operation("eraser", RED, 0, 0))

        with pytest.raises(UnknownTool):
            surface.flush()

    def test_failed_batch_keeps_target_in_sync(self, editor):
        """Operations applied before a failing one should still reach the target."""
        target = ImageRenderTarget()
        surface = CanvasSurface(editor, target)
        surface.queue(Operation(Tool.DRAW, RED, 1, 1))
        surface.queue(Operation("spray", GREEN, 0, 0))

        with pytest.raises(UnknownTool):
            surface.flush()

        assert surface.pick(1, 1) == RED
        assert target.image.getpixel((1, 1)) == (255, 0, 0, 255)
        assert target.updates[-1] == (0, 0, 10, 8)
        assert surface.pending == ()


class TestScheduling:
    """Tests for the next-frame scheduler hook."""

    def test_schedules_once_per_batch(self, editor):
        scheduler = Mock()
        surface = CanvasSurface(editor, Mock(), scheduler=scheduler)

        surface.queue(Operation(Tool.DRAW, RED, 0, 0))
        surface.queue(Operation(Tool.DRAW, RED, 1, 0))

        scheduler.assert_called_once_with(surface.flush)

        scheduled_flush = scheduler.call_args[0][0]
        scheduled_flush()
        surface.queue(Operation(Tool.DRAW, RED, 2, 0))

        assert scheduler.call_count == 2
        assert surface.pick(1, 0) == RED


class TestImageRenderTarget:
    """Tests for the Pillow-backed render target."""

    def test_tracks_editor_pixels(self, editor):
        target = ImageRenderTarget()
        surface = CanvasSurface(editor, target)

        surface.queue(Operation(Tool.DRAW, RED, 9, 7))
        surface.flush()

        assert target.image.size == (10, 8)
        assert target.image.getpixel((9, 7)) == (255, 0, 0, 255)
        assert target.image.getpixel((0, 0)) == (255, 255, 255, 255)
        assert target.updates[-1] == (9, 7, 1, 1)

    def test_requires_resize(self):
        with pytest.raises(RuntimeError):
            ImageRenderTarget().put_pixels(0, 0, 1, 1, bytes(4))
