"""ImageViewer - an overlay showing an image, or a list of images, with pan,
zoom, rotation, caption toggling and screenshot saving.

Every interaction mutates the view or chrome state (or moves the sequence
cursor) and then calls rebuild(), which lays out the chrome, re-renders the
displayed bitmap and asks the host for a repaint.

Bitmap ownership:
- a single image is released on close when its source is disposable;
- with a sequence, each displayed frame is released when leaving it (and on
  close) when the sequence's frames are disposable, and the sequence itself
  is released on close when it is disposable;
- bitmaps derived for display are always released before being replaced,
  but never when they are the source bitmap itself.
"""

from __future__ import annotations
import os
from datetime import datetime
from typing import Callable, List, Optional, Union

from .bitmap import load_bitmap
from .commands import Close, Command, ToggleCaption, ToggleRotation, ToggleScale
from .config import (
    BUTTON_CLOSE, BUTTON_PADDING, BUTTON_ROTATE, BUTTON_SCALE,
    DEFAULT_TITLE, IMAGE_PADDING, LABEL_CLOSE, LABEL_NO_ROTATION,
    LABEL_ORIGINAL_SIZE, LABEL_ROTATE, LABEL_SCALE, PAN_THRESHOLD,
    PROGRESS_HEIGHT, PROGRESS_PADDING, SCREENSHOT_DIR, SCREENSHOT_NAME_TEMPLATE,
    ZOOM_MAX, ZOOM_MIN, ZOOM_STEP_KEYS,
)
from .gestures import GestureEvent
from .host import ChromeWidget, Host, ProgressIndicator
from .input_handler import GestureDispatcher
from .logging import dbg, increment_event, log
from .math_utils import in_open_range
from .renderer import render_view
from .state import ChromeState, ImageSequence, PanState, SingleImage, ViewState
from .types import (
    Bitmap, ButtonSpec, ChromeSnapshot, DeviceInfo, PaintRequest, Rect,
    RefreshPolicy, RenderedView,
)
from .view_math import (
    center_rect, compute_frame_size, compute_image_box, effective_rotation,
    pan_center_ratio,
)


class ChromeRestore:
    """One-shot callback restoring chrome visibility after a screenshot."""

    def __init__(self, viewer: ImageViewer, snapshot: ChromeSnapshot):
        self.viewer = viewer
        self.snapshot = snapshot
        self.done = False

    def __call__(self) -> None:
        if self.done:
            return
        self.done = True
        self.viewer.restore_chrome(self.snapshot)


class ImageViewer:
    """Image viewer overlay.

    Args:
        host: Host application services.
        source: A SingleImage or an ImageSequence.
        width: Frame width when not fullscreen (default: screen minus margin).
        height: Frame height when not fullscreen (default: screen minus margin).
        fullscreen: Cover the whole screen.
        with_title_bar: Show a title bar.
        title_text: Title bar text.
        caption: Optional caption, toggled from the title bar.
        caption_visible: Whether the caption starts shown.
        buttons_visible: Whether the button row starts shown.
        scale_factor: Initial scale, 0 to fit the image.
        rotated: Start rotated.
        keep_pan_and_zoom: With sequences, keep pan and zoom when navigating.
        screenshot_dir: Where saved views go.
    """

    def __init__(
        self,
        host: Host,
        source: Union[SingleImage, ImageSequence],
        *,
        width: Optional[int] = None,
        height: Optional[int] = None,
        fullscreen: bool = False,
        with_title_bar: bool = True,
        title_text: str = DEFAULT_TITLE,
        caption: Optional[str] = None,
        caption_visible: bool = True,
        buttons_visible: bool = False,
        scale_factor: float = 0.0,
        rotated: bool = False,
        keep_pan_and_zoom: bool = True,
        screenshot_dir: Optional[str] = None,
    ):
        self.host = host
        self.width = width
        self.height = height
        self.title_text = title_text
        self.caption = caption
        self.keep_pan_and_zoom = keep_pan_and_zoom
        self.screenshot_dir = screenshot_dir or SCREENSHOT_DIR

        self.view = ViewState.initial(scale_factor, rotated)
        self.orig_scale_factor = scale_factor
        self.chrome = ChromeState(
            with_title_bar=with_title_bar,
            caption_visible=caption_visible,
            buttons_visible=buttons_visible,
            fullscreen=fullscreen,
        )
        self.pan_state = PanState()
        self.closed = False
        self.covers_fullscreen = fullscreen

        self.rendered: Optional[RenderedView] = None
        self.frame_rect = Rect()
        self.image_box = Rect()
        self.title_bar_height = 0

        # With a sequence, the first frame is displayed and the per-frame
        # disposable flag comes from the sequence
        self.sequence: Optional[ImageSequence] = None
        if isinstance(source, ImageSequence):
            if source.count == 0:
                raise ValueError("empty image sequence")
            self.sequence = source
            source.index = 1
            self.image: Optional[Bitmap] = source.materialize(1)
            self.image_disposable = source.frames_disposable
        else:
            self.image = source.bitmap
            self.image_disposable = source.disposable

        self.dispatcher = GestureDispatcher(self)
        self._build_chrome()
        self.rebuild()

    @classmethod
    def from_file(cls, host: Host, path: str, **kwargs) -> ImageViewer:
        """Open an image file; the loaded bitmap is owned by the viewer."""
        bmp = load_bitmap(path)
        if bmp is None:
            raise ValueError(f"cannot load image: {path}")
        return cls(host, SingleImage.owned(bmp), **kwargs)

    # ═══════════════════════════════════════════════════════════════════════
    # Properties
    # ═══════════════════════════════════════════════════════════════════════

    @property
    def device(self) -> DeviceInfo:
        return self.host.device

    @property
    def pan_threshold(self) -> int:
        """Movement below which a hold is not a pan."""
        return self.device.scale_by_size(PAN_THRESHOLD)

    @property
    def current_index(self) -> int:
        """1-based index of the displayed frame (1 for a single image)."""
        return self.sequence.index if self.sequence else 1

    @property
    def active_title_bar(self) -> Optional[ChromeWidget]:
        if not self.chrome.with_title_bar or self.title_bar is None:
            return None
        if self.captioned_title_bar is not None and self.chrome.caption_visible:
            return self.captioned_title_bar
        return self.title_bar

    # ═══════════════════════════════════════════════════════════════════════
    # Layout
    # ═══════════════════════════════════════════════════════════════════════

    def _build_chrome(self) -> None:
        """Create all the chrome widgets we may have to show."""
        device = self.device
        frame_w, _ = compute_frame_size(device, self.chrome.fullscreen, self.width, self.height)
        button_padding = device.scale_by_size(BUTTON_PADDING)
        inner_w = frame_w - 2 * button_padding

        self.button_row = self.host.create_button_row(inner_w, [
            ButtonSpec(BUTTON_SCALE, self._scale_label(), self._on(ToggleScale())),
            ButtonSpec(BUTTON_ROTATE, self._rotate_label(), self._on(ToggleRotation())),
            ButtonSpec(BUTTON_CLOSE, LABEL_CLOSE, self._on(Close())),
        ])

        self.title_bar: Optional[ChromeWidget] = None
        self.captioned_title_bar: Optional[ChromeWidget] = None
        if self.chrome.with_title_bar:
            if self.caption:
                # Toggling the caption swaps these two title bars
                self.title_bar = self.host.create_title_bar(
                    frame_w, self.title_text, None, self._on(ToggleCaption()), self._on(Close()))
                self.captioned_title_bar = self.host.create_title_bar(
                    frame_w, self.title_text, self.caption, self._on(ToggleCaption()), self._on(Close()))
            else:
                self.title_bar = self.host.create_title_bar(
                    frame_w, self.title_text, None, None, self._on(Close()))

        self.progress_bar: Optional[ProgressIndicator] = None
        if self.sequence is not None:
            self.progress_bar = self.host.create_progress_bar(
                inner_w, device.scale_by_size(PROGRESS_HEIGHT))

    def _on(self, cmd: Command) -> Callable[[], None]:
        """Widget callback running a command on this viewer."""
        def callback() -> None:
            if self.closed:
                return
            increment_event()
            cmd.execute(self)
        return callback

    def _scale_label(self) -> str:
        return LABEL_ORIGINAL_SIZE if self.view.scale_to_fit else LABEL_SCALE

    def _rotate_label(self) -> str:
        return LABEL_NO_ROTATION if self.view.rotated else LABEL_ROTATE

    def _release_rendered(self) -> None:
        if self.rendered is not None:
            self.rendered.release()
            self.rendered = None

    def _release_image(self) -> None:
        """Release the displayed frame if we own it."""
        if self.image is not None and self.image_disposable and self.image.can_release:
            dbg("[VIEWER] Releasing current image")
            self.image.release()
            self.image = None

    def rebuild(self) -> None:
        """Recompute layout and displayed bitmap, then request a repaint."""
        if self.closed or self.image is None:
            return
        self._release_rendered()

        device = self.device
        prev_frame = self.frame_rect
        frame_w, frame_h = compute_frame_size(device, self.chrome.fullscreen, self.width, self.height)
        frame = center_rect(device.screen_rect, frame_w, frame_h)

        # Rows from top to bottom: title bar, image, progress bar, buttons
        title = self.active_title_bar
        title_h = title.get_height() if title is not None else 0
        bottom_h = 0
        if self.progress_bar is not None:
            self.progress_bar.set_percentage(self.sequence.progress)
            bottom_h += self.progress_bar.get_height() + device.scale_by_size(PROGRESS_PADDING)
        if self.chrome.buttons_visible:
            self.button_row.set_button_text(BUTTON_SCALE, self._scale_label())
            self.button_row.set_button_text(BUTTON_ROTATE, self._rotate_label())
            bottom_h += self.button_row.get_height()

        container = Rect(frame.x, frame.y + title_h, frame_w, max(1, frame_h - title_h - bottom_h))
        padding = device.scale_by_size(IMAGE_PADDING) if self.chrome.needs_padding else 0
        box = compute_image_box(container, padding)
        rotation = effective_rotation(self.view.rotated, device.landscape_clockwise, device.is_landscape)

        self.rendered = render_view(self.image, self.view, rotation, box)
        self.frame_rect = frame
        self.image_box = box
        self.title_bar_height = title_h
        self.covers_fullscreen = self.chrome.fullscreen

        # High quality refresh: zooming and panning make partial refresh
        # artifacts (banding) very visible
        self.host.paint(PaintRequest(frame.union(prev_frame), RefreshPolicy.UI, dither=True))

    def on_show(self) -> None:
        """Initial full refresh once the host has put us on screen."""
        self.host.paint(PaintRequest(self.frame_rect, RefreshPolicy.FULL, dither=True))

    def request_full_refresh(self) -> None:
        """Flashing full screen refresh, to clean up ghosting."""
        self.host.paint(PaintRequest(None, RefreshPolicy.FULL, dither=True))

    # ═══════════════════════════════════════════════════════════════════════
    # Input
    # ═══════════════════════════════════════════════════════════════════════

    def handle(self, event: GestureEvent) -> bool:
        """Handle one gesture or key event. Returns True if the event was consumed."""
        if self.closed:
            return False
        increment_event()
        commands: List[Command] = self.dispatcher.dispatch(event)
        for cmd in commands:
            cmd.execute(self)
            if self.closed:
                break
        return True

    # ═══════════════════════════════════════════════════════════════════════
    # Navigation
    # ═══════════════════════════════════════════════════════════════════════

    def navigate_to(self, num: int) -> bool:
        """Show frame ``num`` (1-based) of the sequence.

        Navigating to the frame already shown does nothing: releasing it and
        producing it again would hand a closed handle to the renderer. A
        loaded frame released by an earlier visit is skipped the same way.
        """
        seq = self.sequence
        if self.closed or seq is None:
            return False
        if not seq.in_range(num) or num == seq.index:
            dbg(f"[NAV] Ignoring navigation to {num} (at {seq.index}/{seq.count})")
            return False
        if seq.is_stale(num):
            log(f"[NAV][WARN] Frame {num} was already released, not showing it")
            return False
        self._release_image()
        self.image = seq.materialize(num)
        seq.index = num
        if not self.keep_pan_and_zoom:
            self.view.reset_center()
            self.view.scale_factor = self.orig_scale_factor
        log(f"[NAV] Showing image {num}/{seq.count}")
        self.rebuild()
        return True

    def next_image(self) -> bool:
        if self.sequence is None:
            return False
        return self.navigate_to(self.sequence.index + 1)

    def prev_image(self) -> bool:
        if self.sequence is None:
            return False
        return self.navigate_to(self.sequence.index - 1)

    # ═══════════════════════════════════════════════════════════════════════
    # Zoom & pan
    # ═══════════════════════════════════════════════════════════════════════

    def _base_scale(self) -> float:
        """Explicit scale, or the scale the fit mode computed."""
        if self.view.scale_factor == 0 and self.rendered is not None:
            return self.rendered.scale
        return self.view.scale_factor

    def _set_scale(self, new_scale: float) -> bool:
        if not in_open_range(new_scale, ZOOM_MIN, ZOOM_MAX):
            dbg(f"[ZOOM] Ignoring out of range scale {new_scale:.3f}")
            return False
        dbg(f"[ZOOM] {self.view.scale_factor:.3f} -> {new_scale:.3f}")
        self.view.scale_factor = new_scale
        self.rebuild()
        return True

    def zoom_in(self, inc: Optional[float] = None) -> bool:
        if self.closed:
            return False
        if inc is None:
            inc = ZOOM_STEP_KEYS
        return self._set_scale(self._base_scale() + inc)

    def zoom_out(self, dec: Optional[float] = None) -> bool:
        if self.closed:
            return False
        if dec is None:
            dec = ZOOM_STEP_KEYS
        return self._set_scale(self._base_scale() - dec)

    def _panned_center(self, dx: float, dy: float):
        r = self.rendered
        cx = pan_center_ratio(self.view.center_x_ratio, dx, r.full_w, r.crop.w)
        cy = pan_center_ratio(self.view.center_y_ratio, dy, r.full_h, r.crop.h)
        return cx, cy

    def recenter_by(self, dx: float, dy: float) -> None:
        """Move the focal point as a pan would, without rebuilding."""
        if self.closed or self.rendered is None:
            return
        self.view.set_center(*self._panned_center(dx, dy))

    def pan_by(self, dx: float, dy: float) -> bool:
        """Move the visible window by (dx, dy) pixels of the scaled image."""
        if self.closed or self.rendered is None:
            return False
        self.view.set_center(*self._panned_center(dx, dy))
        dbg(f"[PAN] by ({dx:.0f}, {dy:.0f}) -> center=({self.view.center_x_ratio:.3f}, "
            f"{self.view.center_y_ratio:.3f})")
        self.rebuild()
        return True

    # ═══════════════════════════════════════════════════════════════════════
    # Toggles
    # ═══════════════════════════════════════════════════════════════════════

    def toggle_scale(self) -> None:
        self.view.toggle_scale()
        self.rebuild()

    def toggle_rotation(self) -> None:
        self.view.rotated = not self.view.rotated
        self.rebuild()

    def toggle_caption(self) -> None:
        self.chrome.caption_visible = not self.chrome.caption_visible
        self.rebuild()

    def toggle_buttons(self) -> None:
        self.chrome.buttons_visible = not self.chrome.buttons_visible
        self.rebuild()

    # ═══════════════════════════════════════════════════════════════════════
    # Save
    # ═══════════════════════════════════════════════════════════════════════

    def screenshot_path(self) -> str:
        return os.path.join(self.screenshot_dir, datetime.now().strftime(SCREENSHOT_NAME_TEMPLATE))

    def save_view(self) -> bool:
        """Save the displayed image (panned or zoomed), without chrome."""
        if self.closed:
            return False
        restore = None
        if not self.chrome.is_chromeless:
            restore = ChromeRestore(self, self.chrome.snapshot())
            self.chrome.go_chromeless()
            self.rebuild()
            self.host.force_repaint()
        path = self.screenshot_path()
        log(f"[SAVE] Requesting screenshot {path}")
        self.host.save_screenshot(path, restore)
        return True

    def restore_chrome(self, snapshot: ChromeSnapshot) -> None:
        if self.closed:
            return
        self.chrome.restore(snapshot)
        self.rebuild()

    # ═══════════════════════════════════════════════════════════════════════
    # Close
    # ═══════════════════════════════════════════════════════════════════════

    def close(self) -> None:
        """Close the viewer and release what it owns."""
        if self.closed:
            return
        self.closed = True
        log("[VIEWER] Closing")
        self.host.close(self)

        self._release_rendered()
        # The rendered view never releases the source bitmap, so this is the
        # only place the current image can be released
        self._release_image()
        if self.sequence is not None and self.sequence.disposable:
            self.sequence.release()

        for widget in (self.title_bar, self.captioned_title_bar, self.progress_bar, self.button_row):
            if widget is not None:
                widget.free()

        self.host.paint(PaintRequest(self.frame_rect, RefreshPolicy.FLASH_UI))
