import os

import pytest

from einkview import ImageViewer, RefreshPolicy, ScaleMode, SingleImage
from einkview.config import ZOOM_MAX, ZOOM_MIN
from einkview.types import Rect


@pytest.fixture
def viewer(host, new_bitmap, bare_kwargs):
    bmp, _ = new_bitmap(1200, 1600)
    return ImageViewer(host, SingleImage.owned(bmp), **bare_kwargs)


# ─── Zoom ───────────────────────────────────────────────────────────────────

def test_first_zoom_starts_from_fit_scale(viewer):
    assert viewer.view.scale_mode == ScaleMode.FIT
    assert viewer.zoom_in()
    assert viewer.view.scale_mode == ScaleMode.EXPLICIT
    assert viewer.view.scale_factor == pytest.approx(0.7)


def test_zoom_out_of_bounds_is_ignored(host, viewer):
    viewer.view.scale_factor = 0.5
    viewer.rebuild()
    paints = len(host.paints)

    assert not viewer.zoom_out(0.5)
    assert not viewer.zoom_in(99.5)
    assert viewer.view.scale_factor == 0.5
    assert len(host.paints) == paints


def test_zoom_from_fit_out_of_bounds_keeps_fit_mode(viewer):
    assert not viewer.zoom_in(200)
    assert viewer.view.scale_mode == ScaleMode.FIT


def test_zoom_sequence_stays_in_bounds(viewer):
    steps = [5, 20, 30, 40, -3, 0.3, 0.2, 0.25, 50, 10, 0.1]
    for i, step in enumerate(steps):
        if i % 2:
            viewer.zoom_out(abs(step))
        else:
            viewer.zoom_in(abs(step))
        assert ZOOM_MIN < viewer.view.scale_factor < ZOOM_MAX


# ─── Toggles ────────────────────────────────────────────────────────────────

def test_scale_toggle_resets_center(viewer):
    assert viewer.view.scale_to_fit
    viewer.toggle_scale()
    assert viewer.view.scale_factor == 1.0
    assert viewer.view.center_ratio == (0.5, 0.5)

    viewer.pan_by(120, -200)
    assert viewer.view.center_ratio != (0.5, 0.5)
    viewer.toggle_scale()
    assert viewer.view.scale_factor == 0
    assert viewer.view.center_ratio == (0.5, 0.5)

    viewer.toggle_scale()
    assert viewer.view.scale_factor == 1.0
    assert viewer.view.center_ratio == (0.5, 0.5)


def test_buttons_drive_the_viewer(host, new_bitmap):
    bmp, _ = new_bitmap(1200, 1600)
    v = ImageViewer(host, SingleImage.owned(bmp), buttons_visible=True)
    row = host.widget("button_row")
    assert row.labels["scale"] == "Original size"
    assert row.labels["rotate"] == "Rotate"

    row.press("scale")
    assert v.view.scale_factor == 1.0
    assert row.labels["scale"] == "Scale"

    row.press("rotate")
    assert v.view.rotated
    assert row.labels["rotate"] == "No rotation"

    row.press("close")
    assert v.closed


def test_button_row_takes_room(host, new_bitmap):
    bmp, _ = new_bitmap(300, 400)
    v = ImageViewer(host, SingleImage.owned(bmp))
    box_h = v.image_box.h
    v.toggle_buttons()
    assert v.image_box.h == box_h - host.widget("button_row").get_height()


def test_caption_toggle_swaps_title_bars(host, new_bitmap):
    bmp, _ = new_bitmap(300, 400)
    v = ImageViewer(host, SingleImage.owned(bmp), caption="Figure 1")
    captioned = host.widget("captioned_title_bar")
    plain = host.widget("title_bar")
    assert v.title_bar_height == captioned.get_height()

    plain.on_toggle_caption()
    assert not v.chrome.caption_visible
    assert v.title_bar_height == plain.get_height()

    captioned.on_close()
    assert v.closed


def test_no_title_bar(host, new_bitmap):
    bmp, _ = new_bitmap(300, 400)
    v = ImageViewer(host, SingleImage.owned(bmp), with_title_bar=False)
    assert v.title_bar_height == 0
    assert host.widget("title_bar") is None


def test_rotation_follows_screen_orientation(new_bitmap):
    from einkview import DeviceInfo, Rotation
    from einkview.headless import HeadlessHost

    host = HeadlessHost(device_info=DeviceInfo(screen_w=800, screen_h=600, landscape_clockwise=False))
    bmp, _ = new_bitmap(300, 200)
    v = ImageViewer(host, SingleImage.owned(bmp), rotated=True)
    assert v.rendered.rotation == Rotation.CLOCKWISE_90
    v.toggle_rotation()
    assert v.rendered.rotation == Rotation.NONE


# ─── Paint requests ─────────────────────────────────────────────────────────

def test_rebuild_paints_union_of_frames(host, new_bitmap):
    bmp, _ = new_bitmap(300, 400)
    v = ImageViewer(host, SingleImage.owned(bmp))
    assert host.last_paint.region == Rect(20, 20, 560, 760)
    assert host.last_paint.policy == RefreshPolicy.UI
    assert host.last_paint.dither

    v.chrome.fullscreen = True
    v.rebuild()
    assert host.last_paint.region == Rect(0, 0, 600, 800)
    assert v.covers_fullscreen

    v.chrome.fullscreen = False
    v.rebuild()
    assert host.last_paint.region == Rect(0, 0, 600, 800)


def test_on_show_requests_full_refresh(host, viewer):
    viewer.on_show()
    assert host.last_paint.policy == RefreshPolicy.FULL
    assert host.last_paint.region == viewer.frame_rect


def test_explicit_window_size(host, new_bitmap):
    bmp, _ = new_bitmap(300, 400)
    v = ImageViewer(host, SingleImage.owned(bmp), width=400, height=500)
    assert v.frame_rect == Rect(100, 150, 400, 500)


# ─── Save view ──────────────────────────────────────────────────────────────

def test_save_view_hides_chrome_then_restores(host, new_bitmap, tmp_path):
    bmp, _ = new_bitmap(1200, 1600)
    v = ImageViewer(host, SingleImage.owned(bmp), buttons_visible=True,
                    screenshot_dir=str(tmp_path))

    assert v.save_view()
    assert v.chrome.is_chromeless
    assert v.frame_rect == Rect(0, 0, 600, 800)
    assert host.force_repaints == 1

    path = host.screenshots[0]
    assert os.path.dirname(path) == str(tmp_path)
    name = os.path.basename(path)
    assert name.startswith("ImageViewer_") and name.endswith(".png")

    assert host.finish_screenshots() == 1
    assert v.chrome.with_title_bar
    assert v.chrome.buttons_visible
    assert not v.chrome.fullscreen
    assert v.frame_rect == Rect(20, 20, 560, 760)


def test_save_view_restore_runs_once(host, new_bitmap, tmp_path):
    bmp, _ = new_bitmap(300, 400)
    v = ImageViewer(host, SingleImage.owned(bmp), screenshot_dir=str(tmp_path))
    v.save_view()
    _path, callback = host.pending_captures[0]

    callback()
    paints = len(host.paints)
    v.chrome.buttons_visible = True
    callback()
    assert len(host.paints) == paints
    assert v.chrome.buttons_visible


def test_save_view_when_already_chromeless(host, viewer):
    paints = len(host.paints)
    viewer.save_view()
    assert host.pending_captures[0][1] is None
    assert host.force_repaints == 0
    assert len(host.paints) == paints
    assert host.finish_screenshots() == 0


def test_restore_after_close_is_ignored(host, new_bitmap, tmp_path):
    bmp, _ = new_bitmap(300, 400)
    v = ImageViewer(host, SingleImage.owned(bmp), screenshot_dir=str(tmp_path))
    v.save_view()
    v.close()
    paints = len(host.paints)
    host.finish_screenshots()
    assert len(host.paints) == paints


def test_button_presses_are_counted_and_ignored_after_close(host, new_bitmap):
    from einkview.logging import get_event

    bmp, _ = new_bitmap(1200, 1600)
    v = ImageViewer(host, SingleImage.owned(bmp), buttons_visible=True)
    row = host.widget("button_row")

    before = get_event()
    row.press("rotate")
    assert get_event() == before + 1

    v.close()
    row.press("scale")
    row.press("rotate")
    assert v.view.scale_factor == 0
    assert v.view.rotated
    assert get_event() == before + 1
