import math

import pytest

from einkview import DeviceInfo, ImageSequence, ImageViewer, RefreshPolicy, SingleImage
from einkview.headless import HeadlessHost
from einkview.gestures import (
    Direction, Hold, HoldRelease, KeyPress, MultiSwipe, Pan, PanRelease,
    Pinch, Spread, Swipe, Tap, TwoFingerTap,
)


def big_viewer(host, new_bitmap, **kwargs):
    bmp, _ = new_bitmap(1200, 1600)
    opts = dict(fullscreen=True, with_title_bar=False)
    opts.update(kwargs)
    return ImageViewer(host, SingleImage.owned(bmp), **opts)


def sequence_viewer(host, new_bitmap, n=3):
    seq = ImageSequence.of([new_bitmap(300, 400)[0] for _ in range(n)], frames_disposable=False)
    return ImageViewer(host, seq, fullscreen=True, with_title_bar=False)


# ─── Swipes ─────────────────────────────────────────────────────────────────

def test_swipe_south_pans_when_zoomed(host, new_bitmap):
    v = big_viewer(host, new_bitmap, scale_factor=1.5)
    v.handle(Swipe(300, 400, Direction.SOUTH, 300))

    assert not v.closed
    assert v.view.center_y_ratio == pytest.approx(0.5 - 300 / 2400)
    assert v.view.center_x_ratio == pytest.approx(0.5)


def test_swipe_south_closes_when_fit(host, new_bitmap):
    v = big_viewer(host, new_bitmap)
    v.handle(Swipe(300, 400, Direction.SOUTH, 300))

    assert v.closed
    assert host.closed == [v]
    assert v.view.center_ratio == (0.5, 0.5)


def test_swipe_north_on_edge_zooms_in(host, new_bitmap):
    v = big_viewer(host, new_bitmap)
    v.handle(Swipe(10, 400, Direction.NORTH, 400))
    assert v.view.scale_factor == pytest.approx(0.5 + 400 / 800)


def test_swipe_south_on_edge_zooms_out(host, new_bitmap):
    v = big_viewer(host, new_bitmap, scale_factor=1.0)
    v.handle(Swipe(590, 400, Direction.SOUTH, 200))
    assert v.view.scale_factor == pytest.approx(0.75)
    assert not v.closed


def test_swipe_north_pans(host, new_bitmap):
    v = big_viewer(host, new_bitmap, scale_factor=1.0)
    v.handle(Swipe(300, 400, Direction.NORTH, 160))
    assert v.view.center_y_ratio == pytest.approx(0.5 + 160 / 1600)


@pytest.mark.parametrize(
    "direction, sx, sy",
    [
        (Direction.EAST, -1, 0),
        (Direction.WEST, 1, 0),
    ],
)
def test_horizontal_swipes(host, new_bitmap, direction, sx, sy):
    v = big_viewer(host, new_bitmap, scale_factor=1.0)
    v.handle(Swipe(300, 400, direction, 120))
    assert v.view.center_x_ratio == pytest.approx(0.5 + sx * 120 / 1200)
    assert v.view.center_y_ratio == pytest.approx(0.5)


@pytest.mark.parametrize(
    "direction, sx, sy",
    [
        (Direction.NORTHEAST, -1, 1),
        (Direction.NORTHWEST, 1, 1),
        (Direction.SOUTHEAST, -1, -1),
        (Direction.SOUTHWEST, 1, -1),
    ],
)
def test_diagonal_swipes(host, new_bitmap, direction, sx, sy):
    v = big_viewer(host, new_bitmap, scale_factor=1.0)
    v.handle(Swipe(300, 400, direction, 100 * math.sqrt(2)))
    assert v.view.center_x_ratio == pytest.approx(0.5 + sx * 100 / 1200)
    assert v.view.center_y_ratio == pytest.approx(0.5 + sy * 100 / 1600)


def test_multiswipe_closes(host, new_bitmap):
    v = big_viewer(host, new_bitmap, scale_factor=2.0)
    v.handle(MultiSwipe(300, 400))
    assert v.closed


# ─── Taps ───────────────────────────────────────────────────────────────────

def test_tap_outside_frame_closes(host, new_bitmap):
    bmp, _ = new_bitmap(300, 400)
    v = ImageViewer(host, SingleImage.owned(bmp))
    v.handle(Tap(5, 5))
    assert v.closed


def test_tap_toggles_buttons(host, new_bitmap):
    bmp, _ = new_bitmap(300, 400)
    v = ImageViewer(host, SingleImage.owned(bmp))
    v.handle(Tap(300, 400))
    assert v.chrome.buttons_visible
    v.handle(Tap(50, 400))
    assert not v.chrome.buttons_visible


def test_tap_in_title_bar_is_ignored(host, new_bitmap):
    bmp, _ = new_bitmap(300, 400)
    v = ImageViewer(host, SingleImage.owned(bmp))
    paints = len(host.paints)
    assert v.handle(Tap(300, 50))
    assert not v.chrome.buttons_visible
    assert not v.closed
    assert len(host.paints) == paints


def test_tap_thirds_navigate_sequence(host, new_bitmap):
    v = sequence_viewer(host, new_bitmap)

    v.handle(Tap(50, 400))   # previous, but already on first
    assert v.current_index == 1
    assert not v.chrome.buttons_visible

    v.handle(Tap(550, 400))
    assert v.current_index == 2
    v.handle(Tap(550, 400))
    v.handle(Tap(550, 400))  # already on last
    assert v.current_index == 3
    v.handle(Tap(50, 400))
    assert v.current_index == 2

    v.handle(Tap(300, 400))
    assert v.chrome.buttons_visible


def test_tap_thirds_mirrored(new_bitmap):
    host = HeadlessHost(device_info=DeviceInfo(mirrored_ui=True))
    v = sequence_viewer(host, new_bitmap)
    v.handle(Tap(50, 400))
    assert v.current_index == 2
    v.handle(Tap(550, 400))
    assert v.current_index == 1


def test_tap_bottom_left_saves_without_multitouch(new_bitmap, tmp_path):
    host = HeadlessHost(device_info=DeviceInfo(has_multitouch=False))
    bmp, _ = new_bitmap(300, 400)
    v = ImageViewer(host, SingleImage.owned(bmp), fullscreen=True, screenshot_dir=str(tmp_path))
    v.handle(Tap(30, 780))
    assert len(host.screenshots) == 1


def test_tap_bottom_left_toggles_with_multitouch(host, new_bitmap):
    bmp, _ = new_bitmap(300, 400)
    v = ImageViewer(host, SingleImage.owned(bmp), fullscreen=True)
    v.handle(Tap(30, 780))
    assert host.screenshots == []
    assert v.chrome.buttons_visible


# ─── Hold and pan ───────────────────────────────────────────────────────────

def test_hold_without_move_requests_full_refresh(host, new_bitmap):
    v = big_viewer(host, new_bitmap, scale_factor=1.0)
    v.handle(Hold(300, 400))
    v.handle(HoldRelease(302, 401))

    assert host.last_paint.region is None
    assert host.last_paint.policy == RefreshPolicy.FULL
    assert v.view.center_ratio == (0.5, 0.5)
    assert not v.pan_state.panning


def test_hold_with_move_pans(host, new_bitmap):
    v = big_viewer(host, new_bitmap, scale_factor=1.0)
    v.handle(Hold(300, 400))
    v.handle(HoldRelease(300, 500))
    assert v.view.center_y_ratio == pytest.approx(0.5 - 100 / 1600)


def test_hold_release_without_hold_is_ignored(host, new_bitmap):
    v = big_viewer(host, new_bitmap, scale_factor=1.0)
    paints = len(host.paints)
    v.handle(HoldRelease(300, 500))
    assert len(host.paints) == paints


def test_hold_release_after_pan_is_ignored(host, new_bitmap):
    v = big_viewer(host, new_bitmap, scale_factor=1.0)
    v.handle(Pan(300, 400, relative=(50, 50)))
    paints = len(host.paints)

    assert v.handle(HoldRelease(350, 450))
    assert len(host.paints) == paints
    assert v.view.center_ratio == (0.5, 0.5)

    # the pan itself still completes
    v.handle(PanRelease(350, 450))
    assert v.view.center_x_ratio == pytest.approx(0.5 - 50 / 1200)


def test_pan_release_pans_by_relative_movement(host, new_bitmap):
    v = big_viewer(host, new_bitmap, scale_factor=1.0)
    v.handle(Pan(350, 400, relative=(20, 0)))
    v.handle(Pan(380, 400, relative=(50, 0)))
    v.handle(PanRelease(380, 400))
    assert v.view.center_x_ratio == pytest.approx(0.5 - 50 / 1200)
    assert not v.pan_state.panning


# ─── Pinch, spread, two finger tap ──────────────────────────────────────────

def test_spread_recenters_then_zooms(host, new_bitmap):
    v = big_viewer(host, new_bitmap, scale_factor=1.0)
    v.handle(Spread(450, 400, 60))
    assert v.view.scale_factor == pytest.approx(1.1)
    assert v.view.center_x_ratio == pytest.approx(0.5 + 150 / 1200)
    assert v.view.center_y_ratio == pytest.approx(0.5)


def test_pinch_zooms_out_keeping_center(host, new_bitmap):
    v = big_viewer(host, new_bitmap, scale_factor=1.0)
    v.pan_by(100, 0)
    center = v.view.center_ratio
    v.handle(Pinch(450, 400, 60))
    assert v.view.scale_factor == pytest.approx(0.9)
    assert v.view.center_ratio == center


def test_two_finger_tap_along_diagonal_saves(host, new_bitmap, tmp_path):
    v = big_viewer(host, new_bitmap, screenshot_dir=str(tmp_path))
    v.handle(TwoFingerTap(300, 400, 500))
    assert host.screenshots == []
    v.handle(TwoFingerTap(300, 400, 850))
    assert len(host.screenshots) == 1


# ─── Keys and device capabilities ───────────────────────────────────────────

def test_keys_zoom_and_close(new_bitmap):
    host = HeadlessHost(device_info=DeviceInfo(has_keys=True))
    v = big_viewer(host, new_bitmap)
    v.handle(KeyPress("page_back"))
    assert v.view.scale_factor == pytest.approx(0.7)
    v.handle(KeyPress("page_forward"))
    assert v.view.scale_factor == pytest.approx(0.5)
    v.handle(KeyPress("menu"))
    assert v.closed


def test_back_key_closes(new_bitmap):
    host = HeadlessHost(device_info=DeviceInfo(has_keys=True))
    v = big_viewer(host, new_bitmap)
    v.handle(KeyPress("back"))
    assert v.closed


def test_keys_ignored_without_keys(host, new_bitmap):
    v = big_viewer(host, new_bitmap)
    v.handle(KeyPress("back"))
    assert not v.closed


def test_touch_ignored_on_non_touch_device(new_bitmap):
    host = HeadlessHost(device_info=DeviceInfo(is_touch=False, has_keys=True))
    v = big_viewer(host, new_bitmap)
    v.handle(Swipe(300, 400, Direction.SOUTH, 300))
    assert not v.closed


def test_events_after_close_are_not_consumed(host, new_bitmap):
    v = big_viewer(host, new_bitmap)
    v.close()
    assert not v.handle(Tap(300, 400))
