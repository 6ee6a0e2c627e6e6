import pytest
from PIL import Image

from einkview.types import Bitmap, DeviceInfo
from einkview.headless import HeadlessHost


class ReleaseCounter:
    """Release capability counting its calls."""

    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


def make_bitmap(w, h, releasable=True):
    counter = ReleaseCounter()
    bmp = Bitmap(image=Image.new("L", (w, h), 200), release_fn=counter if releasable else None)
    return bmp, counter


@pytest.fixture
def device():
    return DeviceInfo(screen_w=600, screen_h=800)


@pytest.fixture
def host(device):
    return HeadlessHost(device_info=device)


@pytest.fixture
def bare_kwargs():
    """Fullscreen viewer without any chrome."""
    return dict(fullscreen=True, with_title_bar=False, buttons_visible=False)


@pytest.fixture
def new_bitmap():
    """Factory returning (bitmap, release counter)."""
    return make_bitmap
