import pytest
from pathlib import Path
from PIL import Image

from letterbox_remover.exceptions import ImageProcessingError
from letterbox_remover.processing.interfaces import IImageProcessor


class FakeProcessor(IImageProcessor):
    """Records every call instead of touching pixels. Fails on names in `fail_on`."""

    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.calls = []
        self.callbacks = []

    def is_jxl_file(self, path: Path) -> bool:
        return path.suffix.lower() == ".jxl"

    def is_image_file(self, path: Path) -> bool:
        return path.suffix.lower() in {".png", ".jpg"}

    def remove_letterbox(self, path: Path, threshold: int) -> None:
        self.calls.append(("remove", path, threshold))
        if path.name in self.fail_on:
            raise ImageProcessingError(f"cannot decode {path.name}")

    def process_jxl_file(self, path: Path, processor) -> None:
        self.calls.append(("jxl", path))
        self.callbacks.append(processor)
        if path.name in self.fail_on:
            raise ImageProcessingError(f"cannot decode {path.name}")
        processor(path)

    def visited(self):
        return [call[1] for call in self.calls]


@pytest.fixture
def fake_processor():
    return FakeProcessor()


@pytest.fixture
def make_image():
    """Returns a helper that writes a white PNG, optionally with black bars top and bottom."""
    def _make(path: Path, width: int = 100, height: int = 100, with_letterbox: bool = False) -> Path:
        im = Image.new("RGB", (width, height), color=(255, 255, 255))
        if with_letterbox:
            for y in range(height):
                if y < height // 4 or y > height * 3 // 4:
                    for x in range(width):
                        im.putpixel((x, y), (0, 0, 0))
        im.save(path)
        return path
    return _make


@pytest.fixture
def make_processor():
    """Returns the FakeProcessor class, for tests that need failing files."""
    return FakeProcessor
