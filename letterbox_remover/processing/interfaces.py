from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable

# A removal step bound to a threshold; receives only the decoded file path
RemovalCallback = Callable[[Path], None]


class IImageProcessor(ABC):
    """
    Contract for the image-processing engine the traversal depends on.
    Abstracts away pixel handling and codecs from the dispatch logic.
    """

    @abstractmethod
    def is_jxl_file(self, path: Path) -> bool:
        """Returns True if the path is a JPEG XL file (by extension or signature)."""
        pass

    @abstractmethod
    def is_image_file(self, path: Path) -> bool:
        """Returns True if the path is a raster image this engine can crop directly."""
        pass

    @abstractmethod
    def remove_letterbox(self, path: Path, threshold: int) -> None:
        """
        Detects letterboxing and crops it away, rewriting the file in place.
        Leaves the file untouched if no letterbox is found.

        Raises:
            ImageProcessingError: If the image cannot be read or written.
        """
        pass

    @abstractmethod
    def process_jxl_file(self, path: Path, processor: RemovalCallback) -> None:
        """
        Decodes a JPEG XL file, applies `processor` to the decoded raster
        and re-encodes the result over the original.

        Raises:
            ImageProcessingError: If decoding or encoding fails.
        """
        pass
