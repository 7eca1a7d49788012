from pathlib import Path

from ..models import FileClassification
from ..processing.interfaces import IImageProcessor


class PathClassifier:
    """
    Decides which removal strategy a path needs.

    Never raises: a path that does not exist is classified by its name,
    and the failure surfaces later when the file is actually opened.
    """

    def __init__(self, processor: IImageProcessor):
        self.processor = processor

    def classify(self, path: Path) -> FileClassification:
        # JPEG XL is checked first; its extension is not a plain raster type
        if self.processor.is_jxl_file(path):
            return FileClassification.STRUCTURED_FORMAT
        if self.processor.is_image_file(path):
            return FileClassification.STANDARD_IMAGE
        return FileClassification.NON_IMAGE
