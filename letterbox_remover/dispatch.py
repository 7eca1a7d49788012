import functools
import logging
from pathlib import Path
from typing import Optional

from .exceptions import FileProcessingError
from .models import FileClassification, ProcessingConfig, ProcessingOutcome
from .processing.interfaces import IImageProcessor
from .scanning.classifier import PathClassifier

logger = logging.getLogger(__name__)


class FileDispatcher:
    def __init__(self,
                 processor: IImageProcessor,
                 classifier: Optional[PathClassifier] = None,
                 log: Optional[logging.Logger] = None):
        self.processor = processor
        self.classifier = classifier or PathClassifier(processor)
        self.log = log or logger

    def dispatch(self, path: Path, config: ProcessingConfig) -> ProcessingOutcome:
        """
        Routes a single file to the matching removal strategy.

        Non-image files are skipped with a warning. Any error raised while
        processing is wrapped in a FileProcessingError naming the file and
        returned as a FAILED outcome rather than raised.
        """
        kind = self.classifier.classify(path)

        if kind is FileClassification.NON_IMAGE:
            self.log.warning(f"Skipping non-image file: {path}")
            return ProcessingOutcome.skipped(path, "not an image")

        try:
            if kind is FileClassification.STRUCTURED_FORMAT:
                self.log.info(f"Processing JXL file: {path}")
                remover = functools.partial(self.processor.remove_letterbox, threshold=config.threshold)
                self.processor.process_jxl_file(path, remover)
            else:
                self.log.info(f"Processing image file: {path}")
                self.processor.remove_letterbox(path, config.threshold)
        except Exception as e:
            error = FileProcessingError(path, e)
            error.__cause__ = e
            return ProcessingOutcome.failed(path, error)

        return ProcessingOutcome.ok(path)
