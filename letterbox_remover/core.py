import logging
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from .dispatch import FileDispatcher
from .exceptions import InputNotFoundError
from .models import OutcomeStatus, ProcessingConfig, ProcessingOutcome
from .processing.interfaces import IImageProcessor
from .processing.letterbox import PillowImageProcessor
from .scanning.walker import DirectoryWalker


class LetterboxRemoverApp:
    def __init__(self,
                 processor: Optional[IImageProcessor] = None,
                 logger: Optional[logging.Logger] = None,
                 show_progress: bool = False):
        self.processor = processor or PillowImageProcessor()
        self.logger = logger or logging.getLogger(__name__)
        self.show_progress = show_progress
        self.dispatcher = FileDispatcher(self.processor, log=self.logger)
        self.walker = DirectoryWalker()

    def run(self, input_path: Path, config: ProcessingConfig) -> None:
        """
        Removes letterboxing from a single file or from every image in a directory.

        Files are handled one at a time, in walk order. The first failure
        aborts the run: nothing after the failing file is touched.

        Raises:
            InputNotFoundError: If input_path does not exist.
            DirectoryReadError: If a directory cannot be listed.
            FileProcessingError: If any file fails to process.
        """
        if not input_path.exists():
            raise InputNotFoundError(input_path)

        if input_path.is_file():
            self._handle(self.dispatcher.dispatch(input_path, config))
        elif input_path.is_dir():
            self._process_directory(input_path, config)

    def _process_directory(self, root: Path, config: ProcessingConfig):
        self.logger.info(f"Processing directory: {root} (recursive={config.recursive})")

        processed_count = 0
        skipped_count = 0
        paths = self.walker.walk(root, config.recursive)
        for path in tqdm(paths, desc="Removing letterbox", unit="file", disable=not self.show_progress):
            outcome = self._handle(self.dispatcher.dispatch(path, config))
            if outcome.status is OutcomeStatus.SKIPPED:
                skipped_count += 1
            else:
                processed_count += 1

        self.logger.info(f"Directory complete. Processed {processed_count} files, skipped {skipped_count}.")

    def _handle(self, outcome: ProcessingOutcome) -> ProcessingOutcome:
        if outcome.is_failure:
            raise outcome.error
        return outcome
