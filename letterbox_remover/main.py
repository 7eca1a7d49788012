import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import config
from .core import LetterboxRemoverApp
from .exceptions import LetterboxRemoverError
from .models import ProcessingConfig
from .processing.letterbox import PillowImageProcessor


def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to the console and, optionally, to a file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )

    # Silence chatty libraries
    logging.getLogger("PIL").setLevel(logging.WARNING)


def threshold_arg(value: str) -> int:
    try:
        threshold = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid threshold: {value!r} is not an integer")
    if not config.MIN_THRESHOLD <= threshold <= config.MAX_THRESHOLD:
        raise argparse.ArgumentTypeError(
            f"invalid threshold: {threshold} (choose from {config.MIN_THRESHOLD}-{config.MAX_THRESHOLD})"
        )
    return threshold


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(description="Remove letterboxing from images")

    p.add_argument("-i", "--input", type=Path, required=True, help="Input directory or file path")
    p.add_argument("-r", "--recursive", action="store_true",
                   help="Process files recursively if input is a directory")
    p.add_argument("-t", "--threshold", type=threshold_arg, default=config.DEFAULT_THRESHOLD,
                   help="Threshold for letterbox detection (0-255). Higher values are more aggressive: "
                        "pixels with every RGB value at or below it are treated as letterbox. Default: %(default)s")

    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    p.add_argument("--progress", action="store_true", help="Show a progress bar for directory runs")
    p.add_argument("--cjxl", default=config.CJXL_BINARY, help="Path to the cjxl encoder (JPEG XL files)")
    p.add_argument("--djxl", default=config.DJXL_BINARY, help="Path to the djxl decoder (JPEG XL files)")

    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)

    setup_logging(args.verbose, args.log_file)

    settings = ProcessingConfig(threshold=args.threshold, recursive=args.recursive)
    app = LetterboxRemoverApp(
        processor=PillowImageProcessor(cjxl=args.cjxl, djxl=args.djxl),
        logger=logging.getLogger("letterbox_remover"),
        show_progress=args.progress,
    )

    try:
        app.run(args.input, settings)
    except LetterboxRemoverError as e:
        logging.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        sys.exit(1)
    except Exception:
        logging.exception("Fatal error while removing letterbox.")
        sys.exit(1)


if __name__ == "__main__":
    main()
