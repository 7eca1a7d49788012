import hashlib
import logging
import shutil
import struct
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional, Tuple

from PIL import Image, ImageChops, UnidentifiedImageError

from .. import config
from ..exceptions import ImageProcessingError
from .interfaces import IImageProcessor, RemovalCallback

logger = logging.getLogger(__name__)


class PillowImageProcessor(IImageProcessor):
    """
    Concrete implementation of IImageProcessor.

    Strategies:
      - Raster images: Pillow (bounding box of non-dark pixels, crop in place).
      - JPEG XL: 'djxl' decodes to a temporary PNG, the PNG is cropped,
        and 'cjxl' re-encodes it losslessly over the source.
    """

    def __init__(self, cjxl: str = config.CJXL_BINARY, djxl: str = config.DJXL_BINARY):
        self.cjxl = cjxl
        self.djxl = djxl

    # --- Classification ---

    def is_jxl_file(self, path: Path) -> bool:
        if self._file_type(path) == 'jxl':
            return True
        return self._has_jxl_signature(path)

    def is_image_file(self, path: Path) -> bool:
        return self._file_type(path) == 'raster'

    def _file_type(self, path: Path) -> Optional[str]:
        # macOS resource forks share the image extension but hold no pixels
        if path.name.startswith("._"):
            return None
        return config.EXT_TO_TYPE.get(path.suffix.lower())

    def _has_jxl_signature(self, path: Path) -> bool:
        try:
            with open(path, 'rb') as f:
                head = f.read(config.SIGNATURE_READ_SIZE)
        except OSError:
            # Missing or unreadable: classification falls back to the name alone
            return False
        return (head.startswith(config.JXL_CODESTREAM_SIGNATURE)
                or head.startswith(config.JXL_CONTAINER_SIGNATURE))

    # --- Letterbox Removal ---

    def remove_letterbox(self, path: Path, threshold: int) -> None:
        try:
            with Image.open(path) as im:
                im.load()
                fmt = im.format
                width, height = im.size
                box = self._content_bbox(im, threshold)

                if box is None:
                    logger.debug(f"Image is entirely below threshold, leaving as-is: {path}")
                    return
                if box == (0, 0, width, height):
                    logger.debug(f"No letterbox detected in {path}")
                    return

                cropped = im.crop(box)
                save_format, options = self._save_options(im, fmt, path)

            # Source handle must be closed before the file is overwritten
            cropped.save(path, format=save_format, **options)
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise ImageProcessingError(f"Could not crop {path}: {e}") from e

        logger.info(f"Cropped {path} from {width}x{height} to {cropped.width}x{cropped.height}")

    def _content_bbox(self, im: Image.Image, threshold: int) -> Optional[Tuple[int, int, int, int]]:
        """
        Bounding box of pixels with at least one RGB channel above threshold.
        Everything outside it is letterbox.
        """
        bands = im.convert("RGB").split()
        masks = [band.point(lambda v: 255 if v > threshold else 0) for band in bands]

        mask = masks[0]
        for m in masks[1:]:
            mask = ImageChops.lighter(mask, m)
        return mask.getbbox()

    def _save_options(self, im: Image.Image, fmt: Optional[str], path: Path) -> Tuple[Optional[str], dict]:
        """
        Format and encoder options for writing the crop back over `path`.
        Carries metadata and the source's compression choices across.
        """
        options = {}
        if im.info.get("exif"):
            options["exif"] = im.info["exif"]
        if im.info.get("icc_profile"):
            options["icc_profile"] = im.info["icc_profile"]

        # Camera/phone JPEGs often open as MPO; only the primary frame is kept
        if fmt == "MPO":
            fmt = "JPEG"
        if fmt == "JPEG":
            options["quality"] = config.JPEG_SAVE_QUALITY
        elif fmt == "TIFF":
            compression = im.info.get("compression")
            compression = config.TIFF_SAVE_COMPRESSION.get(compression, compression)
            if compression:
                options["compression"] = compression
        elif fmt == "WEBP" and self._is_lossless_webp(path):
            options["lossless"] = True
        return fmt, options

    def _is_lossless_webp(self, path: Path) -> bool:
        """Walks the RIFF chunks; a VP8L bitstream means the source was lossless."""
        with open(path, 'rb') as f:
            header = f.read(12)
            if header[:4] != b'RIFF' or header[8:12] != b'WEBP':
                return False
            while True:
                chunk = f.read(8)
                if len(chunk) < 8:
                    return False
                fourcc, size = struct.unpack('<4sI', chunk)
                if fourcc == b'VP8L':
                    return True
                if fourcc == b'VP8 ':
                    return False
                # Chunks are padded to an even length
                f.seek(size + (size & 1), 1)

    # --- JPEG XL Pipeline ---

    def process_jxl_file(self, path: Path, processor: RemovalCallback) -> None:
        with tempfile.TemporaryDirectory(prefix="letterbox-jxl-") as tmp:
            decoded = Path(tmp) / "decoded.png"
            encoded = Path(tmp) / "encoded.jxl"

            self._run_tool([self.djxl, str(path), str(decoded)], "decode", path)

            before = self._sha256(decoded)
            processor(decoded)
            if self._sha256(decoded) == before:
                logger.debug(f"Decoded raster unchanged, keeping original: {path}")
                return

            # -d 0 = mathematically lossless
            self._run_tool([self.cjxl, str(decoded), str(encoded), "-d", "0"], "encode", path)
            shutil.move(str(encoded), str(path))

        logger.info(f"Re-encoded JXL file: {path}")

    def _run_tool(self, cmd: List[str], action: str, path: Path) -> None:
        logger.debug(f"Executing: {' '.join(cmd)}")
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise ImageProcessingError(
                f"{cmd[0]} not found in PATH. Install libjxl to {action} {path}"
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.strip() if e.stderr else "Unknown error"
            raise ImageProcessingError(f"JXL {action} failed for {path}: {stderr}") from e

    def _sha256(self, path: Path) -> str:
        h = hashlib.sha256()
        with open(path, 'rb') as f:
            while chunk := f.read(config.HASH_CHUNK_SIZE):
                h.update(chunk)
        return h.hexdigest()
