"""
Configuration constants for the letterbox remover.
"""

# --- File Type Definitions ---
JXL_EXTS = {'.jxl'}
RASTER_EXTS = {'.jpg', '.jpeg', '.jpe', '.png', '.webp', '.bmp'}
TIFF_EXTS = {'.tif', '.tiff'}

# Extension to Type Mapping
# Used to quickly classify files without complex if/else chains
EXT_TO_TYPE = {}
for ext in JXL_EXTS: EXT_TO_TYPE[ext] = 'jxl'
for ext in RASTER_EXTS: EXT_TO_TYPE[ext] = 'raster'
for ext in TIFF_EXTS: EXT_TO_TYPE[ext] = 'raster'

# JPEG XL signatures: bare codestream and ISO BMFF container
JXL_CODESTREAM_SIGNATURE = b'\xff\x0a'
JXL_CONTAINER_SIGNATURE = b'\x00\x00\x00\x0cJXL \r\n\x87\n'
SIGNATURE_READ_SIZE = len(JXL_CONTAINER_SIGNATURE)

# --- Letterbox Detection ---
# Pixels with every channel at or below the threshold are treated as letterbox
DEFAULT_THRESHOLD = 10
MIN_THRESHOLD = 0
MAX_THRESHOLD = 255

# Pillow's default of 75 is too lossy for a crop-only rewrite
JPEG_SAVE_QUALITY = 95

# --- JPEG XL Pipeline ---
# Reference libjxl tools, resolved on PATH unless overridden
CJXL_BINARY = "cjxl"
DJXL_BINARY = "djxl"

HASH_CHUNK_SIZE = 64 * 1024  # 64 KB chunks for reading

# TIFF compression names as reported on open, mapped to what the writer accepts.
# None = leave Pillow's default (uncompressed)
TIFF_SAVE_COMPRESSION = {
    'raw': None,
    'tiff_jpeg': 'jpeg',  # old-style JPEG cannot be written by libtiff
}
