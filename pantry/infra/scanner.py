"""Barcode capability: decode a code from a camera frame.

The browser captures frames from the video device and uploads them; the
decoder runs in a worker thread so the event loop is never blocked. A frame
without a code is not a failure: the caller keeps sending frames until one
decodes or the session is stopped.
"""
import io
import asyncio
import logging
from typing import Optional, Protocol

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """Scanning was cancelled, is unsupported, or the frame could not be read."""


class ScannerUnsupported(ScanError):
    pass


class CodeScanner(Protocol):
    async def decode_once(self, frame: bytes) -> Optional[str]:
        ...


class ZXingScanner:
    """Decodes 1D/2D barcodes with zxing-cpp."""

    def __init__(self):
        try:
            import zxingcpp
        except ImportError as e:
            raise ScannerUnsupported("zxing-cpp is not available") from e
        self._zxing = zxingcpp

    def _decode(self, frame: bytes) -> Optional[str]:
        try:
            image = Image.open(io.BytesIO(frame))
            image.load()
            image = image.convert("L")
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise ScanError(f"Unreadable frame: {e}") from e
        try:
            results = self._zxing.read_barcodes(image)
        except (RuntimeError, ValueError) as e:
            raise ScanError(f"Decoder error: {e}") from e
        if not results:
            logger.debug("No barcode in %dx%d frame", *image.size)
            return None
        return results[0].text

    async def decode_once(self, frame: bytes) -> Optional[str]:
        """Returns the decoded text, or None when the frame holds no code."""
        if not frame:
            raise ScanError("Empty frame")
        return await asyncio.to_thread(self._decode, frame)
