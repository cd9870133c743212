"""Bounded-size image transcoding with Pillow.

Photos of fines arrive in whatever size and format the phone produced. Before
they reach the inference service they are rotated upright from EXIF data,
flattened to RGB, shrunk to fit inside a square bound (never enlarged), and
re-encoded as JPEG at a fixed quality. Images whose declared pixel count
exceeds a cap are refused before any pixel data is decoded.
"""

import io

from PIL import Image, ImageOps, UnidentifiedImageError

from fine_appeal.exceptions import ExtractionError
from fine_appeal.extraction.models import ImageContent

DEFAULT_MAX_DIMENSION = 1200
DEFAULT_JPEG_QUALITY = 85
DEFAULT_MAX_PIXELS = 50_000_000
OUTPUT_MIME_TYPE = "image/jpeg"

_DECODE_ERRORS = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    ValueError,
)


class ImageTranscoder:
    """Resizes and re-encodes images into a compact JPEG payload."""

    def __init__(
        self,
        max_dimension: int = DEFAULT_MAX_DIMENSION,
        quality: int = DEFAULT_JPEG_QUALITY,
        max_pixels: int = DEFAULT_MAX_PIXELS,
    ) -> None:
        if max_dimension <= 0:
            raise ValueError("max_dimension must be positive")
        if not 1 <= quality <= 95:
            raise ValueError("quality must be between 1 and 95")
        if max_pixels <= 0:
            raise ValueError("max_pixels must be positive")
        self._max_dimension = max_dimension
        self._quality = quality
        self._max_pixels = max_pixels

    def transcode(self, image_bytes: bytes) -> ImageContent:
        """Return a JPEG no larger than the configured bound.

        Raises:
            ExtractionError: if the bytes are not a readable image or the
                image has too many pixels to decode.
        """
        bound = (self._max_dimension, self._max_dimension)
        try:
            with Image.open(io.BytesIO(image_bytes)) as img:
                width, height = img.size
                if width * height > self._max_pixels:
                    raise ExtractionError(
                        f"Image is too large to process ({width}x{height} pixels)"
                    )
                if img.format == "JPEG":
                    img.draft("RGB", bound)
                img.load()
                oriented = ImageOps.exif_transpose(img) or img
                rgb = self._to_rgb(oriented)
                rgb.thumbnail(bound, Image.Resampling.LANCZOS)
                buf = io.BytesIO()
                rgb.save(buf, format="JPEG", quality=self._quality, optimize=True)
                width, height = rgb.size
        except _DECODE_ERRORS as exc:
            raise ExtractionError(f"Image could not be decoded: {exc}") from exc

        return ImageContent(
            data=buf.getvalue(),
            mime_type=OUTPUT_MIME_TYPE,
            width=width,
            height=height,
        )

    @staticmethod
    def _to_rgb(img: Image.Image) -> Image.Image:
        if img.mode == "RGB":
            return img.copy()
        if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
            rgba = img.convert("RGBA")
            background = Image.new("RGB", rgba.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.getchannel("A"))
            return background
        return img.convert("RGB")
