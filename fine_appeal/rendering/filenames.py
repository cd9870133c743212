import re

_UNSAFE_RE = re.compile(r"[^A-Za-z0-9._-]+")

DEFAULT_STEM = "appeal_letter"


def export_filename(reference_number: str, extension: str) -> str:
    """Build a download filename from a fine reference number.

    ``export_filename("AB/123 4", "pdf") -> "appeal_AB_123_4.pdf"``; an empty
    or unusable reference falls back to ``appeal_letter.<ext>``.
    """
    safe = _UNSAFE_RE.sub("_", reference_number.strip()).strip("._")
    stem = f"appeal_{safe}" if safe else DEFAULT_STEM
    return f"{stem}.{extension.lstrip('.')}"
