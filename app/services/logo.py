"""Waitlist logos.

Storage keeps a single string column: a decimal number picks one of the
built-in vector icons, anything else is the URL of an uploaded image. The rest
of the code works with the tagged values below and only converts at the edges.
"""
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

BUILTIN_ICON_COUNT = 10

_ICON_INDEX = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class BuiltinIcon:
    index: int

    @property
    def variant(self) -> int:
        # Icons wrap around: 11 draws icon 1, 0 draws icon 10
        return ((self.index - 1) % BUILTIN_ICON_COUNT) + 1


@dataclass(frozen=True)
class UploadedImage:
    url: str


Logo = Union[BuiltinIcon, UploadedImage]


def parse_logo(stored: Optional[str]) -> Optional[Logo]:
    if stored is None:
        return None
    value = stored.strip()
    if not value:
        return None
    if _ICON_INDEX.fullmatch(value):
        return BuiltinIcon(int(value))
    return UploadedImage(value)


def to_stored(logo: Optional[Logo]) -> Optional[str]:
    if logo is None:
        return None
    if isinstance(logo, BuiltinIcon):
        return str(logo.index)
    return logo.url


def logo_payload(logo: Optional[Logo]) -> Optional[Dict[str, Any]]:
    """JSON shape handed to page renderers."""
    if logo is None:
        return None
    if isinstance(logo, BuiltinIcon):
        return {"kind": "builtin", "variant": logo.variant}
    return {"kind": "image", "url": logo.url}
