"""Directory content manifests with concurrent MD5 hashing."""

from .api import generate_manifest
from .constants import VERSION
from .models import FileEntry, GenerateResult, HashResult, Manifest

__version__ = VERSION

__all__ = [
    "FileEntry",
    "GenerateResult",
    "HashResult",
    "Manifest",
    "generate_manifest",
]
