"""Dostęp do systemu plików: dyski, listowanie i liczenie rozmiarów."""

from .base import (
    DirectoryLister,
    DriveEnumerator,
    Filesystem,
    FilesystemError,
    ListingError,
    SizeCalculationCancelled,
    SizeCalculator,
    SizingError,
)
from .local import LocalFilesystem

__all__ = [
	"DirectoryLister",
	"DriveEnumerator",
	"Filesystem",
	"FilesystemError",
	"ListingError",
	"LocalFilesystem",
	"SizeCalculationCancelled",
	"SizeCalculator",
	"SizingError",
]
