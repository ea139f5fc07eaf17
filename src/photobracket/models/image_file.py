"""Image file handle tracked by the bracket."""

# Photo Bracket
# Copyright (C) 2025  Photo Bracket developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from functools import total_ordering
from pathlib import Path
from typing import Iterable, List, Optional, Union

from PyQt6 import QtGui

from photobracket.constants import DEFAULT_IMAGE_EXTENSIONS
from photobracket.exceptions import ImageLoadError
from photobracket.utils import setup_logger

logger = setup_logger(__name__)

PathLike = Union[str, Path]


@total_ordering
class ImageFile:
    """A photograph on disk plus a cache for its decoded image.

    Identity, hashing and ordering use only the resolved path, so two handles
    for the same file are interchangeable whatever their load state.

    Attributes
    ----------
    path : Path
        Canonical (resolved) path of the image.
    """

    __slots__ = ("path", "_image")

    def __init__(self, path: PathLike):
        self.path = Path(path).expanduser().resolve()
        self._image: Optional[QtGui.QImage] = None

    @classmethod
    def from_paths(cls, *paths: PathLike) -> List["ImageFile"]:
        """Convert paths to image files, dropping repeats but keeping order."""
        seen = set()
        files = []
        for path in paths:
            image_file = path if isinstance(path, cls) else cls(path)
            if image_file in seen:
                continue
            seen.add(image_file)
            files.append(image_file)
        return files

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_loaded(self) -> bool:
        return self._image is not None

    @property
    def image(self) -> QtGui.QImage:
        """The decoded image, loading it first if it was flushed."""
        image = self._image
        if image is None:
            image = self.load()
        return image

    def load(self) -> QtGui.QImage:
        """Decode the file and cache the result.

        Returns:
            The decoded image

        Raises:
            ImageLoadError: If the file is missing or cannot be decoded
        """
        if self._image is not None:
            return self._image
        if not self.path.is_file():
            raise ImageLoadError(self.path, "file does not exist")

        reader = QtGui.QImageReader(str(self.path))
        # Honour EXIF orientation
        reader.setAutoTransform(True)
        image = reader.read()
        if image.isNull():
            raise ImageLoadError(self.path, reader.errorString())

        self._image = image
        logger.debug("Loaded %s (%dx%d)", self.path, image.width(), image.height())
        return image

    def flush(self) -> None:
        """Drop the cached image. Safe to call repeatedly."""
        self._image = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageFile):
            return NotImplemented
        return self.path == other.path

    def __lt__(self, other: "ImageFile") -> bool:
        if not isinstance(other, ImageFile):
            return NotImplemented
        return self.path < other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self) -> str:
        return f"ImageFile({str(self.path)!r})"

    def __str__(self) -> str:
        return str(self.path)


def normalize_extension(extension: str) -> str:
    """Lower-case a suffix and make sure it starts with a dot."""
    extension = extension.strip().lower()
    return extension if extension.startswith(".") else f".{extension}"


def discover_images(
    directory: PathLike,
    extensions: Iterable[str] = DEFAULT_IMAGE_EXTENSIONS,
    recursive: bool = False,
) -> List[ImageFile]:
    """Collect the image files in a directory, sorted by path.

    Sorting keeps burst shots in capture order, which the pairing relies on
    to keep near-duplicates apart.

    Args:
        directory: Directory to scan
        extensions: File suffixes to accept, compared case-insensitively
        recursive: Whether to descend into subdirectories

    Returns:
        The image files found

    Raises:
        NotADirectoryError: If ``directory`` is not an existing directory
    """
    root = Path(directory).expanduser()
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    suffixes = {normalize_extension(ext) for ext in extensions}
    candidates = root.rglob("*") if recursive else root.iterdir()
    paths = sorted(
        path
        for path in candidates
        if path.is_file() and path.suffix.lower() in suffixes
    )
    logger.info("Found %d image(s) in %s", len(paths), root)
    return ImageFile.from_paths(*paths)
