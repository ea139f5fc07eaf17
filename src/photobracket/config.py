"""Session configuration."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List

from photobracket.constants import DEFAULT_IMAGE_EXTENSIONS
from photobracket.exceptions import ConfigurationError
from photobracket.models.image_file import normalize_extension


@dataclass
class BracketConfig:
    """Settings handed to whatever drives a bracket.

    Attributes
    ----------
    extensions : list of str
        File suffixes treated as photos when scanning a directory.
    recursive : bool
        Whether scanning descends into subdirectories.
    check_images : bool
        Whether every photo is decoded once before judging starts, to report
        unreadable files early.
    verbose : bool
        Enables debug logging.
    """

    extensions: List[str] = field(
        default_factory=lambda: list(DEFAULT_IMAGE_EXTENSIONS)
    )
    recursive: bool = False
    check_images: bool = False
    verbose: bool = False

    def __post_init__(self):
        if not self.extensions:
            raise ConfigurationError("At least one image extension is required")
        self.extensions = [normalize_extension(ext) for ext in self.extensions]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "extensions": self.extensions,
            "recursive": self.recursive,
            "check_images": self.check_images,
            "verbose": self.verbose,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BracketConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            extensions=list(data.get("extensions", DEFAULT_IMAGE_EXTENSIONS)),
            recursive=bool(data.get("recursive", False)),
            check_images=bool(data.get("check_images", False)),
            verbose=bool(data.get("verbose", False)),
        )
