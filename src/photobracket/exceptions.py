"""Exceptions for use in Photo Bracket"""

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


# ========== Base Application Exception ==========


class PhotoBracketException(Exception):
    """Base exception for all Photo Bracket errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Bracket Exceptions ==========


class BracketException(PhotoBracketException):
    """Base exception for scheduling errors."""

    pass


class InvalidVerdictError(BracketException):
    """Raised when a verdict does not match the pair on display.

    Attributes:
        items: The items that were passed with the verdict
        reason: Why the verdict was rejected
    """

    def __init__(self, items, reason: str):
        self.items = tuple(items)
        self.reason = reason
        super().__init__(f"Rejected verdict {list(self.items)!r}: {reason}")


# ========== Image Exceptions ==========


class ImageLoadError(PhotoBracketException, OSError):
    """Raised when an image file is missing or cannot be decoded.

    Subclasses OSError so callers treating it as a plain I/O failure keep working.

    Attributes:
        path: Path of the image that failed
        reason: Decoder or filesystem message
    """

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load image '{path}': {reason}")


# ========== Configuration Exceptions ==========


class ConfigurationError(PhotoBracketException):
    """Raised when configuration values are invalid."""

    pass
