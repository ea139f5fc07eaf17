"""Constants used throughout Photo Bracket."""

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

# --- Constants ---
# Suffixes picked up when scanning a directory (compared case-insensitively)
DEFAULT_IMAGE_EXTENSIONS = (
    ".jpg",
    ".jpeg",
    ".png",
    ".bmp",
    ".gif",
    ".tif",
    ".tiff",
    ".webp",
)

# Number of items presented per comparison
PAIR_SIZE = 2

# Logging
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

# Terminal session commands
CMD_KEEP_LEFT = "1"
CMD_KEEP_RIGHT = "2"
CMD_KEEP_BOTH = "b"
CMD_KEEP_NEITHER = "n"
CMD_SKIP = "s"  # requeue the pair, "different pics"
CMD_UNDO = "u"
CMD_REDO = "r"
CMD_QUIT = "q"

COMMAND_HELP = {
    CMD_KEEP_LEFT: "keep left",
    CMD_KEEP_RIGHT: "keep right",
    CMD_KEEP_BOTH: "keep both",
    CMD_KEEP_NEITHER: "keep neither",
    CMD_SKIP: "different pics",
    CMD_UNDO: "undo",
    CMD_REDO: "redo",
    CMD_QUIT: "quit",
}
