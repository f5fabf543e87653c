"""In-memory files and file paths."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class VirtualFile:
    """The text content of a file held in memory."""

    content: str

    def get_file_content(self) -> str:
        """The file's content."""
        return self.content


@dataclass(frozen=True)
class FilePath:
    """A file path usable as a dictionary key."""

    path: str