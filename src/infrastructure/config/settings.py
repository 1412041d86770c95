"""
Process configuration read from environment variables (and a local .env file).
See docs/CleanArchitecture.md for the layering rationale.

Only the composition roots call ArchiveSettings.from_env(); the application
and domain layers receive plain values through constructors.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class ArchiveSettings:
    root: Path = Path("meetings")
    document_suffix: str = ".md"
    index_filename: str = "README.md"
    index_title: str = "Meeting Notes"
    log_level: str = "INFO"
    log_format: str = "console"

    @classmethod
    def from_env(cls) -> "ArchiveSettings":
        """Load settings from the environment, after merging any .env file into it.

        Variables already set in the environment take precedence over .env.
        """
        load_dotenv()
        return cls(
            root=Path(os.environ.get("MEETING_NOTES_ROOT", "meetings")),
            document_suffix=os.environ.get("MEETING_NOTES_SUFFIX", ".md"),
            index_filename=os.environ.get("MEETING_NOTES_INDEX_FILENAME", "README.md"),
            index_title=os.environ.get("MEETING_NOTES_INDEX_TITLE", "Meeting Notes"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            log_format=os.environ.get("LOG_FORMAT", "console").lower(),
        )

    def with_root(self, root: Optional[str | Path]) -> "ArchiveSettings":
        """Return a copy pointing at *root*, or self when *root* is None."""
        if root is None:
            return self
        return replace(self, root=Path(root))
