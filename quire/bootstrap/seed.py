"""Enumerate the seed files committed to newly installed repositories."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path, PurePosixPath

DEFAULT_SEED_ROOT = Path(__file__).resolve().parent / "seed_templates"


@dataclasses.dataclass(frozen=True, slots=True)
class TemplateFile:
    """A seed file: its path relative to the seed root and its bytes."""

    relative_path: str
    content: bytes


class LocalTemplateTree:
    """Recursive view over a local directory of seed files.

    The directory is walked afresh on every call to :meth:`files`, so edits
    on disk are picked up by the next bootstrap. Order follows the
    filesystem listing and is not sorted.
    """

    def __init__(self, root: Path | str = DEFAULT_SEED_ROOT) -> None:
        """Point the tree at ``root``."""
        self.root = Path(root)

    def files(self) -> list[TemplateFile]:
        """Return every regular file below the root, at any depth.

        Raises
        ------
        FileNotFoundError
            If the root directory does not exist.

        """
        if not self.root.is_dir():
            msg = f"Seed template directory not found: {self.root}"
            raise FileNotFoundError(msg)

        found: list[TemplateFile] = []
        for dirpath, _dirnames, filenames in os.walk(self.root):
            directory = Path(dirpath)
            for filename in filenames:
                path = directory / filename
                if not path.is_file():
                    continue
                relative = PurePosixPath(*path.relative_to(self.root).parts)
                found.append(
                    TemplateFile(relative_path=str(relative), content=path.read_bytes())
                )
        return found
