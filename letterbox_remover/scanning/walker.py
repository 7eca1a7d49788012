import os
import logging
from pathlib import Path
from typing import Iterator, Tuple

from ..exceptions import DirectoryReadError

logger = logging.getLogger(__name__)


class DirectoryWalker:
    def walk(self, root: Path, recursive: bool) -> Iterator[Path]:
        """
        Depth-first walker using os.scandir.

        Each directory is listed once, when it is reached. Its files are
        yielded (sorted by name) before any of its subdirectories are
        entered. Subdirectories are only entered when `recursive` is set;
        otherwise they are ignored.

        Symlinks are followed for files and directories alike. A directory
        whose (device, inode) has already been queued is not entered again,
        so symlink loops terminate and every file is yielded once.

        Raises:
            DirectoryReadError: If a directory cannot be listed.
        """
        visited = {self._identity(root)}
        stack = [root]
        while stack:
            current = stack.pop()
            logger.debug(f"Listing directory: {current}")

            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError as e:
                raise DirectoryReadError(current, e) from e

            # Sort for stable traversal order
            entries.sort(key=lambda e: e.name.lower())

            dirs = []
            for e in entries:
                if e.is_file():
                    yield Path(e.path)
                elif recursive and e.is_dir():
                    path = Path(e.path)
                    key = self._identity(path)
                    if key in visited:
                        logger.debug(f"Already visited, not descending again: {path}")
                        continue
                    visited.add(key)
                    dirs.append(path)

            # Push dirs to stack (reversed so we process A before Z)
            for d in reversed(dirs):
                stack.append(d)

    def _identity(self, path: Path) -> Tuple[int, int]:
        # os.stat rather than DirEntry.stat: the latter leaves st_ino at 0 on Windows
        try:
            st = os.stat(path)
        except OSError as e:
            raise DirectoryReadError(path, e) from e
        return st.st_dev, st.st_ino
