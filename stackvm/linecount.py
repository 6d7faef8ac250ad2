from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

logger = logging.getLogger(__name__)


def count_lines(path: Path) -> int:
    """Count newline-delimited lines; a trailing partial line counts as one."""
    n = 0
    with path.open("rb") as f:
        for _ in f:
            n += 1
    return n


def _log_walk_error(err: OSError) -> None:
    logger.debug("skipping unreadable directory: %s", err)


def _dir_key(path: str | Path) -> tuple[int, int]:
    st = os.stat(path)
    return st.st_dev, st.st_ino


def _prune_loops(dirpath: str, dirnames: list[str], ancestors: dict[str, frozenset]) -> None:
    # A followed link back to one of its own ancestors would be walked forever.
    above = ancestors.pop(dirpath, frozenset())
    kept: list[str] = []
    for name in sorted(dirnames):
        child = os.path.join(dirpath, name)
        try:
            key = _dir_key(child)
        except OSError as e:
            _log_walk_error(e)
            continue
        if key in above:
            logger.debug("skipping directory loop: %s", child)
            continue
        ancestors[child] = above | {key}
        kept.append(name)
    dirnames[:] = kept


def iter_matching_files(root: Path, ext: str) -> Iterator[Path]:
    suffix = "." + ext
    ancestors: dict[str, frozenset] = {}
    try:
        ancestors[os.fspath(root)] = frozenset({_dir_key(root)})
    except OSError as e:
        _log_walk_error(e)
        return
    for dirpath, dirnames, filenames in os.walk(root, followlinks=True, onerror=_log_walk_error):
        _prune_loops(dirpath, dirnames, ancestors)
        for name in sorted(filenames):
            if not name.endswith(suffix):
                continue
            path = Path(dirpath) / name
            if not path.exists():
                logger.debug("skipping dangling link: %s", path)
                continue
            yield path


def search_files(root: Path, ext: str, *, out: TextIO | None = None) -> int:
    """Print `<path> <line-count>` for every file under `root` ending in `.<ext>`.

    Unreadable matched files abort the search with the underlying OSError.
    """
    stream = out if out is not None else sys.stdout
    matched = 0
    for path in iter_matching_files(root, ext):
        n = count_lines(path)
        print(f"{path} {n}", file=stream)
        matched += 1
    logger.debug("matched %d files with extension %r under %s", matched, ext, root)
    return matched
