"""Read a generated file, run patchers over it and write it back only if something changed."""

import logging
from collections.abc import Mapping
from pathlib import Path

from ogenfix import Patcher
from ogenfix.exceptions import PatchFileError

logger = logging.getLogger("ogenfix.files")


def _read(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise PatchFileError("read file", path, e) from e


def _write(path: Path, content: bytes) -> None:
    try:
        path.write_bytes(content)
    except OSError as e:
        raise PatchFileError("write file", path, e) from e


def patch_files(path: Path | str, patchers: Mapping[str, Patcher]) -> dict[str, int]:
    """Apply `patchers` in order to the file at `path`.

    The file is read once and written once, and only when at least one pass changed something.
    Returns the number of sites changed per patcher name.
    """
    path = Path(path)
    content = _read(path)
    counts = {}
    for name, patcher in patchers.items():
        content, counts[name] = patcher(content)
        logger.debug("%s: %d site(s) in %s", name, counts[name], path)
    if any(counts.values()):
        _write(path, content)
    return counts


def patch_file(path: Path | str, patcher: Patcher) -> int:
    """Apply a single patcher to the file at `path`, returns the number of sites changed."""
    return patch_files(path, {"patch": patcher})["patch"]
