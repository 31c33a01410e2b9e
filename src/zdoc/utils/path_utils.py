"""
Path helpers for locating Lua sources and mapping them to output files.

Examples:
    >>> from zdoc.utils.path_utils import iter_lua_files, resolve_output_path
    >>> for path in iter_lua_files(Path("media/lua")):
    ...     target = resolve_output_path(path, Path("media/lua"), Path("out"))
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

LUA_EXTENSIONS = frozenset({".lua"})


def ensure_directory(path: Path) -> Path:
    """
    Create directory if it doesn't exist, return Path.

    Raises:
        OSError: If directory creation fails.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def is_lua_file(path: Path) -> bool:
    """Return True for regular files with a ``.lua`` extension."""
    return path.is_file() and path.suffix.lower() in LUA_EXTENSIONS


def iter_lua_files(root: Path) -> Iterator[Path]:
    """
    Yield every Lua file under ``root`` in sorted order.

    ``root`` may itself be a single Lua file.

    Raises:
        FileNotFoundError: If ``root`` does not exist.
    """
    if not root.exists():
        raise FileNotFoundError(str(root))
    if root.is_file():
        if is_lua_file(root):
            yield root
        return
    for path in sorted(root.rglob("*")):
        if is_lua_file(path):
            yield path


def resolve_output_path(path: Path, root: Path, output_dir: Path | None) -> Path:
    """
    Map an input file to the file that should receive its output.

    Without an output directory the input file itself is returned, which
    means it gets overwritten. When ``root`` is the file itself only its
    name is resolved against ``output_dir``, otherwise the relative
    directory structure below ``root`` is kept.

    Examples:
        >>> resolve_output_path(Path("lua/ui/ISButton.lua"), Path("lua"), Path("out"))
        PosixPath('out/ui/ISButton.lua')
    """
    if output_dir is None:
        return path
    if root == path:
        return output_dir / path.name
    return output_dir / path.relative_to(root)
