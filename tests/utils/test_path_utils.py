"""
Tests for path_utils module.

Tests cover directory creation, Lua file discovery and output path
resolution.
"""

from pathlib import Path

import pytest

from zdoc.utils.path_utils import (
    ensure_directory,
    is_lua_file,
    iter_lua_files,
    resolve_output_path,
)


@pytest.fixture
def lua_tree(tmp_path):
    """Create a small directory of Lua and non-Lua files."""
    root = tmp_path / "lua"
    (root / "client" / "ui").mkdir(parents=True)
    (root / "client" / "ui" / "ISButton.lua").write_text("ISButton = {}\n")
    (root / "client" / "ISMain.lua").write_text("ISMain = {}\n")
    (root / "shared").mkdir()
    (root / "shared" / "Util.LUA").write_text("Util = {}\n")
    (root / "shared" / "notes.txt").write_text("not lua\n")
    return root


class TestDirectories:
    """Test directory creation."""

    def test_ensure_directory(self, tmp_path):
        target = tmp_path / "a" / "b"
        assert ensure_directory(target) == target
        assert target.is_dir()
        ensure_directory(target)


class TestLuaFiles:
    """Test Lua file discovery."""

    def test_is_lua_file(self, lua_tree):
        assert is_lua_file(lua_tree / "client" / "ISMain.lua")
        assert is_lua_file(lua_tree / "shared" / "Util.LUA")
        assert not is_lua_file(lua_tree / "shared" / "notes.txt")
        assert not is_lua_file(lua_tree / "client")

    def test_iter_lua_files_sorted_and_recursive(self, lua_tree):
        """Test that files are found recursively in sorted order."""
        names = [p.relative_to(lua_tree).as_posix() for p in iter_lua_files(lua_tree)]
        assert names == ["client/ISMain.lua", "client/ui/ISButton.lua", "shared/Util.LUA"]

    def test_iter_single_file(self, lua_tree):
        path = lua_tree / "client" / "ISMain.lua"
        assert list(iter_lua_files(path)) == [path]

    def test_iter_single_non_lua_file(self, lua_tree):
        assert list(iter_lua_files(lua_tree / "shared" / "notes.txt")) == []

    def test_iter_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            list(iter_lua_files(tmp_path / "missing"))


class TestResolveOutputPath:
    """Test mapping of input files to output files."""

    def test_without_output_dir_overwrites(self):
        path = Path("lua/ui/ISButton.lua")
        assert resolve_output_path(path, Path("lua"), None) == path

    def test_relative_structure_is_kept(self):
        result = resolve_output_path(Path("lua/ui/ISButton.lua"), Path("lua"), Path("out"))
        assert result == Path("out/ui/ISButton.lua")

    def test_single_file_root(self):
        path = Path("lua/ui/ISButton.lua")
        assert resolve_output_path(path, path, Path("out")) == Path("out/ISButton.lua")
