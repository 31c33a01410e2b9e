"""
Utility modules for logging and path handling.

Examples:
    >>> from zdoc.utils import setup_logger, iter_lua_files
    >>> logger = setup_logger("zdoc")
"""

from .path_utils import (
    ensure_directory,
    is_lua_file,
    iter_lua_files,
    resolve_output_path,
)

from .logger import (
    setup_logger,
    get_logger,
    add_file_handler,
    add_console_handler,
    VALID_LOG_LEVELS,
)

__all__ = [
    "ensure_directory",
    "is_lua_file",
    "iter_lua_files",
    "resolve_output_path",
    "setup_logger",
    "get_logger",
    "add_file_handler",
    "add_console_handler",
    "VALID_LOG_LEVELS",
]
