"""Include resolution: walking and compiling config trees."""

from .compiler import CompileResult, compile_and_write, compile_config, render_compiled
from .includes import INCLUDE_PATTERN, include_path, parse_include, read_config, split_lines
from .walker import walk_included_files

__all__ = [
    "INCLUDE_PATTERN",
    "CompileResult",
    "compile_and_write",
    "compile_config",
    "include_path",
    "parse_include",
    "read_config",
    "render_compiled",
    "split_lines",
    "walk_included_files",
]
