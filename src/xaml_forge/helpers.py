"""Integration helpers for xaml_forge.

Utilities for wiring the compiler into build steps and applications:
- Collecting markup files from a directory tree
- Compiling a markup file to a generated Python module
- Loading a markup file at run time
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from xaml_forge.backends.base import ControlHandle, UiBackend
from xaml_forge.backends.codegen import GeneratedCode
from xaml_forge.compiler import compile_static, load_markup

logger = logging.getLogger(__name__)

MARKUP_EXTENSIONS = {".xaml"}
GENERATED_SUFFIX = "_ui.py"


def collect_markup_files(path: Path, recursive: bool = False) -> list[Path]:
    """Collect markup files under ``path``.

    Args:
        path: A markup file or a directory.
        recursive: Required when ``path`` is a directory.

    Returns:
        Sorted markup file paths.

    Raises:
        ValueError: If ``path`` is a directory and ``recursive`` is False.
    """
    if path.is_dir():
        if not recursive:
            raise ValueError(f"{path} is a directory. Use --recursive to process all files.")
        return sorted({p for ext in MARKUP_EXTENSIONS for p in path.rglob(f"*{ext}")})
    return [path]


def generated_module_path(source: Path, out_dir: Path | None = None) -> Path:
    """Path of the module generated for ``source``, e.g. ``main.xaml`` -> ``main_ui.py``."""
    stem = re.sub(r"\W", "_", source.stem)
    if stem[:1].isdigit():
        stem = f"_{stem}"
    directory = out_dir if out_dir is not None else source.parent
    return directory / f"{stem}{GENERATED_SUFFIX}"


def compile_file(
    source: str | Path,
    destination: str | Path | None = None,
    function_name: str = "build",
) -> Path:
    """Compile a markup file and write the generated module.

    Args:
        source: Markup file.
        destination: Output path; defaults to ``<stem>_ui.py`` next to the source.
        function_name: Name of the generated build function.

    Returns:
        Path of the written module.

    Raises:
        CompileError: If the markup is invalid. Nothing is written then.
    """
    source = Path(source)
    markup = source.read_text(encoding="utf-8")
    code: GeneratedCode = compile_static(
        markup,
        source_name=source.name,
        function_name=function_name,
    )

    target = Path(destination) if destination is not None else generated_module_path(source)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(code.source, encoding="utf-8")
    logger.info("Compiled %s -> %s (%d nodes)", source, target, code.node_count)
    return target


def load_markup_file(path: str | Path, backend: UiBackend | None = None) -> ControlHandle:
    """Read a markup file and build it through ``backend`` at run time."""
    markup = Path(path).read_text(encoding="utf-8")
    return load_markup(markup, backend)
