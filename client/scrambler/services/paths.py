"""Local path helpers for the file/folder pickers."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Union

from scrambler.core.constants import VIDEO_EXTENSIONS
from scrambler.core.settings import PATHS, build_paths

PathLike = Union[str, Path]


def is_video_file(path: PathLike) -> bool:
    return Path(path).suffix.lower().lstrip(".") in VIDEO_EXTENSIONS


def video_files(paths: Optional[Iterable[PathLike]]) -> list[str]:
    """Keep picker selections that look like videos; ``None`` means cancelled."""
    if not paths:
        return []
    return [str(p) for p in paths if is_video_file(p)]


def suggested_output_dir(home: Optional[Path] = None) -> Path:
    if home is None:
        return PATHS.default_output_dir
    return build_paths(home).default_output_dir
