"""Runtime paths and static client settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ClientPaths:
    home_root: Path
    runtime_root: Path
    config_path: Path
    default_output_dir: Path


def build_paths(home: Path | None = None) -> ClientPaths:
    home_root = home or Path.home()
    runtime_root = home_root / ".broll-scrambler"
    config_path = runtime_root / "config.json"
    default_output_dir = home_root / "Videos" / "BRollScrambler"

    return ClientPaths(
        home_root=home_root,
        runtime_root=runtime_root,
        config_path=config_path,
        default_output_dir=default_output_dir,
    )


CLIENT_VERSION = "0.1.0"
PATHS = build_paths()
