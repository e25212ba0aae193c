"""Pydantic schemas for executor environment replies and local readiness state."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from scrambler.core.constants import UNKNOWN_ENCODER


class DependencyReport(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ffmpeg_installed: bool
    ytdlp_installed: bool
    all_good: bool
    gpu_encoder: Optional[str] = None


class DependencyStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    ffmpeg_installed: bool = False
    ytdlp_installed: bool = False
    all_good: bool = False
    checked: bool = False
    gpu_encoder: str = UNKNOWN_ENCODER


class AppDirectories(BaseModel):
    model_config = ConfigDict(frozen=True)

    temp: Optional[str] = None
    exports: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.temp is not None and self.exports is not None


class OverlayOption(BaseModel):
    value: str
    label: str
    description: str = ""


class FormatOption(BaseModel):
    value: str
    label: str
    width: int = 0
    height: int = 0
    description: str = ""
