"""Executor environment readiness: dependencies, directories, option catalogs."""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from scrambler.core.constants import CPU_ENCODER, FORMAT_CATALOG, OVERLAY_CATALOG, Command
from scrambler.schemas.environment import (
    AppDirectories,
    DependencyReport,
    DependencyStatus,
    FormatOption,
    OverlayOption,
)
from scrambler.services.gateway import CommandGateway
from scrambler.services.store import Writable

logger = logging.getLogger(__name__)

_OVERLAY_OPTIONS = TypeAdapter(list[OverlayOption])
_FORMAT_OPTIONS = TypeAdapter(list[FormatOption])


class EnvironmentState:
    def __init__(self, gateway: CommandGateway) -> None:
        self._gateway = gateway
        self.dependencies: Writable[DependencyStatus] = Writable(DependencyStatus())
        self.app_dirs: Writable[AppDirectories] = Writable(AppDirectories())
        self.loading: Writable[bool] = Writable(False)

    def _mark_checked(self) -> None:
        self.dependencies.update(lambda status: status.model_copy(update={"checked": True}))

    async def probe_dependencies(self) -> Optional[DependencyReport]:
        """Ask the executor which tools it can use.

        ``checked`` ends up true whether or not the probe succeeded, so a
        failed probe is distinguishable from one that never ran.
        """
        result = await self._gateway.invoke(Command.CHECK_DEPENDENCIES)
        if not result.ok:
            logger.warning("dependency probe failed, keeping previous readiness values")
            self._mark_checked()
            return None

        try:
            report = DependencyReport.model_validate(result.value)
        except ValidationError as exc:
            logger.warning(f"dependency probe returned an unusable reply: {exc}")
            self._mark_checked()
            return None

        self.dependencies.set(
            DependencyStatus(
                ffmpeg_installed=report.ffmpeg_installed,
                ytdlp_installed=report.ytdlp_installed,
                all_good=report.all_good,
                checked=True,
                gpu_encoder=report.gpu_encoder or CPU_ENCODER,
            )
        )
        return report

    async def resolve_app_directories(self) -> Optional[AppDirectories]:
        result = await self._gateway.invoke(Command.GET_APP_DIRS)
        if not result.ok:
            return None
        try:
            dirs = AppDirectories.model_validate(result.value)
        except ValidationError as exc:
            logger.warning(f"app directories reply is unusable: {exc}")
            return None
        if not dirs.resolved:
            logger.warning("app directories reply is missing temp or exports")
            return None
        self.app_dirs.set(dirs)
        return dirs

    async def validate_remote_source_url(self, url: str) -> bool:
        result = await self._gateway.invoke(Command.VALIDATE_YOUTUBE_URL, {"url": url})
        return result.unwrap_or(False) is True

    async def list_overlay_positions(self) -> list[OverlayOption]:
        result = await self._gateway.invoke(Command.GET_OVERLAY_POSITIONS)
        if result.ok:
            try:
                return _OVERLAY_OPTIONS.validate_python(result.value)
            except ValidationError as exc:
                logger.warning(f"overlay catalog reply is unusable: {exc}")
        return _OVERLAY_OPTIONS.validate_python(OVERLAY_CATALOG)

    async def list_output_formats(self) -> list[FormatOption]:
        result = await self._gateway.invoke(Command.GET_OUTPUT_FORMATS)
        if result.ok:
            try:
                return _FORMAT_OPTIONS.validate_python(result.value)
            except ValidationError as exc:
                logger.warning(f"output format catalog reply is unusable: {exc}")
        return _FORMAT_OPTIONS.validate_python(FORMAT_CATALOG)
