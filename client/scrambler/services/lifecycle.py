"""Submit, cancel and query jobs on the executor."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from scrambler.core.constants import Command
from scrambler.schemas.job import Job, SubmissionRequest, normalize_submission
from scrambler.services.gateway import CommandError, CommandGateway, CommandResult
from scrambler.services.registry import JobRegistry

logger = logging.getLogger(__name__)


class JobLifecycleController:
    def __init__(self, gateway: CommandGateway, registry: JobRegistry) -> None:
        self._gateway = gateway
        self._registry = registry

    async def submit(self, raw_config: Union[SubmissionRequest, Mapping[str, Any]]) -> CommandResult[str]:
        """Start a job and refresh the registry before handing back its id.

        The refresh happens only on success, so the new job is already in the
        mirror when the caller next reads it.
        """
        try:
            config = normalize_submission(raw_config)
        except ValidationError as exc:
            logger.error(f"job submission rejected before sending: {exc}")
            return CommandResult.failure(exc)

        result = await self._gateway.invoke(Command.START_JOB, config.to_command_args())
        if not result.ok:
            return CommandResult.failure(result.error)

        job_id = result.value
        if not isinstance(job_id, str) or not job_id:
            logger.error(f"start_job replied without a job id: {job_id!r}")
            return CommandResult.failure(CommandError(f"start_job returned no job id: {job_id!r}"))

        logger.info(f"started job {job_id} ({config.output_format}, overlay={config.overlay_position})")
        await self._registry.refresh()
        return CommandResult.success(job_id)

    async def cancel(self, job_id: str) -> CommandResult[None]:
        # Refresh either way: the executor decides whether the cancel took.
        result = await self._gateway.invoke(Command.CANCEL_JOB, {"jobId": job_id})
        if result.ok:
            logger.info(f"cancel requested for job {job_id}")
        await self._registry.refresh()
        return CommandResult.success() if result.ok else CommandResult.failure(result.error)

    async def query_status(self, job_id: str) -> Optional[Job]:
        result = await self._gateway.invoke(Command.GET_JOB_STATUS, {"jobId": job_id})
        if not result.ok:
            return None
        try:
            return Job.model_validate(result.value)
        except ValidationError as exc:
            logger.warning(f"status reply for job {job_id} is unusable: {exc}")
            return None
