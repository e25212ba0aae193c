"""Local mirror of the executor's job list."""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from scrambler.core.constants import UNSUCCESSFUL_STATES, Command
from scrambler.schemas.job import Job
from scrambler.services.gateway import CommandGateway, CommandResult
from scrambler.services.store import Derived, Writable

logger = logging.getLogger(__name__)

JobSnapshot = tuple[Job, ...]

_JOB_LIST = TypeAdapter(list[Job])


def active_jobs(jobs: JobSnapshot) -> JobSnapshot:
    return tuple(job for job in jobs if job.is_active)


def completed_jobs(jobs: JobSnapshot) -> JobSnapshot:
    return tuple(job for job in jobs if job.is_complete)


def unsuccessful_jobs(jobs: JobSnapshot) -> JobSnapshot:
    return tuple(job for job in jobs if job.state in UNSUCCESSFUL_STATES)


def _find(jobs: JobSnapshot, job_id: Optional[str]) -> Optional[Job]:
    if job_id is None:
        return None
    return next((job for job in jobs if job.id == job_id), None)


class JobRegistry:
    """Snapshot mirror of every job the executor knows about.

    ``jobs`` is only ever written by ``refresh`` and always holds a complete
    reply from the last successful fetch. A failed fetch leaves the previous
    snapshot in place. ``active``, ``completed`` and ``terminal_non_success``
    partition the snapshot.
    """

    def __init__(self, gateway: CommandGateway) -> None:
        self._gateway = gateway
        self.jobs: Writable[JobSnapshot] = Writable(())
        self.active = Derived(self.jobs, active_jobs)
        self.completed = Derived(self.jobs, completed_jobs)
        self.terminal_non_success = Derived(self.jobs, unsuccessful_jobs)
        self.selected_job_id: Writable[Optional[str]] = Writable(None)
        self.selected = Derived((self.jobs, self.selected_job_id), lambda values: _find(*values))

    async def refresh(self) -> CommandResult[JobSnapshot]:
        result = await self._gateway.invoke(Command.GET_ALL_JOBS)
        if not result.ok:
            logger.warning("job refresh failed, keeping previous snapshot")
            return CommandResult.failure(result.error)

        try:
            snapshot = tuple(_JOB_LIST.validate_python(result.value))
        except ValidationError as exc:
            logger.warning(f"job refresh returned an unusable reply, keeping previous snapshot: {exc}")
            return CommandResult.failure(exc)

        self.jobs.set(snapshot)
        return CommandResult.success(snapshot)

    def get(self, job_id: str) -> Optional[Job]:
        return _find(self.jobs.get(), job_id)

    def select(self, job_id: Optional[str]) -> None:
        self.selected_job_id.set(job_id)

