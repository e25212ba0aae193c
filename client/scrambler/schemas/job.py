"""Pydantic schemas for executor job records and submissions."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidatorFunctionWrapHandler, field_validator
from pydantic.alias_generators import to_camel

from scrambler.core.constants import DEFAULT_OVERLAY_POSITION, TERMINAL_STATES, JobState


class JobProgress(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    stage: str = ""
    percent: float = 0.0
    current_item: Optional[str] = None
    total_items: Optional[int] = None
    completed_items: Optional[int] = None


class Job(BaseModel):
    """Read-only mirror of one executor job.

    Only ``id`` and ``state`` are interpreted client-side; the rest is
    executor payload kept for display, left as the raw value when it does not
    parse.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    state: str
    progress: Optional[JobProgress] = None
    created_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    output_path: Optional[str] = None
    error: Optional[str] = None
    output_format: Optional[str] = None
    overlay_position: Optional[str] = None

    @field_validator(
        "progress",
        "created_at",
        "started_at",
        "completed_at",
        "output_path",
        "error",
        "output_format",
        "overlay_position",
        mode="wrap",
    )
    @classmethod
    def _keep_unparsed_payload(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        # Unparseable display fields keep the executor's raw value.
        try:
            return handler(value)
        except ValidationError:
            return value

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def is_active(self) -> bool:
        return not self.is_terminal

    @property
    def is_complete(self) -> bool:
        return self.state == JobState.COMPLETE.value


class SubmissionRequest(BaseModel):
    """Caller-side job settings, as loose as the UI hands them over."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    youtube_links: Optional[list[str]] = None
    local_broll_paths: Optional[list[str]] = None
    user_video_path: str
    output_format: str
    overlay_position: Optional[str] = None
    custom_width: Optional[int] = None
    custom_height: Optional[int] = None
    split_ratio: Optional[float] = None
    pip_scale: Optional[float] = None
    sfx_folder: Optional[str] = None


class JobSubmissionConfig(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    youtube_links: list[str] = Field(default_factory=list)
    local_broll_paths: Optional[list[str]] = None
    user_video_path: str
    output_format: str
    overlay_position: str = DEFAULT_OVERLAY_POSITION
    custom_width: Optional[int] = None
    custom_height: Optional[int] = None
    split_ratio: Optional[float] = None
    pip_scale: Optional[float] = None
    sfx_folder: Optional[str] = None

    def to_command_args(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def _blank_to_none(value: Any) -> Any:
    # Zero, empty strings and None all count as "not provided".
    if isinstance(value, list):
        return value
    return value if value else None


def normalize_submission(
    raw: Union[SubmissionRequest, Mapping[str, Any]],
) -> JobSubmissionConfig:
    """Fill every optional field so the ``start_job`` bundle is always complete.

    Raises ``pydantic.ValidationError`` when a required field is missing.
    """
    request = raw if isinstance(raw, SubmissionRequest) else SubmissionRequest.model_validate(dict(raw))
    return JobSubmissionConfig(
        youtube_links=list(request.youtube_links or []),
        local_broll_paths=_blank_to_none(request.local_broll_paths),
        user_video_path=request.user_video_path,
        output_format=request.output_format,
        overlay_position=request.overlay_position or DEFAULT_OVERLAY_POSITION,
        custom_width=_blank_to_none(request.custom_width),
        custom_height=_blank_to_none(request.custom_height),
        split_ratio=_blank_to_none(request.split_ratio),
        pip_scale=_blank_to_none(request.pip_scale),
        sfx_folder=_blank_to_none(request.sfx_folder),
    )
