"""Pydantic schemas for persisted client configuration."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from scrambler.core.constants import DEFAULT_NOTIFICATION_MS, DEFAULT_POLL_INTERVAL_S


class ExecutorConfig(BaseModel):
    base_url: str = "http://127.0.0.1:8765"
    command_prefix: str = "/invoke"
    timeout_s: Optional[float] = None


class PollingConfig(BaseModel):
    enabled: bool = True
    interval_s: float = Field(default=DEFAULT_POLL_INTERVAL_S, gt=0)


class NotificationConfig(BaseModel):
    default_duration_ms: int = DEFAULT_NOTIFICATION_MS


class LoggingConfig(BaseModel):
    level: str = "INFO"


class ClientConfig(BaseModel):
    executor: ExecutorConfig = Field(default_factory=ExecutorConfig)
    polling: PollingConfig = Field(default_factory=PollingConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
