"""Client session entrypoint: wires the gateway, state containers and poller."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Optional

import httpx

from scrambler.core.log import configure_logging
from scrambler.schemas.config import ClientConfig
from scrambler.services.config_store import ensure_config
from scrambler.services.environment import EnvironmentState
from scrambler.services.gateway import CommandGateway, HttpCommandTransport
from scrambler.services.lifecycle import JobLifecycleController
from scrambler.services.notifications import NotificationChannel, Scheduler
from scrambler.services.paths import suggested_output_dir
from scrambler.services.registry import JobRegistry
from scrambler.workers.poller import RegistryPoller

logger = logging.getLogger(__name__)


@dataclass
class ClientSession:
    config: ClientConfig
    transport: HttpCommandTransport
    gateway: CommandGateway
    environment: EnvironmentState
    registry: JobRegistry
    lifecycle: JobLifecycleController
    notifications: NotificationChannel
    poller: RegistryPoller

    def suggested_output_dir(self) -> Path:
        return suggested_output_dir()

    async def start(self) -> None:
        self.environment.loading.set(True)
        try:
            await self.environment.probe_dependencies()
            await self.environment.resolve_app_directories()
            await self.registry.refresh()
        finally:
            self.environment.loading.set(False)

        if self.config.polling.enabled:
            self.poller.start()

    async def close(self) -> None:
        await self.poller.stop()
        await self.transport.aclose()


def create_session(
    config: Optional[ClientConfig] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    scheduler: Optional[Scheduler] = None,
) -> ClientSession:
    cfg = config or ClientConfig()
    http_transport = HttpCommandTransport(cfg.executor, transport=transport)
    gateway = CommandGateway(http_transport)
    registry = JobRegistry(gateway)

    return ClientSession(
        config=cfg,
        transport=http_transport,
        gateway=gateway,
        environment=EnvironmentState(gateway),
        registry=registry,
        lifecycle=JobLifecycleController(gateway, registry),
        notifications=NotificationChannel(cfg.notifications.default_duration_ms, scheduler=scheduler),
        poller=RegistryPoller(registry, cfg.polling.interval_s),
    )


@asynccontextmanager
async def open_session(
    config: Optional[ClientConfig] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    scheduler: Optional[Scheduler] = None,
) -> AsyncIterator[ClientSession]:
    session = create_session(config, transport=transport, scheduler=scheduler)
    try:
        await session.start()
        logger.info(f"client session ready against {session.config.executor.base_url}")
        yield session
    finally:
        await session.close()


def load_session_config(path: Optional[Path] = None) -> ClientConfig:
    """Load (or bootstrap) the persisted config and apply its logging level."""
    config = ensure_config(path) if path is not None else ensure_config()
    configure_logging(config.logging.level)
    return config
