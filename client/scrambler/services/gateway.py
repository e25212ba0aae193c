"""Command gateway to the job executor, plus its HTTP transport."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, Union

import httpx

from scrambler.core.constants import Command
from scrambler.schemas.config import ExecutorConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

CommandName = Union[Command, str]
Transport = Callable[[str, dict[str, Any]], Awaitable[Any]]


class CommandError(RuntimeError):
    pass


@dataclass(frozen=True)
class CommandResult(Generic[T]):
    ok: bool
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, value: T = None) -> "CommandResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "CommandResult[T]":
        return cls(ok=False, error=error)

    def unwrap_or(self, default: T) -> T:
        return self.value if self.ok else default


def _command_name(command: CommandName) -> str:
    return command.value if isinstance(command, Command) else command


class CommandGateway:
    """Single point through which the client talks to the executor.

    Every call is one transport round trip; whatever the transport raises is
    turned into a failed ``CommandResult`` and logged here, so callers never
    need their own try/except.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def invoke(self, command: CommandName, args: Optional[dict[str, Any]] = None) -> CommandResult[Any]:
        name = _command_name(command)
        try:
            value = await self._transport(name, dict(args or {}))
        except Exception as exc:
            logger.error(f"invoke {name} failed: {exc!r}")
            return CommandResult.failure(exc)
        logger.debug(f"invoke {name} ok")
        return CommandResult.success(value)


class HttpCommandTransport:
    """POSTs each command to the executor's HTTP bridge.

    ``POST {base_url}{command_prefix}/{command}`` with the argument bundle as
    the JSON body; the decoded JSON reply is the command's value.
    """

    def __init__(
        self,
        cfg: ExecutorConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._prefix = "/" + cfg.command_prefix.strip("/") if cfg.command_prefix.strip("/") else ""
        self._client = httpx.AsyncClient(
            base_url=cfg.base_url.rstrip("/"),
            timeout=cfg.timeout_s,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            payload = response.json()
        except Exception:
            return response.text[:500]
        if isinstance(payload, dict):
            detail = payload.get("detail") or payload.get("error")
            if isinstance(detail, str) and detail.strip():
                return detail.strip()
        return response.text[:500]

    async def __call__(self, command: str, args: dict[str, Any]) -> Any:
        resp = await self._client.post(f"{self._prefix}/{command}", json=args)
        if resp.status_code >= 400:
            raise CommandError(f"{command} failed: {resp.status_code} {self._error_detail(resp)}")
        if not resp.content:
            return None
        return resp.json()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpCommandTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
