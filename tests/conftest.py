from __future__ import annotations

from typing import Any

import pytest

from scrambler.services.gateway import CommandError, CommandGateway


class ScriptedExecutor:
    """In-memory stand-in for the executor transport.

    Replies queue per command; the last queued reply keeps answering once the
    others are used up. Exceptions are raised, callables get the args.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._replies: dict[str, list[Any]] = {}

    def reply(self, command: str, *values: Any) -> None:
        self._replies[command] = list(values)

    def count(self, command: str) -> int:
        return sum(1 for name, _ in self.calls if name == command)

    def commands(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def __call__(self, command: str, args: dict[str, Any]) -> Any:
        self.calls.append((command, args))
        queue = self._replies.get(command)
        if not queue:
            raise CommandError(f"no scripted reply for {command}")
        value = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(value, BaseException):
            raise value
        if callable(value):
            return value(args)
        return value


@pytest.fixture
def executor() -> ScriptedExecutor:
    return ScriptedExecutor()


@pytest.fixture
def gateway(executor: ScriptedExecutor) -> CommandGateway:
    return CommandGateway(executor)


def job_record(job_id: str, state: str, **extra: Any) -> dict[str, Any]:
    record = {
        "id": job_id,
        "state": state,
        "progress": {"stage": state, "percent": 0.0},
        "created_at": "2026-01-01T00:00:00Z",
        "output_format": "YouTube",
        "overlay_position": "Top",
    }
    record.update(extra)
    return record


@pytest.fixture
def make_job():
    return job_record
