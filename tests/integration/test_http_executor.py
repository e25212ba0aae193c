from __future__ import annotations

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Any

import httpx
import pytest
from fastapi import FastAPI, HTTPException, Request

from scrambler.main import open_session
from scrambler.schemas.config import ClientConfig
from scrambler.services.gateway import CommandError


def build_executor_app() -> FastAPI:
    """Minimal in-memory executor speaking the command wire contract."""
    app = FastAPI()
    jobs: dict[str, dict[str, Any]] = {}

    def start_job(args: dict[str, Any]) -> str:
        if not args.get("youtubeLinks") and not args.get("localBrollPaths"):
            raise HTTPException(status_code=400, detail="need youtube links or local files")
        job_id = uuid.uuid4().hex[:8]
        jobs[job_id] = {
            "id": job_id,
            "state": "Queued",
            "progress": {"stage": "Queued - waiting to start", "percent": 0.0},
            "created_at": datetime.now(timezone.utc).isoformat(),
            "output_format": args["outputFormat"],
            "overlay_position": args["overlayPosition"],
            "submitted": args,
        }
        return job_id

    def cancel_job(args: dict[str, Any]) -> None:
        job = jobs.get(args["jobId"])
        if job is None:
            raise HTTPException(status_code=404, detail=f"job {args['jobId']} not found")
        if job["state"] in {"Complete", "Failed"}:
            raise HTTPException(status_code=409, detail="cant cancel a finished job")
        job["state"] = "Cancelled"
        return None

    def get_job_status(args: dict[str, Any]) -> dict[str, Any]:
        job = jobs.get(args["jobId"])
        if job is None:
            raise HTTPException(status_code=404, detail=f"job {args['jobId']} not found")
        return job

    handlers = {
        "check_dependencies": lambda args: {
            "ffmpeg_installed": True,
            "ytdlp_installed": False,
            "all_good": True,
            "gpu_encoder": "CPU (libx264)",
        },
        "get_app_dirs": lambda args: {"temp": "/data/temp", "exports": "/data/exports"},
        "validate_youtube_url": lambda args: "youtu" in args.get("url", ""),
        "get_all_jobs": lambda args: sorted(jobs.values(), key=lambda j: j["created_at"], reverse=True),
        "start_job": start_job,
        "cancel_job": cancel_job,
        "get_job_status": get_job_status,
    }

    @app.post("/invoke/{command}")
    async def invoke(command: str, request: Request) -> Any:
        handler = handlers.get(command)
        if handler is None:
            raise HTTPException(status_code=404, detail=f"unknown command {command}")
        body = await request.body()
        args = await request.json() if body else {}
        return handler(args)

    app.state.jobs = jobs
    return app


@pytest.fixture
def executor_app() -> FastAPI:
    return build_executor_app()


def _config() -> ClientConfig:
    config = ClientConfig()
    config.executor.base_url = "http://executor.test"
    config.polling.enabled = False
    return config


def test_session_startup_reads_environment(executor_app: FastAPI) -> None:
    async def scenario():
        async with open_session(_config(), transport=httpx.ASGITransport(app=executor_app)) as session:
            return session.environment.dependencies.get(), session.environment.app_dirs.get(), session

    deps, dirs, session = asyncio.run(scenario())

    assert deps.checked is True
    assert deps.gpu_encoder == "CPU (libx264)"
    assert dirs.exports == "/data/exports"
    assert session.environment.loading.get() is False
    assert not session.poller.running


def test_submit_cancel_roundtrip(executor_app: FastAPI) -> None:
    async def scenario():
        async with open_session(_config(), transport=httpx.ASGITransport(app=executor_app)) as session:
            submitted = await session.lifecycle.submit(
                {"userVideoPath": "/me.mp4", "outputFormat": "tiktok", "youtubeLinks": ["https://youtu.be/a"]}
            )
            active_after_submit = [job.id for job in session.registry.active.get()]
            cancelled = await session.lifecycle.cancel(submitted.value)
            status = await session.lifecycle.query_status(submitted.value)
            return session, submitted, active_after_submit, cancelled, status

    session, submitted, active_after_submit, cancelled, status = asyncio.run(scenario())

    assert submitted.ok is True
    assert active_after_submit == [submitted.value]
    assert cancelled.ok is True
    assert status.state == "Cancelled"
    assert [job.id for job in session.registry.terminal_non_success.get()] == [submitted.value]
    assert session.registry.active.get() == ()
    sent = executor_app.state.jobs[submitted.value]["submitted"]
    assert sent["overlayPosition"] == "top"
    assert sent["localBrollPaths"] is None


def test_executor_errors_become_failed_results(executor_app: FastAPI) -> None:
    async def scenario():
        async with open_session(_config(), transport=httpx.ASGITransport(app=executor_app)) as session:
            rejected = await session.lifecycle.submit({"userVideoPath": "/me.mp4", "outputFormat": "youtube"})
            missing = await session.lifecycle.cancel("nope")
            valid = await session.environment.validate_remote_source_url("https://youtu.be/abc")
            formats = await session.environment.list_output_formats()
            return rejected, missing, valid, formats

    rejected, missing, valid, formats = asyncio.run(scenario())

    assert rejected.ok is False
    assert isinstance(rejected.error, CommandError)
    assert "need youtube links or local files" in str(rejected.error)
    assert missing.ok is False
    assert "404" in str(missing.error)
    assert valid is True
    assert formats[0].value == "youtube"


def test_unreachable_executor_degrades_safely() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def scenario():
        async with open_session(_config(), transport=httpx.MockTransport(refuse)) as session:
            refreshed = await session.registry.refresh()
            return session, refreshed

    session, refreshed = asyncio.run(scenario())

    assert refreshed.ok is False
    assert isinstance(refreshed.error, httpx.ConnectError)
    assert session.registry.jobs.get() == ()
    assert session.environment.dependencies.get().checked is True
    assert session.environment.app_dirs.get().temp is None
