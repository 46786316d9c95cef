from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

import typer

from core.task import Task
from core.timing.errors import TrackingError
from core.timing.lap import Lap
from core.timing.session import Session, SessionStatus
from sdk.config import AppConfig, load_config
from sdk.ids import SessionId
from sdk.log import configure_logging
from sdk.registry import build_store
from tracking.session_manager import SessionManager

T = TypeVar("T")

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Track time spent on tasks.")

_state: dict = {}


@app.callback()
def main(
    store: Optional[str] = typer.Option(None, "--store", help="Store key, e.g. store.jsonl or store.memory"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level, e.g. INFO"),
) -> None:
    """Cuckoo time tracker."""

    overrides = {}
    if store:
        overrides["store"] = store
    if log_level:
        overrides["log_level"] = log_level
    cfg = load_config(**overrides)
    try:
        configure_logging(cfg.log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc
    _state["cfg"] = cfg


def _cfg() -> AppConfig:
    return _state.get("cfg") or load_config()


def _run(op: Callable[[SessionManager], Awaitable[T]]) -> T:
    """Run ``op`` against a fresh manager, turning tracker errors into exit code 1."""

    cfg = _cfg()

    async def _go() -> T:
        manager = SessionManager(build_store(cfg), serialize_per_identifier=cfg.serialize_per_identifier)
        return await op(manager)

    try:
        return asyncio.run(_go())
    except TrackingError as exc:
        typer.echo(f"[cuckoo] {exc}", err=True)
        raise typer.Exit(code=1) from exc


async def _require(manager: SessionManager, session_id: SessionId) -> Session:
    session = await manager.session(session_id)
    if session is None:
        typer.echo(f"[cuckoo] no session '{session_id}'", err=True)
        raise typer.Exit(code=1)
    return session


def _fmt_seconds(seconds: Optional[float]) -> str:
    if seconds is None:
        return "-"
    sign = "-" if seconds < 0 else ""
    minutes, secs = divmod(abs(seconds), 60)
    hours, minutes = divmod(int(minutes), 60)
    return f"{sign}{hours:d}:{minutes:02d}:{secs:06.3f}"


def _lap_line(position: int, lap: Lap) -> str:
    duration = lap.duration() if not lap.is_active else None
    return f"  lap {position}: {lap.status().value} {_fmt_seconds(duration)}"


@app.command()
def start(session_id: str = typer.Argument(..., help="Identifier of the session")) -> None:
    """Start tracking SESSION_ID (creates it when unknown)."""

    _run(lambda m: m.start_tracking(SessionId(session_id)))
    typer.echo(f"[cuckoo] started '{session_id}'")


@app.command()
def stop(session_id: str = typer.Argument(..., help="Identifier of the session")) -> None:
    """Stop tracking SESSION_ID."""

    _run(lambda m: m.stop_tracking(SessionId(session_id)))
    typer.echo(f"[cuckoo] stopped '{session_id}'")


@app.command()
def show(session_id: str = typer.Argument(..., help="Identifier of the session")) -> None:
    """Print status, duration and laps of SESSION_ID."""

    session = _run(lambda m: _require(m, SessionId(session_id)))
    status = session.status()
    typer.echo(f"{session.id}: {status.value}")
    if status is not SessionStatus.IDLE:
        task = Task.from_session(session)
        typer.echo(f"  started:  {task.start_time.isoformat()}")
        if task.end_time is not None:
            typer.echo(f"  stopped:  {task.end_time.isoformat()}")
        typer.echo(f"  duration: {_fmt_seconds(task.duration)}")
    for position, lap in enumerate(session.laps):
        typer.echo(_lap_line(position, lap))


@app.command()
def lap(session_id: str = typer.Argument(..., help="Identifier of the session")) -> None:
    """Open a new lap in SESSION_ID."""

    async def _add(manager: SessionManager) -> int:
        session = await _require(manager, SessionId(session_id))
        session.add_lap()
        await manager.store.update(session)
        return len(session.laps) - 1

    position = _run(_add)
    typer.echo(f"[cuckoo] lap {position} started in '{session_id}'")


@app.command("stop-lap")
def stop_lap(
    session_id: str = typer.Argument(..., help="Identifier of the session"),
    position: int = typer.Argument(..., help="Zero-based lap position"),
) -> None:
    """Stop the lap at POSITION in SESSION_ID."""

    async def _stop(manager: SessionManager) -> None:
        session = await _require(manager, SessionId(session_id))
        if session.get_lap(position) is None:
            typer.echo(f"[cuckoo] no lap at position {position} in '{session_id}'", err=True)
            raise typer.Exit(code=1)
        session.stop_lap(position)
        await manager.store.update(session)

    _run(_stop)
    typer.echo(f"[cuckoo] lap {position} stopped in '{session_id}'")


@app.command()
def remove(session_id: str = typer.Argument(..., help="Identifier of the session")) -> None:
    """Forget SESSION_ID."""

    async def _remove(manager: SessionManager) -> None:
        session = await _require(manager, SessionId(session_id))
        await manager.store.remove(session)

    _run(_remove)
    typer.echo(f"[cuckoo] removed '{session_id}'")


if __name__ == "__main__":
    app()
