"""
HTTP boundary for the command agent.

``POST /api/agent`` accepts ``{"prompt": ..., "context": ...}`` and returns the
response envelope with 200, 400 (missing prompt) or 500 (internal failure).
The task endpoints expose the board's in-memory store.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import Settings, get_settings
from marketplace_agent import __version__
from marketplace_agent.agents import CommandAgent
from marketplace_agent.errors import AgentError, InputError, InvalidStatusError
from marketplace_agent.models import Marketplace, ResponseType
from marketplace_agent.store import InMemoryTaskStore

logger = logging.getLogger(__name__)


class AgentRequest(BaseModel):
    prompt: Optional[str] = None
    context: Any = None


class StatusUpdateRequest(BaseModel):
    status: str


def _error_body(error: AgentError) -> Dict[str, Any]:
    return {"type": ResponseType.ERROR.value, "message": error.message}


def _task_validation_error(errors: List[Dict[str, Any]]) -> AgentError:
    """Map a validation failure on the task endpoints to an agent error."""
    for error in errors:
        loc = error.get("loc") or ()
        field = loc[-1] if loc else None
        if field == "status":
            return InvalidStatusError()
        if field == "marketplace":
            return InputError(f"Unknown marketplace '{error.get('input')}'.")
    return InputError("Malformed task request.")


def create_app(
    settings: Optional[Settings] = None,
    agent: Optional[CommandAgent] = None,
    task_store: Optional[InMemoryTaskStore] = None,
) -> FastAPI:
    settings = settings or get_settings()
    if task_store is None and agent is not None:
        task_store = agent.task_store
    if task_store is None:
        task_store = InMemoryTaskStore()
    if agent is None:
        agent = CommandAgent(settings.to_dict(), task_store=task_store)

    app = FastAPI(title="Marketplace Command Agent API", version=__version__)
    app.state.agent = agent
    app.state.task_store = task_store

    @app.exception_handler(AgentError)
    async def agent_error_handler(_: Request, exc: AgentError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        logger.warning(f"Rejected malformed request to {request.url.path}: {errors}")
        if request.url.path == settings.api.route:
            error = InputError()
        else:
            error = _task_validation_error(errors)
        return JSONResponse(status_code=error.status_code, content=_error_body(error))

    @app.post(settings.api.route)
    def agent_endpoint(payload: AgentRequest) -> JSONResponse:
        response = app.state.agent.process_command(payload.prompt, payload.context)
        return JSONResponse(status_code=response.status_code, content=response.to_dict())

    @app.get("/api/tasks")
    def list_tasks(marketplace: Optional[Marketplace] = None) -> Dict[str, Any]:
        tasks = app.state.task_store.list_tasks(marketplace)
        return {"tasks": [task.to_dict() for task in tasks]}

    @app.patch("/api/tasks/{task_id}")
    def update_task(task_id: str, payload: StatusUpdateRequest) -> Dict[str, Any]:
        task = app.state.task_store.update_task_status(task_id, payload.status)
        return task.to_dict()

    return app


app = create_app()
