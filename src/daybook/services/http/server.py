from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ...api import ApiFunction, api_state, call_api, get_api_functions
from ...api.models import EventDraftPayload
from ...api.serializers import serialize_event, serialize_month, serialize_search_hit
from ...domain import CalendarError, ConflictError, FormatError, NotFoundError, ValidationError


logger = logging.getLogger(__name__)

app = FastAPI(title="Daybook Local API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_STATUS_BY_ERROR = (
    (ValidationError, 422),
    (ConflictError, 409),
    (NotFoundError, 404),
    (FormatError, 400),
)


def _status_for(exc: CalendarError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


@app.exception_handler(CalendarError)
async def calendar_error_handler(request: Request, exc: CalendarError) -> JSONResponse:
    status = _status_for(exc)
    logger.warning("%s %s rejected (%s): %s", request.method, request.url.path, status, exc)
    body: Dict[str, Any] = {"error": type(exc).__name__, "detail": str(exc)}
    if isinstance(exc, ConflictError):
        body["conflicts"] = [serialize_event(event) for event in exc.conflicts]
    return JSONResponse(body, status_code=status)


class ApiCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


class EventUpdateRequest(BaseModel):
    name: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None


def _serialize_api_function(api_function: ApiFunction) -> dict:
    return {
        "name": api_function.name,
        "description": api_function.description,
        "category": api_function.category,
        "tags": list(api_function.tags),
        "parameters": api_function.parameters,
    }


@app.get("/api/functions")
async def list_api_functions() -> JSONResponse:
    functions = [_serialize_api_function(func) for func in get_api_functions()]
    return JSONResponse({"functions": functions})


@app.post("/api/functions/{function_name}")
async def invoke_api_function(function_name: str, request: ApiCallRequest) -> JSONResponse:
    try:
        result = call_api(function_name, **request.arguments)
    except KeyError as exc:
        logger.warning("API function not found: %s", function_name)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except CalendarError:
        raise
    except (TypeError, ValueError, OSError) as exc:
        logger.exception("API function %s failed", function_name)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    logger.debug("API function %s executed successfully", function_name)
    return JSONResponse({"name": function_name, "result": result})


@app.get("/api/months/{year}/{month}")
def get_month(year: int, month: int) -> Dict[str, Any]:
    return serialize_month(api_state.calendar.month_overview(year, month))


@app.get("/api/days/{day}/events")
def get_day_events(day: str) -> Dict[str, Any]:
    events = api_state.calendar.list_day(day)
    return {"date": day, "events": [serialize_event(event) for event in events]}


@app.post("/api/days/{day}/events", status_code=201)
def create_event(day: str, payload: EventDraftPayload) -> Dict[str, Any]:
    event = api_state.calendar.add(
        day,
        name=payload.name,
        start_time=payload.start_time,
        end_time=payload.end_time,
        description=payload.description,
        color=payload.color,
    )
    return {"event": serialize_event(event)}


@app.put("/api/days/{day}/events/{event_id}")
def replace_event(day: str, event_id: int, payload: EventUpdateRequest) -> Dict[str, Any]:
    event = api_state.calendar.update(
        day,
        event_id,
        name=payload.name,
        start_time=payload.startTime,
        end_time=payload.endTime,
        description=payload.description,
        color=payload.color,
    )
    return {"event": serialize_event(event)}


@app.delete("/api/days/{day}/events/{event_id}")
def remove_event(day: str, event_id: int) -> Dict[str, Any]:
    api_state.calendar.delete(day, event_id)
    return {"deleted": event_id, "date": day}


@app.get("/api/search")
def search(q: str = "") -> Dict[str, Any]:
    hits = api_state.calendar.search(q)
    return {"term": q, "results": [serialize_search_hit(hit) for hit in hits]}


@app.get("/api/export")
def export_snapshot() -> Dict[str, Any]:
    return api_state.calendar.store.export_snapshot()


@app.put("/api/import")
def import_snapshot(snapshot: Dict[str, Any]) -> Dict[str, Any]:
    api_state.calendar.store.import_snapshot(snapshot)
    return {"events": len(api_state.calendar.store)}


def run_local_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    import asyncio
    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    config = Config()
    config.bind = [f"{host}:{port}"]
    logger.info("Serving Daybook API on %s:%s", host, port)
    asyncio.run(serve(app, config))
