from contextlib import asynccontextmanager
from dataclasses import asdict, replace
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from launchboard.config import setup_logging
from launchboard.filtering import normalize_query
from launchboard.state import LaunchBoard, visible_launches
from launchboard.viewmodel import UNKNOWN, date_only, safe_get


# ---- Request bodies ----
class QueryIn(BaseModel):
    q: str = ""


class SelectIn(BaseModel):
    flight_number: int = Field(..., ge=1)


def _summary(record) -> dict:
    return {
        "flight_number": record.flight_number,
        "mission_name": record.mission_name,
        "date": date_only(record),
        "site": safe_get(record, "launch_site", "site_name_long", default=UNKNOWN),
        "upcoming": bool(record.upcoming),
    }


def create_app(board: Optional[LaunchBoard] = None) -> FastAPI:
    board = board or LaunchBoard()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(board.aggregator.settings)
        # one load per process; no refresh endpoint
        await board.start()
        yield

    app = FastAPI(title="SpaceX Launch Board API", version="0.1.0", lifespan=lifespan)
    app.state.board = board

    @app.get("/health")
    def health():
        state = board.state
        return {
            "status": "ok" if state.error is None else "error",
            "loading": state.loading,
            "launches": len(state.launches),
            "error": state.error,
            "warning": state.warning,
        }

    @app.get("/launches")
    def launches(q: Optional[str] = None):
        state = board.state
        if state.error:
            raise HTTPException(status_code=503, detail=state.error)
        if q is not None:
            # ad-hoc search; the stored query is left alone
            state = replace(state, query=normalize_query(q))
        shown = visible_launches(state)
        return [_summary(r) for r in shown]

    @app.post("/query")
    def set_query(body: QueryIn):
        state = board.set_query(body.q)
        return {"query": state.query}

    @app.post("/select")
    def select(body: SelectIn):
        state = board.select(body.flight_number)
        return {"flight_number": state.selection.flight_number}

    @app.get("/details")
    def details():
        fields = board.details()
        return {"launch": asdict(fields) if fields is not None else None}

    return app


app = create_app()
