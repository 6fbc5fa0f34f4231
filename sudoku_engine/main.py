"""Main FastAPI application for the Sudoku puzzle engine."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import _validate_presets, router
from .config import log_level


@asynccontextmanager
async def _app_lifespan(_: FastAPI):
    """Eagerly validate difficulty presets so misconfiguration fails at startup."""
    error = _validate_presets()
    if error:
        raise RuntimeError(f"Failed to load difficulty presets at startup: {error}")
    yield


app = FastAPI(
    title="Sudoku Puzzle Engine API",
    description="API for generating, grading and solving Sudoku puzzles",
    version="1.0.0",
    lifespan=_app_lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Sudoku Puzzle Engine API", "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("sudoku_engine.main:app", host="0.0.0.0", port=8000, reload=True)
