"""Tests for application startup behavior."""

import pytest

from sudoku_engine import main


@pytest.mark.asyncio
async def test_app_lifespan_fails_when_presets_broken(monkeypatch):
    monkeypatch.setattr(main, "_validate_presets", lambda: "no difficulty presets configured")

    with pytest.raises(RuntimeError, match="Failed to load difficulty presets at startup"):
        async with main._app_lifespan(main.app):
            pass


@pytest.mark.asyncio
async def test_app_lifespan_succeeds_with_default_presets():
    async with main._app_lifespan(main.app):
        pass


@pytest.mark.asyncio
async def test_root_endpoint():
    assert await main.root() == {"message": "Sudoku Puzzle Engine API", "docs": "/docs"}
