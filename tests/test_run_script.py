"""Tests for the run_script tool."""

import json

import pytest

from superpowers.sandbox import ERROR_PREFIX
from superpowers.tools import create_run_script_tool
from superpowers.tools.run_script import run_script_factory


class TestRunScriptTool:
    @pytest.fixture
    def tool(self, scheduler_skill, sandbox, make_catalog):
        catalog = make_catalog(scheduler_skill)
        return create_run_script_tool(catalog.scripts, sandbox)

    @pytest.mark.asyncio
    async def test_books_on_a_weekday(self, tool):
        result = await tool.run(
            script_name="bookAppointment",
            params_json='{"date": "2026-03-02", "name": "Ada"}',
        )

        payload = json.loads(result)
        assert payload["ok"] is True
        assert "2026-03-02" in payload["confirmation"]

    @pytest.mark.asyncio
    async def test_refuses_a_sunday(self, tool):
        result = await tool.run(script_name="bookAppointment", params_json='{"date": "2026-03-01"}')

        payload = json.loads(result)
        assert payload["ok"] is False
        assert "Monday to Friday" in payload["error"]

    @pytest.mark.asyncio
    async def test_accepts_params_as_object(self, tool):
        result = await tool.run(script_name="bookAppointment", params_json={"date": "2026-03-02"})

        assert json.loads(result)["ok"] is True

    @pytest.mark.asyncio
    async def test_unknown_script_lists_known_names(self, tool):
        result = await tool.run(script_name="cancelAppointment")

        assert result == "Script 'cancelAppointment' not found. Available scripts: bookAppointment"

    @pytest.mark.asyncio
    async def test_unknown_script_without_scripts(self, sandbox):
        tool = create_run_script_tool({}, sandbox)

        assert await tool.run(script_name="x") == "Script 'x' not found. Available scripts: none"

    @pytest.mark.asyncio
    async def test_invalid_params_json(self, tool):
        result = await tool.run(script_name="bookAppointment", params_json="{date: tomorrow}")

        assert result.startswith(f"{ERROR_PREFIX}Invalid params JSON")

    @pytest.mark.asyncio
    async def test_script_error_is_a_string(self, tool):
        result = await tool.run(script_name="bookAppointment", params_json='{"date": "someday"}')

        assert result.startswith(ERROR_PREFIX)
        assert "someday" in result

    @pytest.mark.asyncio
    async def test_factory_binds_catalog_scripts(self, scheduler_skill, fetcher_skill, sandbox, make_catalog):
        factory = run_script_factory(sandbox)

        with_scripts = await factory(make_catalog(scheduler_skill))
        without = await factory(make_catalog(fetcher_skill))

        assert "bookAppointment" in await with_scripts.run(script_name="nope")
        assert await without.run(script_name="bookAppointment") == (
            "Script 'bookAppointment' not found. Available scripts: none"
        )
