"""Script execution tool bound to an agent's scripts."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from superpowers.core.catalog import SkillCatalog
from superpowers.core.exception import ScriptParamsError
from superpowers.core.tool import Tool
from superpowers.sandbox import ERROR_PREFIX, ScriptSandbox, parse_script_params

logger = logging.getLogger(__name__)


class RunScriptInput(BaseModel):
    """Input for run_script.

    Parameters:
        script_name: Script name as listed in a loaded skill.
        params_json: JSON object passed to ``main(params)``.
    """

    script_name: str = Field(description="Name of the script to run (as defined in a loaded skill)")
    params_json: str | dict[str, Any] | None = Field(
        default=None,
        description="Optional JSON string of parameters to pass to main(params)",
    )


def create_run_script_tool(scripts: Mapping[str, str], sandbox: ScriptSandbox) -> Tool:
    """Create a run_script tool for one agent.

    Args:
        scripts: Script name to source, fixed for the turn.
        sandbox: Executor for the script sources.

    Returns:
        Tool whose results are JSON strings or descriptive error strings.
    """

    async def run_script(script_name: str, params_json: str | dict[str, Any] | None = None) -> str:
        logger.info("Calling tool run_script | script=%s params=%s", script_name, params_json)

        source = scripts.get(script_name)
        if not source:
            available = ", ".join(scripts) or "none"
            return f"Script '{script_name}' not found. Available scripts: {available}"

        try:
            params = parse_script_params(params_json)
        except ScriptParamsError as e:
            return f"{ERROR_PREFIX}{e}"

        return await sandbox.run(source, params, script_name=script_name)

    return Tool(
        name="run_script",
        description=(
            "Execute a script by name. Scripts are defined in the loaded skills. "
            "Pass the script name (e.g. from the skill's ## Scripts section) and "
            "optional params. Use when you need to run a predefined script from a skill."
        ),
        function=run_script,
        input_schema=RunScriptInput,
    )


def run_script_factory(sandbox: ScriptSandbox):
    """Registry factory binding run_script to each catalog's script map."""

    async def factory(catalog: SkillCatalog) -> Tool:
        return create_run_script_tool(catalog.scripts, sandbox)

    return factory
