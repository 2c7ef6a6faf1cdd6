"""Tool definition exposed to the model."""

import inspect
import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel


@dataclass(frozen=True)
class Tool:
    """A callable capability the model can invoke.

    Attributes:
        name: Unique identifier, matched case-sensitively against declarations.
        description: Human-readable description shown to the LLM.
        function: The callable that executes the tool (sync or async).
        input_schema: Pydantic model defining input parameters.
    """

    name: str
    description: str
    function: Callable[..., Any]
    input_schema: type[BaseModel]

    def execute(self, **kwargs: Any) -> Any:
        """Execute the tool with validated inputs.

        Args:
            **kwargs: Tool parameters matching input_schema.

        Returns:
            Tool execution result.
        """
        validated = self.input_schema(**kwargs)
        return self.function(**validated.model_dump())

    async def aexecute(self, **kwargs: Any) -> Any:
        """Execute the tool asynchronously with validated inputs.

        For async functions, awaits the result.
        For sync functions, calls directly.
        """
        validated = self.input_schema(**kwargs)
        result = self.function(**validated.model_dump())

        if inspect.isawaitable(result):
            return await result
        return result

    async def run(self, **kwargs: Any) -> str:
        """Execute the tool and render the result as a string for the model."""
        result = await self.aexecute(**kwargs)
        if isinstance(result, str):
            return result
        return json.dumps(result, indent=2, default=str)

    def to_langchain_tool(self) -> dict:
        """Convert to LangChain tool format for binding to models."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.input_schema.model_json_schema(),
        }
