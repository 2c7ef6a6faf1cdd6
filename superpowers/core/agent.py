"""Tool-calling agent loop."""

import asyncio
import functools
import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, SystemMessage

from superpowers.core.messages import Conversation
from superpowers.core.middleware import Middleware, ModelHandler, ModelRequest
from superpowers.core.tool import Tool

logger = logging.getLogger(__name__)


@dataclass
class AgentResponse:
    """Response from agent processing."""

    content: str
    tool_calls_made: list[dict[str, Any]] = field(default_factory=list)
    finished: bool = True


def _message_text(content: Any) -> str:
    """Flatten provider content blocks into plain text."""
    if not content:
        return ""
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class Agent:
    """Agent that answers a user message with tools.

    The agent:
    1. Runs every model call through the middleware pipeline
    2. Binds its tools (plus middleware tools) to the chat model
    3. Executes each batch of tool calls concurrently
    4. Stops at the first reply without tool calls

    Example:
        agent = Agent(chat_model, "You are helpful.", tools, middleware=[skills])
        response = await agent.process("Book me a slot on Monday")
        print(response.content)
    """

    def __init__(
        self,
        chat_model: BaseChatModel,
        system_prompt: str,
        tools: Sequence[Tool] = (),
        middleware: Sequence[Middleware] = (),
        max_iterations: int = 10,
        conversation: Conversation | None = None,
    ):
        """Initialize the agent.

        Args:
            chat_model: LangChain chat model to use.
            system_prompt: Base system prompt; middleware may extend it per call.
            tools: Tools resolved for this turn.
            middleware: Model-call interceptors, outermost first.
            max_iterations: Maximum tool call iterations to prevent loops.
            conversation: Prior conversation memory to continue from.
        """
        self.chat_model = chat_model
        self.system_prompt = system_prompt
        self.middleware = list(middleware)
        self.max_iterations = max_iterations
        self.conversation = conversation or Conversation()

        all_tools = list(tools)
        for mw in self.middleware:
            all_tools.extend(mw.tools)
        self.tools: dict[str, Tool] = {tool.name: tool for tool in all_tools}

        self._pipeline = self._build_pipeline()

    def _build_pipeline(self) -> ModelHandler:
        """Chain middleware so the first one listed sees the request first."""
        handler: ModelHandler = self._call_model
        for mw in reversed(self.middleware):
            handler = functools.partial(mw.wrap_model_call, handler=handler)
        return handler

    async def _call_model(self, request: ModelRequest) -> AIMessage:
        """Innermost pipeline stage: invoke the chat model."""
        model = self.chat_model
        if request.tools:
            model = model.bind_tools([t.to_langchain_tool() for t in request.tools])

        messages = [SystemMessage(content=request.system_prompt), *request.messages]
        return await model.ainvoke(messages)

    async def _execute_tool(self, tool_name: str, tool_args: dict[str, Any]) -> str:
        """Execute a tool and return the result as a string.

        Args:
            tool_name: Name of the tool to execute.
            tool_args: Arguments for the tool.

        Returns:
            Tool result, or a JSON error object the model can react to.
        """
        tool = self.tools.get(tool_name)
        if tool is None:
            return json.dumps({"error": f"Tool '{tool_name}' is not available"})

        logger.info("Calling tool %s | args=%s", tool_name, tool_args)
        try:
            return await tool.run(**tool_args)
        except Exception as e:
            logger.warning("Tool %s failed: %s", tool_name, e)
            return json.dumps({"error": str(e)})

    async def process(self, user_message: str) -> AgentResponse:
        """Process a user message and return a response.

        Args:
            user_message: The user's input message.

        Returns:
            AgentResponse with the assistant's response.
        """
        self.conversation.add_user(user_message)

        tool_calls_made: list[dict[str, Any]] = []
        iterations = 0

        while iterations < self.max_iterations:
            iterations += 1

            request = ModelRequest(
                system_prompt=self.system_prompt,
                messages=self.conversation.to_langchain(),
                tools=list(self.tools.values()),
            )
            response = await self._pipeline(request)
            content = _message_text(response.content)

            tool_calls = getattr(response, "tool_calls", None)
            if tool_calls:
                self.conversation.add_assistant(content=content, tool_calls=tool_calls)

                results = await asyncio.gather(
                    *(self._execute_tool(tc["name"], tc.get("args") or {}) for tc in tool_calls)
                )

                for tool_call, result in zip(tool_calls, results):
                    self.conversation.add_tool_result(result, tool_call.get("id") or "")
                    tool_calls_made.append({
                        "tool": tool_call["name"],
                        "args": tool_call.get("args") or {},
                        "result": result,
                    })

                continue

            self.conversation.add_assistant(content)

            return AgentResponse(
                content=content,
                tool_calls_made=tool_calls_made,
                finished=True,
            )

        return AgentResponse(
            content="I couldn't complete the request within the allowed iterations.",
            tool_calls_made=tool_calls_made,
            finished=False,
        )

    def reset(self) -> None:
        """Forget the conversation."""
        self.conversation.clear()
