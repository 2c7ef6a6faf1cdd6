"""Model-call middleware.

A middleware sits between the agent loop and the chat model. For every model
call it receives the outgoing request, may rewrite it, and forwards it to the
next stage. Middleware can also contribute tools of their own.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from typing import Protocol, runtime_checkable

from langchain_core.messages import AIMessage, BaseMessage
from pydantic import BaseModel, Field

from superpowers.core.records import Superpower
from superpowers.core.tool import Tool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelRequest:
    """A single outgoing model call."""

    system_prompt: str
    messages: list[BaseMessage] = field(default_factory=list)
    tools: list[Tool] = field(default_factory=list)


ModelHandler = Callable[[ModelRequest], Awaitable[AIMessage]]


@runtime_checkable
class Middleware(Protocol):
    """Protocol for model-call interceptors."""

    @property
    def name(self) -> str:
        ...

    @property
    def tools(self) -> list[Tool]:
        """Extra tools this middleware registers with the agent."""
        ...

    async def wrap_model_call(self, request: ModelRequest, handler: ModelHandler) -> AIMessage:
        """Intercept a model call.

        Args:
            request: The outgoing request.
            handler: The next stage; call it to continue the pipeline.

        Returns:
            The model's reply.
        """
        ...


NO_SKILLS_MESSAGE = "No skills available."

SKILLS_PROMPT_TEMPLATE = """

## Available Skills

You have access to the following skills. You MUST use the `load_skill` tool to load \
the full content and instructions for a skill before you try to use it or answer \
questions related to it.

{catalog}

CRITICAL: Before handling any user request that matches one of your available skills, \
you MUST first call the `load_skill` tool with the exact name of the relevant skill. \
Do not assume you know how to perform the task without loading the skill first."""


class LoadSkillInput(BaseModel):
    skill_name: str = Field(
        description=(
            'The EXACT name of the skill to load, e.g. "Product Catalogs" '
            'or "Appointment Scheduler"'
        )
    )


@dataclass(frozen=True)
class SkillMiddleware:
    """Injects the skill catalog and exposes ``load_skill``.

    Skills start out as a single catalog line in the system prompt. Their
    instructions only enter the model's context when it calls ``load_skill``.
    Nothing here holds per-turn state, so calls are idempotent and safe to
    run concurrently.

    Example:
        middleware = SkillMiddleware(catalog.skills)
        agent = Agent(chat_model, system_prompt, tools, middleware=[middleware])
    """

    skills: tuple[Superpower, ...] = ()

    @property
    def name(self) -> str:
        return "skill_middleware"

    def render_catalog(self) -> str:
        """Render one line per skill, or a placeholder when there are none."""
        if not self.skills:
            return NO_SKILLS_MESSAGE
        return "\n".join(f"- **{s.name}**: {s.description}" for s in self.skills)

    def render_prompt_addendum(self) -> str:
        return SKILLS_PROMPT_TEMPLATE.format(catalog=self.render_catalog())

    def find_skill(self, skill_name: str) -> Superpower | None:
        """Case-insensitive exact-name lookup."""
        wanted = skill_name.strip().casefold()
        for skill in self.skills:
            if skill.name.casefold() == wanted:
                return skill
        return None

    def load_skill(self, skill_name: str) -> str:
        """Return a skill's full instructions for inclusion in context."""
        logger.info("Loading skill %r", skill_name)
        skill = self.find_skill(skill_name)
        if skill is not None:
            return f"Loaded skill: {skill.name}\n\n# {skill.name}\n\n{skill.content}"

        available = ", ".join(s.name for s in self.skills) or "none"
        return f"Skill '{skill_name}' not found. Available skills: {available}"

    @property
    def tools(self) -> list[Tool]:
        return [
            Tool(
                name="load_skill",
                description=(
                    "Load the full content of a skill into the agent's context. "
                    "You MUST call this before attempting to perform any task "
                    "related to an available skill."
                ),
                function=self.load_skill,
                input_schema=LoadSkillInput,
            )
        ]

    async def wrap_model_call(self, request: ModelRequest, handler: ModelHandler) -> AIMessage:
        system_prompt = request.system_prompt + self.render_prompt_addendum()
        return await handler(replace(request, system_prompt=system_prompt))
