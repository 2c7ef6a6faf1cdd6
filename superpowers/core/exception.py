"""Orchestration exceptions."""


class OrchestrationError(Exception):
    """Base exception for agent orchestration errors."""

    pass


class AgentNotFoundError(OrchestrationError):
    """The agent id does not resolve against the record store."""

    def __init__(self, agent_id: str):
        self.agent_id = agent_id
        super().__init__(f"Agent not found: {agent_id}")


class DuplicateToolError(OrchestrationError):
    """A tool or tool factory with the same name is already registered."""

    pass


class ScriptError(Exception):
    """Base exception for sandboxed script failures."""

    pass


class ScriptParamsError(ScriptError):
    """Caller-supplied script parameters could not be parsed."""

    pass


class ScriptTimeoutError(ScriptError):
    """A script exceeded its wall-clock budget."""

    pass


class ScriptExecutionError(ScriptError):
    """A script failed while loading or running."""

    pass
