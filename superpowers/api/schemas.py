"""API request and response schemas."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from superpowers.core.records import AgentConfig, KnowledgeDocument, Script, Superpower
from superpowers.rag.documents import split_rows

# Health


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str
    llm_provider: str
    llm_model: str
    embedding_provider: str
    script_timeout_seconds: float
    auth_enabled: bool


# Superpowers


class ScriptSchema(BaseModel):
    """Named script source."""

    name: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)

    def to_record(self) -> Script:
        return Script(name=self.name, content=self.content)


class SuperpowerPayload(BaseModel):
    """Body for creating or replacing a superpower."""

    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    content: str = ""
    tools: list[Any] = Field(
        default_factory=list,
        description="Tool identifiers, e.g. run_script, http_call, query_files",
    )
    scripts: list[ScriptSchema] = Field(default_factory=list)


class SuperpowerInfo(BaseModel):
    """Stored superpower."""

    id: str
    name: str
    description: str
    content: str
    tools: list[Any]
    scripts: list[ScriptSchema]

    @classmethod
    def from_record(cls, superpower: Superpower) -> "SuperpowerInfo":
        return cls(
            id=superpower.id,
            name=superpower.name,
            description=superpower.description,
            content=superpower.content,
            tools=list(superpower.tools),
            scripts=[ScriptSchema(name=s.name, content=s.content) for s in superpower.scripts],
        )


# Agents


class AgentPayload(BaseModel):
    """Body for creating or replacing an agent."""

    name: str = Field(min_length=1, max_length=200)
    base_prompt: str = ""
    superpower_ids: list[str] = Field(default_factory=list)


class AgentInfo(BaseModel):
    """Stored agent."""

    id: str
    name: str
    base_prompt: str
    superpower_ids: list[str]

    @classmethod
    def from_record(cls, agent: AgentConfig) -> "AgentInfo":
        return cls(
            id=agent.id,
            name=agent.name,
            base_prompt=agent.base_prompt,
            superpower_ids=list(agent.superpower_ids),
        )


# Knowledge base documents


class DocumentUpload(BaseModel):
    """CSV document upload."""

    name: str = Field(min_length=1, max_length=255, description="File name ending in .csv")
    content: str


class DocumentInfo(BaseModel):
    """Stored knowledge base document."""

    id: str
    agent_id: str
    name: str
    rows: int

    @classmethod
    def from_record(cls, document: KnowledgeDocument) -> "DocumentInfo":
        return cls(
            id=document.id,
            agent_id=document.agent_id,
            name=document.name,
            rows=len(split_rows(document)),
        )


# Chat


class ChatRequest(BaseModel):
    """Chat request body."""

    agent_id: str = Field(min_length=1)
    message: str = Field(min_length=1, max_length=10000)
    session_id: str | None = Field(
        default=None,
        description="Optional session ID for conversation continuity",
    )
    mode: Literal["text", "voice"] = "text"


class ToolCall(BaseModel):
    """Tool call information."""

    tool: str
    args: dict
    result: str


class ChatResponse(BaseModel):
    """Chat response body."""

    response: str
    tool_calls: list[ToolCall] = []
    session_id: str | None = None
    finished: bool = True


# Sessions


class SessionInfo(BaseModel):
    """Session information."""

    session_id: str
    agent_id: str
    message_count: int
    created_at: str


class SessionListResponse(BaseModel):
    """List of sessions."""

    sessions: list[SessionInfo]


# Errors


class ErrorResponse(BaseModel):
    """Error response."""

    error: str
    detail: str | None = None
    code: str | None = None
