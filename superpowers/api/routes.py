"""API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from superpowers.api.schemas import (
    AgentInfo,
    AgentPayload,
    ChatRequest,
    ChatResponse,
    DocumentInfo,
    DocumentUpload,
    ErrorResponse,
    HealthResponse,
    SessionInfo,
    SessionListResponse,
    SuperpowerInfo,
    SuperpowerPayload,
    ToolCall,
)
from superpowers.api.sessions import SessionStore
from superpowers.config import get_settings
from superpowers.core.builder import AgentBuilder
from superpowers.core.exception import AgentNotFoundError
from superpowers.dependencies import (
    get_agent_builder,
    get_llm_provider,
    get_record_store,
    get_session_store,
)
from superpowers.store import InvalidReferenceError, SqlRecordStore

logger = logging.getLogger(__name__)

router = APIRouter()


# Health


@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
)
async def health_check() -> HealthResponse:
    """Check application health status."""
    settings = get_settings()
    provider = get_llm_provider()

    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.env,
        llm_provider=provider.provider_name,
        llm_model=provider.model_name,
        embedding_provider=settings.embedding_provider,
        script_timeout_seconds=settings.script_timeout_seconds,
        auth_enabled=settings.auth_enabled,
    )


# Superpowers


@router.get(
    "/superpowers",
    response_model=list[SuperpowerInfo],
    tags=["Superpowers"],
)
async def list_superpowers(
    store: SqlRecordStore = Depends(get_record_store),
) -> list[SuperpowerInfo]:
    return [SuperpowerInfo.from_record(sp) for sp in await store.list_superpowers()]


@router.post(
    "/superpowers",
    response_model=SuperpowerInfo,
    status_code=201,
    tags=["Superpowers"],
)
async def create_superpower(
    payload: SuperpowerPayload,
    store: SqlRecordStore = Depends(get_record_store),
) -> SuperpowerInfo:
    superpower = await store.create_superpower(
        name=payload.name,
        description=payload.description,
        content=payload.content,
        tools=payload.tools,
        scripts=[s.to_record() for s in payload.scripts],
    )
    return SuperpowerInfo.from_record(superpower)


@router.get(
    "/superpowers/{superpower_id}",
    response_model=SuperpowerInfo,
    responses={404: {"model": ErrorResponse}},
    tags=["Superpowers"],
)
async def get_superpower(
    superpower_id: str,
    store: SqlRecordStore = Depends(get_record_store),
) -> SuperpowerInfo:
    superpower = await store.get_superpower(superpower_id)
    if superpower is None:
        raise HTTPException(status_code=404, detail="Superpower not found")
    return SuperpowerInfo.from_record(superpower)


@router.put(
    "/superpowers/{superpower_id}",
    response_model=SuperpowerInfo,
    responses={404: {"model": ErrorResponse}},
    tags=["Superpowers"],
)
async def update_superpower(
    superpower_id: str,
    payload: SuperpowerPayload,
    store: SqlRecordStore = Depends(get_record_store),
) -> SuperpowerInfo:
    superpower = await store.update_superpower(
        superpower_id,
        name=payload.name,
        description=payload.description,
        content=payload.content,
        tools=payload.tools,
        scripts=[s.to_record() for s in payload.scripts],
    )
    if superpower is None:
        raise HTTPException(status_code=404, detail="Superpower not found")
    return SuperpowerInfo.from_record(superpower)


@router.delete(
    "/superpowers/{superpower_id}",
    responses={404: {"model": ErrorResponse}},
    tags=["Superpowers"],
)
async def delete_superpower(
    superpower_id: str,
    store: SqlRecordStore = Depends(get_record_store),
) -> dict:
    if not await store.delete_superpower(superpower_id):
        raise HTTPException(status_code=404, detail="Superpower not found")
    return {"status": "deleted", "superpower_id": superpower_id}


# Agents


@router.get(
    "/agents",
    response_model=list[AgentInfo],
    tags=["Agents"],
)
async def list_agents(
    store: SqlRecordStore = Depends(get_record_store),
) -> list[AgentInfo]:
    return [AgentInfo.from_record(agent) for agent in await store.list_agents()]


@router.post(
    "/agents",
    response_model=AgentInfo,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
    tags=["Agents"],
)
async def create_agent(
    payload: AgentPayload,
    store: SqlRecordStore = Depends(get_record_store),
) -> AgentInfo:
    try:
        agent = await store.create_agent(
            name=payload.name,
            base_prompt=payload.base_prompt,
            superpower_ids=payload.superpower_ids,
        )
    except InvalidReferenceError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return AgentInfo.from_record(agent)


@router.get(
    "/agents/{agent_id}",
    response_model=AgentInfo,
    responses={404: {"model": ErrorResponse}},
    tags=["Agents"],
)
async def get_agent(
    agent_id: str,
    store: SqlRecordStore = Depends(get_record_store),
) -> AgentInfo:
    agent = await store.get_agent(agent_id)
    if agent is None:
        raise HTTPException(status_code=404, detail="Agent not found")
    return AgentInfo.from_record(agent)


@router.put(
    "/agents/{agent_id}",
    response_model=AgentInfo,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    tags=["Agents"],
)
async def update_agent(
    agent_id: str,
    payload: AgentPayload,
    store: SqlRecordStore = Depends(get_record_store),
) -> AgentInfo:
    try:
        agent = await store.update_agent(
            agent_id,
            name=payload.name,
            base_prompt=payload.base_prompt,
            superpower_ids=payload.superpower_ids,
        )
    except InvalidReferenceError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if agent is None:
        raise HTTPException(status_code=404, detail="Agent not found")
    return AgentInfo.from_record(agent)


@router.delete(
    "/agents/{agent_id}",
    responses={404: {"model": ErrorResponse}},
    tags=["Agents"],
)
async def delete_agent(
    agent_id: str,
    store: SqlRecordStore = Depends(get_record_store),
) -> dict:
    if not await store.delete_agent(agent_id):
        raise HTTPException(status_code=404, detail="Agent not found")
    return {"status": "deleted", "agent_id": agent_id}


# Knowledge base


@router.get(
    "/agents/{agent_id}/documents",
    response_model=list[DocumentInfo],
    responses={404: {"model": ErrorResponse}},
    tags=["Knowledge"],
)
async def list_documents(
    agent_id: str,
    store: SqlRecordStore = Depends(get_record_store),
) -> list[DocumentInfo]:
    if await store.get_agent(agent_id) is None:
        raise HTTPException(status_code=404, detail="Agent not found")
    return [DocumentInfo.from_record(doc) for doc in await store.get_documents(agent_id)]


@router.post(
    "/agents/{agent_id}/documents",
    response_model=DocumentInfo,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    tags=["Knowledge"],
)
async def upload_document(
    agent_id: str,
    upload: DocumentUpload,
    store: SqlRecordStore = Depends(get_record_store),
) -> DocumentInfo:
    """Add a CSV file to the agent's knowledge base."""
    if not upload.name.lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="Only CSV files are supported")

    document = await store.add_document(agent_id, upload.name, upload.content)
    if document is None:
        raise HTTPException(status_code=404, detail="Agent not found")
    return DocumentInfo.from_record(document)


@router.delete(
    "/documents/{document_id}",
    responses={404: {"model": ErrorResponse}},
    tags=["Knowledge"],
)
async def delete_document(
    document_id: str,
    store: SqlRecordStore = Depends(get_record_store),
) -> dict:
    if not await store.delete_document(document_id):
        raise HTTPException(status_code=404, detail="Document not found")
    return {"status": "deleted", "document_id": document_id}


# Chat


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Chat"],
)
async def chat(
    request: ChatRequest,
    builder: AgentBuilder = Depends(get_agent_builder),
    session_store: SessionStore = Depends(get_session_store),
) -> ChatResponse:
    """Process a chat message with automatic session management.

    The agent is rebuilt from its stored configuration on every turn. If
    session_id names a session of the same agent, its conversation is
    continued; otherwise a new session is created.
    """
    session = None
    if request.session_id:
        session = await session_store.get(request.session_id)
        if session is None:
            logger.warning("Session %s not found, creating new session", request.session_id)
        elif session.agent_id != request.agent_id:
            logger.warning(
                "Session %s belongs to agent %s, creating new session",
                request.session_id,
                session.agent_id,
            )
            session = None

    try:
        agent = await builder.build(
            request.agent_id,
            mode=request.mode,
            conversation=session.conversation if session else None,
        )
    except AgentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    try:
        if session is None:
            session = await session_store.create(request.agent_id)
            logger.info("Created new session %s", session.session_id)

        result = await agent.process(request.message)
        session.conversation = agent.conversation
        session.increment_messages()
        await session_store.update(session)

        return ChatResponse(
            response=result.content,
            tool_calls=[
                ToolCall(tool=tc["tool"], args=tc["args"], result=tc["result"])
                for tc in result.tool_calls_made
            ],
            session_id=session.session_id,
            finished=result.finished,
        )
    except Exception:
        logger.exception("Chat processing failed for message: %s...", request.message[:50])
        raise HTTPException(
            status_code=500,
            detail="Failed to process message. Please try again.",
        )


# Sessions


@router.get(
    "/sessions",
    response_model=SessionListResponse,
    tags=["Sessions"],
)
async def list_sessions(
    agent_id: str | None = None,
    session_store: SessionStore = Depends(get_session_store),
) -> SessionListResponse:
    """List sessions, optionally for a single agent."""
    sessions = await session_store.list_all(agent_id)
    return SessionListResponse(
        sessions=[
            SessionInfo(
                session_id=s.session_id,
                agent_id=s.agent_id,
                message_count=s.message_count,
                created_at=s.created_at.isoformat(),
            )
            for s in sessions
        ]
    )


@router.delete(
    "/sessions/{session_id}",
    responses={404: {"model": ErrorResponse}},
    tags=["Sessions"],
)
async def delete_session(
    session_id: str,
    session_store: SessionStore = Depends(get_session_store),
) -> dict:
    """Delete a session."""
    if not await session_store.delete(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"status": "deleted", "session_id": session_id}
