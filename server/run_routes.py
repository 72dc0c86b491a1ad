"""AG-UI run endpoints.

The agent is chosen per request from, in order: the URL path, the agent-id
header, ``forwardedProps.agentId`` in the body, then the configured default.
Replies stream back as server-sent events.
"""

import logging
from typing import Iterator

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse

from switchboard.dispatcher import AgentRequest, AgentResponse, RequestDispatcher
from switchboard.errors import (
    AgentExecutionError,
    ConstructionError,
    InvalidRequestError,
    UnknownAgentError,
)
from switchboard.models.events import AguiEvent, EventType
from switchboard.models.run_input import RunAgentInput
from switchboard.utils.identifiers import generate_message_id

logger = logging.getLogger(__name__)

router = APIRouter()


def _event_stream(run_input: RunAgentInput, response: AgentResponse) -> Iterator[str]:
    """Wrap the agent's reply in the AG-UI event sequence."""
    ids = {"thread_id": run_input.thread_id, "run_id": run_input.run_id}
    message_id = generate_message_id()

    yield AguiEvent(type=EventType.run_started, **ids).encode()
    yield AguiEvent(type=EventType.text_message_start, message_id=message_id, role="assistant").encode()
    try:
        for delta in response.deltas():
            yield AguiEvent(type=EventType.text_message_content, message_id=message_id, delta=delta).encode()
    except AgentExecutionError as e:
        logger.error("Run %s on agent '%s' failed: %s", run_input.run_id, response.agent_id, e)
        yield AguiEvent(type=EventType.run_error, message=str(e), code="AGENT_EXECUTION_ERROR").encode()
        return
    yield AguiEvent(type=EventType.text_message_end, message_id=message_id).encode()
    yield AguiEvent(type=EventType.run_finished, **ids).encode()


def _run(request: Request, run_input: RunAgentInput, path_agent_id: str | None) -> StreamingResponse:
    dispatcher: RequestDispatcher = request.app.state.dispatcher
    if not any(m.role == "user" for m in run_input.messages):
        raise HTTPException(status_code=422, detail="Request carries no user message.")

    header_name = request.app.state.settings.agent_id_header
    agent_request = AgentRequest(
        messages=run_input.messages,
        path_agent_id=path_agent_id,
        header_agent_id=request.headers.get(header_name),
        body_agent_id=run_input.body_agent_id(),
    )

    try:
        response = dispatcher.dispatch(agent_request)
    except UnknownAgentError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidRequestError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ConstructionError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except AgentExecutionError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return StreamingResponse(
        _event_stream(run_input, response),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Agent-Id": response.agent_id},
    )


@router.post("/agui/run")
def run_default_agent(run_input: RunAgentInput, request: Request) -> StreamingResponse:
    """Run the agent named by the header, the body, or the configured default."""
    return _run(request, run_input, path_agent_id=None)


@router.post("/agui/run/{agent_id}")
def run_agent(agent_id: str, run_input: RunAgentInput, request: Request) -> StreamingResponse:
    """Run the agent named in the path."""
    return _run(request, run_input, path_agent_id=agent_id)
