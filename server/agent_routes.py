"""API routes for inspecting and managing the agent registry."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from switchboard.errors import UnknownAgentError
from switchboard.models.agent_spec import AgentSpec
from switchboard.registry import AgentRegistry

router = APIRouter()


class AgentSummary(BaseModel):
    """a registered agent and whether it has been built yet."""

    agent_id: str
    instantiated: bool
    is_default: bool = False
    spec: AgentSpec | None = None  # absent for agents registered without a spec


def _summary(request: Request, agent_id: str) -> AgentSummary:
    registry: AgentRegistry = request.app.state.registry
    return AgentSummary(
        agent_id=agent_id,
        instantiated=registry.is_instantiated(agent_id),
        is_default=agent_id == request.app.state.settings.default_agent_id,
        spec=request.app.state.specs.get(agent_id),
    )


@router.get("/agents")
def list_agents(request: Request) -> list[AgentSummary]:
    """list all registered agents in registration order."""
    summaries = []
    for agent_id in request.app.state.registry.list_ids():
        try:
            summaries.append(_summary(request, agent_id))
        except UnknownAgentError:
            # removed between list_ids() and the lookup
            continue
    return summaries


@router.get("/agents/{agent_id}")
def get_agent(agent_id: str, request: Request) -> AgentSummary:
    """get a single agent's registry entry."""
    try:
        return _summary(request, agent_id)
    except UnknownAgentError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/agents/{agent_id}/reset")
def reset_agent(agent_id: str, request: Request) -> dict:
    """drop the agent's cached instance (and its memory); the next run rebuilds it."""
    try:
        dropped = request.app.state.registry.reset(agent_id)
    except UnknownAgentError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"agent_id": agent_id, "reset": dropped}


@router.delete("/agents/{agent_id}")
def delete_agent(agent_id: str, request: Request) -> dict:
    """remove an agent from the registry.

    Idempotent: deleting an unknown agent succeeds with ``existed: false``.
    """
    registry: AgentRegistry = request.app.state.registry
    existed = agent_id in registry
    registry.remove(agent_id)
    request.app.state.specs.pop(agent_id, None)
    return {"deleted": agent_id, "existed": existed}
