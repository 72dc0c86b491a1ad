"""FastAPI application hosting the registered agents."""

import logging
import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from server.agent_routes import router as agent_router
from server.run_routes import router as run_router
from switchboard.catalog import configure_agents
from switchboard.config import Settings
from switchboard.dispatcher import RequestDispatcher
from switchboard.errors import ConfigurationError
from switchboard.factory import require_api_key
from switchboard.models.agent_spec import AgentSpec
from switchboard.registry import AgentRegistry
from switchboard.resolver import AgentResolver

from dotenv import load_dotenv
load_dotenv()  # load environment variables from .env file

logger = logging.getLogger(__name__)

# CORS origins - configurable via environment variable
# Use comma-separated values for multiple origins, or "*" for all (development only)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

VERSION = "0.1.0"


def create_app(
    settings: Settings | None = None,
    registry: AgentRegistry | None = None,
    specs: dict[str, AgentSpec] | None = None,
) -> FastAPI:
    """Build the application.

    Without a *registry*, startup checks the API key (a missing key aborts
    startup) and registers the built-in agents. Passing a registry skips
    both, which is how tests run the app against fake agents.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the registry and dispatcher on startup."""
        app_settings = settings or Settings.from_env()
        app_registry = registry
        app_specs = dict(specs or {})
        if app_registry is None:
            require_api_key(app_settings)
            app_registry = AgentRegistry(allow_overwrite=app_settings.allow_agent_overwrite)
            app_specs.update(configure_agents(app_registry, app_settings))

        app.state.settings = app_settings
        app.state.registry = app_registry
        app.state.specs = app_specs
        app.state.dispatcher = RequestDispatcher(
            AgentResolver(app_settings.default_agent_id),
            app_registry,
        )
        logger.info("Serving agents: %s", ", ".join(app_registry.list_ids()) or "(none)")
        yield

    app = FastAPI(
        title="Switchboard API",
        description="Multi-agent AG-UI service with per-request agent selection",
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(run_router)
    app.include_router(agent_router, prefix="/api")

    @app.get("/")
    def root():
        """Health check endpoint."""
        return {
            "status": "ok",
            "version": VERSION,
            "default_agent_id": app.state.settings.default_agent_id,
            "agents": app.state.registry.list_ids(),
            "endpoints": {
                "run_default": "/agui/run",
                "run_agent": "/agui/run/{agent_id}",
                "agents": "/api/agents",
            },
        }

    return app


app = create_app()


def main():
    """Validate configuration, then serve with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        settings = Settings.from_env()
        require_api_key(settings)
    except ConfigurationError as e:
        logging.critical(str(e))
        sys.exit(1)

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
