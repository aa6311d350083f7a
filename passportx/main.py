from fastapi import FastAPI

from passportx.api import webhooks
from passportx.config import config
from passportx.lib.logger import configure_logger, setup_uvicorn_logging
from passportx.services.integrations.webhooks.chainhook import ChainhookService

# Configure module logger
logger = configure_logger(__name__)

# Define app
app = FastAPI(
    title="PassportX Chainhook Events",
    description="Chainhook webhook ingestion and event dispatch for PassportX",
    version="0.1.0",
)


# Simple health check endpoint
@app.get("/")
async def health_check():
    """Simple health check endpoint."""
    return {"status": "healthy"}


# Load API routes
app.include_router(webhooks.router)


@app.on_event("startup")
async def startup_event():
    """Build the chainhook service once and configure logging."""
    setup_uvicorn_logging()

    logger.info("Starting FastAPI web server...")
    logger.info(
        f"Chainhook source: network={config.network.network} "
        f"node={config.chainhook.node_url} enabled={config.chainhook.enabled}"
    )
    app.state.chainhook_service = ChainhookService()
    event_types = sorted(app.state.chainhook_service.registry.get_event_types())
    logger.info(f"Registered chainhook event types: {', '.join(event_types)}")
    logger.info("Web server startup complete")


@app.on_event("shutdown")
async def shutdown_event():
    """Run web server shutdown tasks."""
    logger.info("Shutting down FastAPI web server...")
    logger.info("Web server shutdown complete")
