from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from constants import LOG_FILE, LOG_LEVEL
from logging_config import get_logger, setup_logging
from routers.rooms import rooms_router
from routers.signaling import signaling_router
from routers.users import users_router
from services.hub import SignalingHub, build_hub

# Setup logging
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)
logger = get_logger(__name__)


def create_app(hub: Optional[SignalingHub] = None) -> FastAPI:
    """Build the app with its own, freshly wired state."""
    application = FastAPI(title="Jump signaling relay")

    # Configure CORS to allow all origins
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Allow all origins
        allow_credentials=True,
        allow_methods=["*"],  # Allow all HTTP methods
        allow_headers=["*"],  # Allow all headers
    )

    application.state.hub = hub or build_hub()

    application.include_router(signaling_router)
    application.include_router(rooms_router)
    application.include_router(users_router)

    @application.get("/health")
    async def health():
        state: SignalingHub = application.state.hub
        return {
            "status": "ok",
            "connections": len(state.transport),
            "users": len(state.identities),
            "rooms": len(state.rooms),
        }

    logger.info("FastAPI application initialized")
    return application


app = create_app()
