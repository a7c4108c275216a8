from contextlib import asynccontextmanager
from dotenv import load_dotenv

# Load environment variables early
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import get_config
from .core.dependencies import get_root_controller, reset_dependency_caches
from .core.errors import ApplicationError, application_error_handler
from .core.http_client import startup as http_client_startup, shutdown as http_client_shutdown
from .routers import all_routers
from .utils.logging_config import setup_application_logging

config = get_config()
logger = setup_application_logging(level=config.log_level, force_flush=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {config.app_name} {config.app_version} ({config.environment})")
    logger.info(f"Backend: {config.backend_url}, locale: {config.locale}")

    # Start shared HTTP client
    try:
        await http_client_startup(config.http_timeout_seconds)
    except Exception:
        logger.exception("Failed to start shared HTTP client")

    # The root controller subscribes to session changes for the app's lifetime
    controller = get_root_controller()
    controller.mount()

    yield

    try:
        controller.unmount()
        reset_dependency_caches()
    except Exception:
        logger.exception("Error during view teardown on shutdown")

    # Close shared http client
    try:
        await http_client_shutdown()
    except Exception:
        logger.exception("Error closing shared HTTP client")


app = FastAPI(title=config.app_name, version=config.app_version, debug=config.debug, lifespan=lifespan)

cors_origins = config.cors_origins_list
allow_origin_regex = None
if "*" in cors_origins:
    if config.environment.lower() in ["production", "prod"]:
        logger.critical("CORS configured with wildcard '*' in production; set CORS_ORIGINS to the page's origin")
        raise SystemExit(1)
    logger.warning("CORS configured with wildcard '*' - acceptable for local development only")
    # Echo the request origin; a literal '*' is rejected when credentials are allowed
    cors_origins = []
    allow_origin_regex = r".*"

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_origin_regex=allow_origin_regex,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Authorization", "Content-Type", "Accept"],
)

app.add_exception_handler(ApplicationError, application_error_handler)

for router in all_routers:
    app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok"}

