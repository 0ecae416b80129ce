"""Get IP API FastAPI Application."""
from datetime import datetime, timezone
from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.responses import JSONResponse
import logging

from app.config import Settings, get_settings
from app.dependencies import get_public_ip_service
from app.models.schemas import DebugResponse, ErrorResponse, HealthCheck
from app.routers import ip
from app.middleware.api_request_logging import ApiRequestLoggingMiddleware
from app.utils.exceptions import AddressNotFoundError
from app.services.public_ip_service import PublicIPService
from app.utils.network import get_client_addresses, read_proxy_headers

# Get settings
settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Reports the caller's public IPv4 and IPv6 addresses",
    version="1.0.0"
)

# Add API request logging middleware
app.add_middleware(ApiRequestLoggingMiddleware)


@app.on_event("startup")
async def startup_event():
    """Log the effective configuration on application startup."""
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Public IP fallback {'enabled' if settings.enable_fallback else 'disabled'}")


# Include routers
app.include_router(ip.router)


@app.get("/health", response_model=HealthCheck)
async def health_check(settings: Settings = Depends(get_settings)):
    """Health check endpoint."""
    return HealthCheck(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        service=settings.app_name,
        environment=settings.environment,
        host=settings.host,
        port=settings.port,
    )


@app.get("/debug", response_model=DebugResponse)
async def debug_headers(
    request: Request,
    settings: Settings = Depends(get_settings),
    public_ip_service: PublicIPService = Depends(get_public_ip_service),
):
    """Show what the address detection saw (development only)."""
    if not settings.debug_enabled:
        raise HTTPException(status_code=404, detail="Not Found")

    addresses = await public_ip_service.resolve_client_addresses(get_client_addresses(request))
    request.state.addresses = addresses

    return DebugResponse(
        detected=addresses,
        proxy_headers=read_proxy_headers(request.headers),
        headers=dict(request.headers),
        client_host=request.client.host if request.client else None,
        timestamp=datetime.now(timezone.utc),
    )


# Error handlers
@app.exception_handler(AddressNotFoundError)
async def address_not_found_handler(request, exc):
    logger.warning(f"{request.url.path}: {exc.detail}")
    body = ErrorResponse(error=exc.detail, timestamp=datetime.now(timezone.utc))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json")
    )
