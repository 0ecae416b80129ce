"""Process entry point for running the API under uvicorn."""
import logging

import uvicorn

from app.config import get_settings

logger = logging.getLogger(__name__)

ENDPOINTS = (
    ("/", "Get IP info (IPv4 & IPv6) as JSON"),
    ("/ip", "Get IP info (IPv4 & IPv6) as JSON"),
    ("/ip/plain", "Get primary IP as plain text"),
    ("/ipv4", "Get IPv4 address as JSON"),
    ("/ipv6", "Get IPv6 address as JSON"),
    ("/ipv4/plain", "Get IPv4 address as plain text"),
    ("/ipv6/plain", "Get IPv6 address as plain text"),
    ("/health", "Health check"),
)


def log_banner(settings) -> None:
    """Log where the server listens and what it serves."""
    logger.info(f"Get IP API server is running on http://{settings.host}:{settings.port}")
    logger.info(f"Environment: {settings.environment}")
    logger.info("Available endpoints:")
    for path, description in ENDPOINTS:
        logger.info(f"   GET {path:<12} - {description}")
    if settings.debug_enabled:
        logger.info(f"   GET {'/debug':<12} - Show detection details and raw headers")


def run() -> None:
    """Start the server on the configured host and port."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    log_banner(settings)
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
