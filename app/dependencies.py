"""FastAPI dependencies shared by the routers."""
from fastapi import Depends, Request

from app.config import Settings, get_settings
from app.models.schemas import AddressResult
from app.services.public_ip_service import PublicIPService
from app.utils.network import get_client_addresses


def get_public_ip_service(settings: Settings = Depends(get_settings)) -> PublicIPService:
    """Build the fallback resolver from the application settings."""
    return PublicIPService(settings)


async def get_detected_addresses(
    request: Request,
    public_ip_service: PublicIPService = Depends(get_public_ip_service),
) -> AddressResult:
    """Detect the caller's addresses, consulting the fallback services when needed."""
    result = get_client_addresses(request)
    addresses = await public_ip_service.resolve_client_addresses(result)
    # Picked up by the request logging middleware
    request.state.addresses = addresses
    return addresses
