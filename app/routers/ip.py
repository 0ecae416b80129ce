"""Endpoints reporting the caller's IP addresses."""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from app.dependencies import get_detected_addresses
from app.models.schemas import (
    AddressResult,
    ErrorResponse,
    IPInfoResponse,
    IPv4Response,
    IPv6Response,
)
from app.utils.exceptions import IPv4NotFoundError, IPv6NotFoundError


router = APIRouter(tags=["ip"])

NOT_FOUND_RESPONSES = {404: {"model": ErrorResponse}}


def _ip_info(addresses: AddressResult) -> IPInfoResponse:
    return IPInfoResponse(
        ip=addresses.primary,
        ipv4=addresses.ipv4,
        ipv6=addresses.ipv6,
        version=addresses.version,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/", response_model=IPInfoResponse)
async def get_ip_root(addresses: AddressResult = Depends(get_detected_addresses)):
    """Return the caller's primary address plus both families as JSON."""
    return _ip_info(addresses)


@router.get("/ip", response_model=IPInfoResponse)
async def get_ip(addresses: AddressResult = Depends(get_detected_addresses)):
    """Alternative endpoint with explicit path."""
    return _ip_info(addresses)


@router.get("/ip/plain", response_class=PlainTextResponse)
async def get_ip_plain(addresses: AddressResult = Depends(get_detected_addresses)):
    """Return the primary address as plain text."""
    return PlainTextResponse(addresses.primary)


@router.get("/ipv4", response_model=IPv4Response, responses=NOT_FOUND_RESPONSES)
async def get_ipv4(addresses: AddressResult = Depends(get_detected_addresses)):
    """Return only the IPv4 address."""
    if not addresses.ipv4:
        raise IPv4NotFoundError()
    return IPv4Response(ipv4=addresses.ipv4, timestamp=datetime.now(timezone.utc))


@router.get("/ipv6", response_model=IPv6Response, responses=NOT_FOUND_RESPONSES)
async def get_ipv6(addresses: AddressResult = Depends(get_detected_addresses)):
    """Return only the IPv6 address."""
    if not addresses.ipv6:
        raise IPv6NotFoundError()
    return IPv6Response(ipv6=addresses.ipv6, timestamp=datetime.now(timezone.utc))


@router.get("/ipv4/plain", response_class=PlainTextResponse)
async def get_ipv4_plain(addresses: AddressResult = Depends(get_detected_addresses)):
    """Return the IPv4 address as plain text."""
    if not addresses.ipv4:
        return PlainTextResponse("No IPv4 address found", status_code=404)
    return PlainTextResponse(addresses.ipv4)


@router.get("/ipv6/plain", response_class=PlainTextResponse)
async def get_ipv6_plain(addresses: AddressResult = Depends(get_detected_addresses)):
    """Return the IPv6 address as plain text."""
    if not addresses.ipv6:
        return PlainTextResponse("No IPv6 address found", status_code=404)
    return PlainTextResponse(addresses.ipv6)
