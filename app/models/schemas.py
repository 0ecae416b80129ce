"""Pydantic models for detected addresses and response schemas."""
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict

UNKNOWN_ADDRESS = "Unknown"


class IPVersion(str, Enum):
    """Address family of the primary address."""
    IPV4 = "IPv4"
    IPV6 = "IPv6"
    UNKNOWN = "Unknown"


class AddressResult(BaseModel):
    """Addresses detected for a single request.

    At most one value is held per family. ``primary`` is the ``Unknown``
    sentinel only when neither family was classified.
    """
    model_config = ConfigDict(frozen=True)

    ipv4: Optional[str] = Field(default=None, description="Best IPv4 candidate seen")
    ipv6: Optional[str] = Field(default=None, description="Best IPv6 candidate seen")
    primary: str = Field(default=UNKNOWN_ADDRESS, description="The address reported as the client IP")
    version: IPVersion = Field(default=IPVersion.UNKNOWN, description="Family of the primary address")

    @property
    def addresses(self) -> list[str]:
        """All classified addresses, IPv4 first."""
        return [ip for ip in (self.ipv4, self.ipv6) if ip]

    def with_fallback(self, ipv4: str) -> "AddressResult":
        """Return a copy with the IPv4 slot and primary replaced by ``ipv4``."""
        return self.model_copy(
            update={"ipv4": ipv4, "primary": ipv4, "version": IPVersion.IPV4}
        )


class IPInfoResponse(BaseModel):
    """Response model for the combined IP endpoints."""
    ip: str = Field(..., description="Primary client address")
    ipv4: Optional[str] = Field(None, description="IPv4 address, if detected")
    ipv6: Optional[str] = Field(None, description="IPv6 address, if detected")
    version: IPVersion
    timestamp: datetime


class IPv4Response(BaseModel):
    """Response model for the IPv4 endpoint."""
    ipv4: str
    timestamp: datetime


class IPv6Response(BaseModel):
    """Response model for the IPv6 endpoint."""
    ipv6: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Error body returned when an address family was not detected."""
    error: str
    timestamp: datetime


class HealthCheck(BaseModel):
    """Health check response model."""
    status: str
    timestamp: datetime
    service: str
    environment: str
    host: str
    port: int


class DebugResponse(BaseModel):
    """Diagnostic dump of what the extractor saw."""
    detected: AddressResult
    proxy_headers: Dict[str, Optional[str]]
    headers: Dict[str, str]
    client_host: Optional[str] = None
    timestamp: datetime
