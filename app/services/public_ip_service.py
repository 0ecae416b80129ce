"""Service for discovering the public IPv4 address through IP-echo services."""
import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import httpx

from app.config import Settings
from app.models.schemas import AddressResult
from app.utils.network import has_public_address, is_ipv4, is_private_ip

logger = logging.getLogger(__name__)


def parse_plain_text(body: str) -> str:
    """Echo services answer with the bare address, usually newline-terminated."""
    return body.strip()


@dataclass(frozen=True)
class FallbackEndpoint:
    """An external service that echoes the caller's public IPv4 address."""
    name: str
    url: str
    parser: Callable[[str], str] = parse_plain_text


# Tried in order; the first usable answer wins.
DEFAULT_ENDPOINTS: Tuple[FallbackEndpoint, ...] = (
    FallbackEndpoint(name="ipify", url="https://api.ipify.org"),
    FallbackEndpoint(name="icanhazip", url="https://ipv4.icanhazip.com"),
    FallbackEndpoint(name="amazonaws", url="https://checkip.amazonaws.com"),
)


def should_use_fallback(result: AddressResult, settings: Settings) -> bool:
    """Fallback runs only when something was detected and all of it is private."""
    if not settings.enable_fallback:
        return False
    if not result.addresses:
        return False
    return not has_public_address(result)


class PublicIPService:
    """Service to look up the public IPv4 address when a request only carried private ones."""

    def __init__(
        self,
        settings: Settings,
        endpoints: Tuple[FallbackEndpoint, ...] = DEFAULT_ENDPOINTS,
    ):
        self.settings = settings
        self.endpoints = endpoints

    async def _query(self, client: httpx.AsyncClient, endpoint: FallbackEndpoint) -> Optional[str]:
        """
        Ask a single echo service for the public address.

        Args:
            client: The HTTP client to issue the request with
            endpoint: The service to query

        Returns:
            The public IPv4 address, or None if the answer is unusable
        """
        try:
            # httpx timeouts apply per phase; a slow trickle of bytes can outlast them
            response = await asyncio.wait_for(client.get(endpoint.url), self.settings.fallback_timeout)

            if not response.is_success:
                logger.warning(f"Public IP service {endpoint.name} returned status {response.status_code}")
                return None

            candidate = endpoint.parser(response.text)

            if not is_ipv4(candidate):
                logger.warning(f"Public IP service {endpoint.name} returned a malformed address: {candidate[:64]!r}")
                return None

            if is_private_ip(candidate):
                logger.warning(f"Public IP service {endpoint.name} returned a private address {candidate}")
                return None

            return candidate

        except (httpx.TimeoutException, asyncio.TimeoutError):
            logger.warning(f"Public IP lookup timeout for {endpoint.name}")
            return None
        except httpx.HTTPError as e:
            logger.warning(f"Public IP lookup failed for {endpoint.name}: {e}")
            return None
        except Exception as e:
            logger.error(f"Error during public IP lookup via {endpoint.name}: {e}")
            return None

    async def resolve_public_ipv4(self) -> Optional[str]:
        """
        Query the echo services in order and return the first public IPv4 address.

        Returns:
            The public IPv4 address, or None if every service failed
        """
        try:
            async with httpx.AsyncClient(timeout=self.settings.fallback_timeout) as client:
                for endpoint in self.endpoints:
                    address = await self._query(client, endpoint)
                    if address:
                        logger.info(f"Resolved public IP {address} via {endpoint.name}")
                        return address
        except Exception as e:
            logger.error(f"Public IP lookup aborted: {e}")
            return None

        logger.warning("All public IP services failed; keeping detected private address")
        return None

    async def resolve_client_addresses(self, result: AddressResult) -> AddressResult:
        """Replace a private-only result with the public IPv4 address, when one can be found."""
        if not should_use_fallback(result, self.settings):
            return result

        logger.debug(f"Only private addresses detected ({', '.join(result.addresses)}); trying fallback")
        public_ip = await self.resolve_public_ipv4()
        if public_ip is None:
            return result

        return result.with_fallback(public_ip)
