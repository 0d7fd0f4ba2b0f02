"""
Mapbox Directions v5 API client.

Builds request URLs from RouteOptions and returns the raw JSON response.
"""

import httpx
from typing import Any, Dict, Optional
from directions_codec.core.config import settings
from directions_codec.core.exceptions import DirectionsApiError
from directions_codec.core.logging_config import logger
from directions_codec.schemas.route_options import RouteOptions


class DirectionsClient:
    """Client for the Mapbox Directions API."""
    
    def __init__(
        self,
        access_token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize Directions client.
        
        Args:
            access_token: Mapbox access token (defaults to env var)
            base_url: API host (defaults to BASE_API_URL setting)
            timeout: Request timeout in seconds
            transport: Custom httpx transport, e.g. a MockTransport in tests
        """
        self.access_token = access_token or settings.MAPBOX_ACCESS_TOKEN
        self.base_url = (base_url or settings.BASE_API_URL).rstrip("/")
        self.timeout = timeout or settings.REQUEST_TIMEOUT_SECONDS
        self.transport = transport
        if not self.access_token:
            logger.warning("MAPBOX_ACCESS_TOKEN not set. Directions requests will fail.")
    
    def build_url(self, options: RouteOptions) -> str:
        """
        Build the request URL for the given options.
        
        Raises:
            MalformedElementError: If an option value cannot be rendered
            ValidationViolationError: If an option breaks a parameter rule
        """
        return options.to_url(base_url=self.base_url, access_token=self.access_token)
    
    def get_directions(self, options: RouteOptions) -> Dict[str, Any]:
        """
        Request routes for the given options.
        
        Options are encoded and validated before any network call is made.
        
        Args:
            options: Route request options
            
        Returns:
            Decoded JSON response body
            
        Raises:
            DirectionsApiError: If the API answers with an error status
        """
        url = self.build_url(options)
        
        logger.info(
            f"Requesting directions: {len(options.coordinates)} coordinates, "
            f"profile={options.profile.value}"
        )
        
        try:
            with httpx.Client(transport=self.transport, timeout=self.timeout) as client:
                response = client.get(url)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Directions API error {e.response.status_code}: {e.response.text}")
            raise DirectionsApiError(
                f"Directions API failed: {e.response.status_code}",
                status_code=e.response.status_code
            ) from e
        
        code = data.get("code")
        if code != "Ok":
            logger.warning(f"Directions API returned code={code}: {data.get('message')}")
        else:
            logger.info(f"Received {len(data.get('routes', []))} routes")
        
        return data
