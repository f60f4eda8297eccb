"""
Nearby Places Client - looks up Wikipedia articles around a coordinate.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from bucketlist.config.settings import GeosearchSettings, get_settings
from bucketlist.core.exceptions import NearbyPlacesError
from bucketlist.models.bookmark import Coordinate
from bucketlist.models.place import GeosearchResponse, NearbyPlace

logger = logging.getLogger(__name__)


class NearbyPlacesClient:
    """Client for the geosearch endpoint. One request per lookup, no retries."""

    def __init__(
        self,
        settings: Optional[GeosearchSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings().geosearch
        self.base_url = self.settings.base_url
        self.timeout = self.settings.timeout_seconds
        # swapped out in tests
        self.transport = transport

    def build_params(self, coordinate: Coordinate) -> Dict[str, Any]:
        """Query string for a geosearch around ``coordinate``."""
        limit = self.settings.result_limit
        return {
            "ggscoord": f"{coordinate.latitude}|{coordinate.longitude}",
            "action": "query",
            "prop": "coordinates|pageimages|pageterms",
            "colimit": limit,
            "piprop": "thumbnail",
            "pithumbsize": self.settings.thumbnail_size,
            "pilimit": limit,
            "wbptterms": "description",
            "generator": "geosearch",
            "ggsradius": self.settings.radius_m,
            "ggslimit": limit,
            "format": "json",
        }

    def endpoint(self) -> httpx.URL:
        """
        Parsed geosearch URL.

        Raises:
            NearbyPlacesError: If the configured URL is not an absolute http(s) URL
        """
        try:
            url = httpx.URL(self.base_url)
        except httpx.InvalidURL as e:
            logger.error(f"Bad URL: {self.base_url}")
            raise NearbyPlacesError("Bad geosearch URL", details={"url": self.base_url}) from e
        if url.scheme not in ("http", "https") or not url.host:
            logger.error(f"Bad URL: {self.base_url}")
            raise NearbyPlacesError("Bad geosearch URL", details={"url": self.base_url})
        return url

    async def fetch_nearby(self, coordinate: Coordinate) -> List[NearbyPlace]:
        """
        Fetch places around ``coordinate``, sorted by title.

        Args:
            coordinate: Centre of the search

        Returns:
            Places ordered by title

        Raises:
            NearbyPlacesError: On a bad URL, transport error, timeout, non-2xx
                status or a body that does not match the expected schema
        """
        url = self.endpoint()
        params = self.build_params(coordinate)
        logger.info(f"Fetching nearby places for {coordinate.latitude},{coordinate.longitude}")

        try:
            async with httpx.AsyncClient(
                headers={"User-Agent": self.settings.user_agent},
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("Timeout fetching nearby places")
            raise NearbyPlacesError("Nearby places request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"Geosearch returned {e.response.status_code}")
            raise NearbyPlacesError(
                "Geosearch returned an error status",
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"Error fetching nearby places: {e}")
            raise NearbyPlacesError("Nearby places request failed") from e

        try:
            decoded = GeosearchResponse.model_validate_json(response.content)
        except ValidationError as e:
            logger.warning(f"Undecodable geosearch response ({e.error_count()} errors)")
            raise NearbyPlacesError("Geosearch response could not be decoded") from e

        places = decoded.sorted_places()
        logger.info(f"Found {len(places)} nearby places")
        return places
