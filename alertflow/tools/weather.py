"""
Weather lookup used by integration nodes.

Fetches the current temperature for a pair of coordinates from the
Open-Meteo forecast API. The HTTP client is created by the application
and shared between requests; this module never builds its own.
"""

from typing import Optional
import asyncio
import logging

import httpx

from alertflow.engine.errors import DataLookupError


logger = logging.getLogger(__name__)


class WeatherLookup:
    """
    Current-temperature lookup backed by a shared ``httpx.AsyncClient``.

    Usage:
        async with httpx.AsyncClient() as client:
            lookup = WeatherLookup(client)
            temperature = await lookup(-33.8688, 151.2093)
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_url: str = "https://api.open-meteo.com/v1/forecast",
        timeout: float = 10.0,
    ):
        """
        Args:
            client: Shared HTTP client (owns the connection pool)
            api_url: Forecast endpoint
            timeout: Upper bound in seconds for one lookup
        """
        self.client = client
        self.api_url = api_url
        self.timeout = timeout

    async def __call__(
        self,
        latitude: float,
        longitude: float,
        cancellation: Optional[asyncio.Event] = None,
    ) -> float:
        """
        Fetch the current temperature.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            cancellation: Optional event; once set, the lookup is abandoned

        Returns:
            Current temperature in degrees Celsius

        Raises:
            DataLookupError: on a non-200 response, transport error,
                malformed payload, timeout or cancellation
        """
        if cancellation is not None and cancellation.is_set():
            raise DataLookupError("lookup cancelled")

        request = asyncio.ensure_future(self._fetch(latitude, longitude))
        waiters = {request}
        cancel_waiter = None
        if cancellation is not None:
            cancel_waiter = asyncio.ensure_future(cancellation.wait())
            waiters.add(cancel_waiter)

        try:
            done, _ = await asyncio.wait(
                waiters,
                timeout=self.timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()
            if not request.done():
                request.cancel()

        if request in done:
            return request.result()

        if cancel_waiter is not None and cancel_waiter in done:
            raise DataLookupError("lookup cancelled")
        raise DataLookupError(f"lookup timed out after {self.timeout:g}s")

    async def _fetch(self, latitude: float, longitude: float) -> float:
        params = {
            "latitude": f"{latitude:.4f}",
            "longitude": f"{longitude:.4f}",
            "current_weather": "true",
        }
        logger.debug(f"Fetching weather for ({latitude:.4f}, {longitude:.4f})")

        try:
            response = await self.client.get(self.api_url, params=params, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise DataLookupError(str(e) or type(e).__name__) from e

        if response.status_code != httpx.codes.OK:
            raise DataLookupError(
                f"weather API error: {response.status_code} "
                f"{response.reason_phrase} - {response.text}"
            )

        try:
            temperature = response.json()["current_weather"]["temperature"]
        except (ValueError, KeyError, TypeError) as e:
            raise DataLookupError(f"malformed weather response: {e}") from e

        if isinstance(temperature, bool) or not isinstance(temperature, (int, float)):
            raise DataLookupError(f"malformed weather response: temperature={temperature!r}")

        return float(temperature)
