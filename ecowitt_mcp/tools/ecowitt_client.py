"""
Ecowitt API Client

Async HTTP client for the Ecowitt v3 REST API. Every call is a GET carrying the
two credential query parameters; responses are {code, msg, data[, time]}
envelopes where code 0 means success. Failures are raised as EcowittError.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import ClientConfig, is_absolute_http_url
from .errors import (
    api_error,
    configuration_error,
    data_parsing_error,
    network_error,
    parameter_error,
    timeout_error,
)

logger = logging.getLogger(__name__)

DEVICE_LIST_ENDPOINT = "/device/list"
DEVICE_INFO_ENDPOINT = "/device/info"
DEVICE_REALTIME_ENDPOINT = "/device/real_time"
DEVICE_HISTORY_ENDPOINT = "/device/history"

CYCLE_TYPES = ("auto", "5min", "30min", "4hour", "1day")


def transform_device(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Map one raw upstream device record onto the DeviceSummary shape."""
    sensors = raw.get("iotdevice_list") or []
    return {
        "id": raw.get("id"),
        "name": raw.get("name"),
        "mac": raw.get("mac"),
        "imei": raw.get("imei"),
        "type": raw.get("type"),
        "stationType": raw.get("stationtype"),
        "timeZoneId": raw.get("date_zone_id"),
        "createdAt": raw.get("createtime"),
        "longitude": raw.get("longitude"),
        "latitude": raw.get("latitude"),
        "attachedSensors": [
            {
                "name": sensor.get("name"),
                "defaultTitle": sensor.get("default_title"),
                "deviceId": sensor.get("device_id"),
                "version": sensor.get("version"),
                "createdAt": sensor.get("createtime"),
            }
            for sensor in sensors
        ],
    }


def build_device_params(mac_or_imei: Optional[str]) -> Dict[str, str]:
    """{'mac': ...} when the identifier contains a colon, else {'imei': ...}"""
    if not mac_or_imei:
        raise parameter_error("MAC or IMEI is required.")
    return {"mac": mac_or_imei} if ":" in mac_or_imei else {"imei": mac_or_imei}


class EcowittClient:
    """HTTP client for the Ecowitt weather station API"""

    def __init__(self, config: ClientConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        credentials = config.credentials
        if not credentials.application_key:
            raise configuration_error("Application key is required")
        if not credentials.api_key:
            raise configuration_error("API key is required")
        if not config.base_url:
            raise configuration_error("Base URL is required")
        if not is_absolute_http_url(config.base_url):
            raise configuration_error("Invalid base URL format", "INVALID_CONFIG")
        if not config.request_timeout_ms or config.request_timeout_ms <= 0:
            raise configuration_error("Request timeout must be a positive number", "INVALID_CONFIG")

        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.timeout = config.request_timeout
        self.client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    def get_base_url(self) -> str:
        return self.base_url

    async def aclose(self) -> None:
        await self.client.aclose()

    def build_url(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> str:
        """Absolute URL for endpoint with credentials and non-None params."""
        path = "/" + endpoint.lstrip("/")
        query = {
            "application_key": self.config.credentials.application_key,
            "api_key": self.config.credentials.api_key,
        }
        for key, value in (params or {}).items():
            if value is not None:
                query[key] = str(value)
        return str(httpx.URL(f"{self.base_url}{path}", params=query))

    def _redact(self, message: str) -> str:
        credentials = self.config.credentials
        for secret in (credentials.application_key, credentials.api_key):
            message = message.replace(secret, "***")
        return message

    async def perform_request(
        self,
        endpoint: str,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Issue one request and return the envelope's data field."""
        url = self.build_url(endpoint, params)
        request_headers = {
            "Content-Type": "application/json",
            "User-Agent": f"ecowitt-mcp/{self.config.version}",
        }
        request_headers.update(headers or {})

        logger.debug("Ecowitt %s %s", method, endpoint)
        try:
            # wait_for cancels the in-flight request when the timeout elapses
            response = await asyncio.wait_for(
                self.client.request(method, url, headers=request_headers),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning("Ecowitt request to %s timed out after %.1fs", endpoint, self.timeout)
            raise timeout_error() from None
        except httpx.HTTPError as e:
            logger.warning("Ecowitt request to %s failed: %s", endpoint, type(e).__name__)
            raise network_error(self._redact(str(e) or type(e).__name__)) from None

        if not response.is_success:
            raise api_error(
                response.status_code,
                f"HTTP Error: {response.reason_phrase}",
                original_message=f"HTTP status {response.status_code}: {response.reason_phrase}",
            )

        try:
            envelope = response.json()
        except ValueError as e:
            raise data_parsing_error(str(e)) from None
        if not isinstance(envelope, dict):
            raise data_parsing_error(f"expected a JSON object, got {type(envelope).__name__}")

        code = envelope.get("code")
        if code != 0:
            logger.debug("Ecowitt %s returned code %s", endpoint, code)
            raise api_error(code, envelope.get("msg"))

        return envelope.get("data")

    async def list_devices(self) -> List[Dict[str, Any]]:
        """All devices on the account as DeviceSummary dicts"""
        data = await self.perform_request(DEVICE_LIST_ENDPOINT)
        devices = (data.get("list") if isinstance(data, dict) else None) or []
        return [transform_device(device) for device in devices]

    async def get_device_detail(self, mac_or_imei: str) -> Any:
        """Raw device detail payload; an empty dict is left for callers to judge."""
        params = build_device_params(mac_or_imei)
        return await self.perform_request(DEVICE_INFO_ENDPOINT, params=params)

    async def get_realtime_reading(
        self,
        mac_or_imei: str,
        call_back: Optional[str] = None,
        unit_options: Optional[Dict[str, Any]] = None,
    ) -> Any:
        params = build_device_params(mac_or_imei)
        if call_back:
            params["call_back"] = call_back
        params.update(unit_options or {})
        return await self.perform_request(DEVICE_REALTIME_ENDPOINT, params=params)

    async def get_historical_readings(
        self,
        mac_or_imei: str,
        start_date: str,
        end_date: str,
        call_back: str,
        cycle_type: Optional[str] = None,
        unit_options: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """History between start_date and end_date ("YYYY-MM-DD HH:mm:ss", passed through)."""
        params = build_device_params(mac_or_imei)
        if not start_date:
            raise parameter_error("start_date is required.")
        if not end_date:
            raise parameter_error("end_date is required.")
        if not call_back:
            raise parameter_error("call_back is required.")
        params.update({"start_date": start_date, "end_date": end_date, "call_back": call_back})
        if cycle_type:
            params["cycle_type"] = cycle_type
        params.update(unit_options or {})
        return await self.perform_request(DEVICE_HISTORY_ENDPOINT, params=params)
