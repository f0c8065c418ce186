"""
Device Handlers

Orchestration between MCP-facing operations and the Ecowitt client: address
resolution (name -> MAC -> device), payload shaping and error wrapping.
Classified errors pass through untouched; anything else becomes handler_error.
"""

import logging
from typing import Any, Dict, List, Optional

from .ecowitt_client import EcowittClient
from .errors import (
    EcowittError,
    ambiguous_device_name,
    device_not_found,
    handler_error,
    parameter_error,
)
from .mac import compact_mac_address, format_mac_address, is_valid_mac_address
from .validation import validate_required

logger = logging.getLogger(__name__)

RESOURCE_URI_PREFIX = "ecowitt://device/"


def is_missing_device(payload: Any) -> bool:
    """The detail endpoint answers code 0 with an empty object for unknown devices."""
    return not payload


def resolve_address(address: str) -> str:
    """Valid MACs come back as AA:BB:CC:DD:EE:FF; other all-digit strings are IMEIs.

    A 12-digit string is always read as a compact MAC.
    """
    validate_required("MAC address", address)
    address = address.strip()
    if is_valid_mac_address(address):
        return format_mac_address(address)
    if address.isdigit():
        return address
    raise parameter_error("Invalid MAC address format. Expected 12 hexadecimal characters.")


def device_resource_uri(device: Dict[str, Any]) -> str:
    mac = device.get("mac")
    if mac and is_valid_mac_address(mac):
        return f"{RESOURCE_URI_PREFIX}{compact_mac_address(mac)}"
    return f"{RESOURCE_URI_PREFIX}{device.get('imei') or mac}"


class DeviceHandlers:
    """Device operations consumed by the MCP tool and resource handlers"""

    def __init__(self, client: EcowittClient):
        self.client = client

    async def list_resources(self) -> List[Dict[str, Any]]:
        devices = await self.client.list_devices()
        return [
            {
                "uri": device_resource_uri(device),
                "name": device.get("name"),
                "mac": device.get("mac"),
                "imei": device.get("imei"),
                "type": device.get("type"),
                "stationType": device.get("stationType"),
                "timeZoneId": device.get("timeZoneId"),
                "longitude": device.get("longitude"),
                "latitude": device.get("latitude"),
            }
            for device in devices
        ]

    async def get_by_address(self, address: str) -> Dict[str, Any]:
        address = resolve_address(address)
        try:
            data = await self.client.get_device_detail(address)
        except EcowittError:
            raise
        except Exception as e:
            raise handler_error("get_by_address", e) from e
        if is_missing_device(data):
            raise device_not_found(address)
        return data

    async def get_realtime_info(
        self,
        address: str,
        call_back: Optional[str] = None,
        unit_options: Optional[Dict[str, Any]] = None,
    ) -> Any:
        address = resolve_address(address)
        try:
            return await self.client.get_realtime_reading(address, call_back, unit_options or {})
        except EcowittError:
            raise
        except Exception as e:
            raise handler_error("get_realtime_info", e) from e

    async def get_history(
        self,
        address: str,
        start_date: str,
        end_date: str,
        call_back: str,
        cycle_type: Optional[str] = None,
        unit_options: Optional[Dict[str, Any]] = None,
    ) -> Any:
        validate_required("MAC address", address)
        validate_required("start date", start_date)
        validate_required("end date", end_date)
        validate_required("callback", call_back)
        address = resolve_address(address)
        try:
            return await self.client.get_historical_readings(
                address, start_date, end_date, call_back, cycle_type, unit_options or {}
            )
        except EcowittError:
            raise
        except Exception as e:
            raise handler_error("get_history", e) from e

    async def get_by_name(self, name: str, strict: bool = False) -> Dict[str, Any]:
        """Resolve a device by name (case-insensitive, trimmed).

        Duplicate names resolve to the first device in list order unless
        strict is set, in which case the lookup fails.
        """
        validate_required("Device name", name)
        wanted = name.strip().lower()
        try:
            resources = await self.list_resources()
        except EcowittError:
            raise
        except Exception as e:
            raise handler_error("get_by_name", e) from e

        matches = [r for r in resources if (r.get("name") or "").strip().lower() == wanted]
        if not matches:
            raise device_not_found(name)
        if len(matches) > 1:
            if strict:
                raise ambiguous_device_name(name, len(matches))
            logger.warning("Device name %r matches %d devices; using the first", name, len(matches))

        match = matches[0]
        return await self.get_by_address(match.get("mac") or match.get("imei"))
