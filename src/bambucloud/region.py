"""Account regions and the hosts each one talks to."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from bambucloud._constants import (
    API_BASE,
    API_BASE_CN,
    IOT_SERVICE,
    MQTT_HOST,
    MQTT_HOST_CN,
    USER_SERVICE,
)


class Region(StrEnum):
    """Geographic region of a Bambu Lab account."""

    CHINA = "China"
    EUROPE = "Europe"
    NORTH_AMERICA = "NorthAmerica"
    ASIA_PACIFIC = "AsiaPacific"
    OTHER = "Other"

    @property
    def is_china(self) -> bool:
        """Whether this region is served by the ``.cn`` backend."""
        return self is Region.CHINA


@dataclass(frozen=True)
class Endpoints:
    """Base URLs and MQTT host for one backend."""

    user_service: str
    """Account service base URL (login, profile, tasks)."""

    iot_service: str
    """Device service base URL (bindings, camera tickets)."""

    mqtt_host: str
    """MQTT broker hostname."""


_DEFAULT = Endpoints(
    user_service=f"{API_BASE}/{USER_SERVICE}",
    iot_service=f"{API_BASE}/{IOT_SERVICE}",
    mqtt_host=MQTT_HOST,
)

_CHINA = Endpoints(
    user_service=f"{API_BASE_CN}/{USER_SERVICE}",
    iot_service=f"{API_BASE_CN}/{IOT_SERVICE}",
    mqtt_host=MQTT_HOST_CN,
)


def endpoints_for(region: Region) -> Endpoints:
    """Return the hosts for *region*.

    Only China has its own backend; every other region uses the default
    ``.com`` hosts.
    """
    return _CHINA if region.is_china else _DEFAULT
