"""Python API and CLI for the Bambu Lab 3D printer cloud."""

import logging

import structlog

# Quiet the library by default unless the application configured structlog
if not structlog.is_configured():
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING))

from bambucloud.auth import Token
from bambucloud.client import Client
from bambucloud.exceptions import (
    BambuCloudError,
    CameraUrlError,
    DecodeError,
    TokenError,
    TransportError,
)
from bambucloud.models import Account, AMSDetail, Device, Personal, Task
from bambucloud.region import Endpoints, Region, endpoints_for

__all__ = [
    "AMSDetail",
    "Account",
    "BambuCloudError",
    "CameraUrlError",
    "Client",
    "DecodeError",
    "Device",
    "Endpoints",
    "Personal",
    "Region",
    "Task",
    "Token",
    "TokenError",
    "TransportError",
    "endpoints_for",
]
