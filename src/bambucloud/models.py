"""Typed shapes of the JSON resources returned by the Bambu Lab cloud."""

from __future__ import annotations

import typing

import pydantic
import structlog
from pydantic.alias_generators import to_camel

if typing.TYPE_CHECKING:
    from bambucloud.client import Client

logger = structlog.get_logger(__name__)


class CloudModel(pydantic.BaseModel):
    """Read-only base model that keeps and reports unknown fields."""

    model_config = pydantic.ConfigDict(extra="allow", frozen=True)

    def model_post_init(self, context: typing.Any, /) -> None:
        """Log any fields the model does not declare."""
        if self.__pydantic_extra__:
            logger.debug(
                "Model received unknown fields",
                model=self.__class__.__name__,
                fields=sorted(self.__pydantic_extra__),
            )


class CamelModel(CloudModel):
    """Base for resources whose JSON keys are camelCase."""

    model_config = pydantic.ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Account
# ---------------------------------------------------------------------------


class Personal(CamelModel):
    """Public profile details and lifetime print totals."""

    bio: str
    links: list[pydantic.AnyUrl]
    task_weight_sum: float
    task_length_sum: pydantic.NonNegativeInt
    task_time_sum: pydantic.NonNegativeInt
    background_url: pydantic.AnyUrl


class Account(CamelModel):
    """The logged-in user's profile."""

    uid: pydantic.NonNegativeInt
    email: str = pydantic.Field(alias="account")
    name: str
    avatar: pydantic.AnyUrl
    fan_count: pydantic.NonNegativeInt
    follow_count: pydantic.NonNegativeInt
    like_count: pydantic.NonNegativeInt
    collection_count: pydantic.NonNegativeInt
    download_count: pydantic.NonNegativeInt
    product_models: list[str]
    my_like_count: pydantic.NonNegativeInt
    favourites_count: pydantic.NonNegativeInt
    point: pydantic.NonNegativeInt
    personal: Personal


# ---------------------------------------------------------------------------
# Devices
# ---------------------------------------------------------------------------


class Device(CloudModel):
    """A printer bound to the account."""

    name: str
    online: bool
    dev_id: str
    print_status: str
    nozzle_diameter: float
    dev_model_name: str
    dev_access_code: str
    dev_product_name: str

    async def camera_url(self, client: Client) -> str:
        """Request a one-time camera streaming URL for this printer.

        Shortcut for :meth:`Client.get_camera_url`.
        """
        return await client.get_camera_url(self)


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


class AMSDetail(CamelModel):
    """One AMS filament slot used by a print task."""

    position: pydantic.NonNegativeInt = pydantic.Field(alias="ams")
    source_color: str
    target_color: str
    filament_id: str
    filament_type: str
    target_filament_type: str
    weight: float


class Task(CamelModel):
    """A print task from the account history."""

    id: pydantic.NonNegativeInt
    design_id: pydantic.NonNegativeInt
    design_title: str
    instance_id: pydantic.NonNegativeInt
    model_id: str
    title: str
    cover: pydantic.AnyUrl
    status: pydantic.NonNegativeInt
    feedback_status: pydantic.NonNegativeInt
    start_time: pydantic.AwareDatetime
    end_time: pydantic.AwareDatetime
    weight: float
    length: pydantic.NonNegativeInt
    cost_time: pydantic.NonNegativeInt
    profile_id: pydantic.NonNegativeInt
    plate_index: pydantic.NonNegativeInt
    plate_name: str
    device_id: str
    ams_detail_mapping: list[AMSDetail]  # server order
    mode: str
    is_public_profile: bool
    is_printable: bool
    device_model: str
    device_name: str
    bed_type: str


# ---------------------------------------------------------------------------
# Response envelopes
# ---------------------------------------------------------------------------


class LoginResponse(CamelModel):
    access_token: str


class DevicesResponse(CloudModel):
    devices: list[Device]


class TasksResponse(CloudModel):
    total: pydantic.NonNegativeInt
    hits: list[Task]


class CameraTicket(CloudModel):
    """One-time camera session returned by the ttcode endpoint."""

    ttcode: str
    authkey: str
    passwd: str
    region: str
