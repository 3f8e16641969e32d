"""JSON structures and protocol bits for the Compute API."""

from datetime import datetime
from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from typing import Annotated, Any

from pydantic import ConfigDict, Field, IPvAnyAddress, field_validator

from stackbind.common.decoding import decode_open_enum, empty_as_none
from stackbind.common.protocol import Link
from stackbind.http.body import JsonBody


class ServerSortKey(str, Enum):
    """Available sort keys."""

    ACCESS_IPV4 = "access_ip_v4"
    ACCESS_IPV6 = "access_ip_v6"
    AUTO_DISK_CONFIG = "auto_disk_config"
    AVAILABILITY_ZONE = "availability_zone"
    CONFIG_DRIVE = "config_drive"
    CREATED_AT = "created_at"
    DISPLAY_DESCRIPTION = "display_description"
    DISPLAY_NAME = "display_name"
    HOST = "host"
    HOST_NAME = "hostname"
    IMAGE_REF = "image_ref"
    INSTANCE_TYPE_ID = "instance_type_id"
    KERNEL_ID = "kernel_id"
    KEY_NAME = "key_name"
    LAUNCH_INDEX = "launch_index"
    LAUNCHED_AT = "launched_at"
    LOCKED_BY = "locked_by"
    NODE = "node"
    POWER_STATE = "power_state"
    PROGRESS = "progress"
    PROJECT_ID = "project_id"
    RAMDISK_ID = "ramdisk_id"
    ROOT_DEVICE_NAME = "root_device_name"
    TASK_STATE = "task_state"
    TERMINATED_AT = "terminated_at"
    UPDATED_AT = "updated_at"
    USER_ID = "user_id"
    UUID = "uuid"
    VM_STATE = "vm_state"

    def __str__(self) -> str:
        return self.value


class SortDirection(str, Enum):
    """Sort direction for list queries."""

    ASC = "asc"
    DESC = "desc"

    def __str__(self) -> str:
        return self.value


class ServerStatus(str, Enum):
    """All possible server statuses."""

    ACTIVE = "ACTIVE"
    BUILDING = "BUILD"
    DELETED = "DELETED"
    ERROR = "ERROR"
    HARD_REBOOTING = "HARD_REBOOT"
    MIGRATING = "MIGRATING"
    PAUSED = "PAUSED"
    REBOOTING = "REBOOT"
    RESIZING = "RESIZE"
    REVERTING_RESIZE = "REVERT_RESIZE"
    SHUT_OFF = "SHUTOFF"
    SUSPENDED = "SUSPENDED"
    RESCUING = "RESCUE"
    SHELVED = "SHELVED"
    SHELVED_OFFLOADED = "SHELVED_OFFLOADED"
    SOFT_DELETED = "SOFT_DELETED"
    UPDATING_PASSWORD = "PASSWORD"
    VERIFYING_RESIZE = "VERIFY_RESIZE"
    UNKNOWN = "UNKNOWN"

    def __str__(self) -> str:
        return self.value


class AddressType(str, Enum):
    """Type of a server address."""

    FIXED = "fixed"
    FLOATING = "floating"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


class ServerAddress(JsonBody):
    """Address of a server."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    addr: Annotated[IPvAnyAddress, Field(description="IP (v4 or v6) address")]
    mac_addr: Annotated[
        str | None,
        Field(alias="OS-EXT-IPS-MAC:mac_addr", description="MAC address, if available"),
    ] = None
    addr_type: Annotated[
        AddressType,
        Field(alias="OS-EXT-IPS:type", description="Address type, if known"),
    ] = AddressType.UNKNOWN

    @field_validator("addr_type", mode="before")
    @classmethod
    def decode_addr_type(cls, v: Any) -> AddressType:
        return decode_open_enum(AddressType, v, field="OS-EXT-IPS:type")


class Ref(JsonBody):
    """Reference to another resource, e.g. the image a server was built from."""

    model_config = ConfigDict(extra="ignore")

    id: str
    links: list[Link]


class Server(JsonBody):
    """A server as returned by the detailed views."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    access_ipv4: Annotated[IPv4Address | None, Field(alias="accessIPv4")] = None
    access_ipv6: Annotated[IPv6Address | None, Field(alias="accessIPv6")] = None
    addresses: dict[str, list[ServerAddress]] = Field(default_factory=dict)
    availability_zone: Annotated[str, Field(alias="OS-EXT-AZ:availability_zone")]
    created: datetime
    id: str
    # Servers booted from a volume report an empty string here.
    image: Ref | None = None
    name: str
    status: ServerStatus = ServerStatus.UNKNOWN
    tenant_id: str
    updated: datetime
    user_id: str

    @field_validator("access_ipv4", "access_ipv6", "image", mode="before")
    @classmethod
    def empty_string_is_none(cls, v: Any) -> Any:
        return empty_as_none(v)

    @field_validator("status", mode="before")
    @classmethod
    def decode_status(cls, v: Any) -> ServerStatus:
        return decode_open_enum(ServerStatus, v, field="status")


class ServerSummary(JsonBody):
    """A server as returned by the short list view."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str


class ServersRoot(JsonBody):
    servers: list[ServerSummary]


class ServersDetailRoot(JsonBody):
    servers: list[Server]


class ServerRoot(JsonBody):
    server: Server
