"""Bridge configuration document models."""

from __future__ import annotations

from pydantic import Field

from .base import FileModel
from .device import Device


class MqttConfig(FileModel):
    host: str = "localhost"
    port: int = 1883
    user: str = ""
    password: str = ""


class HttpsConfig(FileModel):
    private_key: str = Field(default="", alias="privateKey")
    certificate: str = ""
    port: int = 443


class Client(FileModel):
    id: str
    name: str
    client_id: str = Field(alias="clientId")
    client_secret: str = Field(alias="clientSecret")
    is_trusted: bool = Field(alias="isTrusted")


class User(FileModel):
    id: str
    username: str
    password: str
    name: str


class Configuration(FileModel):
    """The whole document exported by the bridge config module."""

    mqtt: MqttConfig = Field(default_factory=MqttConfig)
    https: HttpsConfig = Field(default_factory=HttpsConfig)
    clients: list[Client] = Field(default_factory=list)
    users: list[User] = Field(default_factory=list)
    devices: list[Device] = Field(default_factory=list)
