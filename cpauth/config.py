"""Runtime settings read from an optional INI file."""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass

from .constants import IDENTIFIER_LENGTH

DEFAULT_CONFIG = "cpauth.ini"


@dataclass
class Settings:
    host: str = "127.0.0.1"
    port: int = 50051
    identifier_length: int = IDENTIFIER_LENGTH
    log_level: str = "INFO"

    @property
    def server_url(self) -> str:
        return f"http://{self.host}:{self.port}"


def load_settings(path: str | None = None) -> Settings:
    """Load settings from ``path``; absent files and keys keep the defaults.

    Example::

        [server]
        host = 0.0.0.0
        port = 50051

        [auth]
        identifier_length = 16

        [logging]
        level = DEBUG
    """

    settings = Settings()
    path = path or DEFAULT_CONFIG
    if not os.path.exists(path):
        return settings

    config = configparser.ConfigParser()
    config.read(path, encoding="utf-8")

    settings.host = config.get("server", "host", fallback=settings.host)
    settings.port = config.getint("server", "port", fallback=settings.port)
    settings.identifier_length = config.getint(
        "auth", "identifier_length", fallback=settings.identifier_length
    )
    settings.log_level = config.get("logging", "level", fallback=settings.log_level).upper()

    if settings.identifier_length < 8:
        raise ValueError("identifier_length below 8 makes id collisions likely")
    return settings


__all__ = ["DEFAULT_CONFIG", "Settings", "load_settings"]
