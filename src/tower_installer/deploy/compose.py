"""Compose document generation for the published-image stack.

The published stack is four services: postgres, prisma (depends on
postgres), openresty, and the tower server (depends on prisma). The
document is serialized at call time and piped to the compose tool, so no
source checkout is needed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml

from ..config import InstallerConfig
from ..preflight.runtime import DATASTORE_IMAGE, MIGRATION_IMAGE, PROXY_IMAGE

DATASTORE_USER = "prisma"
DATASTORE_PASSWORD = "prisma"
SERVER_PORT = 8800
PROXY_PORT = 80


@dataclass
class ComposeService:
    """One service entry of a compose document."""

    name: str
    image: str
    restart: str = "always"
    depends_on: list[str] = field(default_factory=list)
    ports: list[str] = field(default_factory=list)
    environment: dict[str, str] = field(default_factory=dict)
    volumes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"image": self.image, "restart": self.restart}
        if self.depends_on:
            data["depends_on"] = list(self.depends_on)
        if self.ports:
            data["ports"] = list(self.ports)
        if self.environment:
            data["environment"] = dict(self.environment)
        if self.volumes:
            data["volumes"] = list(self.volumes)
        return data


@dataclass
class ComposeDocument:
    """A compose file held as data."""

    services: list[ComposeService] = field(default_factory=list)
    volumes: list[str] = field(default_factory=list)
    version: str = "3"

    def service(self, name: str) -> ComposeService:
        for service in self.services:
            if service.name == name:
                return service
        raise KeyError(name)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": self.version,
            "services": {s.name: s.to_dict() for s in self.services},
        }
        if self.volumes:
            data["volumes"] = {name: None for name in self.volumes}
        return data

    def to_yaml(self) -> str:
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)


class ComposeGenerator:
    """Generate the compose document for the published images."""

    def build(self, config: InstallerConfig) -> ComposeDocument:
        """Build the published stack.

        Args:
            config: Installer configuration (image tag, migration port).

        Returns:
            ComposeDocument describing the four-service stack.
        """
        port = config.migration_port
        prisma_config = {
            "port": port,
            "databases": {
                "default": {
                    "connector": "postgres",
                    "host": "postgres",
                    "port": 5432,
                    "user": DATASTORE_USER,
                    "password": DATASTORE_PASSWORD,
                    "rawAccess": True,
                }
            },
        }

        return ComposeDocument(
            services=[
                ComposeService(
                    name="prisma",
                    image=MIGRATION_IMAGE,
                    depends_on=["postgres"],
                    ports=[f"{port}:{port}"],
                    environment={
                        "PRISMA_CONFIG": yaml.dump(prisma_config, sort_keys=False),
                    },
                ),
                ComposeService(
                    name="postgres",
                    image=DATASTORE_IMAGE,
                    environment={
                        "POSTGRES_USER": DATASTORE_USER,
                        "POSTGRES_PASSWORD": DATASTORE_PASSWORD,
                    },
                    volumes=["postgres:/var/lib/postgresql/data"],
                ),
                ComposeService(
                    name="openresty",
                    image=PROXY_IMAGE,
                    ports=[f"{PROXY_PORT}:{PROXY_PORT}"],
                    environment={"NGINX_PORT": str(PROXY_PORT)},
                    volumes=[
                        "../server/config/nginx:/etc/nginx/conf.d",
                        f"../ui/build:/www/{config.project_name}",
                    ],
                ),
                ComposeService(
                    name="server",
                    image=f"{config.project_name}:{config.image_tag}",
                    depends_on=["prisma"],
                    ports=[f"{SERVER_PORT}:{SERVER_PORT}"],
                ),
            ],
            volumes=["postgres"],
        )

    def render(self, config: InstallerConfig) -> str:
        """Serialize the published stack to YAML."""
        return self.build(config).to_yaml()
