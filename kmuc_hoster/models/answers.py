"""Structured project configuration collected by the init questions."""
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectType(str, Enum):
    EXPRESS = "express"
    NEXTJS = "nextjs"
    REACT_VITE = "react-vite"
    NODE_BASIC = "node-basic"
    STATIC = "static"


class Database(str, Enum):
    NONE = "none"
    POSTGRES = "postgres"
    MONGODB = "mongodb"
    REDIS = "redis"
    MYSQL = "mysql"


class DeploymentTarget(str, Enum):
    LOCAL = "local"
    VPS = "vps"
    CLOUD = "cloud"


class CloudProvider(str, Enum):
    DIGITALOCEAN = "digitalocean"
    HETZNER = "hetzner"
    AWS = "aws"
    GENERIC = "generic"


DEFAULT_PORTS: Dict[str, str] = {
    "express": "3000",
    "nextjs": "3000",
    "react-vite": "5173",
    "node-basic": "3000",
    "static": "80",
}


def default_port_for(project_type: Any) -> str:
    """Default container port for a project type; unknown types get 3000."""
    key = project_type.value if isinstance(project_type, Enum) else str(project_type)
    return DEFAULT_PORTS.get(key, "3000")


class ProjectAnswers(BaseModel):
    """Answers driving every generator.

    Core fields are always present. Optional fields belong to conditional
    questions and stay None when the question was skipped, so
    ``to_answers()`` leaves them out of the persisted map entirely.
    """

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)

    project_name: str = Field(alias="projectName")
    project_type: ProjectType = Field(alias="projectType")
    port: str
    database: Database = Database.NONE
    deployment_target: DeploymentTarget = Field(DeploymentTarget.LOCAL, alias="deploymentTarget")

    use_default_port: Optional[bool] = Field(None, alias="useDefaultPort")
    needs_domain: Optional[bool] = Field(None, alias="needsDomain")
    domain: Optional[str] = None

    # VPS
    server_ip: Optional[str] = Field(None, alias="serverIP")
    server_user: Optional[str] = Field(None, alias="serverUser")
    server_port: Optional[str] = Field(None, alias="serverPort")

    # Cloud
    cloud_provider: Optional[CloudProvider] = Field(None, alias="cloudProvider")

    # Derived by the deploy-scripts step
    needs_reverse_proxy: Optional[bool] = Field(None, alias="needsReverseProxy")
    needs_ssl: Optional[bool] = Field(None, alias="needsSSL")

    @field_validator("port", "server_port", mode="before")
    @classmethod
    def coerce_port(cls, v):
        """Ports are carried as strings, matching what the prompts return."""
        if v is None:
            return v
        return str(v)

    @classmethod
    def from_answers(cls, answers: Dict[str, Any]) -> "ProjectAnswers":
        """Build from a raw answers map, filling the derived port default."""
        data = dict(answers)
        if not data.get("port"):
            data["port"] = default_port_for(data.get("projectType"))
        return cls.model_validate(data)

    def to_answers(self) -> Dict[str, Any]:
        """Dump back to the raw answers map, dropping skipped questions."""
        data = self.model_dump(by_alias=True, exclude_none=True, mode="json")
        data["needsDatabase"] = self.needs_database
        return data

    @property
    def needs_database(self) -> bool:
        return self.database != Database.NONE.value

    @property
    def deploys_remotely(self) -> bool:
        """True for targets that get deploy scripts (vps, cloud)."""
        return self.deployment_target in (DeploymentTarget.VPS.value, DeploymentTarget.CLOUD.value)

    @property
    def wants_domain(self) -> bool:
        return bool(self.needs_domain) and self.deploys_remotely

    @property
    def reverse_proxied(self) -> bool:
        """Whether the app sits behind the generated nginx service.

        Both the reverse proxy and SSL follow the single domain question.
        """
        if self.needs_reverse_proxy is not None:
            return self.needs_reverse_proxy
        return self.wants_domain

    @property
    def ssl_enabled(self) -> bool:
        if self.needs_ssl is not None:
            return self.needs_ssl
        return self.wants_domain

    def with_deploy_flags(self) -> "ProjectAnswers":
        """Copy with needsReverseProxy and needsSSL derived from needsDomain."""
        requested = bool(self.needs_domain)
        return self.model_copy(update={"needs_reverse_proxy": requested, "needs_ssl": requested})
