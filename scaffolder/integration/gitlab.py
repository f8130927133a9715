"""GitLab integration configuration.

Each entry under ``integrations.gitlab`` in the app config describes one
GitLab installation:

    integrations:
      gitlab:
        - host: gitlab.example.com
          token: ${GITLAB_TOKEN}
          apiBaseUrl: https://gitlab.example.com/api/v4
"""

import re
from typing import Any, List, Optional, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from scaffolder.common.config import ConfigReader
from scaffolder.common.errors import ConfigValidationError

HOST_PATTERN = re.compile(
    r"^[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?"
    r"(\.[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?)*(:[0-9]+)?$"
)


class GitLabIntegrationConfig(BaseModel):
    """Configuration for a single GitLab host.

    Attributes:
        host: Host name (optionally with port) the integration applies to.
        token: Access token used for cloning and API calls, if any.
        api_base_url: Base URL of the REST API.
        base_url: Base URL of the web interface.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    host: str = Field(..., description="Host name of the GitLab installation")

    token: Optional[str] = Field(
        default=None,
        description="Access token for the host",
    )

    api_base_url: Optional[str] = Field(
        default=None,
        alias="apiBaseUrl",
        description="REST API base URL, derived from host when unset",
    )

    base_url: Optional[str] = Field(
        default=None,
        alias="baseUrl",
        description="Web base URL, derived from host when unset",
    )

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Validate that host is a bare host name with an optional port."""
        if not HOST_PATTERN.match(v):
            raise ValueError(f"'{v}' is not a valid host")
        return v

    @model_validator(mode="before")
    @classmethod
    def fill_default_urls(cls, data: Any) -> Any:
        """Derive the API and web base URLs from the host when left out."""
        if not isinstance(data, dict) or not isinstance(data.get("host"), str):
            return data
        data = dict(data)
        host = data["host"]
        if data.get("apiBaseUrl") is None and data.get("api_base_url") is None:
            data["apiBaseUrl"] = f"https://{host}/api/v4"
        if data.get("baseUrl") is None and data.get("base_url") is None:
            data["baseUrl"] = f"https://{host}"
        return data

    def __repr__(self) -> str:
        token = "***" if self.token else None
        return f"GitLabIntegrationConfig(host={self.host!r}, token={token!r})"


def read_gitlab_integration_config(config: ConfigReader) -> GitLabIntegrationConfig:
    """Parse one integration entry.

    Raises:
        ConfigValidationError: If the entry is missing a host or holds
            values of the wrong type.
    """
    try:
        return GitLabIntegrationConfig.model_validate(config.as_dict())
    except ValidationError as e:
        # Input values are left out so tokens never reach the message
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'entry'}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigValidationError(
            f"Invalid gitlab integration config at '{config.prefix}': {problems}"
        ) from e


def read_gitlab_integration_configs(
    configs: Sequence[ConfigReader],
) -> List[GitLabIntegrationConfig]:
    """Parse all integration entries, preserving their configured order."""
    return [read_gitlab_integration_config(config) for config in configs]
