"""Template entity models.

A template entity is the catalog description of a software template.
Only the fields the preparation stage reads are modelled; unknown fields
are ignored so full catalog documents validate as-is.

    apiVersion: backstage.io/v1alpha1
    kind: Template
    metadata:
      name: react-ssr-template
      annotations:
        backstage.io/managed-by-location: url:https://gitlab.com/group/templates/-/blob/main/react/template.yaml
    spec:
      type: website
      path: "."
"""

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

LOCATION_ANNOTATION = "backstage.io/managed-by-location"


class TemplateMetadata(BaseModel):
    """Entity metadata.

    Attributes:
        name: Entity name. Also used as the temporary directory prefix.
        annotations: Free-form string annotations.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(..., description="Name of the template entity")

    annotations: dict[str, str] = Field(
        default_factory=dict,
        description="Entity annotations, including the managed-by location",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that the name is usable as a directory prefix."""
        if not v or not v.strip():
            raise ValueError("metadata.name cannot be empty")
        if "/" in v or "\\" in v:
            raise ValueError("metadata.name cannot contain path separators")
        return v


class TemplateSpec(BaseModel):
    """Template-specific fields.

    Attributes:
        type: Kind of software the template produces.
        path: Template root relative to the directory holding the
            template file. Defaults to that directory.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str = Field(default="", description="Type of the produced component")

    path: Optional[str] = Field(
        default=None,
        description="Relative path to the template root",
    )


class TemplateEntity(BaseModel):
    """Template entity as read from the catalog."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    api_version: str = Field(default="backstage.io/v1alpha1", alias="apiVersion")

    kind: str = Field(default="Template")

    metadata: TemplateMetadata

    spec: TemplateSpec = Field(default_factory=TemplateSpec)

    @field_validator("kind")
    @classmethod
    def validate_kind(cls, v: str) -> str:
        if v != "Template":
            raise ValueError(f"kind must be 'Template', got '{v}'")
        return v


def load_template_entity(path: Union[str, Path]) -> TemplateEntity:
    """Read a template entity from a YAML document.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If YAML parsing fails.
        pydantic.ValidationError: If the document is not a valid template.
    """
    with open(path, "r") as f:
        document = yaml.safe_load(f)
    return TemplateEntity.model_validate(document)
