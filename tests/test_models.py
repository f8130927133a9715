"""Tests for template entity models."""

import pytest
import yaml
from pydantic import ValidationError

from scaffolder.catalog.models import (
    LOCATION_ANNOTATION,
    TemplateEntity,
    load_template_entity,
)


def test_template_entity_from_catalog_document():
    entity = TemplateEntity.model_validate({
        "apiVersion": "backstage.io/v1alpha1",
        "kind": "Template",
        "metadata": {
            "name": "react-ssr-template",
            "title": "React SSR Template",
            "annotations": {LOCATION_ANNOTATION: "url:https://gitlab.com/g/p"},
        },
        "spec": {"type": "website", "path": "./template", "schema": {}},
    })
    assert entity.api_version == "backstage.io/v1alpha1"
    assert entity.metadata.name == "react-ssr-template"
    assert entity.spec.path == "./template"


def test_spec_defaults():
    entity = TemplateEntity.model_validate({"metadata": {"name": "tpl"}})
    assert entity.spec.path is None
    assert entity.metadata.annotations == {}


@pytest.mark.parametrize("name", ["", "   ", "a/b", "a\\b"])
def test_invalid_names_rejected(name):
    with pytest.raises(ValidationError):
        TemplateEntity.model_validate({"metadata": {"name": name}})


def test_other_kinds_rejected():
    with pytest.raises(ValidationError, match="kind must be 'Template'"):
        TemplateEntity.model_validate({"kind": "Component", "metadata": {"name": "c"}})


def test_entity_is_frozen():
    entity = TemplateEntity.model_validate({"metadata": {"name": "tpl"}})
    with pytest.raises(ValidationError):
        entity.kind = "Component"


def test_load_template_entity(tmp_path):
    path = tmp_path / "template.yaml"
    path.write_text(yaml.dump({
        "apiVersion": "backstage.io/v1alpha1",
        "kind": "Template",
        "metadata": {"name": "tpl", "annotations": {LOCATION_ANNOTATION: "file:./t.yaml"}},
        "spec": {"type": "service"},
    }))
    entity = load_template_entity(path)
    assert entity.metadata.annotations[LOCATION_ANNOTATION] == "file:./t.yaml"
