"""Pytest configuration for all tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from scaffolder.catalog.models import LOCATION_ANNOTATION, TemplateEntity


def build_template(
    name="my-template",
    location="url:https://gitlab.example.com/group/project.git",
    path=None,
):
    annotations = {LOCATION_ANNOTATION: location} if location is not None else {}
    spec = {"type": "website"}
    if path is not None:
        spec["path"] = path
    return TemplateEntity.model_validate({
        "apiVersion": "backstage.io/v1alpha1",
        "kind": "Template",
        "metadata": {"name": name, "annotations": annotations},
        "spec": spec,
    })


@pytest.fixture
def make_template():
    return build_template


@pytest.fixture
def mock_logger():
    return MagicMock()


@pytest.fixture
def git_process():
    """A finished git subprocess that exited successfully."""
    process = AsyncMock()
    process.returncode = 0
    process.communicate = AsyncMock(return_value=(b"", b""))
    return process
