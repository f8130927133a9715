"""Location annotation parsing."""

from typing import NamedTuple

from scaffolder.catalog.models import LOCATION_ANNOTATION, TemplateEntity
from scaffolder.common.errors import InputError


class LocationRef(NamedTuple):
    """Protocol and location pair from a managed-by location annotation."""

    protocol: str
    location: str


def parse_location_annotation(template: TemplateEntity) -> LocationRef:
    """Split the template's location annotation into protocol and location.

    The annotation is split on its first colon only, so the location keeps
    any scheme it carries (``url:https://host/...``).

    Raises:
        InputError: If the annotation is missing or either part is empty.
    """
    annotation = template.metadata.annotations.get(LOCATION_ANNOTATION)
    if not annotation:
        raise InputError(
            f"No location annotation provided in entity: {template.metadata.name}"
        )

    protocol, _, location = annotation.partition(":")
    if not protocol or not location:
        raise InputError(
            "Failure to parse either protocol or location for entity: "
            f"{template.metadata.name}"
        )
    return LocationRef(protocol=protocol, location=location)
