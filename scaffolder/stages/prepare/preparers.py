"""Protocol-keyed preparer registry."""

from typing import Any, Optional

import structlog

from scaffolder.catalog.models import TemplateEntity
from scaffolder.common.config import ConfigReader
from scaffolder.common.errors import InputError
from scaffolder.stages.prepare.file import FilePreparer
from scaffolder.stages.prepare.gitlab import GITLAB_PROTOCOLS, GitlabPreparer
from scaffolder.stages.prepare.helpers import parse_location_annotation
from scaffolder.stages.prepare.types import PreparerBase


class Preparers:
    """Selects the preparer for a template by its location protocol.

    Example usage:
        preparers = Preparers.from_config(config)
        preparer = preparers.get(template)
        path = await preparer.prepare(template)
    """

    def __init__(self):
        self._preparers: dict[str, PreparerBase] = {}

    def register(self, protocol: str, preparer: PreparerBase) -> None:
        """Register ``preparer`` for ``protocol``, replacing any earlier one."""
        self._preparers[protocol] = preparer

    def get(self, template: TemplateEntity) -> PreparerBase:
        """Return the preparer registered for the template's protocol.

        Raises:
            InputError: If the template has no usable location annotation
                or no preparer handles its protocol.
        """
        protocol, _ = parse_location_annotation(template)
        preparer = self._preparers.get(protocol)
        if preparer is None:
            raise InputError(f"No preparer registered for type: {protocol}")
        return preparer

    @property
    def protocols(self) -> list[str]:
        return sorted(self._preparers)

    @classmethod
    def from_config(
        cls, config: ConfigReader, logger: Optional[Any] = None
    ) -> "Preparers":
        """Build a registry with the file and GitLab preparers."""
        preparers = cls()
        preparers.register("file", FilePreparer(logger=logger))

        gitlab_preparer = GitlabPreparer(config, logger=logger)
        for protocol in GITLAB_PROTOCOLS:
            preparers.register(protocol, gitlab_preparer)

        (logger or structlog.get_logger()).debug(
            "Registered preparers", protocols=preparers.protocols
        )
        return preparers
