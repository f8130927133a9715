"""GitLab template preparer.

Clones the repository a template lives in and resolves the directory
holding the template files. Tokens come from the ``integrations.gitlab``
config entry matching the repository host, or from the deprecated
``scaffolder.gitlab.api.token`` setting, which takes precedence.
"""

import asyncio
import os
import tempfile
from typing import Any, Optional

import structlog

from scaffolder.catalog.models import TemplateEntity
from scaffolder.common.config import ConfigReader
from scaffolder.common.errors import InputError
from scaffolder.integration.gitlab import (
    GitLabIntegrationConfig,
    read_gitlab_integration_configs,
)
from scaffolder.stages.prepare.git import Git
from scaffolder.stages.prepare.git_url import GitUrl
from scaffolder.stages.prepare.helpers import parse_location_annotation
from scaffolder.stages.prepare.types import PreparerBase, PreparerOptions

GITLAB_PROTOCOLS = ("gitlab", "gitlab/api", "url")

# GitLab accepts any access token as the password for this username
GITLAB_TOKEN_USERNAME = "oauth2"


class GitlabPreparer(PreparerBase):
    """Prepares templates stored in GitLab repositories.

    Attributes:
        integrations: Configured GitLab hosts, read once at construction.
        logger: structlog logger used for this preparer and its git clients.
    """

    def __init__(self, config: ConfigReader, logger: Optional[Any] = None):
        self.logger = logger or structlog.get_logger()
        self.integrations: tuple[GitLabIntegrationConfig, ...] = tuple(
            read_gitlab_integration_configs(
                config.get_optional_config_array("integrations.gitlab") or []
            )
        )

        if not self.integrations:
            self.logger.warning(
                "Integrations for GitLab in Scaffolder are not set. This will cause "
                "errors in a future release. Please migrate to using integrations "
                "config and specifying tokens under hostnames"
            )

        self._scaffolder_token = config.get_optional_string(
            "scaffolder.gitlab.api.token"
        )

        if self._scaffolder_token:
            self.logger.warning(
                "DEPRECATION: Using the token format under "
                "'scaffolder.gitlab.api.token' will not be respected in future "
                "releases. Please consider using integrations config instead"
            )

    async def prepare(
        self,
        template: TemplateEntity,
        options: Optional[PreparerOptions] = None,
    ) -> str:
        """Clone the template's repository and return its template directory.

        Args:
            template: Template entity with a gitlab, gitlab/api or url
                location annotation.
            options: Optional working directory override.

        Returns:
            Absolute path of the template directory inside a new temporary
            directory. The caller owns and must remove that directory.

        Raises:
            InputError: If the location protocol is not supported, the
                location is not a Git URL, or ``spec.path`` leaves the
                repository.
            OSError: If the temporary directory cannot be created.
            GitCloneError: If the clone fails.
        """
        protocol, location = parse_location_annotation(template)
        working_directory = (
            options.working_directory if options and options.working_directory
            else tempfile.gettempdir()
        )

        if protocol not in GITLAB_PROTOCOLS:
            raise InputError(
                f"Wrong location protocol: {protocol}, should be 'url'"
            )
        template_id = template.metadata.name

        parsed_location = GitUrl.parse(location)
        checkout_url = parsed_location.to_string("https")
        template_directory = self._template_directory(parsed_location, template)

        temp_dir = await asyncio.to_thread(
            tempfile.mkdtemp, prefix=template_id, dir=working_directory
        )

        token = self._get_token(parsed_location.resource)
        if token:
            git = Git.from_auth(
                username=GITLAB_TOKEN_USERNAME,
                password=token,
                logger=self.logger,
            )
        else:
            git = Git.from_auth(logger=self.logger)

        await git.clone(url=checkout_url, directory=temp_dir)

        return os.path.abspath(os.path.join(temp_dir, template_directory))

    def _template_directory(
        self, parsed_location: GitUrl, template: TemplateEntity
    ) -> str:
        """Repository-relative directory holding the template files."""
        # A leading separator in spec.path is a plain segment, not a root.
        spec_path = (template.spec.path or ".").lstrip("/\\") or "."
        template_directory = os.path.normpath(
            os.path.join(os.path.dirname(parsed_location.filepath), spec_path)
        )
        if template_directory.split(os.sep)[0] == "..":
            raise InputError(
                f"Template path escapes the repository: {template.spec.path}"
            )
        return template_directory

    def _get_token(self, host: str) -> Optional[str]:
        if self._scaffolder_token:
            return self._scaffolder_token
        for integration in self.integrations:
            if integration.host.lower() == host.lower():
                return integration.token
        return None
