"""Preparer interface shared by every location protocol."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from scaffolder.catalog.models import TemplateEntity


@dataclass(frozen=True)
class PreparerOptions:
    """Per-call preparation options.

    Attributes:
        working_directory: Directory under which the temporary template
            directory is created. The system temp directory when None.
    """

    working_directory: Optional[str] = None


class PreparerBase(ABC):
    """Fetches a template's files into a new local directory.

    Concrete implementations include:
    - GitlabPreparer: clones gitlab, gitlab/api and url locations
    - FilePreparer: copies file locations from the local filesystem

    The directory returned by ``prepare`` belongs to the caller, who is
    responsible for removing it.
    """

    @abstractmethod
    async def prepare(
        self,
        template: TemplateEntity,
        options: Optional[PreparerOptions] = None,
    ) -> str:
        """Prepare the template and return the absolute path of its root.

        Args:
            template: Template entity carrying a location annotation.
            options: Optional per-call options.

        Returns:
            Absolute path to the prepared template directory.

        Raises:
            InputError: If the template location cannot be handled.
        """
        pass
