"""Local filesystem template preparer."""

import asyncio
import os
import shutil
import tempfile
from typing import Any, Optional
from urllib.parse import urlsplit

import structlog

from scaffolder.catalog.models import TemplateEntity
from scaffolder.common.errors import InputError
from scaffolder.stages.prepare.helpers import parse_location_annotation
from scaffolder.stages.prepare.types import PreparerBase, PreparerOptions


class FilePreparer(PreparerBase):
    """Copies templates registered from ``file`` locations.

    The directory containing the template file, adjusted by ``spec.path``,
    is copied into a new temporary directory.
    """

    def __init__(self, logger: Optional[Any] = None):
        self.logger = logger or structlog.get_logger()

    async def prepare(
        self,
        template: TemplateEntity,
        options: Optional[PreparerOptions] = None,
    ) -> str:
        protocol, location = parse_location_annotation(template)
        if protocol != "file":
            raise InputError(
                f"Wrong location protocol: {protocol}, should be 'file'"
            )

        working_directory = (
            options.working_directory if options and options.working_directory
            else tempfile.gettempdir()
        )
        # file:///abs/path and file:/abs/path both name /abs/path
        if location.startswith("//"):
            location = urlsplit(f"file:{location}").path

        source_directory = os.path.abspath(
            os.path.join(os.path.dirname(location), template.spec.path or ".")
        )

        temp_dir = await asyncio.to_thread(
            tempfile.mkdtemp, prefix=template.metadata.name, dir=working_directory
        )
        await asyncio.to_thread(
            shutil.copytree, source_directory, temp_dir, dirs_exist_ok=True
        )

        self.logger.info(
            "Copied template files",
            template=template.metadata.name,
            source=source_directory,
            directory=temp_dir,
        )
        return os.path.abspath(temp_dir)
