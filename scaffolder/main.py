"""Command-line entry point for preparing a single template.

Usage:
    python -m scaffolder.main path/to/template.yaml [--working-directory DIR]

Prints the absolute path of the prepared template directory on success.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

import structlog

from scaffolder.catalog.models import load_template_entity
from scaffolder.common.config import ConfigReader
from scaffolder.common.logging import configure_logging
from scaffolder.common.settings import ScaffolderSettings, get_settings
from scaffolder.stages.prepare.preparers import Preparers
from scaffolder.stages.prepare.types import PreparerOptions

logger = structlog.get_logger()


def load_app_config(settings: ScaffolderSettings) -> ConfigReader:
    """Load the app config file, or an empty config when it doesn't exist."""
    config_path = Path(settings.config_path)
    if not config_path.exists():
        logger.warning(
            "App config not found, using empty config", config_path=str(config_path)
        )
        return ConfigReader()
    return ConfigReader.from_yaml(config_path)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="scaffolder-prepare",
        description="Fetch a template's files into a new temporary directory.",
    )
    parser.add_argument("template", help="Path to the template entity YAML file")
    parser.add_argument(
        "--working-directory",
        default=None,
        help="Directory to create the temporary template directory in",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, settings: ScaffolderSettings) -> int:
    """Prepare the template named by ``args`` and print its path."""
    try:
        config = load_app_config(settings)
        template = load_template_entity(args.template)
        preparer = Preparers.from_config(config, logger=logger).get(template)
        options = PreparerOptions(
            working_directory=args.working_directory or settings.working_directory
        )
        path = await preparer.prepare(template, options)
    except Exception as e:
        logger.error("Template preparation failed", error=str(e), exc_info=True)
        return 1

    logger.info("Template prepared", template=template.metadata.name, path=path)
    print(path)
    return 0


async def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entrypoint."""
    settings = get_settings()
    configure_logging(settings.log_level, json_output=settings.log_json)
    return await run(parse_args(argv), settings)


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
