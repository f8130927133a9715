"""Git command-line client.

Runs ``git`` as an asyncio subprocess so clones never block the event
loop. Credentials, when given, travel as an HTTP Authorization header set
through git's environment config, so they never appear in argv or in the
cloned repository's ``.git/config``. They are scrubbed from every log
event and error message.
"""

import asyncio
import base64
import os
from typing import Any, Dict, Optional
from urllib.parse import quote

import structlog

REDACTED = "***"


class GitCloneError(Exception):
    """Raised when a Git clone operation fails."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Failed to clone {url}: {message}")


class Git:
    """Thin asynchronous wrapper around the ``git`` executable.

    Attributes:
        username: Username sent with HTTP(S) requests, if any.
        git_binary: Name or path of the git executable.
    """

    def __init__(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        logger: Optional[Any] = None,
        git_binary: str = "git",
    ):
        self.username = username
        self._password = password
        self.logger = logger or structlog.get_logger()
        self.git_binary = git_binary

    @classmethod
    def from_auth(
        cls,
        username: Optional[str] = None,
        password: Optional[str] = None,
        logger: Optional[Any] = None,
    ) -> "Git":
        """Create a client, optionally authenticating with basic credentials.

        Without credentials git falls back to whatever credential helpers
        the environment provides.
        """
        return cls(username=username, password=password, logger=logger)

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self._password)

    async def clone(self, url: str, directory: str) -> None:
        """Clone the full repository at ``url`` into ``directory``.

        Args:
            url: Repository URL to clone from.
            directory: Existing, empty destination directory.

        Raises:
            GitCloneError: If git cannot be started or exits non-zero.
        """
        safe_url = self._redact(url)

        self.logger.info("Cloning repository", url=safe_url, directory=directory)

        try:
            process = await asyncio.create_subprocess_exec(
                self.git_binary,
                "clone",
                url,
                directory,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=self._environment(),
            )
            _, stderr = await process.communicate()
        except OSError as exc:
            raise GitCloneError(
                safe_url, f"Failed to execute git: {self._redact(str(exc))}"
            ) from exc

        if process.returncode != 0:
            error_output = self._redact(stderr.decode(errors="replace").strip())
            raise GitCloneError(safe_url, error_output)

        self.logger.info("Cloned repository", url=safe_url, directory=directory)

    def _environment(self) -> Dict[str, str]:
        """Environment for the git subprocess.

        Credentials are appended to any ``GIT_CONFIG_*`` entries already set,
        as a one-off ``http.extraHeader`` that git never writes to disk.
        Requires git 2.31 or newer.
        """
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
        if not self.has_credentials:
            return env

        index = int(env.get("GIT_CONFIG_COUNT") or 0)
        env["GIT_CONFIG_COUNT"] = str(index + 1)
        env[f"GIT_CONFIG_KEY_{index}"] = "http.extraHeader"
        env[f"GIT_CONFIG_VALUE_{index}"] = (
            f"Authorization: Basic {self._basic_credentials()}"
        )
        return env

    def _basic_credentials(self) -> str:
        raw = f"{self.username}:{self._password}".encode()
        return base64.b64encode(raw).decode("ascii")

    def _redact(self, text: str) -> str:
        if not self._password:
            return text
        secrets = {self._password, quote(self._password, safe="")}
        if self.username:
            secrets.add(self._basic_credentials())
        for secret in secrets:
            text = text.replace(secret, REDACTED)
        return text
