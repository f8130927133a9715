"""Git repository URL parsing.

Understands plain repository URLs, scp-style SSH locations and the
file/tree URLs GitLab and GitHub show in their web interfaces:

    https://gitlab.com/group/project.git
    git@gitlab.com:group/project.git
    https://gitlab.com/group/sub/project/-/blob/main/templates/app/template.yaml
    https://github.com/owner/repo/tree/main/templates
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from scaffolder.common.errors import InputError

# Path segments that separate the repository from a ref and file path
FILE_MARKERS = ("blob", "tree", "raw", "edit")

SCP_LOCATION_PATTERN = re.compile(
    r"^(?:(?P<user>[^@/:]+)@)?(?P<host>[^@/:]+):(?P<path>[^/].*)$"
)


@dataclass(frozen=True)
class GitUrl:
    """Structured view of a Git repository location.

    Attributes:
        protocol: Scheme of the original location ("https", "ssh", ...).
        resource: Host name without port.
        port: Port of the original location, if one was given.
        owner: Group/owner path, may contain slashes for subgroups.
        name: Repository name without a ``.git`` suffix.
        ref: Branch, tag or commit of a file/tree URL, if any.
        filepath: Repository-relative path of a file/tree URL, empty for
            a plain repository URL.
        git_suffix: Whether the original location ended in ``.git``.
    """

    protocol: str
    resource: str
    owner: str
    name: str
    port: Optional[int] = None
    ref: Optional[str] = None
    filepath: str = ""
    git_suffix: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, location: str) -> "GitUrl":
        """Parse a repository location.

        Raises:
            InputError: If the location has no host or no owner/name path.
        """
        location = location.strip()
        if "://" in location:
            split = urlsplit(location)
            protocol = split.scheme.lower()
            resource = split.hostname or ""
            try:
                port = split.port
            except ValueError as exc:
                raise InputError(f"Invalid port in Git URL: {location}") from exc
            path = split.path
        else:
            match = SCP_LOCATION_PATTERN.match(location)
            if not match:
                raise InputError(f"Unable to parse Git URL: {location}")
            protocol = "ssh"
            resource = match.group("host")
            port = None
            path = match.group("path")

        if not resource:
            raise InputError(f"Git URL has no host: {location}")

        segments = [segment for segment in path.split("/") if segment]
        repo_segments, ref, file_segments = _split_file_segments(segments)
        if len(repo_segments) < 2:
            raise InputError(f"Git URL must include owner and repository: {location}")

        name = repo_segments[-1]
        git_suffix = name.endswith(".git")
        if git_suffix:
            name = name[: -len(".git")]

        return cls(
            protocol=protocol,
            resource=resource.lower(),
            port=port,
            owner="/".join(repo_segments[:-1]),
            name=name,
            ref=ref,
            filepath="/".join(file_segments),
            git_suffix=git_suffix,
        )

    def to_string(self, protocol: Optional[str] = None) -> str:
        """Serialize the repository location under the given scheme.

        Credentials, refs and file paths of the original location are
        never included.
        """
        protocol = protocol or self.protocol
        suffix = ".git" if self.git_suffix else ""

        if protocol in ("https", "http"):
            # A port only carries over between web schemes
            port = ""
            if self.port and self.protocol in ("https", "http"):
                port = f":{self.port}"
            return f"{protocol}://{self.resource}{port}/{self.full_name}{suffix}"
        if protocol == "ssh":
            return f"git@{self.resource}:{self.full_name}.git"
        raise ValueError(f"Unsupported Git URL protocol: {protocol}")

    def __str__(self) -> str:
        return self.to_string()


def _split_file_segments(
    segments: list[str],
) -> tuple[list[str], Optional[str], list[str]]:
    """Split path segments into repository, ref and file parts.

    GitLab separates the repository path with a ``-`` segment
    (``group/project/-/blob/main/dir``). Without it, the first file marker
    after an owner/name pair is used (``owner/repo/tree/main/dir``).
    """
    if "-" in segments:
        index = segments.index("-")
        rest = segments[index + 1:]
        if rest and rest[0] in FILE_MARKERS:
            ref = rest[1] if len(rest) > 1 else None
            return segments[:index], ref, rest[2:]
        return segments[:index], None, []

    for index in range(2, len(segments)):
        if segments[index] in FILE_MARKERS:
            rest = segments[index + 1:]
            ref = rest[0] if rest else None
            return segments[:index], ref, rest[1:]

    return segments, None, []
