"""Bazel target label parsing.

Labels are compared as plain strings throughout the engine; this module is
only needed when a caller wants the structured form (repository, package,
target name), e.g. to group affected targets by package.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

# Package and target names: anything but whitespace and the label
# delimiters themselves.
_REPO_RE = re.compile(r"^[A-Za-z0-9_.~+\-]*$")
_PACKAGE_RE = re.compile(r"^[^\s:@]*$")
_NAME_RE = re.compile(r"^[^\s:@]+$")


class LabelParseError(ValueError):
    """Raised when a string is not a well-formed target label."""


class Label(BaseModel):
    """A parsed target label: ``@repo//package:name``."""

    model_config = ConfigDict(frozen=True)

    repo: str = ""
    package: str = ""
    name: str
    relative: bool = False
    canonical_repo: bool = False

    def __str__(self) -> str:
        if self.relative:
            return f":{self.name}"
        prefix = ""
        if self.repo or self.canonical_repo:
            prefix = ("@@" if self.canonical_repo else "@") + self.repo
        return f"{prefix}//{self.package}:{self.name}"


def parse_label(text: str) -> Label:
    """Parse *text* into a :class:`Label`.

    Accepted forms::

        //pkg/sub:name
        //pkg/sub            (name defaults to "sub")
        @repo//pkg:name
        @@canonical_repo//pkg:name
        :name                (relative to an unspecified package)

    Raises
    ------
    LabelParseError
        If *text* is empty or does not follow any of the forms above.
    """
    if not text or text != text.strip():
        raise LabelParseError(f"Invalid label: {text!r}")

    if text.startswith(":"):
        name = text[1:]
        if not _NAME_RE.match(name):
            raise LabelParseError(f"Invalid target name in label: {text!r}")
        return Label(name=name, relative=True)

    repo = ""
    canonical = False
    rest = text
    if rest.startswith("@@"):
        canonical = True
        rest = rest[2:]
    elif rest.startswith("@"):
        rest = rest[1:]
    elif not rest.startswith("//"):
        raise LabelParseError(f"Label must start with '//', '@' or ':': {text!r}")

    if text.startswith("@"):
        repo, sep, rest = rest.partition("//")
        if not sep or not _REPO_RE.match(repo):
            raise LabelParseError(f"Invalid repository in label: {text!r}")
        rest = "//" + rest

    body = rest[2:]
    package, sep, name = body.partition(":")
    if not _PACKAGE_RE.match(package) or package.startswith("/") or package.endswith("/"):
        raise LabelParseError(f"Invalid package in label: {text!r}")
    if not sep:
        name = package.rsplit("/", 1)[-1]
    if not name or not _NAME_RE.match(name):
        raise LabelParseError(f"Invalid target name in label: {text!r}")

    return Label(repo=repo, package=package, name=name, canonical_repo=canonical)
