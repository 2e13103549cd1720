"""
Directives decoded from pod annotations.

Each directive is derived from exactly one annotation key, the `DirectiveKind` value.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class DirectiveKind(str, Enum):
    """Recognized annotation keys, in the order their rules are applied"""

    COMMAND = "inject/command"
    MOUNTS = "inject/mounts"
    CERTIFICATE = "inject/certificate"


class MountEntry(BaseModel):
    """One `<secret_name>/<sub_path>:<mount_path>` item of the mounts annotation"""

    secret_name: str
    sub_path: str
    mount_path: str

    model_config = ConfigDict(frozen=True)


class CommandDirective(BaseModel):
    kind: Literal[DirectiveKind.COMMAND] = DirectiveKind.COMMAND
    command: list[str]

    model_config = ConfigDict(frozen=True)


class MountDirective(BaseModel):
    kind: Literal[DirectiveKind.MOUNTS] = DirectiveKind.MOUNTS
    entries: list[MountEntry] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class CertificateDirective(BaseModel):
    kind: Literal[DirectiveKind.CERTIFICATE] = DirectiveKind.CERTIFICATE
    secret_name: str

    model_config = ConfigDict(frozen=True)


Directive = Annotated[Union[CommandDirective, MountDirective, CertificateDirective], Field(discriminator="kind")]

ParsedDirectives = dict[DirectiveKind, Directive]
"""Valid directives found on a pod, keyed by kind. Missing kinds mean no directive."""
