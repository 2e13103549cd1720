from logging import Logger
from typing import Callable, Final, Mapping

import pydantic
from pydantic import TypeAdapter

from pod_mutator.entities.directives import (
    CertificateDirective,
    CommandDirective,
    Directive,
    DirectiveKind,
    MountDirective,
    MountEntry,
    ParsedDirectives,
)

from .exceptions import DirectiveDecodeError, MountEntryError

_STRING_LIST: Final = TypeAdapter(list[str])


class AnnotationDirectiveParser:
    """Decode the recognized annotations of a pod into directives.

    Decoding errors never escape `parse`: the offending directive (or mount entry)
    is dropped with a warning and the remaining ones are still returned.
    """

    _logger: Logger
    _decoders: dict[DirectiveKind, Callable[[str], Directive]]

    def __init__(self, logger: Logger):
        self._logger = logger
        self._decoders = {
            DirectiveKind.COMMAND: self.decode_command,
            DirectiveKind.MOUNTS: self.decode_mounts,
            DirectiveKind.CERTIFICATE: self.decode_certificate,
        }

    def parse(self, annotations: Mapping[str, str] | None) -> ParsedDirectives:
        directives: ParsedDirectives = {}
        for kind, decode in self._decoders.items():
            if not annotations or kind.value not in annotations:
                continue
            try:
                directives[kind] = decode(annotations[kind.value])
            except DirectiveDecodeError as exc:
                self._logger.warning("%s, skipping", exc)
        return directives

    def decode_command(self, value: str) -> CommandDirective:
        """`inject/command` holds a JSON array of strings"""
        return CommandDirective(command=self._decode_string_list(DirectiveKind.COMMAND, value))

    def decode_mounts(self, value: str) -> MountDirective:
        """`inject/mounts` holds a JSON array of `<secret_name>/<sub_path>:<mount_path>` strings.

        Malformed items are skipped one by one, the well-formed ones are kept in order.
        """
        entries: list[MountEntry] = []
        for item in self._decode_string_list(DirectiveKind.MOUNTS, value):
            try:
                entries.append(self.decode_mount_entry(item))
            except MountEntryError as exc:
                self._logger.warning("%s, skipping", exc)
        return MountDirective(entries=entries)

    def decode_certificate(self, value: str) -> CertificateDirective:
        """`inject/certificate` holds a bare secret name, not JSON encoded"""
        secret_name = value
        if not secret_name:
            raise DirectiveDecodeError(key=DirectiveKind.CERTIFICATE.value, reason="empty secret name")
        return CertificateDirective(secret_name=secret_name)

    @staticmethod
    def decode_mount_entry(item: str) -> MountEntry:
        """An empty sub_path mounts the whole secret"""
        parts = item.split(":")
        if len(parts) != 2:
            raise MountEntryError(key=DirectiveKind.MOUNTS.value, entry=item)
        source, mount_path = parts
        source_parts = source.split("/")
        if len(source_parts) != 2:
            raise MountEntryError(key=DirectiveKind.MOUNTS.value, entry=item)
        secret_name, sub_path = source_parts
        if not (secret_name and mount_path):
            raise MountEntryError(key=DirectiveKind.MOUNTS.value, entry=item)
        return MountEntry(secret_name=secret_name, sub_path=sub_path, mount_path=mount_path)

    @staticmethod
    def _decode_string_list(kind: DirectiveKind, value: str) -> list[str]:
        try:
            return _STRING_LIST.validate_json(value)
        except pydantic.ValidationError as exc:
            reason = "; ".join(error["msg"] for error in exc.errors())
            raise DirectiveDecodeError(key=kind.value, reason=reason) from exc
