# pylint: disable=redefined-outer-name
import logging

import pytest

from pod_mutator.entities.directives import (
    CertificateDirective,
    CommandDirective,
    DirectiveKind,
    MountDirective,
    MountEntry,
)
from pod_mutator.services.annotation_parser import AnnotationDirectiveParser
from pod_mutator.services.exceptions import DirectiveDecodeError, MountEntryError


@pytest.fixture()
def parser(logger: logging.Logger) -> AnnotationDirectiveParser:
    return AnnotationDirectiveParser(logger)


def test_parse_without_annotations(parser: AnnotationDirectiveParser):
    assert parser.parse(None) == {}
    assert parser.parse({}) == {}
    assert parser.parse({"app.kubernetes.io/name": "test"}) == {}


def test_parse_all_directives(parser: AnnotationDirectiveParser):
    directives = parser.parse(
        {
            "inject/command": '["/bin/sleep","1"]',
            "inject/mounts": '["db-creds/password:/etc/db/password"]',
            "inject/certificate": "internal-ca",
        }
    )

    assert list(directives) == [DirectiveKind.COMMAND, DirectiveKind.MOUNTS, DirectiveKind.CERTIFICATE]
    assert directives[DirectiveKind.COMMAND] == CommandDirective(command=["/bin/sleep", "1"])
    assert directives[DirectiveKind.MOUNTS] == MountDirective(
        entries=[MountEntry(secret_name="db-creds", sub_path="password", mount_path="/etc/db/password")]
    )
    assert directives[DirectiveKind.CERTIFICATE] == CertificateDirective(secret_name="internal-ca")


@pytest.mark.parametrize(
    "value",
    [
        "/bin/sleep 1",  # not JSON
        '"/bin/sleep"',  # not an array
        '["/bin/sleep", 1]',  # not an array of strings
        "null",
    ],
)
def test_invalid_command_is_dropped(parser: AnnotationDirectiveParser, value: str, caplog):
    with caplog.at_level(logging.WARNING):
        directives = parser.parse({"inject/command": value, "inject/certificate": "internal-ca"})

    assert DirectiveKind.COMMAND not in directives
    assert directives[DirectiveKind.CERTIFICATE] == CertificateDirective(secret_name="internal-ca")
    assert "Unable to decode annotation 'inject/command'" in caplog.text


def test_invalid_mounts_json_is_dropped(parser: AnnotationDirectiveParser, caplog):
    with caplog.at_level(logging.WARNING):
        directives = parser.parse({"inject/mounts": "db-creds/password:/etc/db/password"})

    assert directives == {}
    assert "Unable to decode annotation 'inject/mounts'" in caplog.text


def test_malformed_mount_entry_is_skipped(parser: AnnotationDirectiveParser, caplog):
    with caplog.at_level(logging.WARNING):
        directives = parser.parse(
            {"inject/mounts": '["badentry", "db-creds/password:/etc/db/password", "a/b/c:/d", "a/b:/c:/d"]'}
        )

    assert directives[DirectiveKind.MOUNTS] == MountDirective(
        entries=[MountEntry(secret_name="db-creds", sub_path="password", mount_path="/etc/db/password")]
    )
    assert "Malformed mount entry 'badentry'" in caplog.text
    assert "Malformed mount entry 'a/b/c:/d'" in caplog.text
    assert "Malformed mount entry 'a/b:/c:/d'" in caplog.text


def test_mount_entries_keep_order(parser: AnnotationDirectiveParser):
    directive = parser.decode_mounts('["first/a:/mnt/a", "second/b:/mnt/b", "third/c:/mnt/c"]')

    assert [entry.secret_name for entry in directive.entries] == ["first", "second", "third"]


@pytest.mark.parametrize("item", ["badentry", "no-colon/key", "no-slash:/mnt", "/key:/mnt", "secret/key:"])
def test_decode_mount_entry_errors(item: str):
    with pytest.raises(MountEntryError):
        AnnotationDirectiveParser.decode_mount_entry(item)


def test_mount_entry_with_empty_sub_path(parser: AnnotationDirectiveParser):
    directives = parser.parse({"inject/mounts": '["secret/:/mnt/secret"]'})

    assert directives[DirectiveKind.MOUNTS] == MountDirective(
        entries=[MountEntry(secret_name="secret", sub_path="", mount_path="/mnt/secret")]
    )


def test_certificate_is_not_json_decoded(parser: AnnotationDirectiveParser):
    directives = parser.parse({"inject/certificate": "internal-ca"})

    assert directives[DirectiveKind.CERTIFICATE] == CertificateDirective(secret_name="internal-ca")


def test_empty_certificate_is_dropped(parser: AnnotationDirectiveParser):
    with pytest.raises(DirectiveDecodeError):
        parser.decode_certificate("")
    assert parser.parse({"inject/certificate": ""}) == {}


def test_certificate_name_is_used_unchanged(parser: AnnotationDirectiveParser):
    directives = parser.parse({"inject/certificate": " internal-ca "})

    assert directives[DirectiveKind.CERTIFICATE] == CertificateDirective(secret_name=" internal-ca ")


def test_directive_kinds_are_annotation_keys():
    assert [kind.value for kind in DirectiveKind] == ["inject/command", "inject/mounts", "inject/certificate"]
