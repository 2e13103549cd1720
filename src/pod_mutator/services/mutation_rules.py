"""
Mutation rules, each applying one directive to the working pod spec.

A rule mutates the `k.V1PodSpec` it is given and returns the `PodField`s it touched;
rules never compare the pod spec before and after.
"""

from abc import ABC, abstractmethod
from logging import Logger
from typing import Final, Generic, TypeVar

from kubernetes import client as k
from pydantic import BaseModel

from pod_mutator.entities.directives import (
    CertificateDirective,
    CommandDirective,
    DirectiveKind,
    MountDirective,
)
from pod_mutator.entities.patch import PodField

CERTS_VOLUME_NAME: Final = "certs"
CERTS_MOUNT_PATH: Final = "/etc/ssl/certs"
CERT_INIT_CONTAINER_NAME: Final = "inject-certificate"
CERT_STAGING_PATH: Final = "/certificates"
CERT_SECRET_KEY: Final = "tls.crt"
CA_CERTIFICATES_DIR: Final = "/usr/local/share/ca-certificates"
CERT_INIT_COMMAND: Final = [
    "/bin/sh",
    "-c",
    f"update-ca-certificates && cp -r {CERTS_MOUNT_PATH}/. {CERT_STAGING_PATH}",
]

D = TypeVar("D", bound=BaseModel)


class MutationRule(ABC, Generic[D]):

    kind: DirectiveKind
    _logger: Logger

    def __init__(self, logger: Logger):
        self._logger = logger

    @abstractmethod
    def apply(self, pod_spec: k.V1PodSpec, directive: D) -> set[PodField]:
        """Apply `directive` to `pod_spec` in place, return the changed fields"""


class CommandOverrideRule(MutationRule[CommandDirective]):
    """Replace the command of every container"""

    kind = DirectiveKind.COMMAND

    def apply(self, pod_spec: k.V1PodSpec, directive: CommandDirective) -> set[PodField]:
        self._logger.info("Replacing pod command with: %s", directive.command)
        for container in pod_spec.containers or []:
            container.command = list(directive.command)
        return {PodField.CONTAINERS}


class MountInjectorRule(MutationRule[MountDirective]):
    """Mount secret keys, read-only, in every container"""

    kind = DirectiveKind.MOUNTS

    def apply(self, pod_spec: k.V1PodSpec, directive: MountDirective) -> set[PodField]:
        if not directive.entries:
            self._logger.info("No valid mount entries to add")
            return set()

        for entry in directive.entries:
            self._logger.info(
                "Adding mount of secret '%s' key '%s' at '%s'", entry.secret_name, entry.sub_path, entry.mount_path
            )
            pod_spec.volumes = [*(pod_spec.volumes or []), _secret_volume(entry.secret_name)]
            for container in pod_spec.containers or []:
                container.volume_mounts = [
                    *(container.volume_mounts or []),
                    k.V1VolumeMount(
                        name=entry.secret_name,
                        read_only=True,
                        sub_path=entry.sub_path or None,
                        mount_path=entry.mount_path,
                    ),
                ]
        return {PodField.VOLUMES, PodField.CONTAINERS}


class CertificateInjectorRule(MutationRule[CertificateDirective]):
    """
    Add a TLS certificate, stored in a secret, to the OS trust store of every container.

    An init container running the first container's image installs the certificate with
    `update-ca-certificates` and copies the resulting bundle to a shared emptyDir volume,
    which is then mounted over `/etc/ssl/certs` in every container.
    """

    kind = DirectiveKind.CERTIFICATE

    def apply(self, pod_spec: k.V1PodSpec, directive: CertificateDirective) -> set[PodField]:
        if not pod_spec.containers:
            self._logger.warning(
                "Cannot inject certificate '%s' in a pod without containers, skipping", directive.secret_name
            )
            return set()

        self._logger.info("Injecting certificate from secret '%s'", directive.secret_name)

        # region volumes
        pod_spec.volumes = [
            *(pod_spec.volumes or []),
            _secret_volume(directive.secret_name),
            k.V1Volume(name=CERTS_VOLUME_NAME, empty_dir=k.V1EmptyDirVolumeSource()),
        ]
        # endregion / volumes

        # region containers
        for container in pod_spec.containers:
            container.volume_mounts = [
                *(container.volume_mounts or []),
                k.V1VolumeMount(name=CERTS_VOLUME_NAME, read_only=False, mount_path=CERTS_MOUNT_PATH),
            ]
        # endregion / containers

        # region init containers
        init_container = k.V1Container(
            name=CERT_INIT_CONTAINER_NAME,
            image=pod_spec.containers[0].image,
            command=list(CERT_INIT_COMMAND),
            volume_mounts=[
                k.V1VolumeMount(name=CERTS_VOLUME_NAME, read_only=False, mount_path=CERT_STAGING_PATH),
                k.V1VolumeMount(
                    name=directive.secret_name,
                    read_only=True,
                    sub_path=CERT_SECRET_KEY,
                    mount_path=f"{CA_CERTIFICATES_DIR}/{directive.secret_name}.crt",
                ),
            ],
        )
        pod_spec.init_containers = [init_container, *(pod_spec.init_containers or [])]
        # endregion / init containers

        return {PodField.VOLUMES, PodField.CONTAINERS, PodField.INIT_CONTAINERS}


def _secret_volume(secret_name: str) -> k.V1Volume:
    return k.V1Volume(name=secret_name, secret=k.V1SecretVolumeSource(secret_name=secret_name))
