# pylint: disable=redefined-outer-name
import base64
import copy
import json
import logging
from typing import Any, Callable

import pytest
from kubernetes.client.api_client import ApiClient

from pod_mutator.common.config import Config
from pod_mutator.entities.admission_review import AdmissionRequest, GroupVersionKind
from pod_mutator.services.pod_mutation_service import PodMutationService

_POD: dict[str, Any] = {
    "apiVersion": "v1",
    "kind": "Pod",
    "metadata": {
        "name": "test-pod",
        "namespace": "default",
        "annotations": {},
    },
    "spec": {
        "containers": [
            {
                "name": "app",
                "image": "registry.local/app:1.0",
                "command": ["/app/run"],
                "volumeMounts": [
                    {
                        "name": "kube-api-access-g7qmm",
                        "readOnly": True,
                        "mountPath": "/var/run/secrets/kubernetes.io/serviceaccount",
                    }
                ],
            },
            {
                "name": "sidecar",
                "image": "busybox",
            },
        ],
        "initContainers": [
            {
                "name": "migrate",
                "image": "registry.local/migrate:1.0",
            }
        ],
        "volumes": [
            {
                "name": "kube-api-access-g7qmm",
                "projected": {
                    "sources": [
                        {
                            "serviceAccountToken": {
                                "expirationSeconds": 3607,
                                "path": "token",
                            }
                        },
                    ],
                },
            }
        ],
    },
}


@pytest.fixture()
def logger() -> logging.Logger:
    _logger = logging.getLogger("pod-mutator-test")
    _logger.setLevel(logging.DEBUG)
    _logger.propagate = True
    return _logger


@pytest.fixture()
def k_api_client() -> ApiClient:
    return ApiClient()


@pytest.fixture()
def pm_service(logger: logging.Logger, k_api_client: ApiClient) -> PodMutationService:
    return PodMutationService(Config(), logger, k_api_client)


@pytest.fixture()
def make_pod() -> Callable[..., dict[str, Any]]:
    def _make_pod(annotations: dict[str, str] | None = None, **spec_overrides: Any) -> dict[str, Any]:
        pod = copy.deepcopy(_POD)
        pod["metadata"]["annotations"] = dict(annotations or {})
        pod["spec"].update(spec_overrides)
        return pod

    return _make_pod


@pytest.fixture()
def make_request(make_pod) -> Callable[..., AdmissionRequest]:
    def _make_request(
        annotations: dict[str, str] | None = None,
        *,
        kind: str = "Pod",
        operation: str = "CREATE",
        pod: dict[str, Any] | None = None,
    ) -> AdmissionRequest:
        return AdmissionRequest(
            uid="705ab4f5-6393-11e8-b7cc-42010a800002",
            kind=GroupVersionKind(version="v1", kind=kind),
            operation=operation,
            namespace="default",
            object=pod if pod is not None else make_pod(annotations),
        )

    return _make_request


def decode_patch(patch: str) -> list[dict[str, Any]]:
    return json.loads(base64.b64decode(patch).decode("utf-8"))


@pytest.fixture()
def patch_decoder() -> Callable[[str], list[dict[str, Any]]]:
    return decode_patch
