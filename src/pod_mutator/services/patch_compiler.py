from logging import Logger
from typing import Iterable

from kubernetes import client as k

from pod_mutator.entities import mappers
from pod_mutator.entities.mappers import KApiClient
from pod_mutator.entities.patch import PatchOp, PodField


class PatchCompiler:
    """Compile changed pod fields into JSON Patch `replace` operations.

    Each changed field is replaced as a whole array, rather than patched with targeted
    `add` operations, so the patch stays valid whatever the field held before.
    """

    _logger: Logger
    _k_api_client: KApiClient

    def __init__(self, logger: Logger, k_api_client: KApiClient):
        self._logger = logger
        self._k_api_client = k_api_client

    def compile(self, pod_spec: k.V1PodSpec | None, changed_fields: Iterable[PodField]) -> list[PatchOp]:
        changed = set(changed_fields)
        if pod_spec is None or not changed:
            return []

        patch_ops: list[PatchOp] = []
        for field in PodField:
            if field not in changed:
                continue
            try:
                value = mappers.serialize_k_model_to_dict(self._k_api_client, getattr(pod_spec, field.attribute) or [])
            except (TypeError, ValueError) as exc:
                self._logger.error("Could not serialize spec.%s: %s", field.attribute, exc)
                continue
            patch_ops.append(PatchOp(path=field.path, value=value))
        return patch_ops
