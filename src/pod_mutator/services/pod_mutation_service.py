import base64
from logging import Logger
from typing import Any, Final

import jsonpatch
from injector import inject
from kubernetes import client as k

from pod_mutator.common.config import Config
from pod_mutator.entities import mappers
from pod_mutator.entities.admission_review import JSON_PATCH_TYPE, AdmissionRequest, AdmissionResponse
from pod_mutator.entities.mappers import KApiClient
from pod_mutator.entities.patch import MutationResult, PatchOp, PodField

from .annotation_parser import AnnotationDirectiveParser
from .base_service import BaseService
from .mutation_rules import CertificateInjectorRule, CommandOverrideRule, MountInjectorRule, MutationRule
from .patch_compiler import PatchCompiler

_ELIGIBLE_KIND: Final = "Pod"
_ELIGIBLE_OPERATION: Final = "CREATE"


class PodMutationService(BaseService):
    """
    Decide the admission of a pod and compute the JSON Patch implementing its `inject/*` annotations.

    Every request is always allowed: invalid directives are dropped, never denied.
    """

    _k_api_client: KApiClient  # Just needed to (de)serialize dict to K8s model
    _parser: AnnotationDirectiveParser
    _rules: list[MutationRule]
    _patch_compiler: PatchCompiler

    @inject
    def __init__(self, config: Config, logger: Logger, k_api_client: KApiClient):
        super().__init__(config, logger)
        self._k_api_client = k_api_client
        self._parser = AnnotationDirectiveParser(logger)
        # Applied in this order; only the certificate rule touches init containers.
        self._rules = [
            CommandOverrideRule(logger),
            MountInjectorRule(logger),
            CertificateInjectorRule(logger),
        ]
        self._patch_compiler = PatchCompiler(logger, k_api_client)

    def review(self, admission_request: AdmissionRequest) -> AdmissionResponse:
        """Build the admission response, with a patch only if something was mutated"""
        response = AdmissionResponse(uid=admission_request.uid, allowed=True)

        if not self.is_eligible(admission_request):
            self.logger.info(
                "Admission request with kind '%s' and operation '%s', skipping",
                admission_request.kind.kind,
                admission_request.operation,
            )
            return response

        try:
            pod = self.read_pod(admission_request.object or {})
        except (AttributeError, TypeError, ValueError) as exc:
            self.logger.error("Error deserializing pod object from admission request: %s", exc)
            return response

        patch_ops = self.mutate(pod)
        if patch_ops:
            self.logger.info("Applying %d patches in response", len(patch_ops))
            json_patch = jsonpatch.JsonPatch([patch_op.model_dump() for patch_op in patch_ops])
            response.patch = base64.b64encode(json_patch.to_string().encode("utf-8")).decode("utf-8")
            response.patch_type = JSON_PATCH_TYPE
        return response

    def is_eligible(self, admission_request: AdmissionRequest) -> bool:
        return (
            admission_request.kind.kind == _ELIGIBLE_KIND
            and admission_request.operation == _ELIGIBLE_OPERATION
        )

    def read_pod(self, pod_object: dict[str, Any]) -> k.V1Pod:
        """Deserialize the request object into the working copy mutated by the rules"""
        return mappers.deserialize_dict_to_k_model(self._k_api_client, pod_object, k.V1Pod)

    def mutate(self, pod: k.V1Pod) -> list[PatchOp]:
        """Apply the pod's directives to `pod` in place, return the patch of the changed fields"""
        result = self.apply_rules(pod)
        return self._patch_compiler.compile(result.pod_spec, result.changed_fields)

    def apply_rules(self, pod: k.V1Pod) -> MutationResult:
        if pod.spec is None:
            self.logger.warning("Pod object has no spec, skipping")
            return MutationResult(pod_spec=None)

        annotations = pod.metadata.annotations if pod.metadata else None
        directives = self._parser.parse(annotations)

        changed_fields: set[PodField] = set()
        for rule in self._rules:
            if (directive := directives.get(rule.kind)) is not None:
                changed_fields |= rule.apply(pod.spec, directive)
        return MutationResult(pod_spec=pod.spec, changed_fields=changed_fields)
