from http import HTTPStatus
from typing import Any

from fastapi import APIRouter, Depends
from fastapi_router_controller import Controller

from pod_mutator.common.error_types import MissingPropertiesError
from pod_mutator.controllers.common.dto import ApiErrorResponseDto
from pod_mutator.dependencies import get_pod_mutation_service
from pod_mutator.entities.admission_review import AdmissionReview
from pod_mutator.services.pod_mutation_service import PodMutationService

router = APIRouter()
controller = Controller(router, openapi_tag={"name": "Admission Controller Api"})

COMMON_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    # 400
    str(HTTPStatus.BAD_REQUEST.value): {
        "model": ApiErrorResponseDto,
        "description": HTTPStatus.BAD_REQUEST.phrase,
    },
    # 422 - raised by Pydantic on validation error
    str(HTTPStatus.UNPROCESSABLE_ENTITY.value): {
        "model": ApiErrorResponseDto,
        "description": HTTPStatus.UNPROCESSABLE_ENTITY.phrase,
    },
    # 500
    str(HTTPStatus.INTERNAL_SERVER_ERROR.value): {
        "model": ApiErrorResponseDto,
        "description": HTTPStatus.INTERNAL_SERVER_ERROR.phrase,
    },
}


@controller.use()
@controller.resource()
class AdmissionController:
    @controller.route.post(
        "/mutate",
        summary="Review a Pod admission request",
        response_model=AdmissionReview,
        response_model_by_alias=True,
        response_model_exclude_none=True,
        responses=COMMON_ERROR_RESPONSES,
    )
    async def mutate(
        self,
        review: AdmissionReview,
        pm_service: PodMutationService = Depends(get_pod_mutation_service),
    ) -> AdmissionReview:
        if review.request is None:
            raise MissingPropertiesError(object_name="AdmissionReview", missing=["request"])
        return AdmissionReview(
            api_version=review.api_version,
            kind=review.kind,
            response=pm_service.review(review.request),
        )
