"""
Classes to model the `admission.k8s.io/v1` AdmissionReview envelope
"""

from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field

ADMISSION_API_VERSION: Final = "admission.k8s.io/v1"
ADMISSION_REVIEW_KIND: Final = "AdmissionReview"
JSON_PATCH_TYPE: Final = "JSONPatch"


class GroupVersionKind(BaseModel):
    group: str = ""
    version: str = ""
    kind: str = ""


class AdmissionRequest(BaseModel):
    uid: str
    kind: GroupVersionKind = Field(default_factory=GroupVersionKind)
    operation: str = ""
    name: str | None = None
    namespace: str | None = None
    object: dict[str, Any] | None = None

    model_config = ConfigDict(extra="allow")


class AdmissionResponse(BaseModel):
    uid: str
    allowed: bool = True
    patch: str | None = None
    """Base64 encoded JSON Patch document"""
    patch_type: str | None = Field(default=None, alias="patchType")

    model_config = ConfigDict(populate_by_name=True)


class AdmissionReview(BaseModel):
    api_version: str = Field(default=ADMISSION_API_VERSION, alias="apiVersion")
    kind: str = ADMISSION_REVIEW_KIND
    request: AdmissionRequest | None = None
    response: AdmissionResponse | None = None

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "apiVersion": ADMISSION_API_VERSION,
                "kind": ADMISSION_REVIEW_KIND,
                "request": {
                    "uid": "705ab4f5-6393-11e8-b7cc-42010a800002",
                    "kind": {"group": "", "version": "v1", "kind": "Pod"},
                    "operation": "CREATE",
                    "object": {
                        "metadata": {"name": "app", "annotations": {"inject/command": '["/bin/sleep","1"]'}},
                        "spec": {"containers": [{"name": "app", "image": "busybox"}]},
                    },
                },
            }
        },
    )
