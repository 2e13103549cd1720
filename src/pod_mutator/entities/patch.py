from enum import Enum
from typing import Any, Literal

from kubernetes import client as k
from pydantic import BaseModel, ConfigDict, Field


class PodField(Enum):
    """Enum of (V1PodSpec attribute, JSON Pointer) pairs for the patchable pod fields.

    Members are declared in patch compile order.
    """

    CONTAINERS = ("containers", "/spec/containers")
    VOLUMES = ("volumes", "/spec/volumes")
    INIT_CONTAINERS = ("init_containers", "/spec/initContainers")

    def __str__(self) -> str:
        return self.path

    @property
    def attribute(self) -> str:
        """Get this field's attribute name on `k.V1PodSpec`"""
        return self.value[0]

    @property
    def path(self) -> str:
        """Get this field's JSON Pointer in the Pod object"""
        return self.value[1]


class PatchOp(BaseModel):
    """A JSON Patch (RFC 6902) `replace` operation over a whole pod field"""

    op: Literal["replace"] = "replace"
    path: str
    value: list[Any]


class MutationResult(BaseModel):
    pod_spec: k.V1PodSpec | None  # type: ignore
    changed_fields: set[PodField] = Field(default_factory=set)

    model_config = ConfigDict(arbitrary_types_allowed=True)
