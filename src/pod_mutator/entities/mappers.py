from typing import Any, TypeVar

import kubernetes.client.api_client as k_api_client

KApiClient = k_api_client.ApiClient

T = TypeVar("T")


def serialize_k_model_to_dict(api_client: KApiClient, model: Any) -> Any:
    """Converts a Kubernetes model (i.e., OpenAPI model), or a list of them, to its JSON representation.
    Attribute names are mapped from snake_case to camelCase, `None` attributes are dropped."""
    return api_client.sanitize_for_serialization(model)


def deserialize_dict_to_k_model(api_client: KApiClient, data: dict, k_ref_type: type[T]) -> T:
    """Converts a dict to a Kubernetes model.
    Expects property names in camelCase, they will be converted to snake_case.

    The model is built from scratch, so mutating it never affects `data`.

    Raises:
        `ValueError` if a required property is missing (client side validation),
        `TypeError` if `data` does not match the model shape.
    """
    # The protected function provided by ApiClient creates Kubernetes objects recursively,
    # while V1Pod(**data) would leave nested properties as plain dicts.
    return api_client._ApiClient__deserialize_model(data, k_ref_type)  # type: ignore # pylint: disable=protected-access
