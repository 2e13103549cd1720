from os.path import dirname, join
from typing import Iterable

from fastapi_router_controller import ControllerLoader


def load(api_versions: Iterable[str]):
    """
    Load controllers for each api version package.

    :param `api_versions`: list of versions, e.g. ["v1","v1.1","v2"]
    """
    for api_version in api_versions:
        ControllerLoader.load(join(dirname(__file__), api_version), f"{__package__}.{api_version}")
