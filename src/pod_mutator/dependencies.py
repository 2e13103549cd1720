"""
Configure Dependency Injection
"""

import logging

from injector import Injector, Module, provider, singleton
from kubernetes.client.api_client import ApiClient

from pod_mutator.common.config import Config
from pod_mutator.common.logger_manager import LoggerManager
from pod_mutator.services.pod_mutation_service import PodMutationService


# region Configure Injector Module
class InjectorModule(Module):
    """Configure Injector bindings, i.e. how dependencies are provided.

    Note: bindings provide instances when invoking `Injector.get(MyClass)`.
    Bindings are required to provide instances within a given scope (e.g. singleton).
    If no binding is defined for `MyClass` then a fresh new instance is created
    (resolving constructor injected dependencies) and returned.

    See https://github.com/python-injector/injector/blob/master/docs/terminology.rst.
    """

    def configure(self, binder):
        binder.bind(Config, to=Config(), scope=singleton)

    @singleton
    @provider
    def provide_logger(self, config: Config) -> logging.Logger:
        return LoggerManager(config).logger

    @singleton
    @provider
    def provide_k_api_client(self) -> ApiClient:
        # Never talks to a cluster: only used to (de)serialize Kubernetes models,
        # hence no kubeconfig is loaded.
        return ApiClient()

    @singleton
    @provider
    def provide_pod_mutation_service(
        self, config: Config, logger: logging.Logger, k_api_client: ApiClient
    ) -> PodMutationService:
        return PodMutationService(config, logger, k_api_client)


_injector = Injector([InjectorModule()])
# endregion / Configure Injector Module


# region Public Injector instances
def get_config() -> Config:
    return _injector.get(Config)


def get_logger() -> logging.Logger:
    return _injector.get(logging.Logger)


def get_pod_mutation_service() -> PodMutationService:
    return _injector.get(PodMutationService)


# endregion / Public Injector instances
