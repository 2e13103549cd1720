from abc import ABC
from logging import Logger

from pod_mutator.common.config import Config


class BaseService(ABC):
    """Services hold only their collaborators, never per-request state."""

    config: Config
    logger: Logger

    def __init__(self, config: Config, logger: Logger):
        self.config = config
        self.logger = logger
