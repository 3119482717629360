"""Base service class for application services."""

from abc import ABC

import structlog

logger = structlog.get_logger()


class ServiceBase(ABC):
    """Base class for all application services.
    
    Provides a logger bound to the service name.
    """
    
    def __init__(self):
        self.logger = logger.bind(service=self.__class__.__name__)
