from token_service.utils.configuration.base import ConfigMapping
from token_service.utils.configuration.service import ServiceConfig

__all__ = ["ConfigMapping", "ServiceConfig"]
