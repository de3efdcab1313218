"""
Newsdesk Core
=============

Configuration, logging, errors and blob storage shared by every module.
"""

from .config import Config
from .errors import (
    NewsdeskError, ValidationError, Unauthenticated, InvalidCredentials,
    NotFound, UploadFailure,
)
from .logging_service import LoggingService

__all__ = [
    'Config', 'LoggingService',
    'NewsdeskError', 'ValidationError', 'Unauthenticated', 'InvalidCredentials',
    'NotFound', 'UploadFailure',
]
