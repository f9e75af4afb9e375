"""
Services Module

Application services shared by the API routes.
"""

from .bank_service import BankDirectory, get_bank_directory
from .email_service import EmailService
from .token_service import TokenService

__all__ = [
    "BankDirectory",
    "EmailService",
    "TokenService",
    "get_bank_directory",
]
