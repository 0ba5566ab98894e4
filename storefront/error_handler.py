"""Turns storefront exceptions into transient user notices."""
from typing import Any, Dict
import logging

from storefront.errors import LocalValidationError, StorefrontError
from storefront.notices import Notice, NoticeLevel
from storefront.validation import FormValidationError

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "Something went wrong. Please try again later."


class ErrorHandler:
    def to_notice(self, exc: Exception, context: Dict[str, Any] = None) -> Notice:
        if isinstance(exc, (LocalValidationError, FormValidationError)):
            return Notice(message=exc.message, level=NoticeLevel.WARNING)
        if isinstance(exc, StorefrontError):
            logger.warning("Storefront operation failed: %s context=%s", exc.message, context or {})
            return Notice(message=exc.message, level=NoticeLevel.ERROR)
        logger.error("Unhandled exception in storefront: %s", exc, exc_info=True)
        return Notice(message=GENERIC_MESSAGE, level=NoticeLevel.ERROR)
