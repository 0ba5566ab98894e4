from .account import AccountController
from storefront.notices import Notice, NoticeBoard, NoticeLevel
from .storefront import StorefrontController, StorefrontState

__all__ = ["AccountController", "Notice", "NoticeBoard", "NoticeLevel", "StorefrontController", "StorefrontState"]
