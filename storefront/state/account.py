"""Registration, login and logout transitions for the header/account pages."""

from __future__ import annotations

import logging
from typing import Optional

from storefront.error_handler import ErrorHandler
from storefront.errors import StorefrontError
from storefront.integrations.clients.real_http.auth import AuthClient
from storefront.notices import Notice, NoticeBoard, NoticeLevel
from storefront.session.store import SessionContext, SessionStore, logout, store_login
from storefront.validation import FormValidationError, validate_registration

logger = logging.getLogger(__name__)


class AccountController:
    def __init__(
        self,
        auth_client: AuthClient,
        session_store: SessionStore,
        notices: Optional[NoticeBoard] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        self.auth_client = auth_client
        self.session_store = session_store
        self.notices = notices or NoticeBoard()
        self.error_handler = error_handler or ErrorHandler()

    async def register(self, username: str, password: str, confirm_password: str) -> bool:
        try:
            data = validate_registration(username, password, confirm_password)
            await self.auth_client.register(data["username"], data["password"])
        except (FormValidationError, StorefrontError) as e:
            self.notices.push(self.error_handler.to_notice(e, context={"stage": "register"}))
            return False
        self.notices.push(Notice("Registered successfully", NoticeLevel.SUCCESS))
        return True

    async def login(self, username: str, password: str) -> Optional[SessionContext]:
        if not username or not password:
            self.notices.push(Notice("Username and password are required", NoticeLevel.WARNING))
            return None
        try:
            creds = await self.auth_client.login(username, password)
        except StorefrontError as e:
            self.notices.push(self.error_handler.to_notice(e, context={"stage": "login"}))
            return None
        session = store_login(self.session_store, creds["token"], creds["username"], creds["balance"])
        self.notices.push(Notice("Logged in successfully", NoticeLevel.SUCCESS))
        return session

    def logout(self) -> None:
        logout(self.session_store)
        logger.info("Session cleared")
