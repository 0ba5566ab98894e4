"""Transient user notices (the snackbar messages shown by the storefront)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List

logger = logging.getLogger(__name__)


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    message: str
    level: NoticeLevel = NoticeLevel.INFO


NoticeListener = Callable[[Notice], None]


class NoticeBoard:
    def __init__(self) -> None:
        self._notices: List[Notice] = []
        self._listeners: List[NoticeListener] = []

    @property
    def notices(self) -> List[Notice]:
        return list(self._notices)

    def subscribe(self, listener: NoticeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def push(self, notice: Notice) -> Notice:
        self._notices.append(notice)
        logger.debug("Notice [%s]: %s", notice.level.value, notice.message)
        for listener in list(self._listeners):
            listener(notice)
        return notice

    def clear(self) -> None:
        self._notices.clear()
