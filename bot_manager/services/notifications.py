from enum import Enum
from typing import Dict, List

from fastapi import Request

SESSION_KEY = "_notifications"


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


def notify(request: Request, message: str, level: NotificationLevel = NotificationLevel.INFO) -> None:
    """Queue a transient message shown once on the next rendered page"""
    queued = request.session.get(SESSION_KEY, [])
    queued.append({"level": NotificationLevel(level).value, "message": message})
    request.session[SESSION_KEY] = queued


def success(request: Request, message: str) -> None:
    notify(request, message, NotificationLevel.SUCCESS)


def error(request: Request, message: str) -> None:
    notify(request, message, NotificationLevel.ERROR)


def info(request: Request, message: str) -> None:
    notify(request, message, NotificationLevel.INFO)


def pop_notifications(request: Request) -> List[Dict[str, str]]:
    return request.session.pop(SESSION_KEY, [])
