from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from bot_manager.core.database import get_db
from bot_manager.models.user import User
from bot_manager.services.auth_service import AuthService

SESSION_USER_KEY = "user_id"
AUTH_ENTRY_POINT = "/auth"


@dataclass
class AuthContext:
    """Current user of a request, plus the sign-in / sign-out actions.

    Populated from the signed session cookie when the request starts;
    `sign_in` stores the user id in the session and `sign_out` clears it.
    """
    request: Request
    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user else None

    def sign_in(self, user: User) -> None:
        self.request.session[SESSION_USER_KEY] = user.id
        self.user = user

    def sign_out(self) -> None:
        self.request.session.pop(SESSION_USER_KEY, None)
        self.user = None


def get_auth_context(request: Request, db: Session = Depends(get_db)) -> AuthContext:
    user = AuthService(db).get_user(request.session.get(SESSION_USER_KEY))
    if user is None:
        # stale id in the cookie (e.g. user removed)
        request.session.pop(SESSION_USER_KEY, None)
    return AuthContext(request=request, user=user)


def require_user(auth: AuthContext = Depends(get_auth_context)) -> User:
    if not auth.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required"
        )
    return auth.user
