from fastapi import APIRouter, Depends, Form, Request
from sqlalchemy.orm import Session

from bot_manager.core.auth import AuthContext, get_auth_context, AUTH_ENTRY_POINT
from bot_manager.core.database import get_db
from bot_manager.services import notifications
from bot_manager.services.auth_service import AuthService, AuthError
from bot_manager.views.templating import render, redirect

router = APIRouter()


@router.get(AUTH_ENTRY_POINT)
async def auth_page(request: Request, auth: AuthContext = Depends(get_auth_context)):
    """Sign-in / sign-up page"""
    if auth.is_authenticated:
        return redirect("/dashboard")
    return render(request, "auth.html", {"email": ""})


@router.post(f"{AUTH_ENTRY_POINT}/sign-in")
async def sign_in(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """Sign in with email and password"""
    try:
        user = AuthService(db).sign_in(email, password)
    except AuthError as e:
        notifications.error(request, f"Erro ao entrar: {str(e)}")
        return render(request, "auth.html", {"email": email}, status_code=400)

    auth.sign_in(user)
    notifications.success(request, "Login realizado com sucesso!")
    return redirect("/dashboard")


@router.post(f"{AUTH_ENTRY_POINT}/sign-up")
async def sign_up(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """Create an account and sign in"""
    try:
        user = AuthService(db).sign_up(email, password)
    except AuthError as e:
        notifications.error(request, f"Erro ao cadastrar: {str(e)}")
        return render(request, "auth.html", {"email": email}, status_code=400)

    auth.sign_in(user)
    notifications.success(request, "Conta criada com sucesso!")
    return redirect("/dashboard")


@router.post(f"{AUTH_ENTRY_POINT}/sign-out")
async def sign_out(request: Request, auth: AuthContext = Depends(get_auth_context)):
    """Sign out and go back to the auth page"""
    auth.sign_out()
    notifications.info(request, "Você saiu da sua conta")
    return redirect(AUTH_ENTRY_POINT)
