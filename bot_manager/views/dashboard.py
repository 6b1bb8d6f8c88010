from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from bot_manager.core.auth import AuthContext, get_auth_context, AUTH_ENTRY_POINT
from bot_manager.core.database import get_db
from bot_manager.services import notifications
from bot_manager.services.bot_service import BotService, BotServiceError
from bot_manager.views.templating import render, redirect

router = APIRouter()


@router.get("/")
async def index():
    return redirect("/dashboard")


@router.get("/dashboard")
async def dashboard(
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """List the current user's bots, newest first"""
    if not auth.is_authenticated:
        return redirect(AUTH_ENTRY_POINT)

    try:
        bots = BotService(db).list_bots(auth.user_id)
    except BotServiceError as e:
        notifications.error(request, f"Erro ao carregar bots: {str(e)}")
        bots = []

    return render(request, "dashboard.html", {"user": auth.user, "bots": bots})


@router.post("/dashboard/bots/{bot_id}/toggle")
async def toggle_bot(
    request: Request,
    bot_id: str,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """Flip is_active of a bot"""
    if not auth.is_authenticated:
        return redirect(AUTH_ENTRY_POINT)

    try:
        bot = BotService(db).toggle_bot(auth.user_id, bot_id)
    except BotServiceError as e:
        notifications.error(request, f"Erro ao atualizar bot: {str(e)}")
        return redirect("/dashboard")

    state = "ativado" if bot.is_active else "desativado"
    notifications.success(request, f"Bot {state} com sucesso!")
    return redirect("/dashboard")


@router.post("/dashboard/bots/{bot_id}/delete")
async def delete_bot(
    request: Request,
    bot_id: str,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """Delete a bot"""
    if not auth.is_authenticated:
        return redirect(AUTH_ENTRY_POINT)

    try:
        BotService(db).delete_bot(auth.user_id, bot_id)
    except BotServiceError as e:
        notifications.error(request, f"Erro ao excluir bot: {str(e)}")
        return redirect("/dashboard")

    notifications.success(request, "Bot excluído com sucesso!")
    return redirect("/dashboard")
