from fastapi import APIRouter, Depends, Form, Query, Request
from sqlalchemy.orm import Session
from typing import Optional

from bot_manager.core.auth import AuthContext, get_auth_context, AUTH_ENTRY_POINT
from bot_manager.core.database import get_db
from bot_manager.models.trading_bot import Strategy
from bot_manager.schemas.bot_form import BotFormData, FormValidationError
from bot_manager.services import notifications
from bot_manager.services.bot_service import BotService, BotServiceError, BotNotFoundError
from bot_manager.views.templating import render, redirect

router = APIRouter()


def bot_form_data(
    name: str = Form(""),
    asset_symbol: str = Form(""),
    strategy: str = Form(""),
    initial_capital: str = Form(""),
    stop_loss_percentage: str = Form(""),
    take_profit_percentage: str = Form(""),
    max_trades_per_day: str = Form(""),
) -> BotFormData:
    return BotFormData(
        name=name,
        asset_symbol=asset_symbol,
        strategy=strategy,
        initial_capital=initial_capital,
        stop_loss_percentage=stop_loss_percentage,
        take_profit_percentage=take_profit_percentage,
        max_trades_per_day=max_trades_per_day,
    )


def _render_form(request: Request, auth: AuthContext, form: BotFormData,
                 bot_id: Optional[str] = None, status_code: int = 200):
    return render(
        request,
        "bot_form.html",
        {
            "user": auth.user,
            "form": form,
            "bot_id": bot_id,
            "is_editing": bot_id is not None,
            "strategies": Strategy.choices(),
        },
        status_code=status_code,
    )


def _error_status(error: Exception) -> int:
    if isinstance(error, BotNotFoundError):
        return 404
    return 500


@router.get("/bot/new")
async def new_bot_form(
    request: Request,
    asset: Optional[str] = Query(None, description="Pre-filled asset symbol"),
    auth: AuthContext = Depends(get_auth_context)
):
    """Empty create form, optionally oriented to an asset"""
    if not auth.is_authenticated:
        return redirect(AUTH_ENTRY_POINT)

    form = BotFormData(asset_symbol=(asset or "").strip().upper())
    return _render_form(request, auth, form)


@router.post("/bot/new")
async def create_bot(
    request: Request,
    form: BotFormData = Depends(bot_form_data),
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """Validate the form and insert a new bot"""
    if not auth.is_authenticated:
        return redirect(AUTH_ENTRY_POINT)

    try:
        payload = form.to_create()
    except FormValidationError as e:
        notifications.error(request, str(e))
        return _render_form(request, auth, form, status_code=400)

    try:
        BotService(db).create_bot(auth.user_id, payload)
    except BotServiceError as e:
        notifications.error(request, f"Erro ao salvar bot: {str(e)}")
        return _render_form(request, auth, form, status_code=_error_status(e))

    notifications.success(request, "Bot criado com sucesso!")
    return redirect("/dashboard")


@router.get("/bot/edit/{bot_id}")
async def edit_bot_form(
    request: Request,
    bot_id: str,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """Edit form pre-populated from the stored bot"""
    if not auth.is_authenticated:
        return redirect(AUTH_ENTRY_POINT)

    try:
        bot = BotService(db).get_bot(auth.user_id, bot_id)
    except BotServiceError as e:
        notifications.error(request, f"Erro ao carregar bot: {str(e)}")
        return redirect("/dashboard")

    return _render_form(request, auth, BotFormData.from_bot(bot), bot_id=bot_id)


@router.post("/bot/edit/{bot_id}")
async def update_bot(
    request: Request,
    bot_id: str,
    form: BotFormData = Depends(bot_form_data),
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db)
):
    """Validate the form and update the bot"""
    if not auth.is_authenticated:
        return redirect(AUTH_ENTRY_POINT)

    try:
        payload = form.to_update()
    except FormValidationError as e:
        notifications.error(request, str(e))
        return _render_form(request, auth, form, bot_id=bot_id, status_code=400)

    try:
        BotService(db).update_bot(auth.user_id, bot_id, payload)
    except BotServiceError as e:
        notifications.error(request, f"Erro ao salvar bot: {str(e)}")
        return _render_form(request, auth, form, bot_id=bot_id, status_code=_error_status(e))

    notifications.success(request, "Bot atualizado com sucesso!")
    return redirect("/dashboard")
