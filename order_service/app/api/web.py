"""
Server-rendered order pages.

Every read and write goes through the orders REST API, the same way an
external client would use it.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..clients.orders_api import OrdersApiClient
from ..core.exceptions import OrderNotFoundError, OrderValidationError
from ..schemas.order import OrderResponse
from ..services.order_validation import validate_items_update, validate_order_input
from ..utils.logging import get_order_logger
from .deps import OrdersApiClientDep

logger = get_order_logger("web")

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(include_in_schema=False)


def _redirect_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


async def _render_index(
    request: Request,
    api: OrdersApiClient,
    edit_order: Optional[OrderResponse] = None,
    form_values: Optional[Dict[str, Any]] = None,
    errors: Optional[Dict[str, str]] = None,
    message: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    orders_list = await api.list_orders()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "orders_list": orders_list,
            "edit_order": edit_order,
            "form_values": form_values or {},
            "errors": errors or {},
            "message": message,
        },
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, api: OrdersApiClient = OrdersApiClientDep):
    """Order list with an empty order form"""
    return await _render_index(request, api)


@router.post("/insertOrders")
async def insert_orders(request: Request, api: OrdersApiClient = OrdersApiClientDep):
    form = dict(await request.form())
    try:
        order = validate_order_input(form)
    except OrderValidationError as exc:
        logger.info(
            "Order form rejected",
            extra={"fields": sorted(exc.messages())},
        )
        return await _render_index(
            request,
            api,
            form_values=form,
            errors=exc.messages(),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    await api.create_order(order)
    return _redirect_home()


@router.get("/insertOrders")
async def insert_orders_get():
    return _redirect_home()


@router.get("/deleteOrders/{order_id}")
async def delete_orders(order_id: int, api: OrdersApiClient = OrdersApiClientDep):
    await api.delete_order(order_id)
    return _redirect_home()


@router.get("/editOrders/{order_id}", response_class=HTMLResponse)
async def edit_orders(
    request: Request, order_id: int, api: OrdersApiClient = OrdersApiClientDep
):
    """Order list with the chosen order loaded into the edit form"""
    try:
        order = await api.get_order(order_id)
    except OrderNotFoundError as exc:
        return await _render_index(
            request,
            api,
            message=exc.message,
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return await _render_index(request, api, edit_order=order)


@router.post("/updateOrders/{order_id}")
async def update_orders(
    request: Request, order_id: int, api: OrdersApiClient = OrdersApiClientDep
):
    form = dict(await request.form())
    try:
        patch = validate_items_update(form)
    except OrderValidationError as exc:
        try:
            order = await api.get_order(order_id)
        except OrderNotFoundError as not_found:
            return await _render_index(
                request,
                api,
                message=not_found.message,
                status_code=status.HTTP_404_NOT_FOUND,
            )
        return await _render_index(
            request,
            api,
            edit_order=order,
            errors=exc.messages(),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    await api.update_order_items(order_id, patch)
    return _redirect_home()
