"""
Admin Orders API Endpoints
Order listing, details, status changes and deletion
"""
from fastapi import APIRouter, Depends, HTTPException, Query

from backoffice.api.dependencies import get_order_service, to_http_error
from backoffice.core.config import settings
from backoffice.core.exceptions import BackofficeError
from backoffice.domain.order import OrderRead, PaymentRead, PaymentStatusUpdate, StatusUpdate
from backoffice.services import OrderService

router = APIRouter()


@router.get("/")
def get_orders(
    limit: int = Query(settings.ORDER_LIST_LIMIT, ge=1, le=1000),
    service: OrderService = Depends(get_order_service)
):
    """
    Latest orders, newest first
    """
    try:
        orders = service.list_recent_orders(limit)
        orders_data = [OrderRead.model_validate(o).to_dict() for o in orders]

        return {
            "status": "success",
            "limit": limit,
            "count": len(orders_data),
            "data": orders_data
        }

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching orders: {str(e)}")


@router.get("/{order_id}")
def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    """
    Order with items, payment and the statuses it may be moved to
    """
    details = service.get_order_details(order_id)
    if details is None:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")

    return {
        "status": "success",
        "data": details.to_dict()
    }


@router.post("/{order_id}/status")
def update_order_status(
    order_id: int,
    payload: StatusUpdate,
    service: OrderService = Depends(get_order_service)
):
    try:
        order = service.update_status(order_id, payload.status)
    except BackofficeError as e:
        raise to_http_error(e)

    if order is None:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")

    return {
        "status": "success",
        "message": f"Order status updated to {payload.status}",
        "data": OrderRead.model_validate(order).to_dict()
    }


@router.post("/{order_id}/payment-status")
def update_payment_status(
    order_id: int,
    payload: PaymentStatusUpdate,
    service: OrderService = Depends(get_order_service)
):
    try:
        payment = service.update_payment_status(order_id, payload.payment_status)
    except BackofficeError as e:
        raise to_http_error(e)

    if payment is None:
        raise HTTPException(status_code=404, detail="Payment record not found for this order")

    return {
        "status": "success",
        "message": f"Payment status updated to {payload.payment_status}",
        "data": PaymentRead.model_validate(payment).to_dict()
    }


@router.delete("/{order_id}")
def delete_order(order_id: int, service: OrderService = Depends(get_order_service)):
    try:
        deleted = service.delete_order(order_id)
    except BackofficeError as e:
        raise to_http_error(e)

    if not deleted:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")

    return {
        "status": "success",
        "message": "Order deleted"
    }
