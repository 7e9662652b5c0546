"""Serializable snapshot of an Order, returned across the domain boundary.

The same shape is handed to the payment gateway at checkout and returned
by the order endpoints.
"""


def order_item_dto(item) -> dict:
    return {
        "id": str(item.id),
        "product_id": str(item.product_id),
        "product_name": item.product_name,
        "unit_price": item.unit_price,
        "quantity": item.quantity,
    }


def order_dto(order) -> dict:
    return {
        "id": str(order.id),
        "customer_id": str(order.customer_id) if order.customer_id else None,
        "status": order.status,
        "items": [order_item_dto(item) for item in sorted(order.items, key=lambda item: item.position)],
        "total": order.total,
    }
