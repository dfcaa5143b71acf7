# service/order_service.py
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload, selectinload

from database_init import db
from models.order import Order
from models.payment import Payment
from models.product import Product
from models.product_order import ProductOrder
from util.constant import ORDER_STATUS, ORDER_TYPE, PAYMENT_METHOD
from util.errors import (
    AuthorizationError,
    FieldValidationError,
    InvalidTransitionError,
    ResourceNotFoundError,
)
from util.misc import round_to

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("audit")

# Các trạng thái seller được chọn trên UI
SELLER_STATUS_OPTIONS = (
    ORDER_STATUS.PENDING,
    ORDER_STATUS.IN_TRANSIT,
    ORDER_STATUS.DELIVERED,
)

# current -> các trạng thái được phép chuyển tới.
# Chưa ép thứ tự PENDING -> IN_TRANSIT -> DELIVERED: seller được phép chỉnh tay
# qua lại miễn là đơn chưa kết thúc.
ORDER_TRANSITIONS = {
    ORDER_STATUS.PENDING: frozenset(SELLER_STATUS_OPTIONS + (ORDER_STATUS.CANCELLED,)),
    ORDER_STATUS.CONFIRMED: frozenset(
        SELLER_STATUS_OPTIONS + (ORDER_STATUS.CANCELLED,)
    ),
    ORDER_STATUS.IN_TRANSIT: frozenset(SELLER_STATUS_OPTIONS),
    ORDER_STATUS.DELIVERED: frozenset(),
    ORDER_STATUS.CANCELLED: frozenset(),
}


def parse_status(value):
    if isinstance(value, ORDER_STATUS):
        return value
    try:
        return ORDER_STATUS[str(value).strip().upper()]
    except KeyError:
        raise InvalidTransitionError(f"Invalid status: {value}")


def is_status_locked(order: Order) -> bool:
    """Đơn đã DELIVERED/CANCELLED thì ô chọn trạng thái bị khóa."""
    return not ORDER_TRANSITIONS[order.status]


def can_transition(current, requested) -> bool:
    return requested in ORDER_TRANSITIONS[current]


def get_order(order_id) -> Order:
    order = db.session.get(Order, order_id)
    if order is None:
        raise ResourceNotFoundError("Order not found")
    return order


def get_seller_order(order_id, seller) -> Order:
    """Đơn có sản phẩm của seller, còn lại (kể cả không tồn tại) đều là 404."""
    order = db.session.get(Order, order_id)
    if order is None or not seller_owns_order(order, seller):
        raise ResourceNotFoundError("Order not found")
    return order


def seller_owns_order(order: Order, seller) -> bool:
    return any(item.product.seller_id == seller.id for item in order.line_items)


def seller_line_items(order: Order, seller):
    return [item for item in order.line_items if item.product.seller_id == seller.id]


def advance_status(order_id, requested_status, acting_user) -> Order:
    """Đổi trạng thái đơn theo yêu cầu của seller (hoặc admin).

    Đơn đã kết thúc hoặc trạng thái không nằm trong danh sách cho phép thì
    raise InvalidTransitionError và không ghi gì xuống DB. Hai người cùng
    sửa một đơn thì ai ghi sau thắng.
    """
    if acting_user is None:
        raise AuthorizationError("Login required")
    if acting_user.is_admin:
        order = get_order(order_id)
    else:
        if not (acting_user.is_seller and acting_user.approved):
            raise AuthorizationError("Only sellers and admins can update orders")
        # Đơn không tồn tại và đơn của người khác trả cùng một lỗi
        order = db.session.get(Order, order_id)
        if order is None or not seller_owns_order(order, acting_user):
            raise AuthorizationError("This order has none of your products")

    requested = parse_status(requested_status)
    if requested not in SELLER_STATUS_OPTIONS:
        raise InvalidTransitionError(f"Status {requested.name} cannot be set here")
    if not can_transition(order.status, requested):
        raise InvalidTransitionError(
            f"Order {order.id} is {order.status.label} and can no longer change"
        )

    previous = order.status
    order.status = requested
    db.session.commit()
    audit_logger.info(
        "Order %s: %s -> %s by user %s",
        order.id,
        previous.name,
        requested.name,
        acting_user.id,
    )
    return order


def cancel_order(order_id, acting_user) -> Order:
    """Khách tự hủy đơn của mình (hoặc admin hủy) khi đơn còn PENDING/CONFIRMED."""
    if acting_user is None:
        raise AuthorizationError("Login required")
    if acting_user.is_admin:
        order = get_order(order_id)
    else:
        order = db.session.get(Order, order_id)
        if order is None or order.user_id != acting_user.id:
            raise AuthorizationError("You cannot cancel this order")
    if not can_transition(order.status, ORDER_STATUS.CANCELLED):
        raise InvalidTransitionError(
            f"Order {order.id} is {order.status.label} and cannot be cancelled"
        )

    previous = order.status
    order.status = ORDER_STATUS.CANCELLED
    # trả lại tồn kho
    for item in order.line_items:
        item.product.quantity += item.quantity
    db.session.commit()
    audit_logger.info(
        "Order %s: %s -> CANCELLED by user %s", order.id, previous.name, acting_user.id
    )
    return order


def _parse_enum(enum_cls, value, field, message):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls[str(value).strip().upper()]
    except KeyError:
        raise FieldValidationError({field: message})


def create_order(customer, items, order_type, payment_method, address) -> Order:
    """Checkout: Order + ProductOrder + Payment ghi trong cùng một transaction.

    items: list dict {"productId": int, "quantity": int}
    """
    if customer is None or not customer.is_customer:
        raise AuthorizationError("Only customers can place orders")
    if not items:
        raise FieldValidationError({"products": "Cart is empty"})
    order_type = _parse_enum(ORDER_TYPE, order_type, "type", "Order type is invalid")
    payment_method = _parse_enum(
        PAYMENT_METHOD, payment_method, "paymentMethod", "Payment method is invalid"
    )
    address = (address or "").strip()
    if not address:
        raise FieldValidationError({"address": "Address is required"})

    quantities = {}
    for item in items:
        try:
            product_id = int(item.get("productId"))
            quantity = int(item.get("quantity", 1))
        except (TypeError, ValueError, AttributeError):
            raise FieldValidationError({"products": "Invalid cart item"})
        if quantity < 1:
            raise FieldValidationError({"products": "Quantity must be at least 1"})
        quantities[product_id] = quantities.get(product_id, 0) + quantity

    products = {
        p.id: p for p in Product.query.filter(Product.id.in_(quantities)).all()
    }
    amount = 0
    for product_id, quantity in quantities.items():
        product = products.get(product_id)
        if product is None or not product.approved:
            raise FieldValidationError({"products": f"Product {product_id} is unavailable"})
        if product.quantity < quantity:
            raise FieldValidationError(
                {"products": f"Only {product.quantity} left of {product.name}"}
            )
        amount += product.price * quantity

    order = Order(
        user_id=customer.id,
        status=ORDER_STATUS.PENDING,
        type=order_type,
    )
    for product_id, quantity in quantities.items():
        products[product_id].quantity -= quantity
        order.line_items.append(ProductOrder(product_id=product_id, quantity=quantity))
    order.payment = Payment(
        amount=round_to(amount, 2),
        address=address,
        payment_method=payment_method,
    )
    try:
        db.session.add(order)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.error("Failed to create order for user %s", customer.id)
        raise

    logger.info(
        "Order %s created by user %s (%d items, amount=%s)",
        order.id,
        customer.id,
        len(order.line_items),
        order.payment.amount,
    )
    return order


def _order_query():
    return Order.query.options(
        joinedload(Order.user),
        joinedload(Order.payment),
        selectinload(Order.line_items).joinedload(ProductOrder.product),
    ).order_by(Order.created_at.desc(), Order.id.desc())


def list_seller_orders(seller):
    """Các đơn có ít nhất một sản phẩm của seller (trả về nguyên đơn)."""
    return (
        _order_query()
        .filter(
            Order.line_items.any(
                ProductOrder.product.has(Product.seller_id == seller.id)
            )
        )
        .all()
    )


def list_customer_orders(customer):
    return _order_query().filter(Order.user_id == customer.id).all()


def list_all_orders():
    return _order_query().all()


def line_item_to_dict(item: ProductOrder) -> dict:
    product = item.product
    return {
        "id": item.id,
        "quantity": item.quantity,
        "product": {
            "id": product.id,
            "name": product.name,
            "slug": product.slug,
            "image": product.image,
            "price": product.price,
            "sellerId": product.seller_id,
        },
    }


def order_to_dict(order: Order, seller=None) -> dict:
    """seller != None: chỉ trả các line item của seller đó."""
    items = seller_line_items(order, seller) if seller is not None else order.line_items
    payment = order.payment
    return {
        "id": order.id,
        "createdAt": order.created_at.isoformat() if order.created_at else None,
        "status": order.status.name,
        "statusLabel": order.status.label,
        "statusColor": order.status.color,
        "statusLocked": is_status_locked(order),
        "type": order.type.name,
        "user": {
            "id": order.user.id,
            "name": order.user.name,
            "email": order.user.email,
        },
        "payment": (
            {
                "id": payment.id,
                "amount": payment.amount,
                "address": payment.address,
                "paymentMethod": payment.payment_method.name,
            }
            if payment
            else None
        ),
        "products": [line_item_to_dict(item) for item in items],
    }
