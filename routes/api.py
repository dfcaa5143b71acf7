from flask import Blueprint, jsonify, request
from service import order_service, product_service
from service.authorization import role_required
from service.session_service import resolve_session
from util.constant import ROLE

api_bp = Blueprint("api", __name__, url_prefix="/api")


@api_bp.route("/products")
def list_products():
    """Sản phẩm đã duyệt (catalog cho khách)."""
    products = product_service.list_approved_products(request.args.get("category"))
    return jsonify([product_service.product_to_dict(p) for p in products])


@api_bp.route("/orders", methods=["GET", "POST"])
@role_required(ROLE.CUSTOMER)
def orders():
    """Danh sách đơn của khách hoặc checkout giỏ hàng."""
    customer = resolve_session()
    if request.method == "GET":
        orders = order_service.list_customer_orders(customer)
        return jsonify([order_service.order_to_dict(o) for o in orders])

    data = request.get_json(silent=True) or {}
    order = order_service.create_order(
        customer,
        items=data.get("products", []),
        order_type=data.get("type", "DELIVERY"),
        payment_method=data.get("paymentMethod"),
        address=data.get("address") or customer.address,
    )
    return jsonify(order_service.order_to_dict(order)), 201


@api_bp.route("/orders/<int:order_id>/cancel", methods=["POST"])
@role_required(ROLE.CUSTOMER)
def cancel_order(order_id):
    order = order_service.cancel_order(order_id, resolve_session())
    return jsonify({"success": True, "status": order.status.name})
