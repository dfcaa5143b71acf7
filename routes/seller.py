from flask import Blueprint, jsonify, request
from Form.forms import field_errors
from Form.product_form import ProductForm, product_fields
from service import order_service, product_service
from service.authorization import role_required
from service.session_service import resolve_session
from util.constant import ROLE
from util.errors import InvalidRequestError

seller_bp = Blueprint("seller", __name__, url_prefix="/seller")

UPDATE_ORDER_STATUS = "update-order-status"


def _require_value(name, message):
    value = (request.form.get(name) or "").strip()
    if not value:
        raise InvalidRequestError(message)
    return value


@seller_bp.route("")
@role_required(ROLE.SELLER)
def dashboard():
    seller = resolve_session()
    return jsonify(
        {
            "hasResetPassword": seller.has_reset_password,
            "productCount": len(product_service.list_seller_products(seller)),
            "orderCount": len(order_service.list_seller_orders(seller)),
        }
    )


@seller_bp.route("/orders", methods=["GET", "POST"])
@role_required(ROLE.SELLER)
def orders():
    seller = resolve_session()
    if request.method == "GET":
        orders = order_service.list_seller_orders(seller)
        return jsonify(
            {
                "statusOptions": [
                    {"value": s.name, "label": s.label}
                    for s in order_service.SELLER_STATUS_OPTIONS
                ],
                "orders": [order_service.order_to_dict(o, seller=seller) for o in orders],
            }
        )

    intent = _require_value("intent", "Invalid intent")
    order_id = _require_value("orderId", "Invalid order id")
    try:
        order_id = int(order_id)
    except ValueError:
        raise InvalidRequestError("Invalid order id")

    if intent == UPDATE_ORDER_STATUS:
        status = _require_value("status", "Invalid status")
        order = order_service.advance_status(order_id, status, seller)
        return jsonify({"success": True, "status": order.status.name})

    return jsonify({"success": False, "message": "Invalid intent"}), 400


# Chi tiết đơn: chỉ hiện sản phẩm của seller đang đăng nhập
@seller_bp.route("/orders/<int:order_id>")
@role_required(ROLE.SELLER)
def order_detail(order_id):
    seller = resolve_session()
    order = order_service.get_seller_order(order_id, seller)
    return jsonify({"order": order_service.order_to_dict(order, seller=seller)})


@seller_bp.route("/products", methods=["GET", "POST"])
@role_required(ROLE.SELLER)
def products():
    seller = resolve_session()
    form = ProductForm()
    if not form.is_submitted():
        products = product_service.list_seller_products(seller)
        return jsonify(
            {"products": [product_service.product_to_dict(p) for p in products]}
        )

    if not form.validate():
        return jsonify({"success": False, "fieldErrors": field_errors(form)}), 400

    fields = product_fields(form)
    # seller không có ô approved, nếu cố gửi lên thì để service từ chối
    if "approved" in request.form:
        fields["approved"] = request.form.get("approved")
    product = product_service.upsert_product(fields, seller)
    return jsonify(
        {"success": True, "product": product_service.product_to_dict(product)}
    )
