from flask import Blueprint, jsonify
from Form.forms import field_errors
from Form.product_form import AdminProductForm, product_fields
from Form.seller_form import ApproveSellerForm
from service import order_service, product_service, user_service
from service.authorization import role_required
from service.session_service import resolve_session
from util.constant import ROLE

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")


@admin_bp.route("")
@role_required(ROLE.ADMIN)
def dashboard():
    products = product_service.list_products()
    sellers = user_service.list_sellers()
    orders = order_service.list_all_orders()
    return jsonify(
        {
            "productCount": len(products),
            "pendingProductCount": sum(1 for p in products if not p.approved),
            "sellerCount": len(sellers),
            "pendingSellerCount": sum(1 for s in sellers if not s.approved),
            "orderCount": len(orders),
        }
    )


# Quản lý sản phẩm: loader + upsert
@admin_bp.route("/products", methods=["GET", "POST"])
@role_required(ROLE.ADMIN)
def manage_products():
    form = AdminProductForm()
    if not form.is_submitted():
        products = product_service.list_products()
        return jsonify(
            {
                "products": [
                    product_service.product_to_dict(p, include_seller=True)
                    for p in products
                ]
            }
        )

    if not form.validate():
        return jsonify({"success": False, "fieldErrors": field_errors(form)}), 400

    product = product_service.upsert_product(product_fields(form), resolve_session())
    return jsonify(
        {"success": True, "product": product_service.product_to_dict(product)}
    )


# Duyệt seller
@admin_bp.route("/sellers", methods=["GET", "POST"])
@role_required(ROLE.ADMIN)
def manage_sellers():
    form = ApproveSellerForm()
    if not form.is_submitted():
        sellers = user_service.list_sellers()
        return jsonify({"sellers": [user_service.user_to_dict(s) for s in sellers]})

    if not form.validate():
        return jsonify({"success": False, "fieldErrors": field_errors(form)}), 400

    user_service.approve_seller(form.seller_id.data, resolve_session())
    return jsonify({"success": True})
