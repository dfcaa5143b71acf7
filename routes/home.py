from flask import Blueprint, jsonify, redirect, request
from service import product_service
from service.authorization import role_home
from service.session_service import resolve_session
from util.constant import CATEGORIES
from util.errors import ResourceNotFoundError

home_bp = Blueprint("home", __name__)


def _redirect_staff():
    # Trang mua hàng dành cho khách, seller/admin về trang của mình
    user = resolve_session()
    if user is not None and not user.is_customer:
        return redirect(role_home(user.role))
    return None


@home_bp.route("/")
def home():
    response = _redirect_staff()
    if response is not None:
        return response

    category = request.args.get("category")
    products = product_service.list_approved_products(category)
    return jsonify(
        {
            "categories": list(CATEGORIES),
            "products": [product_service.product_to_dict(p) for p in products],
        }
    )


@home_bp.route("/products/<slug>")
def product_detail(slug):
    response = _redirect_staff()
    if response is not None:
        return response

    product = product_service.get_product_by_slug(slug)
    if product is None:
        raise ResourceNotFoundError("Product not found")
    return jsonify({"product": product_service.product_to_dict(product, include_seller=True)})
