# service/product_service.py
import logging
import math

from sqlalchemy.orm import joinedload

from database_init import db
from models.product import Product
from models.user import User
from util.constant import CATEGORIES, MAX_PRICE, MAX_QUANTITY
from util.errors import AuthorizationError, FieldValidationError, ResourceNotFoundError
from util.misc import make_slug

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("audit")

# field -> (kiểu, giá trị tối đa, nhãn trong thông báo lỗi)
NUMERIC_FIELDS = {
    "price": (float, MAX_PRICE, "Price"),
    "commission": (float, MAX_PRICE, "Commission"),
    "quantity": (int, MAX_QUANTITY, "Quantity"),
}
TEXT_FIELDS = {
    "name": "Name is required",
    "description": "Description is required",
    "image": "Image is required",
}


def parse_categories(value):
    """ "Books,Electronics" hoặc list -> ["Books", "Electronics"]."""
    if value is None:
        raise FieldValidationError({"category": "Category is required"})
    if isinstance(value, str):
        value = value.split(",")
    categories = [str(c).strip() for c in value if str(c).strip()]
    if not categories:
        raise FieldValidationError({"category": "Category is required"})
    invalid = [c for c in categories if c not in CATEGORIES]
    if invalid:
        raise FieldValidationError(
            {"category": f"Unknown category: {', '.join(invalid)}"}
        )
    # bỏ trùng, giữ thứ tự
    return list(dict.fromkeys(categories))


def _coerce_number(field, raw):
    cast, maximum, label = NUMERIC_FIELDS[field]
    try:
        number = cast(raw)
    except (TypeError, ValueError, OverflowError):
        raise FieldValidationError({field: f"{label} must be a number"})
    # float("inf") / float("nan") parse được nhưng không lưu / serialize được
    if not math.isfinite(number):
        raise FieldValidationError({field: f"{label} must be a number"})
    if number < 0:
        raise FieldValidationError({field: f"{label} must be at least 0"})
    if number > maximum:
        raise FieldValidationError({field: f"{label} must be at most {maximum:,}"})
    return number


def _is_truthy(value):
    if isinstance(value, str):
        return value.strip().lower() in ("on", "true", "1", "yes")
    return bool(value)


def upsert_product(fields: dict, acting_user: User) -> Product:
    """Tạo mới khi không có product_id, ngược lại cập nhật tại chỗ.

    - slug luôn sinh lại từ name
    - chỉ ADMIN được set approved; seller tạo sản phẩm mới luôn ở trạng thái chờ duyệt
    - seller chỉ sửa được sản phẩm của mình, sửa nội dung thì mất trạng thái duyệt
    """
    if acting_user is None or not (acting_user.is_admin or acting_user.is_seller):
        raise AuthorizationError("Only sellers and admins can manage products")

    wants_approval = "approved" in fields and fields["approved"] is not None
    approved = _is_truthy(fields.get("approved")) if wants_approval else None
    if approved and not acting_user.is_admin:
        raise AuthorizationError("Only admins can approve products")

    values = {}
    for field, message in TEXT_FIELDS.items():
        text = (fields.get(field) or "").strip()
        if not text:
            raise FieldValidationError({field: message})
        values[field] = text
    for field in NUMERIC_FIELDS:
        values[field] = _coerce_number(field, fields.get(field))
    values["category"] = parse_categories(fields.get("category"))
    values["slug"] = make_slug(values["name"])

    product_id = fields.get("product_id")
    if product_id:
        product = db.session.get(Product, int(product_id))
        if product is None:
            raise ResourceNotFoundError("Product not found")
        if acting_user.is_seller and product.seller_id != acting_user.id:
            raise AuthorizationError("You can only edit your own products")
        created = False
    else:
        seller_id = acting_user.id
        if acting_user.is_admin:
            seller_id = fields.get("seller_id")
            seller = db.session.get(User, int(seller_id)) if seller_id else None
            if seller is None or not seller.is_seller:
                raise FieldValidationError({"sellerId": "Seller is required"})
        product = Product(seller_id=seller_id, approved=False)
        db.session.add(product)
        created = True

    changed = created or any(
        getattr(product, key) != value for key, value in values.items()
    )
    for key, value in values.items():
        setattr(product, key, value)
    if acting_user.is_admin and wants_approval:
        product.approved = approved

    # Seller sửa nội dung sản phẩm đã duyệt -> quay lại chờ admin duyệt
    unapproved_by_edit = acting_user.is_seller and changed and product.approved
    if unapproved_by_edit:
        product.approved = False

    db.session.commit()
    if unapproved_by_edit:
        audit_logger.info(
            "Product %s edited by seller %s, approval revoked",
            product.id,
            acting_user.id,
        )
    logger.info(
        "%s product %s (%s) by user %s",
        "Created" if created else "Updated",
        product.id,
        product.slug,
        acting_user.id,
    )
    if acting_user.is_admin and wants_approval:
        audit_logger.info(
            "Admin %s set approved=%s on product %s",
            acting_user.id,
            product.approved,
            product.id,
        )
    return product


def list_products():
    """Toàn bộ sản phẩm kèm seller (trang admin)."""
    return (
        Product.query.options(joinedload(Product.seller))
        .order_by(Product.created_at.desc(), Product.id.desc())
        .all()
    )


def list_approved_products(category=None):
    products = (
        Product.query.filter_by(approved=True)
        .order_by(Product.created_at.desc(), Product.id.desc())
        .all()
    )
    if category:
        # category lưu dạng JSON, lọc ở Python cho chạy được cả SQLite lẫn MySQL
        products = [p for p in products if category in (p.category or [])]
    return products


def list_seller_products(seller):
    return (
        Product.query.filter_by(seller_id=seller.id)
        .order_by(Product.created_at.desc(), Product.id.desc())
        .all()
    )


def get_product_by_slug(slug):
    # slug có thể trùng, lấy bản mới nhất
    return (
        Product.query.filter_by(slug=slug, approved=True)
        .order_by(Product.id.desc())
        .first()
    )


def product_to_dict(product: Product, include_seller=False) -> dict:
    data = {
        "id": product.id,
        "name": product.name,
        "slug": product.slug,
        "description": product.description,
        "image": product.image,
        "category": list(product.category or []),
        "price": product.price,
        "commission": product.commission,
        "quantity": product.quantity,
        "approved": product.approved,
        "sellerId": product.seller_id,
    }
    if include_seller and product.seller is not None:
        data["seller"] = {
            "id": product.seller.id,
            "name": product.seller.name,
            "email": product.seller.email,
        }
    return data
