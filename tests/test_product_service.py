import pytest

from database_init import db
from models.product import Product
from service import product_service
from util.errors import AuthorizationError, FieldValidationError, ResourceNotFoundError


def _fields(**overrides):
    fields = {
        "name": "Book Title",
        "description": "A well loved paperback",
        "price": "12.5",
        "commission": "1",
        "quantity": "3",
        "image": "https://img.example/book.jpg",
        "category": "Books,Electronics",
    }
    fields.update(overrides)
    return fields


def test_category_string_is_stored_as_list(ctx, make_seller):
    seller = make_seller()
    product = product_service.upsert_product(_fields(), seller)

    stored = db.session.get(Product, product.id)
    assert stored.category == ["Books", "Electronics"]
    assert stored.slug == "book-title"


def test_resaving_same_name_keeps_slug(ctx, make_seller):
    seller = make_seller()
    product = product_service.upsert_product(_fields(), seller)
    again = product_service.upsert_product(
        _fields(product_id=product.id, description="Updated"), seller
    )
    assert again.id == product.id
    assert again.slug == "book-title"
    assert again.description == "Updated"


def test_slug_follows_renamed_product(ctx, make_seller):
    seller = make_seller()
    product = product_service.upsert_product(_fields(), seller)
    renamed = product_service.upsert_product(
        _fields(product_id=product.id, name="Organic Chemistry Notes"), seller
    )
    assert renamed.slug == "organic-chemistry-notes"


def test_duplicate_slugs_are_allowed(ctx, make_seller):
    seller = make_seller()
    first = product_service.upsert_product(_fields(), seller)
    second = product_service.upsert_product(_fields(), seller)
    assert first.id != second.id
    assert first.slug == second.slug


def test_numeric_fields_are_coerced(ctx, make_seller):
    product = product_service.upsert_product(_fields(), make_seller())
    assert product.price == 12.5
    assert product.commission == 1.0
    assert product.quantity == 3


@pytest.mark.parametrize("field", ["price", "commission", "quantity"])
def test_negative_numbers_are_rejected(ctx, make_seller, field):
    with pytest.raises(FieldValidationError) as excinfo:
        product_service.upsert_product(_fields(**{field: "-1"}), make_seller())
    assert field in excinfo.value.field_errors
    assert Product.query.count() == 0


@pytest.mark.parametrize("field", ["price", "commission"])
@pytest.mark.parametrize("raw", ["inf", "-inf", "nan", float("inf"), float("nan")])
def test_non_finite_numbers_are_rejected(ctx, make_seller, field, raw):
    with pytest.raises(FieldValidationError) as excinfo:
        product_service.upsert_product(_fields(**{field: raw}), make_seller())
    assert excinfo.value.field_errors[field].endswith("must be a number")
    assert Product.query.count() == 0


@pytest.mark.parametrize("field, raw", [("price", "1e27"), ("commission", "2000000"),
                                        ("quantity", "1000000")])
def test_numbers_above_limit_are_rejected(ctx, make_seller, field, raw):
    with pytest.raises(FieldValidationError) as excinfo:
        product_service.upsert_product(_fields(**{field: raw}), make_seller())
    assert "at most" in excinfo.value.field_errors[field]


def test_unknown_category_is_rejected(ctx, make_seller):
    with pytest.raises(FieldValidationError) as excinfo:
        product_service.upsert_product(_fields(category="Books,Weapons"), make_seller())
    assert "Weapons" in excinfo.value.field_errors["category"]


def test_parse_categories_strips_and_dedupes():
    assert product_service.parse_categories(" Books , Kitchen,,Books") == ["Books", "Kitchen"]
    with pytest.raises(FieldValidationError):
        product_service.parse_categories(" , ")


def test_seller_products_start_unapproved(ctx, make_seller):
    seller = make_seller()
    product = product_service.upsert_product(_fields(), seller)
    assert product.approved is False
    assert product.seller_id == seller.id


def test_seller_cannot_approve(ctx, make_seller):
    seller = make_seller()
    with pytest.raises(AuthorizationError):
        product_service.upsert_product(_fields(approved="on"), seller)
    assert Product.query.count() == 0


def test_customer_cannot_manage_products(ctx, make_customer):
    with pytest.raises(AuthorizationError):
        product_service.upsert_product(_fields(), make_customer())


def test_seller_cannot_edit_someone_elses_product(ctx, make_seller, make_product):
    owner = make_seller()
    other = make_seller(email="other@campus.edu")
    product = make_product(owner)
    with pytest.raises(AuthorizationError):
        product_service.upsert_product(_fields(product_id=product.id), other)


@pytest.mark.parametrize(
    "change",
    [
        {"name": "Calculus Textbook 2nd Ed"},
        {"description": "Now with a free laptop"},
        {"image": "https://img.example/other.jpg"},
        {"price": "0.5"},
    ],
)
def test_seller_edit_sends_product_back_for_approval(ctx, make_seller, make_product, change):
    seller = make_seller()
    product = make_product(seller, approved=True)
    updated = product_service.upsert_product(
        _fields(product_id=product.id, **change), seller
    )
    assert updated.approved is False
    assert product_service.list_approved_products() == []


def test_seller_resave_without_changes_keeps_approval(ctx, make_seller, make_product):
    seller = make_seller()
    product = make_product(seller, approved=True)
    updated = product_service.upsert_product(
        {
            "product_id": product.id,
            "name": product.name,
            "description": product.description,
            "price": str(product.price),
            "commission": str(product.commission),
            "quantity": str(product.quantity),
            "image": product.image,
            "category": ",".join(product.category),
        },
        seller,
    )
    assert updated.approved is True


def test_admin_edit_keeps_approval(ctx, make_admin, make_seller, make_product):
    product = make_product(make_seller(), approved=True)
    updated = product_service.upsert_product(
        _fields(product_id=product.id, name="Calculus Textbook 2nd Ed"), make_admin()
    )
    assert updated.approved is True


def test_admin_toggles_approval(ctx, make_admin, make_seller, make_product):
    admin = make_admin()
    product = make_product(make_seller(), approved=False)

    approved = product_service.upsert_product(
        _fields(product_id=product.id, approved=True), admin
    )
    assert approved.approved is True

    unapproved = product_service.upsert_product(
        _fields(product_id=product.id, approved=False), admin
    )
    assert unapproved.approved is False


def test_admin_create_needs_a_seller(ctx, make_admin, make_seller):
    admin = make_admin()
    with pytest.raises(FieldValidationError) as excinfo:
        product_service.upsert_product(_fields(), admin)
    assert "sellerId" in excinfo.value.field_errors

    seller = make_seller()
    product = product_service.upsert_product(
        _fields(seller_id=seller.id, approved=True), admin
    )
    assert product.seller_id == seller.id
    assert product.approved is True


def test_update_of_missing_product(ctx, make_seller):
    with pytest.raises(ResourceNotFoundError):
        product_service.upsert_product(_fields(product_id=999), make_seller())


def test_only_approved_products_are_listed_for_customers(ctx, make_seller, make_product):
    seller = make_seller()
    visible = make_product(seller, name="Desk Lamp", category=["Furniture"])
    make_product(seller, name="Hidden Lamp", approved=False)

    listed = product_service.list_approved_products()
    assert [p.id for p in listed] == [visible.id]
    assert product_service.list_approved_products("Books") == []
    assert product_service.get_product_by_slug("hidden-lamp") is None
    assert product_service.get_product_by_slug("desk-lamp").id == visible.id


def test_admin_listing_includes_seller(ctx, make_seller, make_product):
    seller = make_seller()
    make_product(seller, approved=False)
    data = [product_service.product_to_dict(p, include_seller=True)
            for p in product_service.list_products()]
    assert data[0]["seller"]["email"] == seller.email
