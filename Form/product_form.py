import math

from flask_wtf import FlaskForm
from wtforms import BooleanField, FloatField, IntegerField, StringField, TextAreaField
from wtforms.validators import InputRequired, NumberRange, Optional, ValidationError
from util.constant import MAX_PRICE, MAX_QUANTITY


def finite_number(form, field):
    # FloatField nhận cả "inf" / "nan", NumberRange không chặn được nan
    if field.data is not None and not math.isfinite(field.data):
        raise ValidationError(f"{field.label.text} must be a number")


class ProductForm(FlaskForm):
    product_id = IntegerField("Product", name="productId", validators=[Optional()])
    name = StringField("Name", validators=[InputRequired(message="Name is required")])
    description = TextAreaField(
        "Description", validators=[InputRequired(message="Description is required")]
    )
    quantity = IntegerField(
        "Quantity",
        validators=[
            InputRequired(message="Quantity is required"),
            NumberRange(min=0, message="Quantity must be at least 0"),
            NumberRange(max=MAX_QUANTITY, message=f"Quantity must be at most {MAX_QUANTITY:,}"),
        ],
    )
    price = FloatField(
        "Price",
        validators=[
            InputRequired(message="Price is required"),
            finite_number,
            NumberRange(min=0, message="Price must be at least 0"),
            NumberRange(max=MAX_PRICE, message=f"Price must be at most {MAX_PRICE:,}"),
        ],
    )
    commission = FloatField(
        "Commission",
        validators=[
            InputRequired(message="Commission is required"),
            finite_number,
            NumberRange(min=0, message="Commission must be at least 0"),
            NumberRange(max=MAX_PRICE, message=f"Commission must be at most {MAX_PRICE:,}"),
        ],
    )
    image = StringField("Image", validators=[InputRequired(message="Image is required")])
    # Chuỗi "Books,Electronics", service tách lại thành list
    category = StringField(
        "Category", validators=[InputRequired(message="Category is required")]
    )


class AdminProductForm(ProductForm):
    seller_id = IntegerField("Seller", name="sellerId", validators=[Optional()])
    approved = BooleanField("Approved")


def product_fields(form):
    """Dict truyền cho product_service.upsert_product."""
    fields = {
        "product_id": form.product_id.data,
        "name": form.name.data,
        "description": form.description.data,
        "quantity": form.quantity.data,
        "price": form.price.data,
        "commission": form.commission.data,
        "image": form.image.data,
        "category": form.category.data,
    }
    if isinstance(form, AdminProductForm):
        fields["seller_id"] = form.seller_id.data
        fields["approved"] = form.approved.data
    return fields
