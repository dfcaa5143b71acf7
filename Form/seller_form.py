from flask_wtf import FlaskForm
from wtforms import IntegerField
from wtforms.validators import InputRequired


class ApproveSellerForm(FlaskForm):
    seller_id = IntegerField(
        "Seller",
        name="sellerId",
        validators=[InputRequired(message="Seller is required")],
    )
