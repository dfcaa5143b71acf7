from database_init import db


class Product(db.Model):
    __tablename__ = "product"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text, nullable=False)
    price = db.Column(db.Float, nullable=False, default=0)
    commission = db.Column(db.Float, nullable=False, default=0)
    quantity = db.Column(db.Integer, nullable=False, default=0)
    image = db.Column(db.String(500), nullable=False)
    category = db.Column(db.JSON, nullable=False, default=list)  # ["Books", ...]
    approved = db.Column(db.Boolean, nullable=False, default=False)
    # Sinh lại từ name mỗi lần ghi, không kiểm tra trùng
    slug = db.Column(db.String(160), nullable=False, index=True)
    seller_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime, server_default=db.func.now(), onupdate=db.func.now()
    )

    seller = db.relationship("User", back_populates="products")
    line_items = db.relationship("ProductOrder", back_populates="product", lazy=True)

    def __repr__(self):
        return f"<Product {self.id} - {self.name}>"
