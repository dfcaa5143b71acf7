from database_init import db


class ProductOrder(db.Model):
    __tablename__ = "product_order"
    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("order.id"), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey("product.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)

    order = db.relationship("Order", back_populates="line_items")
    product = db.relationship("Product", back_populates="line_items")

    def __repr__(self):
        return f"<ProductOrder Order {self.order_id} - Product {self.product_id} x{self.quantity}>"
