from database_init import db
from util.constant import PAYMENT_METHOD


# Tạo cùng transaction với Order, không sửa sau khi tạo
class Payment(db.Model):
    __tablename__ = "payment"
    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(
        db.Integer, db.ForeignKey("order.id"), unique=True, nullable=False
    )
    amount = db.Column(db.Float, nullable=False)
    address = db.Column(db.String(255), nullable=False)
    payment_method = db.Column(db.Enum(PAYMENT_METHOD), nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    order = db.relationship("Order", back_populates="payment")

    def __repr__(self):
        return f"<Payment {self.id} - Order {self.order_id} ({self.amount})>"
