from database_init import db
from util.constant import ORDER_STATUS, ORDER_TYPE


class Order(db.Model):
    __tablename__ = "order"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    status = db.Column(
        db.Enum(ORDER_STATUS), nullable=False, default=ORDER_STATUS.PENDING
    )
    type = db.Column(db.Enum(ORDER_TYPE), nullable=False, default=ORDER_TYPE.DELIVERY)

    user = db.relationship("User", back_populates="orders")
    payment = db.relationship(
        "Payment", back_populates="order", uselist=False, cascade="all, delete-orphan"
    )
    line_items = db.relationship(
        "ProductOrder",
        back_populates="order",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="ProductOrder.id",
    )

    def __repr__(self):
        return f"<Order {self.id} - User {self.user_id} ({self.status.name})>"
