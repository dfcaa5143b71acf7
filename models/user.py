from database_init import db
from flask_login import UserMixin
from util.constant import ROLE


class User(UserMixin, db.Model):
    __tablename__ = "user"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password = db.Column(db.String(255), nullable=False)
    role = db.Column(db.Enum(ROLE), nullable=False, default=ROLE.CUSTOMER)
    # SELLER mới đăng ký chờ admin duyệt, CUSTOMER/ADMIN duyệt ngay khi tạo
    approved = db.Column(db.Boolean, nullable=False, default=True)
    address = db.Column(db.String(255), nullable=True)
    phone_no = db.Column(db.String(20), nullable=True)
    has_reset_password = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    seller_profile = db.relationship(
        "SellerProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    products = db.relationship("Product", back_populates="seller", lazy=True)
    orders = db.relationship("Order", back_populates="user", lazy=True)

    @property
    def is_admin(self):
        return self.role is ROLE.ADMIN

    @property
    def is_seller(self):
        return self.role is ROLE.SELLER

    @property
    def is_customer(self):
        return self.role is ROLE.CUSTOMER

    def __repr__(self):
        return f"<User {self.id} - {self.email} ({self.role.name})>"
