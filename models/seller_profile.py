from database_init import db
from util.constant import SELLER_TYPE


# Phần mở rộng 1-1 của User có role SELLER, email chỉ nằm ở bảng user
class SellerProfile(db.Model):
    __tablename__ = "seller_profile"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("user.id"), unique=True, nullable=False
    )
    type = db.Column(db.Enum(SELLER_TYPE), nullable=False)

    user = db.relationship("User", back_populates="seller_profile")

    def __repr__(self):
        return f"<SellerProfile user={self.user_id} ({self.type.value})>"
