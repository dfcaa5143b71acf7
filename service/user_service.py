# service/user_service.py
import logging

from sqlalchemy import func
from werkzeug.security import check_password_hash, generate_password_hash

from database_init import db
from models.seller_profile import SellerProfile
from models.user import User
from util.constant import MIN_PASSWORD_LENGTH, ROLE, SELLER_TYPE
from util.errors import AuthorizationError, FieldValidationError, ResourceNotFoundError

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("audit")

DUPLICATE_EMAIL_MESSAGE = "A user already exists with this email"


def normalize_email(email):
    return (email or "").strip().lower()


def get_user_by_id(user_id):
    return db.session.get(User, user_id)


def get_user_by_email(email):
    return User.query.filter(func.lower(User.email) == normalize_email(email)).first()


def _ensure_email_available(email):
    if get_user_by_email(email):
        raise FieldValidationError({"email": DUPLICATE_EMAIL_MESSAGE})


def create_user(name, email, password, role=ROLE.CUSTOMER, phone_no=None, address=None):
    """Tạo CUSTOMER hoặc ADMIN (duyệt ngay). Seller dùng create_seller."""
    if role is ROLE.SELLER:
        raise ValueError("Use create_seller() for seller accounts")
    _ensure_email_available(email)
    user = User(
        name=name.strip(),
        email=normalize_email(email),
        password=generate_password_hash(password),
        role=role,
        approved=True,
        phone_no=phone_no,
        address=address,
    )
    db.session.add(user)
    db.session.commit()
    logger.info("Created %s account %s", role.name, user.email)
    return user


def create_seller(name, email, password, seller_type, address, phone_no, approved=False):
    """User role SELLER + SellerProfile trong cùng một transaction."""
    _ensure_email_available(email)
    if not isinstance(seller_type, SELLER_TYPE):
        seller_type = SELLER_TYPE(seller_type)

    user = User(
        name=name.strip(),
        email=normalize_email(email),
        password=generate_password_hash(password),
        role=ROLE.SELLER,
        approved=approved,
        phone_no=phone_no,
        address=address,
    )
    user.seller_profile = SellerProfile(type=seller_type)
    db.session.add(user)
    db.session.commit()
    logger.info("Created seller account %s (pending approval)", user.email)
    return user


def verify_login(email, password):
    user = get_user_by_email(email)
    if not user or not user.password:
        return None
    if not check_password_hash(user.password, password or ""):
        return None
    return user


def list_sellers():
    return (
        User.query.filter_by(role=ROLE.SELLER)
        .order_by(User.created_at.desc(), User.id.desc())
        .all()
    )


def approve_seller(seller_id, acting_user):
    if acting_user is None or not acting_user.is_admin:
        raise AuthorizationError("Only admins can approve sellers")
    seller = db.session.get(User, seller_id)
    if seller is None or not seller.is_seller:
        raise ResourceNotFoundError("Seller not found")
    seller.approved = True
    db.session.commit()
    audit_logger.info("Admin %s approved seller %s", acting_user.id, seller.id)
    return seller


def reset_password(user_id, password, acting_user):
    if acting_user is None:
        raise AuthorizationError("Login required")
    if acting_user.id != user_id and not acting_user.is_admin:
        raise AuthorizationError("You can only reset your own password")
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise FieldValidationError({"password": "Password is too short"})

    user = db.session.get(User, user_id)
    if user is None:
        raise ResourceNotFoundError("User not found")
    user.password = generate_password_hash(password)
    user.has_reset_password = True
    db.session.commit()
    logger.info("Password reset for user %s by %s", user.id, acting_user.id)
    return user


def user_to_dict(user: User) -> dict:
    data = {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role.name,
        "approved": user.approved,
        "address": user.address,
        "phoneNo": user.phone_no,
        "hasResetPassword": user.has_reset_password,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }
    if user.seller_profile is not None:
        data["type"] = user.seller_profile.type.value
    return data
