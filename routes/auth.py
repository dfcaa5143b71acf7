import logging

from flask import Blueprint, jsonify, redirect, request
from Form.forms import (
    LoginForm,
    RegisterForm,
    ResetPasswordForm,
    SellerRegisterForm,
    field_errors,
    first_field_error,
)
from service.authorization import (
    apply_decision,
    authorize_guest_page,
    login_required,
    role_home,
)
from service.session_service import create_session, destroy_session, resolve_session
from service import user_service
from util.constant import INVALID_LOGIN_MESSAGE, NOT_APPROVED_MESSAGE
from util.errors import FieldValidationError
from util.misc import safe_redirect

auth_bp = Blueprint("auth", __name__)
logger = logging.getLogger(__name__)

GUEST_ONLY_ENDPOINTS = {"auth.login", "auth.register", "auth.register_seller"}


@auth_bp.before_request
def redirect_logged_in_user():
    # Đã đăng nhập thì login/register luôn quay về trang chủ của role
    if request.endpoint in GUEST_ONLY_ENDPOINTS:
        return apply_decision(authorize_guest_page(resolve_session()))


def _bad_request(errors):
    return jsonify({"success": False, "fieldErrors": errors}), 400


# Đăng nhập
@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    form = LoginForm()
    if request.method == "GET":
        return jsonify({"redirectTo": safe_redirect(request.args.get("redirectTo"))})

    if not form.validate_on_submit():
        return _bad_request(field_errors(form))

    user = user_service.verify_login(form.email.data, form.password.data)
    if not user:
        logger.warning("Failed login attempt for %s from %s", form.email.data, request.remote_addr)
        return _bad_request({"password": INVALID_LOGIN_MESSAGE})

    # Mật khẩu đúng nhưng seller chưa được admin duyệt
    if not user.approved:
        logger.warning("Login rejected for unapproved account %s", user.email)
        return _bad_request({"password": NOT_APPROVED_MESSAGE})

    create_session(user, remember=form.remember.data)
    target = safe_redirect(form.redirect_to.data)
    if target == "/":
        target = role_home(user.role)
    return redirect(target)


# Đăng ký khách hàng
@auth_bp.route("/register", methods=["POST"])
def register():
    form = RegisterForm()
    if not form.validate_on_submit():
        return _bad_request(first_field_error(form, RegisterForm.error_aliases))

    try:
        user_service.create_user(
            name=form.name.data,
            email=form.email.data,
            password=form.password.data,
            phone_no=form.phone_no.data,
            address=form.address.data,
        )
    except FieldValidationError as e:
        return _bad_request(e.field_errors)
    return jsonify({"success": True})


# Đăng ký seller: tài khoản chờ admin duyệt
@auth_bp.route("/register/seller", methods=["POST"])
def register_seller():
    form = SellerRegisterForm()
    if not form.validate_on_submit():
        return _bad_request(first_field_error(form, SellerRegisterForm.error_aliases))

    try:
        user_service.create_seller(
            name=form.name.data,
            email=form.email.data,
            password=form.password.data,
            seller_type=form.type.data,
            address=form.address.data,
            phone_no=form.phone_no.data,
        )
    except FieldValidationError as e:
        return _bad_request(e.field_errors)
    return jsonify({"success": True})


# Đăng xuất
@auth_bp.route("/api/auth/logout", methods=["POST"])
def logout():
    destroy_session()
    return redirect("/")


@auth_bp.route("/api/reset-password", methods=["POST"])
@login_required
def reset_password():
    form = ResetPasswordForm()
    if not form.validate_on_submit():
        return _bad_request(field_errors(form))

    user_service.reset_password(form.user_id.data, form.password.data, resolve_session())
    return jsonify({"success": True})
