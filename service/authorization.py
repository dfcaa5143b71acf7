# service/authorization.py
"""Quyết định truy cập theo role / trạng thái duyệt.

Các hàm ở đây thuần túy: nhận user đã resolve (hoặc None) và trả về một
quyết định, không đụng tới request hay database. ``role_required`` là lớp
mỏng nối quyết định đó vào view Flask.
"""
from dataclasses import dataclass
from functools import wraps
from urllib.parse import quote

from flask import redirect, request

from service.session_service import resolve_session
from util.constant import NOT_APPROVED_MESSAGE, ROLE
from util.errors import AuthorizationError


@dataclass(frozen=True)
class Allow:
    pass


@dataclass(frozen=True)
class DenyRedirect:
    target: str


@dataclass(frozen=True)
class DenyUnauthorized:
    message: str


ALLOW = Allow()


def role_home(role: ROLE) -> str:
    if role is ROLE.CUSTOMER:
        return "/"
    if role is ROLE.SELLER:
        return "/seller"
    if role is ROLE.ADMIN:
        return "/admin"
    raise ValueError(f"Unknown role: {role!r}")


def login_redirect(path: str) -> str:
    return f"/login?redirectTo={quote(path or '/', safe='/')}"


def authorize(user, path, required_role=None, require_approved=True):
    """Thứ tự kiểm tra: đăng nhập -> đúng role -> đã duyệt."""
    if user is None:
        return DenyRedirect(login_redirect(path))
    if required_role is not None and user.role is not required_role:
        return DenyRedirect(role_home(user.role))
    if require_approved and not user.approved:
        return DenyUnauthorized(NOT_APPROVED_MESSAGE)
    return ALLOW


def authorize_guest_page(user):
    # Đã đăng nhập thì không vào lại login/register
    if user is not None:
        return DenyRedirect(role_home(user.role))
    return ALLOW


def apply_decision(decision):
    """Đổi quyết định thành response Flask, None nghĩa là được đi tiếp."""
    if isinstance(decision, DenyRedirect):
        return redirect(decision.target)
    if isinstance(decision, DenyUnauthorized):
        raise AuthorizationError(decision.message)
    return None


def role_required(role=None, require_approved=True):
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            decision = authorize(
                resolve_session(), request.path, role, require_approved
            )
            response = apply_decision(decision)
            if response is not None:
                return response
            return view(*args, **kwargs)

        return wrapped

    return decorator


login_required = role_required()
