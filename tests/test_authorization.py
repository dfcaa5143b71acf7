from types import SimpleNamespace

import pytest

from service.authorization import (
    ALLOW,
    DenyRedirect,
    DenyUnauthorized,
    authorize,
    authorize_guest_page,
    login_redirect,
    role_home,
)
from util.constant import NOT_APPROVED_MESSAGE, ROLE


def _user(role, approved=True):
    return SimpleNamespace(id=1, role=role, approved=approved)


@pytest.mark.parametrize(
    "role, home",
    [(ROLE.CUSTOMER, "/"), (ROLE.SELLER, "/seller"), (ROLE.ADMIN, "/admin")],
)
def test_role_home(role, home):
    assert role_home(role) == home


def test_role_home_covers_every_role():
    for role in ROLE:
        assert role_home(role).startswith("/")


def test_role_home_rejects_unknown_value():
    with pytest.raises(ValueError):
        role_home("SUPERUSER")


def test_anonymous_user_is_sent_to_login_with_original_path():
    decision = authorize(None, "/seller/orders", ROLE.SELLER)
    assert decision == DenyRedirect("/login?redirectTo=/seller/orders")


def test_login_redirect_escapes_query_characters():
    assert login_redirect("/admin products") == "/login?redirectTo=/admin%20products"


def test_wrong_role_is_sent_to_its_own_home():
    assert authorize(_user(ROLE.CUSTOMER), "/admin/products", ROLE.ADMIN) == DenyRedirect("/")
    assert authorize(_user(ROLE.SELLER), "/admin/sellers", ROLE.ADMIN) == DenyRedirect("/seller")
    assert authorize(_user(ROLE.ADMIN), "/seller/orders", ROLE.SELLER) == DenyRedirect("/admin")


def test_role_mismatch_wins_over_missing_approval():
    decision = authorize(_user(ROLE.SELLER, approved=False), "/admin", ROLE.ADMIN)
    assert decision == DenyRedirect("/seller")


def test_unapproved_seller_is_unauthorized():
    decision = authorize(_user(ROLE.SELLER, approved=False), "/seller", ROLE.SELLER)
    assert decision == DenyUnauthorized(NOT_APPROVED_MESSAGE)


def test_approval_check_can_be_skipped():
    decision = authorize(
        _user(ROLE.SELLER, approved=False), "/seller", ROLE.SELLER, require_approved=False
    )
    assert decision is ALLOW


def test_matching_role_is_allowed():
    assert authorize(_user(ROLE.ADMIN), "/admin", ROLE.ADMIN) is ALLOW
    assert authorize(_user(ROLE.CUSTOMER), "/api/orders") is ALLOW


def test_guest_pages_redirect_logged_in_users_home():
    assert authorize_guest_page(None) is ALLOW
    assert authorize_guest_page(_user(ROLE.SELLER)) == DenyRedirect("/seller")
    assert authorize_guest_page(_user(ROLE.CUSTOMER)) == DenyRedirect("/")
