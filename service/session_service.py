# service/session_service.py
import logging

from flask import session
from flask_login import current_user, login_user, logout_user

from database_init import db
from extensions import login_manager
from models.user import User

logger = logging.getLogger(__name__)


@login_manager.user_loader
def load_user(user_id):
    # Cookie hỏng / id lạ -> None, Flask-Login coi như chưa đăng nhập
    try:
        return db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        return None


def create_session(user: User, remember: bool = False) -> None:
    """Ghi user id vào cookie đã ký.

    Không remember thì cookie sống theo phiên trình duyệt, remember thì Flask-Login
    cấp thêm remember cookie (REMEMBER_COOKIE_DURATION, mặc định 30 ngày).
    """
    session.clear()
    login_user(user, remember=remember)
    logger.info("User %s signed in (remember=%s)", user.id, remember)


def resolve_session():
    """User của request hiện tại hoặc None. Không bao giờ raise."""
    if not current_user or not current_user.is_authenticated:
        return None
    return current_user._get_current_object()


def destroy_session() -> None:
    user = resolve_session()
    logout_user()
    session.clear()
    if user is not None:
        logger.info("User %s signed out", user.id)
