from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from urllib.parse import urlparse

from slugify import slugify


def round_to(number, precision=2):
    """Làm tròn half-up (0.125 -> 0.13), tránh lỗi binary float của round()."""
    quantum = Decimal(1).scaleb(-precision)
    return float(Decimal(str(number)).quantize(quantum, rounding=ROUND_HALF_UP))


def title_case(text):
    if not text:
        return ""
    words = text.lower().split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def format_list(items):
    """["a", "b", "c"] -> "a, b, and c"."""
    items = [str(item) for item in items]
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return f"{', '.join(items[:-1])}, and {items[-1]}"


def format_currency(value, currency="USD"):
    if isinstance(value, (int, float, Decimal)):
        symbol = "$" if currency == "USD" else f"{currency} "
        sign = "-" if value < 0 else ""
        return f"{sign}{symbol}{abs(value):,.2f}"
    return value


def format_datetime(value, format="%a, %b %d, %I:%M %p"):
    if isinstance(value, datetime):
        return value.strftime(format)
    return value


def format_time(value):
    return format_datetime(value, "%I:%M %p")


def make_slug(name):
    return slugify(name or "", lowercase=True)


def safe_redirect(target, default="/"):
    """Chỉ cho phép redirect nội bộ: "/path", không nhận "//host" hay URL tuyệt đối."""
    if not target or not isinstance(target, str):
        return default
    # Trình duyệt coi "\" như "/", nên "/\host" thành "//host"
    if "\\" in target:
        return default
    if not target.startswith("/") or target.startswith("//"):
        return default
    if urlparse(target).netloc:
        return default
    return target
