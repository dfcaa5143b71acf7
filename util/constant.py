from enum import Enum


class ROLE(Enum):
    CUSTOMER = "CUSTOMER"
    SELLER = "SELLER"
    ADMIN = "ADMIN"


class ORDER_STATUS(Enum):
    PENDING = (0, "Pending", "gray")
    CONFIRMED = (1, "Confirmed", "blue")
    IN_TRANSIT = (2, "In Transit", "yellow")
    DELIVERED = (3, "Delivered", "green")
    CANCELLED = (4, "Cancelled", "red")

    def __init__(self, order, label, color):
        self.order = order
        self.label = label
        self.color = color

    @property
    def is_terminal(self):
        return self in (ORDER_STATUS.DELIVERED, ORDER_STATUS.CANCELLED)


class ORDER_TYPE(Enum):
    DELIVERY = "DELIVERY"
    PICKUP = "PICKUP"


class PAYMENT_METHOD(Enum):
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    CASH = "CASH"


class SELLER_TYPE(Enum):
    FACULTY = "Faculty"
    STUDENT = "Student"


CATEGORIES = (
    "Books",
    "Electronics",
    "Kitchen",
    "Supplies",
    "Transport",
    "Clothing",
    "Furniture",
    "Other",
)

MIN_PASSWORD_LENGTH = 8
REMEMBER_ME_DAYS = 30
# Giới hạn giá / tồn kho, giữ tổng tiền trong tầm chính xác của Decimal
MAX_PRICE = 1_000_000
MAX_QUANTITY = 100_000
NOT_APPROVED_MESSAGE = "Seller account not approved."
INVALID_LOGIN_MESSAGE = "Invalid username or password"
