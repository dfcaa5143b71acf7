from models.order import Order
from models.product import Product
from service import order_service, user_service


def seed_orders(app):
    """Một đơn demo gồm sản phẩm của hai seller, bỏ qua nếu khách đã có đơn."""
    with app.app_context():
        customer = user_service.get_user_by_email("user@app.com")
        if customer is None:
            print("⚠️ Demo customer missing, skipping orders.")
            return
        if Order.query.filter_by(user_id=customer.id).first():
            print("⚠️ Demo order already exists, skipping.")
            return

        items = []
        for slug in ("calculus-101-textbook", "stationary-set"):
            product = Product.query.filter_by(slug=slug, approved=True).first()
            if product is not None and product.quantity > 0:
                items.append({"productId": product.id, "quantity": 1})
        if not items:
            print("⚠️ No products available for demo order.")
            return

        order = order_service.create_order(
            customer,
            items=items,
            order_type="DELIVERY",
            payment_method="CASH",
            address=customer.address,
        )
        print(f"✅ Created demo order #{order.id}.")
