import json
import os
from database_init import db
from models.product import Product
from service import user_service
from util.misc import make_slug


def seed_product(app):
    """Seed all products from ./data/product.json into database."""
    data_file = os.path.abspath(
        os.path.join(os.path.dirname(__file__), "./data/product.json")
    )

    with open(data_file, "r", encoding="utf-8") as f:
        products = json.load(f)

    with app.app_context():
        added_count = 0
        for prod in products:
            seller = user_service.get_user_by_email(prod["sellerEmail"])
            if seller is None:
                print(f"⚠️ Seller {prod['sellerEmail']} not found, skip {prod['name']}")
                continue
            slug = make_slug(prod["name"])
            # Kiểm tra nếu sản phẩm đã tồn tại (theo slug + seller)
            if Product.query.filter_by(slug=slug, seller_id=seller.id).first():
                continue
            product = Product(
                name=prod["name"],
                description=prod["description"],
                image=prod["image"],
                price=prod["price"],
                commission=prod.get("commission", 0),
                quantity=prod["quantity"],
                category=prod["category"],
                approved=True,
                slug=slug,
                seller_id=seller.id,
            )
            db.session.add(product)
            added_count += 1
        if added_count > 0:
            db.session.commit()
            print(f"✅ Added {added_count} new products.")
        else:
            print("⚠️ No new products to add (all exist).")
