# seeder/seed_user.py
import json
import os
from dotenv import load_dotenv

from service import user_service
from util.constant import ROLE

load_dotenv()


def seed_admin_user(app):
    with app.app_context():
        name = os.getenv("ADMIN_NAME", "Admin")
        email = os.getenv("ADMIN_EMAIL")
        raw_password = os.getenv("ADMIN_PASSWORD")

        if not email or not raw_password:
            print("❌ Missing ADMIN_EMAIL or ADMIN_PASSWORD in .env")
            return

        if not user_service.get_user_by_email(email):
            user_service.create_user(
                name=name, email=email, password=raw_password, role=ROLE.ADMIN
            )
            print(f"✅ Created admin user: {email}")
        else:
            print("⚠️ Admin user already exists, skipping.")


def seed_demo_users(app):
    """Seed customer/seller demo từ ./data/user.json (seller đã được duyệt sẵn)."""
    data_file = os.path.abspath(os.path.join(os.path.dirname(__file__), "./data/user.json"))
    password = os.getenv("DEMO_PASSWORD", "password")

    with open(data_file, "r", encoding="utf-8") as f:
        users = json.load(f)

    with app.app_context():
        added_count = 0
        for u in users:
            if user_service.get_user_by_email(u["email"]):
                continue
            if u["role"] == ROLE.SELLER.name:
                user_service.create_seller(
                    name=u["name"],
                    email=u["email"],
                    password=password,
                    seller_type=u["type"],
                    address=u.get("address"),
                    phone_no=u.get("phoneNo"),
                    approved=True,
                )
            else:
                user_service.create_user(
                    name=u["name"],
                    email=u["email"],
                    password=password,
                    role=ROLE[u["role"]],
                    address=u.get("address"),
                    phone_no=u.get("phoneNo"),
                )
            added_count += 1
        if added_count > 0:
            print(f"✅ Added {added_count} demo users.")
        else:
            print("⚠️ No new demo users to add (all exist).")
