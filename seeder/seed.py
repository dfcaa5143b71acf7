# seed.py
from database_init import db
from seeder.seed_user import seed_admin_user, seed_demo_users
from seeder.seed_product import seed_product
from seeder.seed_order import seed_orders


def run_seeders(app):
    seed_admin_user(app)
    seed_demo_users(app)
    seed_product(app)
    seed_orders(app)


if __name__ == "__main__":
    from app import create_app

    app = create_app()
    with app.app_context():
        db.create_all()
        run_seeders(app)
