from app import create_app
from database_init import db

app = create_app()

if __name__ == "__main__":
    from seeder.seed import run_seeders

    with app.app_context():
        db.create_all()
        run_seeders(app)

    app.run(host="0.0.0.0", port=4000, debug=True)
