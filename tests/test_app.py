from app import create_app


def _template_context(app):
    with app.test_request_context("/"):
        context = {}
        app.update_template_context(context)
        return context


def test_context_processor_reads_contact_email(monkeypatch):
    monkeypatch.setenv("APP_NAME", "Trader Test")
    monkeypatch.setenv("CONTACT_EMAIL", "help@campus.edu")
    app = create_app({"TESTING": True, "SQLALCHEMY_DATABASE_URI": "sqlite://"})

    context = _template_context(app)
    assert context["app_name"] == "Trader Test"
    assert context["contact_email"] == "help@campus.edu"


def test_context_processor_defaults(monkeypatch):
    monkeypatch.delenv("APP_NAME", raising=False)
    monkeypatch.delenv("CONTACT_EMAIL", raising=False)
    monkeypatch.setenv("EMAIL", "ignored@campus.edu")
    app = create_app({"TESTING": True, "SQLALCHEMY_DATABASE_URI": "sqlite://"})

    context = _template_context(app)
    assert context["app_name"] == "Campus Trader"
    assert context["contact_email"] == "support@campustrader.app"
