"""Tests for the application factory."""


class TestCreateApp:
    def test_templates_are_found_from_checkout(self, app) -> None:
        for name in ("base.html", "ranking.html", "comparing.html", "submitted.html"):
            assert app.jinja_env.get_template(name) is not None

    def test_blueprints_registered(self, app) -> None:
        assert {"main", "api"} <= set(app.blueprints)
