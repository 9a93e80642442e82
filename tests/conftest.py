import pytest

from app import create_app
from app.extensions import db


@pytest.fixture()
def app():
    app = create_app("config.TestingConfig")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_ingredient(client):
    def _make(name, cost, unit="kg", category="Dry Staples"):
        r = client.post("/api/ingredients", json={
            "name": name, "cost": cost, "unit": unit, "category": category
        })
        assert r.status_code == 201, r.data
        return r.get_json()
    return _make


@pytest.fixture()
def make_recipe(client):
    def _make(name, lines, **fields):
        body = {
            "name": name,
            "category": fields.pop("category", "Main Courses"),
            "selling_price": fields.pop("selling_price", 1100),
            "monthly_sales": fields.pop("monthly_sales", 30),
            "overhead": fields.pop("overhead", 10),
            "ingredients": [{"id": i, "quantity": q} for i, q in lines],
        }
        body.update(fields)
        r = client.post("/api/recipes", json=body)
        assert r.status_code == 201, r.data
        return r.get_json()
    return _make
