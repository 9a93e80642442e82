import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from app.models.recipe import Recipe
from app.models.recipe_ingredient import RecipeIngredient
from app.services import recipe_service


@pytest.fixture()
def pantry(make_ingredient):
    return {
        "beef": make_ingredient("Wagyu Beef", 100, category="Frozen and Refrigerated Items")["id"],
        "butter": make_ingredient("French Butter", 50, category="Dairy and Dairy Alternatives")["id"],
        "salt": make_ingredient("Sea Salt", 2)["id"],
    }


def recipe_body(name, lines, **extra):
    body = {
        "name": name,
        "category": "Main Courses",
        "selling_price": 1100,
        "monthly_sales": 30,
        "overhead": 10,
        "ingredients": [{"id": i, "quantity": q} for i, q in lines],
    }
    body.update(extra)
    return body


def line_count(recipe_id):
    return RecipeIngredient.query.filter_by(recipe_id=recipe_id).count()


def test_create_and_read_back(client, pantry):
    body = recipe_body(
        "Steak Frites",
        [(pantry["beef"], 2), (pantry["butter"], 1)],
        description="Seared and rested",
        chefs_notes="Rest 5 minutes",
        qr_menu_ready=True,
    )
    r = client.post("/api/recipes", json=body)
    assert r.status_code == 201
    created = r.get_json()

    assert created["ingredients_cost"] == 250.0
    assert created["total_cost"] == 275.0
    assert created["markup_factor"] == 4.0
    assert created["profit_margin"] == 75.0
    assert created["monthly_revenue"] == 33000.0
    assert created["monthly_profit"] == 24750.0
    assert created["is_complete"] is True

    r = client.get(f"/api/recipes/{created['id']}")
    assert r.status_code == 200
    data = r.get_json()
    assert data["name"] == "Steak Frites"
    assert data["description"] == "Seared and rested"
    assert data["selling_price"] == 1100.0
    assert data["monthly_sales"] == 30
    assert data["overhead"] == 10.0
    assert data["qr_menu_ready"] is True
    assert data["print_menu_ready"] is False
    lines = {line["id"]: line["quantity"] for line in data["ingredients"]}
    assert lines == {pantry["beef"]: 2.0, pantry["butter"]: 1.0}
    assert data["ingredients"][0]["name"] == "French Butter"


def test_client_derived_fields_are_ignored(client, pantry):
    body = recipe_body("Steak", [(pantry["beef"], 2), (pantry["butter"], 1)],
                       total_cost=1, markup_factor=99, monthly_revenue=5)
    r = client.post("/api/recipes", json=body)
    assert r.status_code == 201
    data = r.get_json()
    assert data["total_cost"] == 275.0
    assert data["markup_factor"] == 4.0
    assert data["monthly_revenue"] == 33000.0


def test_string_inputs_and_sales_alias(client, pantry):
    body = recipe_body("Butter Toast", [(pantry["butter"], "0.5")],
                       selling_price="100", overhead="", sales="12")
    del body["monthly_sales"]
    r = client.post("/api/recipes", json=body)
    assert r.status_code == 201
    data = r.get_json()
    assert data["monthly_sales"] == 12
    assert data["overhead"] == 10.0
    assert data["total_cost"] == 27.5


def test_empty_ingredient_list_is_rejected(client, pantry):
    r = client.post("/api/recipes", json=recipe_body("Air", []))
    assert r.status_code == 400
    body = r.get_json()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    assert "ingredients" in body["details"]

    assert client.get("/api/recipes").get_json() == []


def test_missing_required_fields(client, pantry):
    r = client.post("/api/recipes", json={"ingredients": [{"id": pantry["salt"], "quantity": 1}]})
    assert r.status_code == 400
    assert {"name", "category"} <= set(r.get_json()["error"]["details"])


@pytest.mark.parametrize("extra", [
    {"overhead": 25},
    {"overhead": -1},
    {"selling_price": -5},
    {"monthly_sales": -1},
    {"monthly_sales": 1000000},
    {"selling_price": 1000000},
    {"selling_price": "nan"},
])
def test_out_of_range_numbers(client, pantry, extra):
    r = client.post("/api/recipes", json=recipe_body("Salted", [(pantry["salt"], 1)], **extra))
    assert r.status_code == 400


def test_bad_ingredient_lines(client, pantry):
    r = client.post("/api/recipes", json=recipe_body("Ghost", [(9999, 1)]))
    assert r.status_code == 400
    assert r.get_json()["error"]["code"] == "VALIDATION_ERROR"

    r = client.post("/api/recipes", json=recipe_body("Twice", [(pantry["salt"], 1), (pantry["salt"], 2)]))
    assert r.status_code == 400

    r = client.post("/api/recipes", json=recipe_body("Nothing", [(pantry["salt"], 0)]))
    assert r.status_code == 400

    # Rounds to zero at the stored precision of three places
    r = client.post("/api/recipes", json=recipe_body("Pinch", [(pantry["salt"], 0.0004)]))
    assert r.status_code == 400

    r = client.post("/api/recipes", json=recipe_body("Mountain", [(pantry["salt"], 1000000)]))
    assert r.status_code == 400

    assert client.get("/api/recipes").get_json() == []


def test_duplicate_recipe_name(client, pantry):
    client.post("/api/recipes", json=recipe_body("Steak", [(pantry["beef"], 1)]))
    r = client.post("/api/recipes", json=recipe_body("STEAK", [(pantry["beef"], 1)]))
    assert r.status_code == 409
    assert r.get_json()["error"]["code"] == "DUPLICATE_ENTRY"


def test_update_replaces_ingredient_list(client, app, pantry):
    r = client.post("/api/recipes", json=recipe_body("Steak", [(pantry["beef"], 2)]))
    recipe_id = r.get_json()["id"]

    r = client.put(f"/api/recipes/{recipe_id}", json=recipe_body(
        "Steak au Beurre", [(pantry["butter"], 3)], selling_price=330
    ))
    assert r.status_code == 200
    data = r.get_json()
    assert data["name"] == "Steak au Beurre"
    assert [(i["id"], i["quantity"]) for i in data["ingredients"]] == [(pantry["butter"], 3.0)]
    assert data["total_cost"] == 165.0
    assert data["markup_factor"] == 2.0

    assert line_count(recipe_id) == 1


def test_update_keeps_own_name(client, pantry):
    r = client.post("/api/recipes", json=recipe_body("Steak", [(pantry["beef"], 2)]))
    recipe_id = r.get_json()["id"]

    r = client.put(f"/api/recipes/{recipe_id}", json=recipe_body("steak", [(pantry["beef"], 3)]))
    assert r.status_code == 200


def test_update_missing_recipe(client, pantry):
    r = client.put("/api/recipes/999", json=recipe_body("Nope", [(pantry["salt"], 1)]))
    assert r.status_code == 404
    assert r.get_json()["error"]["code"] == "NOT_FOUND"


def test_delete_removes_recipe_and_lines(client, app, pantry):
    r = client.post("/api/recipes", json=recipe_body("Steak", [(pantry["beef"], 2), (pantry["salt"], 1)]))
    recipe_id = r.get_json()["id"]
    assert line_count(recipe_id) == 2

    r = client.delete(f"/api/recipes/{recipe_id}")
    assert r.status_code == 200
    assert r.get_json() == {"success": True}

    r = client.get(f"/api/recipes/{recipe_id}")
    assert r.status_code == 404
    assert line_count(recipe_id) == 0

    r = client.delete(f"/api/recipes/{recipe_id}")
    assert r.status_code == 404

    # Ingredients survive and can now be deleted
    r = client.delete(f"/api/ingredients/{pantry['salt']}")
    assert r.status_code == 200


def test_failed_create_leaves_nothing_behind(client, app, pantry, monkeypatch):
    def boom(recipe_id, lines):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(recipe_service, "_insert_lines", boom)

    r = client.post("/api/recipes", json=recipe_body("Steak", [(pantry["beef"], 2)]))
    assert r.status_code == 500
    assert r.get_json()["error"]["code"] == "DATABASE_ERROR"

    assert Recipe.query.count() == 0
    assert RecipeIngredient.query.count() == 0


def test_failed_update_keeps_previous_state(client, app, pantry, monkeypatch):
    r = client.post("/api/recipes", json=recipe_body("Steak", [(pantry["beef"], 2)]))
    recipe_id = r.get_json()["id"]

    def boom(recipe_id, lines):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(recipe_service, "_insert_lines", boom)

    r = client.put(f"/api/recipes/{recipe_id}", json=recipe_body("Renamed", [(pantry["salt"], 1)]))
    assert r.status_code == 500
    monkeypatch.undo()

    data = client.get(f"/api/recipes/{recipe_id}").get_json()
    assert data["name"] == "Steak"
    assert [i["id"] for i in data["ingredients"]] == [pantry["beef"]]


def test_list_order_and_filters(client, pantry):
    client.post("/api/recipes", json=recipe_body(
        "Beef Stew", [(pantry["beef"], 1)], chefs_notes="slow cook", print_menu_ready=True))
    client.post("/api/recipes", json=recipe_body(
        "Affogato", [(pantry["butter"], 1)], category="Desserts", qr_menu_ready=True))
    r = client.post("/api/recipes", json=recipe_body("Consomme", [(pantry["salt"], 1)]))
    consomme_id = r.get_json()["id"]

    names = [x["name"] for x in client.get("/api/recipes").get_json()]
    assert names == ["Affogato", "Beef Stew", "Consomme"]

    client.put(f"/api/recipes/{consomme_id}", json=recipe_body("Consomme", [(pantry["salt"], 2)]))
    names = [x["name"] for x in client.get("/api/recipes?order=updated").get_json()]
    assert names[0] == "Consomme"

    r = client.get("/api/recipes?category=Desserts")
    assert [x["name"] for x in r.get_json()] == ["Affogato"]

    r = client.get("/api/recipes?search=SLOW")
    assert [x["name"] for x in r.get_json()] == ["Beef Stew"]

    r = client.get("/api/recipes?menu=qr")
    assert [x["name"] for x in r.get_json()] == ["Affogato"]

    assert client.get("/api/recipes?order=price").status_code == 400
    assert client.get("/api/recipes?menu=fax").status_code == 400


def test_sales_import(client, pantry):
    r = client.post("/api/recipes", json=recipe_body("Steak", [(pantry["beef"], 2), (pantry["butter"], 1)]))
    recipe_id = r.get_json()["id"]

    r = client.post("/api/recipes/sales-import", json={"recipes": [
        {"name": "steak", "sales": 50},
        {"name": "Unicorn Pie", "sales": 5},
    ]})
    assert r.status_code == 200
    body = r.get_json()
    assert body["success"] is True
    assert body["results"]["updated"] == [{"id": recipe_id, "name": "Steak", "sales": 50}]
    assert body["results"]["failed"] == [{"name": "Unicorn Pie", "error": "Recipe not found"}]

    data = client.get(f"/api/recipes/{recipe_id}").get_json()
    assert data["monthly_sales"] == 50
    assert data["monthly_revenue"] == 55000.0

    r = client.post("/api/recipes/sales-import", json={"recipes": "nope"})
    assert r.status_code == 400
