from app import create_app
from app.extensions import db
from app.models.ingredient import Ingredient
from app.models.recipe import Recipe
from app.services.ingredient_service import create_ingredient
from app.services.recipe_service import create_recipe

INGREDIENTS = [
    ("Single Origin Arabica Beans", 1200, "kg", "Raw Ingredients"),
    ("Organic Oat Milk", 180, "L", "Dairy and Dairy Alternatives"),
    ("Vanilla Bean Pods", 28, "g", "Specialty Ingredients"),
    ("Raw Honey", 850, "kg", "Raw Ingredients"),
    ("Norwegian Salmon", 2200, "kg", "Frozen and Refrigerated Items"),
    ("Wagyu Beef", 8500, "kg", "Frozen and Refrigerated Items"),
    ("Truffle Oil", 7.2, "ml", "Oils and Fats"),
    ("Saffron Threads", 450, "g", "Specialty Ingredients"),
    ("Aged Parmesan", 1600, "kg", "Dairy and Dairy Alternatives"),
    ("French Butter", 950, "kg", "Dairy and Dairy Alternatives"),
    ("Belgian Dark Chocolate", 1200, "kg", "Specialty Ingredients"),
    ("Almond Flour", 850, "kg", "Dry Staples"),
]

# name, category, selling price, monthly sales, [(ingredient, quantity)]
RECIPES = [
    ("Signature Vanilla Bean Latte", "Coffee", 450, 1200,
     [("Single Origin Arabica Beans", 0.018), ("Organic Oat Milk", 0.2), ("Vanilla Bean Pods", 0.2)]),
    ("Honey Saffron Tea", "Beverages", 380, 800,
     [("Raw Honey", 0.02), ("Saffron Threads", 0.1)]),
    ("Truffle Wagyu Steak", "Main Courses", 4500, 200,
     [("Wagyu Beef", 0.2), ("Truffle Oil", 15), ("Aged Parmesan", 0.03)]),
    ("Saffron Salmon", "Main Courses", 2400, 300,
     [("Norwegian Salmon", 0.25), ("Saffron Threads", 0.2), ("French Butter", 0.02)]),
    ("Chocolate Almond Tart", "Bakery", 650, 500,
     [("Belgian Dark Chocolate", 0.08), ("Almond Flour", 0.06), ("French Butter", 0.04)]),
]

app = create_app()

with app.app_context():
    # ensure tables exist (non-destructive: won't alter existing columns)
    db.create_all()

    for name, cost, unit, category in INGREDIENTS:
        if not Ingredient.query.filter_by(name=name).first():
            create_ingredient({"name": name, "cost": cost, "unit": unit, "category": category})
            print(f"Added ingredient: {name}")

    ids = {ing.name: ing.id for ing in Ingredient.query.all()}

    for name, category, price, sales, lines in RECIPES:
        if Recipe.query.filter_by(name=name).first():
            continue
        recipe = create_recipe({
            "name": name,
            "category": category,
            "selling_price": price,
            "monthly_sales": sales,
            "overhead": 10,
            "ingredients": [{"id": ids[ing], "quantity": qty} for ing, qty in lines],
        })
        print(f"Added recipe: {name} (markup {recipe['markup_factor']}x)")

    print("Seed completed.")
