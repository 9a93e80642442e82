from datetime import datetime
from app.extensions import db

class Recipe(db.Model):
    __tablename__ = "recipes"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    category = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text)
    preparation_steps = db.Column(db.Text)
    cooking_method = db.Column(db.Text)
    plating_instructions = db.Column(db.Text)
    chefs_notes = db.Column(db.Text)

    selling_price = db.Column(db.Numeric(10,2), nullable=False, default=0)
    monthly_sales = db.Column(db.Integer, nullable=False, default=0)
    overhead = db.Column(db.Numeric(5,2), nullable=False, default=10)

    # Menu readiness
    print_menu_ready = db.Column(db.Boolean, nullable=False, default=False)
    qr_menu_ready = db.Column(db.Boolean, nullable=False, default=False)
    website_menu_ready = db.Column(db.Boolean, nullable=False, default=False)
    available_for_delivery = db.Column(db.Boolean, nullable=False, default=False)
    image_url = db.Column(db.Text, nullable=True)
    delivery_image_url = db.Column(db.Text, nullable=True)

    # Derived from ingredients, overhead, selling_price and monthly_sales
    total_cost = db.Column(db.Numeric(12,2), nullable=False, default=0)
    profit_margin = db.Column(db.Numeric(10,2), nullable=False, default=0)
    monthly_revenue = db.Column(db.Numeric(14,2), nullable=False, default=0)
    monthly_profit = db.Column(db.Numeric(14,2), nullable=False, default=0)
    markup_factor = db.Column(db.Numeric(12,2), nullable=False, default=0)

    created_at = db.Column(db.DateTime, server_default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
