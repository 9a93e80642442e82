"""
Costing Constants

Reference lists and limits shared by the recipe costing services.
"""

INGREDIENT_UNITS = ["kg", "g", "L", "ml", "pcs", "dozen", "pack", "box"]

INGREDIENT_CATEGORIES = [
    "Vegetables & Fruits",
    "Dry Staples",
    "Dairy and Dairy Alternatives",
    "Processed Ingredients",
    "Bakery and Bread",
    "Oils and Fats",
    "Beverages and Additives",
    "Frozen and Refrigerated Items",
    "Specialty Ingredients",
    "Packaging and Garnishes",
    "Raw Ingredients",
    "Miscellaneous",
]

RECIPE_CATEGORIES = [
    "Uncategorized",
    "Food",
    "Beverages",
    "Coffee",
    "Breakfast Items",
    "Sandwiches & Wraps",
    "Salads & Soups",
    "Main Courses",
    "Sides",
    "Desserts",
    "Snacks",
    "Specials",
    "Kids' Menu",
    "Combo Meals",
    "Bakery",
]

# Overhead percentage bounds and default
DEFAULT_OVERHEAD = 10.0
MIN_OVERHEAD = 0.0
MAX_OVERHEAD = 20.0

# Input bounds matching the Numeric column precision
MIN_COST = 0.01
MAX_COST = 999999
MIN_QUANTITY = 0.001
MAX_QUANTITY = 999999
MAX_SELLING_PRICE = 999999
MAX_MONTHLY_SALES = 999999

# Markup factor thresholds
TARGET_MARKUP_FACTOR = 4.0
MARKUP_WARNING_FACTOR = 3.5
MAX_MARKUP_FACTOR = 999999.0

# Sales periods expressed in months
PERIOD_MONTHS = {
    "monthly": 1,
    "quarterly": 3,
    "yearly": 12,
}

# Recipe list filter -> flag column
MENU_FLAGS = {
    "print": "print_menu_ready",
    "qr": "qr_menu_ready",
    "website": "website_menu_ready",
    "delivery": "available_for_delivery",
}
