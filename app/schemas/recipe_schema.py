from marshmallow import Schema, fields, validate, validates, pre_load, ValidationError, EXCLUDE
from app.services.costing_constants import (
    DEFAULT_OVERHEAD, MIN_OVERHEAD, MAX_OVERHEAD, MIN_QUANTITY, MAX_QUANTITY,
    MAX_SELLING_PRICE, MAX_MONTHLY_SALES
)

TEXT_FIELDS = ("name", "category", "description", "preparation_steps",
               "cooking_method", "plating_instructions", "chefs_notes")

class RecipeIngredientLineSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Int(required=True)
    quantity = fields.Float(required=True, validate=validate.Range(min=MIN_QUANTITY, max=MAX_QUANTITY))

class RecipeSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    category = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    description = fields.Str(allow_none=True, load_default="")
    preparation_steps = fields.Str(allow_none=True, load_default="")
    cooking_method = fields.Str(allow_none=True, load_default="")
    plating_instructions = fields.Str(allow_none=True, load_default="")
    chefs_notes = fields.Str(allow_none=True, load_default="")

    selling_price = fields.Float(load_default=0.0, validate=validate.Range(min=0, max=MAX_SELLING_PRICE))
    monthly_sales = fields.Int(load_default=0, validate=validate.Range(min=0, max=MAX_MONTHLY_SALES))
    overhead = fields.Float(load_default=DEFAULT_OVERHEAD, validate=validate.Range(min=MIN_OVERHEAD, max=MAX_OVERHEAD))

    print_menu_ready = fields.Bool(load_default=False)
    qr_menu_ready = fields.Bool(load_default=False)
    website_menu_ready = fields.Bool(load_default=False)
    available_for_delivery = fields.Bool(load_default=False)
    image_url = fields.Str(allow_none=True, load_default=None)
    delivery_image_url = fields.Str(allow_none=True, load_default=None)

    ingredients = fields.List(fields.Nested(RecipeIngredientLineSchema), required=True)

    @pre_load
    def normalize(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        # "sales" is the older name for monthly_sales
        if "monthly_sales" not in data and "sales" in data:
            data["monthly_sales"] = data["sales"]
        for key in TEXT_FIELDS:
            if isinstance(data.get(key), str):
                data[key] = data[key].strip()
        # Blank numeric inputs from forms fall back to defaults
        for key in ("selling_price", "monthly_sales", "overhead"):
            if data.get(key) in ("", None):
                data.pop(key, None)
        return data

    @validates("ingredients")
    def validate_ingredients(self, value, **kwargs):
        if not value:
            raise ValidationError("At least one ingredient is required")
        ids = [line["id"] for line in value]
        if len(ids) != len(set(ids)):
            raise ValidationError("Each ingredient may only appear once")

class SalesImportItemSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1))
    sales = fields.Int(required=True, validate=validate.Range(min=0, max=MAX_MONTHLY_SALES))

class SalesImportSchema(Schema):
    recipes = fields.List(fields.Nested(SalesImportItemSchema), required=True)
