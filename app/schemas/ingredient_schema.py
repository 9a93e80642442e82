from marshmallow import Schema, fields, validate, pre_load, EXCLUDE
from app.services.costing_constants import INGREDIENT_UNITS, INGREDIENT_CATEGORIES, MIN_COST, MAX_COST

class IngredientSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    cost = fields.Float(required=True, validate=validate.Range(min=MIN_COST, max=MAX_COST))
    unit = fields.Str(required=True, validate=validate.OneOf(INGREDIENT_UNITS))
    category = fields.Str(required=True, validate=validate.OneOf(INGREDIENT_CATEGORIES))
    supplier = fields.Str(allow_none=True, load_default=None)

    @pre_load
    def strip_name(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get("name"), str):
            data = dict(data, name=data["name"].strip())
        return data
