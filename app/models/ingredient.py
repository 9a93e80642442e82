from app.extensions import db

class Ingredient(db.Model):
    __tablename__ = "ingredients"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), unique=True, nullable=False)
    cost = db.Column(db.Numeric(10,2), nullable=False)
    unit = db.Column(db.String(50), nullable=False)
    category = db.Column(db.String(100), nullable=True)
    supplier = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now(), nullable=False)
