from .home_routes import home_bp
from .ingredient_routes import bp as ingredient_bp
from .recipe_routes import recipe_bp
from .analytics_routes import analytics_bp

def register_routes(app):
    app.register_blueprint(home_bp)
    app.register_blueprint(ingredient_bp)
    app.register_blueprint(recipe_bp)
    app.register_blueprint(analytics_bp)
