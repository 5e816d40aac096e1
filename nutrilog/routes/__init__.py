from .home_routes import home_bp
from .auth_routes import auth_bp
from .food_entry_routes import food_entries_bp
from .food_routes import food_bp
from .dashboard_routes import dashboard_bp

def register_routes(app):
    app.register_blueprint(home_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(food_entries_bp)
    app.register_blueprint(food_bp)
    app.register_blueprint(dashboard_bp)
