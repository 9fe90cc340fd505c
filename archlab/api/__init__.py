from __future__ import annotations


def register_routes(app) -> None:
    from .routes.catalog_routes import catalog_routes
    from .routes.progress_routes import progress_routes
    from .routes.simulation_routes import simulation_routes

    app.register_blueprint(catalog_routes)
    app.register_blueprint(simulation_routes)
    app.register_blueprint(progress_routes)
