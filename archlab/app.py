from __future__ import annotations

import logging

from flask import Flask

from archlab.api import register_routes
from archlab.config import Config
from archlab.db.session import init_db


def create_app() -> Flask:
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app = Flask(__name__)
    register_routes(app)
    init_db()
    return app


if __name__ == "__main__":
    create_app().run(debug=True)
