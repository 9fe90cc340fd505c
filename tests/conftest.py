import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest

from archlab.app import create_app


@pytest.fixture()
def client():
    app = create_app()
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def reference_graph():
    return {
        "nodes": [
            {"id": "user", "type": "user"},
            {"id": "lb1", "type": "lb"},
            {"id": "app1", "type": "app"},
            {"id": "app2", "type": "app"},
            {"id": "db1", "type": "db"},
        ],
        "edges": [
            {"id": "e1", "source": "user", "target": "lb1"},
            {"id": "e2", "source": "lb1", "target": "app1"},
            {"id": "e3", "source": "lb1", "target": "app2"},
            {"id": "e4", "source": "app1", "target": "db1"},
            {"id": "e5", "source": "app2", "target": "db1"},
        ],
    }
