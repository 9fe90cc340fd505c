import json

import pytest

from archlab.core.catalog import CatalogLoadError, CatalogRegistry, default_registry, evaluate_level
from archlab.core.cost import architecture_cost, resource_cost
from archlab.core.graph.model import NodeType
from archlab.core.graph.validator import validate
from archlab.core.presets import make_node
from archlab.core.simulation_engine import simulate


def test_templates_are_listed_in_order():
    ids = [template.id for template in default_registry().list_templates()]
    assert ids == ["basic_load_balancer", "cached_web_app", "microservices"]


def test_bundled_templates_are_production_ready():
    for template in default_registry().list_templates():
        result = validate(template.initial_state, template.entry_point_id)
        assert result.errors == [], template.id


def test_cached_web_app_has_no_warnings():
    template = default_registry().get_template("cached_web_app")
    assert validate(template.initial_state, template.entry_point_id).warnings == []


def test_unknown_template():
    with pytest.raises(FileNotFoundError):
        default_registry().get_template("does-not-exist")
    with pytest.raises(FileNotFoundError):
        default_registry().get_template("../levels")


def test_levels_loaded():
    levels = default_registry().list_levels()
    assert [level.id for level in levels] == [1, 2, 3, 4, 5]
    assert levels[0].node_requirements[1].type == NodeType.APP
    assert levels[0].node_requirements[1].min_count == 2
    assert levels[4].achievements[0].pattern[-1] == NodeType.DR


def test_invalid_template_file(tmp_path):
    (tmp_path / "templates").mkdir()
    (tmp_path / "templates" / "broken.json").write_text(json.dumps({"name": "Broken", "complexity": "extreme"}))
    registry = CatalogRegistry(presets_dir=tmp_path)
    with pytest.raises(CatalogLoadError):
        registry.get_template("broken")


def test_unreadable_levels_file(tmp_path):
    (tmp_path / "levels.json").write_text("{not json")
    with pytest.raises(CatalogLoadError):
        CatalogRegistry(presets_dir=tmp_path).list_levels()


def test_resource_cost():
    cost = resource_cost(make_node("lb1", NodeType.LB).resources)
    assert cost["breakdown"]["networkBandwidth"] == pytest.approx(500)
    assert cost["total"] == pytest.approx(780)


def test_architecture_cost_skips_user_node():
    template = default_registry().get_template("basic_load_balancer")
    cost = architecture_cost(template.initial_state)
    assert "user" not in cost["nodes"]
    assert cost["monthly"] == pytest.approx(780 + 2 * 680 + 880)


def test_level_one_completed_without_achievement():
    registry = default_registry()
    template = registry.get_template("basic_load_balancer")
    state, metrics = simulate(template.initial_state, 1000)
    result = evaluate_level(registry.get_level(1), state, metrics)

    assert result["complete"] is True
    assert result["throughput"] == 1000
    assert result["cost"] == pytest.approx(3020)
    assert result["unlockedAchievements"] == []
    assert result["points"] == 100


def test_level_one_achievement_unlocked_at_higher_load():
    registry = default_registry()
    template = registry.get_template("basic_load_balancer")
    state, metrics = simulate(template.initial_state, 5000)
    result = evaluate_level(registry.get_level(1), state, metrics)

    assert result["complete"] is True
    assert result["unlockedAchievements"] == ["l1-efficient"]
    assert result["achievementPoints"] == {"l1-efficient": 50}
    assert result["points"] == 150


def test_level_two_requirements_not_met():
    registry = default_registry()
    template = registry.get_template("basic_load_balancer")
    state, metrics = simulate(template.initial_state, 5000)
    result = evaluate_level(registry.get_level(2), state, metrics)

    assert result["complete"] is False
    assert result["costMet"] is True
    met = {item["type"]: item["met"] for item in result["nodeRequirements"]}
    assert met == {"lb": False, "app": False, "cache": False, "db": False}


def test_throughput_capped_by_ceiling():
    registry = default_registry()
    template = registry.get_template("basic_load_balancer")
    state, metrics = simulate(template.initial_state, 50000)
    result = evaluate_level(registry.get_level(1), state, metrics)

    assert result["throughput"] == pytest.approx(metrics.max_achievable_throughput)
