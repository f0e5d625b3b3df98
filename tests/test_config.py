import json

from notebolt.config import DEFAULT_CATEGORIES, DEFAULT_CONFIG, load_config


def test_missing_config_uses_defaults(tmp_path):
    cfg = load_config(tmp_path / "missing.json")

    assert cfg == DEFAULT_CONFIG
    assert tuple(cfg["categories"]) == DEFAULT_CATEGORIES


def test_config_merges_over_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"categories": ["Recipes"]}), encoding="utf-8")

    cfg = load_config(path)

    assert cfg["categories"] == ["Recipes"]
    assert cfg["load_samples"] is True


def test_unreadable_config_falls_back(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_config(path) == DEFAULT_CONFIG
    assert "using defaults" in caplog.text

    path.write_text("[1, 2]", encoding="utf-8")
    assert load_config(path) == DEFAULT_CONFIG


def test_ill_typed_keys_fall_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"categories": ["Work", 5], "load_samples": "yes", "log_level": "DEBUG"}),
        encoding="utf-8",
    )

    cfg = load_config(path)

    assert tuple(cfg["categories"]) == DEFAULT_CATEGORIES
    assert cfg["load_samples"] is True
    assert cfg["log_level"] == "DEBUG"
    assert "'categories'" in caplog.text
    assert "'load_samples'" in caplog.text


def test_string_categories_are_rejected(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"categories": "Work"}), encoding="utf-8")

    assert tuple(load_config(path)["categories"]) == DEFAULT_CATEGORIES


def test_returned_config_does_not_share_defaults(tmp_path):
    cfg = load_config(tmp_path / "missing.json")
    cfg["categories"].append("Recipes")

    assert "Recipes" not in DEFAULT_CONFIG["categories"]
    assert "Recipes" not in load_config(tmp_path / "missing.json")["categories"]
