# tests/test_prompt_engine.py
import pytest
from jinja2 import UndefinedError

from campusflow.prompts.registry import PromptRegistry
from campusflow.utils.templating import render_template


def test_render_template_joins_crowd_levels():
    out = render_template("crowdLevel ({{ levels | join('/') }})", {"levels": ["Low", "Medium", "High"]})
    assert out == "crowdLevel (Low/Medium/High)"


def test_render_template_strict_undefined():
    with pytest.raises(UndefinedError):
        render_template("Hello {{ name }}", {})


def test_packaged_personas():
    reg = PromptRegistry()
    crowd = reg.get_system_message("crowd")
    demand = reg.get_system_message("demand")
    assert "JSON" in crowd
    assert "comma-separated" in demand
    assert reg.get_system_message("unknown-agent") == reg.get_system_message("default")


def test_registry_override_dir_personas(tmp_path):
    (tmp_path / "system_messages.yaml").write_text("default: 'Be brief'\ncrowd:\n", encoding="utf-8")
    reg = PromptRegistry(base_dir=str(tmp_path))
    assert reg.get_system_message("crowd") == ""
    assert reg.get_system_message("demand") == "Be brief"


def test_registry_picks_latest_version(tmp_path):
    (tmp_path / "prompt_db.jsonl").write_text(
        '{"id": "p", "version": "1.9.0", "purpose": "", "template": "old {{ x }}"}\n'
        "\n"
        '{"id": "p", "version": "1.10.0", "purpose": "", "template": "new {{ x }}"}\n',
        encoding="utf-8",
    )
    reg = PromptRegistry(base_dir=str(tmp_path))
    assert reg.get_prompt("p").version == "1.10.0"
    assert reg.render("p", {"x": 1}) == "new 1"
    assert reg.render("p", {"x": 1}, version="1.9.0") == "old 1"


def test_registry_missing_prompt(tmp_path):
    (tmp_path / "prompt_db.jsonl").write_text("", encoding="utf-8")
    reg = PromptRegistry(base_dir=str(tmp_path))
    with pytest.raises(KeyError):
        reg.get_prompt("nope")


def test_packaged_prompts_render():
    reg = PromptRegistry()
    text = reg.render("demand_forecast", {"day": "Friday", "count": 5})
    assert text == (
        "List 5 high-demand food items for a university canteen on Friday considering "
        "student preferences and typical college schedules. Return as a plain comma-separated list."
    )
    assert reg.get_system_message("crowd")
