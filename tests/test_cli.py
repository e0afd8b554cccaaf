import json

import pytest

from slide_layout import cli
from slide_layout.config import LOG_LEVEL_ENV, RULES_FILE_ENV

from tests.content_fixtures import CHART_SLIDE, COMPARISON_TABLE_SLIDE, bullet_slide


@pytest.fixture
def run_cli(tmp_path, monkeypatch, capsys):
    for name in (RULES_FILE_ENV, LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("", encoding="utf-8")

    def _run(*args):
        cli.main(["--env-file", str(env_file), *args])
        return json.loads(capsys.readouterr().out)

    return _run


@pytest.fixture
def content_file(tmp_path):
    def _write(payload, name="content.json"):
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


def test_recommend_single_slide(run_cli, content_file):
    result = run_cli("recommend", str(content_file(CHART_SLIDE)))

    assert result["primary"]["layout_id"] == "chart"
    assert result["signals"]["has_charts"] is True
    assert any(item["type"] == "accessibility" for item in result["optimizations"])


def test_recommend_list_of_slides(run_cli, content_file):
    result = run_cli("recommend", str(content_file([{}, bullet_slide(8)])))

    assert [item["primary"]["layout_id"] for item in result] == ["title-bullets", "title-bullets"]
    assert result[0]["primary"]["reasoning"] == ["Default fallback layout"]


def test_visualize(run_cli, content_file):
    result = run_cli("visualize", str(content_file([CHART_SLIDE, COMPARISON_TABLE_SLIDE])))

    assert [item["visualization"]["type"] for item in result] == ["chart", "table"]
    assert all(0 <= item["priority"] <= 100 for item in result)


def test_rules_listing_honours_tuning_file(run_cli, content_file):
    tuning = content_file({"disabled": ["quote-content"]}, name="rules.json")

    rule_ids = [rule["id"] for rule in run_cli("--rules", str(tuning), "rules")]

    assert "quote-content" not in rule_ids
    assert "bullet-heavy" in rule_ids


def test_deck_command(run_cli, tmp_path):
    pytest.importorskip("pptx")
    from pptx import Presentation

    prs = Presentation()
    slide = prs.slides.add_slide(prs.slide_layouts[1])
    slide.shapes.title.text = "Agenda"
    body = slide.placeholders[1].text_frame
    body.text = "Welcome"
    body.add_paragraph().text = "Results"
    path = tmp_path / "draft.pptx"
    prs.save(str(path))

    result = run_cli("deck", str(path))

    assert result[0]["slide"] == 1
    assert result[0]["title"] == "Agenda"
    assert "primary" in result[0]["layout"]
    assert result[0]["visualization"]["type"] == "text"


def test_missing_content_file_exits(run_cli, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        run_cli("recommend", str(tmp_path / "nope.json"))

    assert "Content file not found" in str(excinfo.value)


def test_invalid_json_exits(run_cli, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{broken", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        run_cli("visualize", str(path))

    assert "Invalid JSON input" in str(excinfo.value)


def test_bad_tuning_file_exits(run_cli, content_file):
    tuning = content_file({"weights": {"unknown": 1.0}}, name="rules.json")

    with pytest.raises(SystemExit) as excinfo:
        run_cli("--rules", str(tuning), "rules")

    assert "rule 'unknown': weight override for unknown rule" in str(excinfo.value)
