from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli.app import app

CARDS = [
    {
        "type": "AdaptiveCard",
        "content": [
            {"type": "TextBlock", "text": "Critical outage", "weight": "bolder", "boundingBox": [0, 0, 100, 20]}
        ],
    },
    {
        "type": "AdaptiveCard",
        "content": [
            {"type": "Input.Text", "id": "note", "value": "ok"},
            {"type": "Input.ChoiceSet", "id": "tags", "isMultiSelect": True, "value": "a;b"},
        ],
    },
]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cards_file(tmp_path: Path) -> Path:
    path = tmp_path / "cards.json"
    path.write_text(json.dumps(CARDS), encoding="utf-8")
    return path


def test_augment_outputs_json(runner: CliRunner, cards_file: Path) -> None:
    result = runner.invoke(app, ["augment", str(cards_file)])
    assert result.exit_code == 0, result.output

    payload = json.loads(result.stdout)
    assert payload["document"]["content"][0]["id"] == "hero_summary"
    assert [item["layoutType"] for item in payload["descriptors"]] == ["text", "form"]
    assert payload["inputDefaults"]["note"] == "ok"
    assert payload["coordinateRecords"][0]["path"] == "content[1].items[0]"


def test_augment_options_and_output_file(runner: CliRunner, cards_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "out" / "result.json"
    options_file = tmp_path / "options.yaml"
    options_file.write_text("value_separator: ';'\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "augment",
            str(cards_file),
            "--options-file",
            str(options_file),
            "--set",
            "hero=false",
            "--no-json",
            "--output",
            str(output),
        ],
    )
    assert result.exit_code == 0, result.output
    assert "卡片摘要" in result.stdout

    written = json.loads(output.read_text(encoding="utf-8"))
    assert written["inputDefaults"]["tags"] == ["a", "b"]
    assert written["document"]["content"][0]["id"] == "section_0"


def test_augment_rejects_unknown_option(runner: CliRunner, cards_file: Path) -> None:
    result = runner.invoke(app, ["augment", str(cards_file), "--options", '{"depth": 3}'])
    assert result.exit_code != 0


def test_augment_reads_stdin_and_repairs_prose(runner: CliRunner) -> None:
    text = "Here you go:\n```json\n" + json.dumps(CARDS[1]) + "\n```"
    result = runner.invoke(app, ["augment", "-"], input=text)
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["inputDefaults"]["note"] == "ok"


def test_missing_input_file(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["augment", str(tmp_path / "missing.json")])
    assert result.exit_code != 0


def test_augment_missing_tables_is_usage_error(runner: CliRunner, cards_file: Path, tmp_path: Path) -> None:
    missing = tmp_path / "nope.yaml"
    result = runner.invoke(app, ["augment", str(cards_file), "--set", f"presentation_tables={missing}"])
    assert result.exit_code == 2
    assert isinstance(result.exception, SystemExit)


def test_inputs_rejects_empty_separator(runner: CliRunner, cards_file: Path) -> None:
    result = runner.invoke(app, ["inputs", str(cards_file), "--separator", ""])
    assert result.exit_code == 2
    assert isinstance(result.exception, SystemExit)


def test_classify_command(runner: CliRunner, cards_file: Path) -> None:
    result = runner.invoke(app, ["classify", str(cards_file)])
    assert result.exit_code == 0, result.output
    descriptors = json.loads(result.stdout)
    assert descriptors[0]["theme"] == "danger"
    assert descriptors[0]["title"] == "Critical outage"
    assert descriptors[1]["stats"]["inputCount"] == 2


def test_inputs_command(runner: CliRunner, cards_file: Path) -> None:
    result = runner.invoke(app, ["inputs", str(cards_file), "--separator", ";"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"note": "ok", "tags": ["a", "b"]}

    result = runner.invoke(app, ["inputs", str(cards_file), "--pairs"])
    assert json.loads(result.stdout) == [
        {"key": "note", "value": "ok"},
        {"key": "tags", "value": ["a;b"]},
    ]


def test_coords_command(runner: CliRunner, cards_file: Path) -> None:
    result = runner.invoke(app, ["coords", str(cards_file)])
    assert result.exit_code == 0, result.output
    records = json.loads(result.stdout)
    assert len(records) == 1
    assert records[0]["rectangle"]["right"] == 100.0


def test_payload_command_with_envelope(runner: CliRunner, tmp_path: Path) -> None:
    envelope = tmp_path / "envelope.json"
    envelope.write_text(
        json.dumps({"cardJson": json.dumps(CARDS[1]), "cardPage": "<div></div>", "notes": ""}),
        encoding="utf-8",
    )
    result = runner.invoke(app, ["payload", str(envelope), "--envelope"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["adaptiveCardObject"][0]["defaultdata"]["note"] == "ok"
    assert payload["AdaptiveAnswerMetaData"]["generatedAt"].endswith("Z")


def test_payload_command_rejects_bad_envelope(runner: CliRunner, tmp_path: Path) -> None:
    envelope = tmp_path / "envelope.json"
    envelope.write_text('{"cardPage": "<div></div>"}', encoding="utf-8")
    result = runner.invoke(app, ["payload", str(envelope), "--envelope"])
    assert result.exit_code != 0


def test_config_commands(runner: CliRunner, monkeypatch) -> None:
    monkeypatch.setenv("CARD_MAX_DEPTH", "12")

    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["card_max_depth"] == 12

    result = runner.invoke(app, ["config", "diff"])
    assert json.loads(result.stdout) == {"card_max_depth": {"value": 12, "default": 64}}

    result = runner.invoke(app, ["config", "options"])
    assert "value_separator" in json.loads(result.stdout)["properties"]

    result = runner.invoke(app, ["config", "tables"])
    assert json.loads(result.stdout)["fallback_title"] == "Generated Adaptive Card"


def test_version_flag(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip()
