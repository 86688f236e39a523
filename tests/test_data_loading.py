import json
from pathlib import Path

import pytest

from storyterm.data.errors import DataLoadError, DataValidationError
from storyterm.data.repositories import SettingsRepository, StoryRepository, load_story
from storyterm.domain.defs import Compare, ConditionDef, Operation


def test_story_repo_parses_full_document(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "story.json",
        {
            "actions": [{"name": "gold", "op": "set", "value": 10}],
            "batches": [
                {
                    "random": True,
                    "prompts": [
                        {
                            "if": {"name": "gold", "op": "more", "value": 5},
                            "request": "A merchant waves.",
                            "answers": [
                                {"text": "Buy", "actions": [{"name": "gold", "op": "sub", "value": 3}]},
                                {"text": "Leave"},
                            ],
                        }
                    ],
                }
            ],
        },
    )
    story = StoryRepository(base_path=definitions_dir).load()

    assert story.actions[0].op is Operation.SET
    assert story.actions[0].value == 10
    batch = story.batches[0]
    assert batch.randomized is True
    prompt = batch.prompts[0]
    assert prompt.request == "A merchant waves."
    assert prompt.pre_condition == ConditionDef(name="gold", op=Compare.MORE, value=5)
    assert [answer.text for answer in prompt.answers] == ["Buy", "Leave"]
    assert prompt.answers[0].actions[0].op is Operation.SUB
    assert prompt.answers[1].actions == ()


def test_story_repo_applies_defaults(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "story.json",
        {"batches": [{"prompts": [{"request": "Hi", "answers": [{}]}]}]},
    )
    story = StoryRepository(base_path=definitions_dir).load()

    assert story.actions == ()
    assert story.batches[0].randomized is False
    prompt = story.batches[0].prompts[0]
    assert prompt.pre_condition is None
    assert prompt.answers[0].text == ""
    assert prompt.answers[0].actions == ()


def test_story_repo_ignores_unknown_fields_and_accepts_cmd(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(
        definitions_dir / "story.json",
        {
            "version": 3,
            "batches": [
                {
                    "random": False,
                    "notes": "authoring comment",
                    "prompts": [
                        {
                            "if": {"name": "seen", "cmd": "not", "value": 0},
                            "request": "Again?",
                            "speaker": "narrator",
                            "answers": [{"text": "Yes", "mood": "happy"}],
                        }
                    ],
                }
            ],
        },
    )
    prompt = StoryRepository(base_path=definitions_dir).load().batches[0].prompts[0]

    assert prompt.pre_condition.op is Compare.NOT


def test_story_repo_caches_loaded_story(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "story.json", {"batches": []})
    repo = StoryRepository(base_path=definitions_dir)

    assert repo.load() is repo.load()


@pytest.mark.parametrize(
    "document, fragment",
    [
        ({}, "batches"),
        ({"batches": {}}, "batches"),
        ({"batches": [{"prompts": [{"answers": []}]}]}, "batches[0].prompts[0].request"),
        ({"batches": [{"random": "yes", "prompts": []}]}, "batches[0].random"),
        (
            {"batches": [{"prompts": [{"request": "x", "answers": [{"actions": [{"name": "a", "op": "mul", "value": 1}]}]}]}]},
            "batches[0].prompts[0].answers[0].actions[0].op",
        ),
        (
            {"batches": [{"prompts": [{"request": "x", "if": {"name": "a", "op": "equal", "value": True}, "answers": []}]}]},
            "batches[0].prompts[0].if.value",
        ),
        ({"actions": [{"name": "a", "op": "set", "value": 2**63}], "batches": []}, "actions[0].value"),
        ({"actions": [{"op": "set", "value": 1}], "batches": []}, "actions[0].name"),
    ],
)
def test_story_repo_rejects_malformed_documents(tmp_path: Path, document: dict, fragment: str) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    _write_json(definitions_dir / "story.json", document)

    with pytest.raises(DataValidationError, match=fragment.replace("[", r"\[").replace("]", r"\]")):
        StoryRepository(base_path=definitions_dir).load()


def test_story_repo_rejects_non_object_document(tmp_path: Path) -> None:
    definitions_dir = _make_definitions_dir(tmp_path)
    (definitions_dir / "story.json").write_text("[]", encoding="utf-8")

    with pytest.raises(DataValidationError):
        StoryRepository(base_path=definitions_dir).load()


def test_story_repo_missing_file_raises_load_error(tmp_path: Path) -> None:
    with pytest.raises(DataLoadError, match="not found"):
        StoryRepository(base_path=tmp_path).load()


def test_story_repo_invalid_json_raises_load_error(tmp_path: Path) -> None:
    (tmp_path / "story.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(DataLoadError, match="Invalid JSON"):
        StoryRepository(base_path=tmp_path).load()


def test_story_repo_invalid_utf8_raises_load_error(tmp_path: Path) -> None:
    story_path = tmp_path / "story.json"
    story_path.write_bytes(b'{"batches": [], "x": "\xff"}')

    with pytest.raises(DataLoadError, match="UTF-8"):
        load_story(story_path)


def test_settings_repo_invalid_json_raises_load_error(tmp_path: Path) -> None:
    (tmp_path / "settings.json").write_text("{", encoding="utf-8")

    with pytest.raises(DataLoadError, match="settings.json"):
        SettingsRepository(base_path=tmp_path).load()


def test_load_story_from_explicit_path(tmp_path: Path) -> None:
    story_path = tmp_path / "custom_story.json"
    _write_json(story_path, {"batches": [{"prompts": [{"request": "Custom", "answers": [{"text": "ok"}]}]}]})

    assert load_story(story_path).batches[0].prompts[0].request == "Custom"


def test_settings_repo_defaults_when_missing(tmp_path: Path) -> None:
    settings = SettingsRepository(base_path=tmp_path).load()

    assert settings.answer_timeout == 10.0
    assert settings.default_answer == 0
    assert settings.fuzzy_threshold == 70


def test_settings_repo_parses_values(tmp_path: Path) -> None:
    _write_json(
        tmp_path / "settings.json",
        {"title": "Demo", "answer_timeout": None, "default_answer": 1, "fuzzy_threshold": 85},
    )
    settings = SettingsRepository(base_path=tmp_path).load()

    assert settings.title == "Demo"
    assert settings.answer_timeout is None
    assert settings.default_answer == 1
    assert settings.fuzzy_threshold == 85


@pytest.mark.parametrize(
    "payload",
    [
        {"answer_timeout": 0},
        {"answer_timeout": "soon"},
        {"fuzzy_threshold": 150},
        {"default_answer": -1},
    ],
)
def test_settings_repo_rejects_invalid_values(tmp_path: Path, payload: dict) -> None:
    _write_json(tmp_path / "settings.json", payload)

    with pytest.raises(DataValidationError):
        SettingsRepository(base_path=tmp_path).load()


def _write_json(path: Path, data: object) -> None:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _make_definitions_dir(tmp_path: Path) -> Path:
    definitions_dir = tmp_path / "definitions"
    definitions_dir.mkdir()
    return definitions_dir
