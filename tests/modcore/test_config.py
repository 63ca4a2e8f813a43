import json5
import pytest

from modcore.config import Config, deepMerge
from modcore.constants import DEFAULT_DATABASE_URL
from modcore.core.errors import ConfigError


def test_deepMerge_merges_nested_objects_only():
    first = {"a": {"x": 1, "y": 2}, "b": [1, 2], "c": "keep"}
    second = {"a": {"y": 3, "z": 4}, "b": [9]}

    assert deepMerge(first, second) == {"a": {"x": 1, "y": 3, "z": 4}, "b": [9], "c": "keep"}
    # Inputs are untouched
    assert first["a"] == {"x": 1, "y": 2}


def test_get_missing_file_gives_defaults(tmp_path):
    config = Config.get(tmp_path / "nope.json5")

    assert config.databaseUrl == DEFAULT_DATABASE_URL
    assert config.allowSymlinks is False
    assert config.devMode is False
    assert config.logFile is None
    assert config.path == str(tmp_path / "nope.json5")


def test_get_merges_json5_over_defaults(tmp_path):
    path = tmp_path / "settings.json5"
    path.write_text(
        """
        // hand-written settings
        {
            owmlPath: '/games/OWML',
            allowSymlinks: true,
            logFile: "logs/modcore.log",
            somethingOld: 1,
        }
        """,
        encoding="utf-8",
    )

    config = Config.get(path)

    assert config.owmlPath == "/games/OWML"
    assert config.allowSymlinks is True
    assert config.logFile == "logs/modcore.log"
    assert config.databaseUrl == DEFAULT_DATABASE_URL


@pytest.mark.parametrize("text", ["{ owmlPath: ", "[1, 2]", "{ allowSymlinks: 'sometimes' }"])
def test_get_rejects_bad_files(tmp_path, text):
    path = tmp_path / "settings.json5"
    path.write_text(text, encoding="utf-8")

    with pytest.raises(ConfigError):
        Config.get(path)


def test_save_then_get(tmp_path):
    path = tmp_path / "nested" / "settings.json5"
    config = Config(owmlPath="/games/OWML", logFile="modcore.log", devMode=True)

    assert config.save(path) == path
    assert config.path == str(path)

    loaded = Config.get(path)
    assert loaded.owmlPath == "/games/OWML"
    assert loaded.logFile == "modcore.log"
    assert loaded.devMode is True
    assert "path" not in json5.loads(path.read_text(encoding="utf-8"))


def test_assignment_is_validated():
    config = Config()
    with pytest.raises(ValueError):
        config.allowSymlinks = "sometimes"
