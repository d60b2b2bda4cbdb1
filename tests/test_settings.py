import pytest
import toml

from lowapp.settings import SETTINGS_ENV_VAR, Settings


def test_missing_file_gives_defaults(tmp_path):
    settings = Settings.load(tmp_path / "absent.toml")
    assert settings.node_subdir == "Nodes/"
    assert settings.directory is None
    assert settings.strict is True
    assert settings.log_level == "INFO"
    settings.validate()


def test_load_from_file(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text(
        'node_subdir = "devices/"\n'
        'directory = "sim/"\n'
        "strict = false\n"
        'log_level = "debug"\n'
        'unrelated = 1\n'
    )
    settings = Settings.load(path)
    assert settings.node_subdir == "devices/"
    assert settings.directory == "sim/"
    assert settings.strict is False
    assert settings.log_level == "DEBUG"
    assert settings.settings_path == path


def test_environment_override(tmp_path, monkeypatch):
    path = tmp_path / "env.toml"
    path.write_text('directory = "envdir/"\n')
    monkeypatch.setenv(SETTINGS_ENV_VAR, str(path))
    assert Settings.load().directory == "envdir/"


def test_invalid_toml(tmp_path):
    path = tmp_path / "bad.toml"
    path.write_text("node_subdir = [unterminated\n")
    with pytest.raises(toml.TomlDecodeError):
        Settings.load(path)


def test_validate_rejects_bad_values():
    with pytest.raises(ValueError):
        Settings(log_level="LOUD").validate()
    with pytest.raises(ValueError):
        Settings(node_subdir="").validate()


@pytest.mark.parametrize("line", [
    'strict = "false"',
    "strict = 0",
    "node_subdir = 5",
    "directory = true",
    "log_level = 10",
])
def test_mistyped_values_rejected(tmp_path, line):
    path = tmp_path / "settings.toml"
    path.write_text(line + "\n")
    with pytest.raises(ValueError):
        Settings.load(path)
