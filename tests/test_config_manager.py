import json

import pytest

from services.config_manager import DEFAULT_EXECUTABLE, ConfigManager
from services.placeholders import PlaceholderContext, substitute_placeholders


def make_context(**kwargs) -> PlaceholderContext:
    defaults = {"workspace_root": "/work", "cwd": "/home/user", "env": {"SCAD_HOME": "/opt/scad"}}
    defaults.update(kwargs)
    return PlaceholderContext(**defaults)


def test_substitutes_workspace_root_and_cwd():
    value = "${workspaceRoot}/bin:${cwd}/bin:${workspaceRoot}"
    assert substitute_placeholders(value, make_context()) == "/work/bin:/home/user/bin:/work"


def test_substitutes_environment_variables():
    value = "${env.SCAD_HOME}/bin/openscad-format"
    assert substitute_placeholders(value, make_context()) == "/opt/scad/bin/openscad-format"


def test_unknown_placeholders_become_empty():
    context = make_context(workspace_root=None, env={})
    assert substitute_placeholders("${workspaceRoot}/${env.MISSING}/x", context) == "//x"


def test_plain_values_are_untouched():
    assert substitute_placeholders("openscad-format", make_context()) == "openscad-format"


def test_defaults_when_no_file(config_manager: ConfigManager):
    config = config_manager.get_config()
    assert config["executable"] == DEFAULT_EXECUTABLE
    assert config["config"] is None
    assert config["languages"] == ["scad"]


def test_config_file_lives_in_env_directory(config_manager: ConfigManager, tmp_path):
    assert config_manager.config_file == tmp_path / "config" / "config.json"


def test_save_persists_and_merges(config_manager: ConfigManager):
    config_manager.save_config({"executable": "/usr/local/bin/openscad-format"})
    on_disk = json.loads(config_manager.config_file.read_text())

    assert on_disk["executable"] == "/usr/local/bin/openscad-format"
    assert on_disk["languages"] == ["scad"]


def test_corrupt_file_falls_back_to_defaults(config_manager: ConfigManager):
    config_manager.config_file.write_text("{not json")
    assert config_manager.get_config()["executable"] == DEFAULT_EXECUTABLE


@pytest.mark.parametrize("content", ["[]", '"openscad-format"', "1", "null"])
def test_non_object_file_falls_back_to_defaults(config_manager: ConfigManager, content):
    config_manager.config_file.write_text(content)
    config = config_manager.get_config()

    assert config["executable"] == DEFAULT_EXECUTABLE
    assert config["languages"] == ["scad"]


def test_executable_path_defaults_when_blank(config_manager: ConfigManager):
    config_manager.set("executable", "")
    assert config_manager.get_executable_path(make_context()) == DEFAULT_EXECUTABLE


def test_executable_path_is_substituted(config_manager: ConfigManager):
    config_manager.set("executable", "${workspaceRoot}/tools/openscad-format")
    assert config_manager.get_executable_path(make_context()) == "/work/tools/openscad-format"


def test_config_path_is_none_when_unset(config_manager: ConfigManager):
    assert config_manager.get_config_path(make_context()) is None


def test_config_path_is_substituted(config_manager: ConfigManager):
    config_manager.set("config", "${env.SCAD_HOME}/.openscad-format")
    assert config_manager.get_config_path(make_context()) == "/opt/scad/.openscad-format"


def test_get_instance_returns_singleton(config_manager: ConfigManager):
    assert ConfigManager.get_instance() is config_manager
