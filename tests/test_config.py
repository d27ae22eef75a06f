"""Tests for cardforge.config."""

import pytest

from cardforge.config import (
    CardStyle,
    GeneratorConfig,
    LayoutSettings,
    config_from_dict,
    is_valid_color,
    is_valid_paint,
    load_config,
)
from cardforge.errors import ConfigError


class TestDefaults:

    def test_default_values(self):
        config = GeneratorConfig()

        assert dict(config.selectors) == {
            "title": "#card-title",
            "backtext": "#card-backtext",
            "photo": "#card-photo",
            "background": "#card-background",
        }
        assert config.styles == CardStyle("#FFFFFF", "#c68411")
        assert config.layout == LayoutSettings(144.0, 12.0)
        assert config.extra_roles() == {}

    def test_selectors_are_read_only(self):
        config = GeneratorConfig()

        with pytest.raises(TypeError):
            config.selectors["title"] = "#other"

    def test_instances_do_not_share_selectors(self):
        custom = GeneratorConfig(selectors={"title": "#t"})

        assert GeneratorConfig().selectors["title"] == "#card-title"
        assert dict(custom.selectors) == {"title": "#t"}


class TestConfigFromDict:

    def test_partial_overrides_keep_defaults(self):
        config = config_from_dict({
            "selectors": {"level": "#card-level"},
            "styles": {"bold_color": "orange"},
        })

        assert config.selectors["title"] == "#card-title"
        assert config.extra_roles() == {"level": "#card-level"}
        assert config.styles.bold_color == "orange"
        assert config.styles.title_color == "#FFFFFF"

    @pytest.mark.parametrize("data", [
        {"colours": {}},
        {"styles": {"boldColor": "#fff"}},
        {"styles": {"bold_color": "not a color"}},
        {"layout": {"max_width": 0}},
        {"layout": {"max_width": "wide"}},
        {"layout": "nope"},
        {"selectors": ["#a"]},
        {"selectors": {"title": ""}},
    ])
    def test_invalid_config(self, data):
        with pytest.raises(ConfigError):
            config_from_dict(data)


class TestLoadConfig:

    def test_no_file_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert load_config() == GeneratorConfig()

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "cardforge.yml"
        path.write_text(
            "styles:\n  title_color: '#000000'\nlayout:\n  max_width: 200\n",
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.styles.title_color == "#000000"
        assert config.layout.max_width == 200

    def test_path_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yml"
        path.write_text("layout:\n  default_font_size: 9\n", encoding="utf-8")
        monkeypatch.setenv("CARDFORGE_CONFIG", str(path))

        assert load_config().layout.default_font_size == 9

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "cardforge.yml"
        path.write_text("styles:\n  bold_color: '#111111'\n", encoding="utf-8")
        monkeypatch.setenv("CARDFORGE_BOLD_COLOR", "#222222")
        monkeypatch.setenv("CARDFORGE_MAX_WIDTH", "180")

        config = load_config(path)

        assert config.styles.bold_color == "#222222"
        assert config.layout.max_width == 180.0

    def test_dotenv_file(self, tmp_path, monkeypatch):
        # register the variable so monkeypatch removes what load_dotenv sets
        monkeypatch.setenv("CARDFORGE_TITLE_COLOR", "#000000")
        monkeypatch.delenv("CARDFORGE_TITLE_COLOR")
        (tmp_path / ".env").write_text("CARDFORGE_TITLE_COLOR=#abcdef\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert load_config().styles.title_color == "#abcdef"

    def test_bad_max_width_env(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("CARDFORGE_MAX_WIDTH", "wide")

        with pytest.raises(ConfigError):
            load_config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("styles: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config(path)

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config(path)


def test_is_valid_color():
    assert is_valid_color("#c68411")
    assert is_valid_color("white")
    assert is_valid_color("rgb(10, 20, 30)")
    assert not is_valid_color("#12")
    assert not is_valid_color("")
    assert not is_valid_color(None)


@pytest.mark.parametrize("value", [
    "#c68411", "white", "none", "None", "transparent", "currentColor", "url(#grad)",
])
def test_is_valid_paint(value):
    assert is_valid_paint(value)


@pytest.mark.parametrize("value", ["not-a-color", "url()", "", None])
def test_is_not_valid_paint(value):
    assert not is_valid_paint(value)


def test_paint_keywords_accepted_in_styles():
    config = config_from_dict({"styles": {"title_color": "none", "bold_color": "currentColor"}})

    assert config.styles.title_color == "none"
    assert config.styles.bold_color == "currentColor"
