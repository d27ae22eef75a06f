import shutil
from pathlib import Path

import pytest

from cardforge.config import GeneratorConfig
from cardforge.text.layout import Geometry

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "cardforge" / "templates"

CONFIG_ENV_VARS = (
    "CARDFORGE_CONFIG",
    "CARDFORGE_TITLE_COLOR",
    "CARDFORGE_BOLD_COLOR",
    "CARDFORGE_MAX_WIDTH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of config loading."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def geometry():
    """10pt text at the origin, 144 wide: line height 12, 5 per char."""
    return Geometry(base_x=0, base_y=0, font_size=10, max_width=144)


@pytest.fixture
def template_path(tmp_path: Path) -> Path:
    dest = tmp_path / "card_template.svg"
    shutil.copy(TEMPLATES_DIR / "card_template.svg", dest)
    return dest


@pytest.fixture
def template_text(template_path: Path) -> str:
    return template_path.read_text(encoding="utf-8")


@pytest.fixture
def cards_csv(tmp_path: Path) -> Path:
    dest = tmp_path / "cards.csv"
    shutil.copy(TEMPLATES_DIR / "cards.csv", dest)
    return dest


@pytest.fixture
def config_with_level() -> GeneratorConfig:
    selectors = dict(GeneratorConfig().selectors)
    selectors["level"] = "#card-level"
    return GeneratorConfig(selectors=selectors)
