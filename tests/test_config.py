import pytest

from story_assembly.config.assembly_config import AssemblyConfig
from story_assembly.errors import UnsupportedLanguageError
from story_assembly.languages.language_registry import LanguageRegistry


def test_defaults():
    config = AssemblyConfig()
    assert config.distribution_threshold == 0.5
    assert config.max_quantile_images == 3
    assert config.quantile_fractions[3] == [0.25, 0.5, 0.75]
    assert config.language == "english"


@pytest.mark.parametrize("kwargs", [
    {"distribution_threshold": 0},
    {"distribution_threshold": 1.5},
    {"max_quantile_images": 0},
    {"max_quantile_images": 4},
    {"min_paragraphs_for_paragraph_mode": 0},
    {"quantile_fractions": {1: [0.5], 2: [0.5], 3: [0.25, 0.5, 0.75]}},
    {"quantile_fractions": {1: [1.5], 2: [0.3, 0.6], 3: [0.25, 0.5, 0.75]}},
])
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        AssemblyConfig(**kwargs)


def test_from_yaml(tmp_path):
    path = tmp_path / "assembly.yaml"
    path.write_text(
        "distribution_threshold: 0.75\n"
        "language: spanish\n"
        "quantile_fractions:\n"
        "  '1': [0.4]\n"
        "  2: [0.3, 0.6]\n"
        "  3: [0.2, 0.5, 0.8]\n"
    )
    config = AssemblyConfig.from_yaml(str(path))

    assert config.distribution_threshold == 0.75
    assert config.language == "spanish"
    assert config.quantile_fractions[1] == [0.4]
    assert config.max_quantile_images == 3


def test_empty_yaml_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert AssemblyConfig.from_yaml(str(path)) == AssemblyConfig()


def test_unknown_yaml_keys(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("threshold: 0.5\n")
    with pytest.raises(ValueError, match="threshold"):
        AssemblyConfig.from_yaml(str(path))


def test_language_registry():
    assert LanguageRegistry.available_languages() == ["english", "spanish"]
    assert LanguageRegistry.get_language("Spanish").closing_line == "Fin."
    with pytest.raises(UnsupportedLanguageError):
        LanguageRegistry.get_language("klingon")
