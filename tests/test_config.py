import json
from pathlib import Path

import pytest

from lead_finder.config import ConfigurationError, Settings, load_configuration, load_settings


def test_load_json_and_yaml(tmp_path) -> None:
    json_path = tmp_path / "config.json"
    json_path.write_text(json.dumps({"home_country": "Brazil"}), encoding="utf-8")
    yaml_path = tmp_path / "config.yaml"
    yaml_path.write_text("home_country: Brazil\napollo:\n  calls_per_minute: 30\n", encoding="utf-8")

    assert load_configuration(json_path) == {"home_country": "Brazil"}
    assert load_configuration(yaml_path)["apollo"] == {"calls_per_minute": 30}


def test_configuration_errors(tmp_path) -> None:
    with pytest.raises(ConfigurationError):
        load_configuration(tmp_path / "missing.yaml")

    ini = tmp_path / "config.ini"
    ini.write_text("[x]", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_configuration(ini)

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_configuration(broken)

    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_configuration(listing)


def test_defaults_without_file() -> None:
    settings = load_settings(environ={})

    assert settings.apollo_api_key == ""
    assert settings.per_call_timeout == 8.0
    assert settings.batch_timeout == 30.0
    assert settings.home_country == "United States"
    with pytest.raises(ConfigurationError):
        settings.require_search_key()


def test_environment_overrides_file(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "\n".join(
            [
                "apollo:",
                "  api_key: from-file",
                "  calls_per_minute: 60",
                "openai:",
                "  api_key: file-openai",
                "  model: gpt-4o-mini",
                "enrichment:",
                "  per_call_timeout: 2",
                "  batch_timeout: 10",
                "storage:",
                f"  path: {tmp_path / 'saved.json'}",
            ]
        ),
        encoding="utf-8",
    )

    settings = load_settings(
        path,
        environ={"APOLLO_API_KEY": "from-env", "LEAD_FINDER_STORAGE": str(tmp_path / "env.json")},
    )

    assert settings.apollo_api_key == "from-env"
    assert settings.openai_api_key == "file-openai"
    assert settings.openai_model == "gpt-4o-mini"
    assert settings.search_calls_per_minute == 60.0
    assert settings.per_call_timeout == 2.0
    assert settings.batch_timeout == 10.0
    assert settings.storage_path == Path(tmp_path / "env.json")


def test_catalog_and_synonyms_come_from_config(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "catalog": {
                    "industries": ["Aerospace", "Healthcare"],
                    "employee_fallbacks": {"Aerospace": "1001-5000"},
                },
                "synonyms": {"engenheiro aeroespacial": ["aerospace engineer"], "piloto": "pilot"},
            }
        ),
        encoding="utf-8",
    )

    settings = load_settings(path, environ={})

    assert settings.catalog.industries == ["Aerospace", "Healthcare"]
    assert settings.catalog.fallback_bucket("Aerospace") == "1001-5000"
    assert settings.synonyms == {"engenheiro aeroespacial": ["aerospace engineer"], "piloto": ["pilot"]}


def test_invalid_numbers_are_reported(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"enrichment": {"per_call_timeout": "soon"}}), encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_settings(path, environ={})


def test_settings_default_catalog_is_independent() -> None:
    first, second = Settings(), Settings()
    first.catalog.industries.append("Space")
    assert "Space" not in second.catalog.industries
