import pytest

from countrycard.core.config import ClientConfig, load_client_config
from countrycard.core.errors import ConfigurationError


def test_missing_client_config_is_fine(tmp_path):
    assert load_client_config(tmp_path / "config.json") is None


def test_client_config_is_loaded(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"OPENWEATHER_API_KEY": "abc"}', encoding="utf-8")

    assert load_client_config(path) == ClientConfig(OPENWEATHER_API_KEY="abc")


@pytest.mark.parametrize(
    "content,message",
    [
        ("{not json", "not valid JSON"),
        ('["OPENWEATHER_API_KEY"]', "must be a JSON object"),
        ('{"OPENWEATHER_API_KEY": 42}', "is invalid"),
    ],
)
def test_broken_client_config(tmp_path, content, message):
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError, match=message):
        load_client_config(path)
