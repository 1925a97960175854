"""
Config manager tests
Verify that the multi-level priority loading of live test scenarios works
"""
import pytest

from tests import config_manager
from tests.config_manager import get_mysql_scenarios, load_config

SCENARIO_YAML = """
databases:
  mysql:
    versions:
      - label: mysql80
        host: yaml_host
        port: 3307
        database: test_db
        username: test_user
        password: test_password
        timezone: "+02:00"
"""

SCENARIO_TOML = """
[[databases.mysql.versions]]
label = "mariadb"
host = "toml_host"
port = 3308
database = "test_db"
username = "test_user"
password = ""
"""


@pytest.fixture
def isolated(monkeypatch, tmp_path):
    """No env vars and no default config files"""
    for name in ("MYSQL_SCENARIOS_CONFIG_PATH", "MYSQL_HOST", "MYSQL_PORT", "MYSQL_USER",
                 "MYSQL_PASSWORD", "MYSQL_DATABASE", "MYSQL_TIMEZONE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_manager, "default_config_paths", lambda: [tmp_path / "missing.yaml"])
    return monkeypatch


def test_load_config_from_env_var_yaml(isolated, tmp_path):
    """Test loading the file named by MYSQL_SCENARIOS_CONFIG_PATH"""
    config_file = tmp_path / "scenarios.yaml"
    config_file.write_text(SCENARIO_YAML, encoding="utf-8")
    isolated.setenv("MYSQL_SCENARIOS_CONFIG_PATH", str(config_file))

    scenario = load_config()["databases"]["mysql"]["versions"][0]
    assert scenario["host"] == "yaml_host"
    assert scenario["port"] == 3307
    assert scenario["timezone"] == "+02:00"


def test_load_config_from_env_var_toml(isolated, tmp_path):
    config_file = tmp_path / "scenarios.toml"
    config_file.write_text(SCENARIO_TOML, encoding="utf-8")
    isolated.setenv("MYSQL_SCENARIOS_CONFIG_PATH", str(config_file))

    scenarios = get_mysql_scenarios()
    assert scenarios[0]["label"] == "mariadb"
    assert scenarios[0]["port"] == 3308


def test_missing_config_file_is_an_error(isolated, tmp_path):
    isolated.setenv("MYSQL_SCENARIOS_CONFIG_PATH", str(tmp_path / "nope.yaml"))
    with pytest.raises(FileNotFoundError):
        load_config()


def test_unsupported_format(isolated, tmp_path):
    config_file = tmp_path / "scenarios.json"
    config_file.write_text("{}", encoding="utf-8")
    isolated.setenv("MYSQL_SCENARIOS_CONFIG_PATH", str(config_file))
    with pytest.raises(ValueError, match="Unsupported configuration file format"):
        load_config()


def test_default_config_file(isolated, tmp_path):
    config_file = tmp_path / "mysql_scenarios.yaml"
    config_file.write_text(SCENARIO_YAML, encoding="utf-8")
    isolated.setattr(config_manager, "default_config_paths", lambda: [tmp_path / "x.toml", config_file])

    assert get_mysql_scenarios()[0]["label"] == "mysql80"


def test_load_config_from_env_vars(isolated):
    """Test building a scenario from MySQL connection environment variables"""
    isolated.setenv("MYSQL_HOST", "envvar_host")
    isolated.setenv("MYSQL_USER", "envvar_user")
    isolated.setenv("MYSQL_DATABASE", "envvar_db")
    isolated.setenv("MYSQL_PORT", "3309")

    scenario = get_mysql_scenarios()[0]
    assert scenario["host"] == "envvar_host"
    assert scenario["port"] == 3309
    assert scenario["username"] == "envvar_user"
    assert scenario["password"] == ""
    assert scenario["timezone"] == "UTC"


def test_nothing_configured(isolated):
    assert get_mysql_scenarios() == []
