import pytest

from piston.config import load_config, parse_serve_addr


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
	monkeypatch.delenv("SERVE_ADDR", raising=False)
	monkeypatch.delenv("PISTON_CONFIG", raising=False)


def test_bundled_config_loads():
	config = load_config()
	assert config["server"]["port"] == 4000
	assert config["logging"]["level"] == "INFO"


def test_missing_keys_get_defaults(tmp_path):
	path = tmp_path / "config.yaml"
	path.write_text("")
	config = load_config(str(path))
	assert config["server"]["host"] == "0.0.0.0"
	assert config["server"]["max_request_bytes"] == 16 * 1024 * 1024


def test_config_path_from_environment(tmp_path, monkeypatch):
	path = tmp_path / "config.yaml"
	path.write_text("server:\n  port: 5001\nlogging:\n  level: DEBUG\n")
	monkeypatch.setenv("PISTON_CONFIG", str(path))
	config = load_config()
	assert config["server"]["port"] == 5001
	assert config["logging"]["level"] == "DEBUG"


def test_serve_addr_overrides_file(monkeypatch):
	monkeypatch.setenv("SERVE_ADDR", "127.0.0.1:9000")
	config = load_config()
	assert config["server"]["host"] == "127.0.0.1"
	assert config["server"]["port"] == 9000


def test_parse_ipv6_serve_addr():
	assert parse_serve_addr("[::1]:50051") == ("::1", 50051)


@pytest.mark.parametrize("addr", ["localhost", ":80", "host:", "host:port"])
def test_malformed_serve_addr(addr):
	with pytest.raises(ValueError):
		parse_serve_addr(addr)


@pytest.mark.parametrize("text", ["- 1\n- 2\n", "server: 8080\n", "logging: [INFO]\n"])
def test_non_mapping_sections_are_rejected(tmp_path, text):
	path = tmp_path / "config.yaml"
	path.write_text(text)
	with pytest.raises(ValueError):
		load_config(str(path))


def test_empty_sections_get_defaults(tmp_path):
	path = tmp_path / "config.yaml"
	path.write_text("server:\nlogging:\n")
	config = load_config(str(path))
	assert config["server"]["port"] == 4000
	assert config["logging"]["level"] == "INFO"
