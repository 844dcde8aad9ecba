# config_loader.py
import os

import yaml
from dotenv import load_dotenv

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")


def parse_serve_addr(addr):
    """Splits a "host:port" listen address."""
    host, sep, port = addr.strip().rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"SERVE_ADDR must look like host:port, got {addr!r}")
    return host.strip("[]"), int(port)


def load_config(config_path=None):
    """
    Loads the YAML config, then applies overrides from the environment.

    The config path comes from the argument, PISTON_CONFIG, or the bundled
    config.yaml in that order. SERVE_ADDR (also read from a .env file)
    replaces server.host and server.port.
    """
    load_dotenv()
    config_path = config_path or os.getenv("PISTON_CONFIG") or DEFAULT_CONFIG_PATH
    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError(f"{config_path}: top level must be a mapping")
    for section in ("server", "logging"):
        if config.get(section) is None:
            config[section] = {}
        elif not isinstance(config[section], dict):
            raise ValueError(f"{config_path}: '{section}' must be a mapping")

    server = config["server"]
    server.setdefault("host", "0.0.0.0")
    server.setdefault("port", 4000)
    server.setdefault("debug", False)
    server.setdefault("max_request_bytes", 16 * 1024 * 1024)
    config["logging"].setdefault("level", "INFO")

    serve_addr = os.getenv("SERVE_ADDR")
    if serve_addr:
        server["host"], server["port"] = parse_serve_addr(serve_addr)
    return config
