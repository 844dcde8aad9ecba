from .config_loader import load_config, parse_serve_addr
