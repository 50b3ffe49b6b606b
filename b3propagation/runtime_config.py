"""Runtime configuration state management."""

# Global runtime configuration state
_config = {
    "default_format": "http_headers",
    "debug": False,
}


def set_default_format(value: str) -> None:
    _config["default_format"] = value


def get_default_format() -> str:
    return _config["default_format"]


def set_debug(value: bool) -> None:
    _config["debug"] = value


def get_debug() -> bool:
    return _config["debug"]


def reset() -> None:
    _config["default_format"] = "http_headers"
    _config["debug"] = False
