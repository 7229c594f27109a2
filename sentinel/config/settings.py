"""Config loading: credentials, reactor options, status server.

Defaults: loaded from config/config.yaml.example (single source of truth, no code-level defaults).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from sentinel.connector.steam import EPersonaState

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_EXAMPLE_PATH = _PROJECT_ROOT / "config" / "config.yaml.example"

# Lazy-loaded example config
_EXAMPLE_CONFIG: Optional[Dict[str, Any]] = None

_ENV_OVERRIDES = {
    "STEAM_ACCOUNT_NAME": "account_name",
    "STEAM_PASSWORD": "password",
    "STEAM_SHARED_SECRET": "shared_secret",
}


@dataclass(frozen=True)
class SteamCredentials:
    steamid: str
    account_name: str
    password: str
    shared_secret: str
    logon_id: Optional[int] = None
    playing_game_name: Optional[str] = None


@dataclass(frozen=True)
class ReactorConfig:
    test_mode: bool = False
    auth_retry_delay_sec: float = 30.0
    persona_state: EPersonaState = EPersonaState.ONLINE
    playing_game_name: str = "🔰 Running Sentinel"


def _load_example_config() -> Dict[str, Any]:
    """Load config.yaml.example as defaults."""
    global _EXAMPLE_CONFIG
    if _EXAMPLE_CONFIG is None:
        with open(_EXAMPLE_PATH, encoding="utf-8") as f:
            _EXAMPLE_CONFIG = yaml.safe_load(f) or {}
    return _EXAMPLE_CONFIG


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into base. Override values take precedence."""
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _merged_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    return _deep_merge(_load_example_config(), cfg)


def read_config(config_path: Optional[str] = None) -> tuple[dict, str]:
    """Load YAML config with env overrides for Steam credentials. Returns (config, resolved_path)."""
    config_path = config_path or os.environ.get("SENTINEL_CONFIG", "config/config.yaml")
    if not Path(config_path).exists():
        config_path = str(_EXAMPLE_PATH)
    config_path = str(Path(config_path).resolve())
    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    steam = dict(config.get("steam") or {})
    for env_key, field_name in _ENV_OVERRIDES.items():
        value = os.environ.get(env_key)
        if value:
            steam[field_name] = value
    config["steam"] = steam
    return config, config_path


def _parse_persona_state(value: Any) -> EPersonaState:
    if isinstance(value, EPersonaState):
        return value
    if isinstance(value, int):
        return EPersonaState(value)
    try:
        return EPersonaState[str(value).strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown persona_state: {value!r}") from None


def get_credentials(config: Optional[Dict[str, Any]] = None) -> SteamCredentials:
    """Return SteamCredentials from the steam section. Raises ValueError if a login field is empty."""
    steam = _merged_config(config or {}).get("steam") or {}
    missing = [k for k in ("account_name", "password", "shared_secret") if not steam.get(k)]
    if missing:
        raise ValueError(f"Missing Steam credentials: {', '.join(missing)}")
    logon_id = steam.get("logon_id")
    return SteamCredentials(
        steamid=str(steam.get("steamid") or ""),
        account_name=str(steam["account_name"]),
        password=str(steam["password"]),
        shared_secret=str(steam["shared_secret"]),
        logon_id=int(logon_id) if logon_id is not None else None,
        playing_game_name=steam.get("playing_game_name") or None,
    )


def get_reactor_config(config: Optional[Dict[str, Any]] = None) -> ReactorConfig:
    """Return ReactorConfig from the reactor section; missing values from config.yaml.example."""
    r = _merged_config(config or {}).get("reactor") or {}
    return ReactorConfig(
        test_mode=bool(r.get("test_mode")),
        auth_retry_delay_sec=float(r.get("auth_retry_delay_sec")),
        persona_state=_parse_persona_state(r.get("persona_state")),
        playing_game_name=r.get("playing_game_name"),
    )


def get_factory_paths(config: Optional[Dict[str, Any]] = None) -> Dict[str, str]:
    """Return dotted 'module:callable' paths for the session and trade-manager factories."""
    steam = _merged_config(config or {}).get("steam") or {}
    return {
        "session_factory": steam.get("session_factory") or "",
        "trade_manager_factory": steam.get("trade_manager_factory") or "",
    }


def get_status_server_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    s = _merged_config(config or {}).get("status_server") or {}
    return {
        "enabled": bool(s.get("enabled")),
        "host": s.get("host"),
        "port": int(s.get("port")),
    }


def apply_overrides(config: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Deep-merge command-line overrides (e.g. {'reactor': {'test_mode': True}}) over a loaded config."""
    if not overrides:
        return config
    return _deep_merge(config, overrides)
