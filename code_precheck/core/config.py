# code_precheck/core/config.py
import json
from pathlib import Path
from typing import Any, Dict


class ConfigError(RuntimeError):
    pass


def _read_json(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def default_root() -> Path:
    return Path(__file__).resolve().parent.parent / "config"


def load_all(cfg_root: str | None) -> Dict[str, Any]:
    """
    Профиль — папка с settings.json (обязательный):
      engine.parallel / engine.workers — правила в пуле потоков
      report.context_width             — ширина превью строки в .rep
      logging.level                    — уровень логов CLI/сервиса
      service.host / service.port      — адрес HTTP-сервиса
    Пороги правил здесь не настраиваются.
    """
    root = Path(cfg_root) if cfg_root else default_root()
    if not root.exists():
        raise ConfigError(f"Config folder not found: {root}")

    settings_path = root / "settings.json"
    if not settings_path.exists():
        raise ConfigError(f"settings.json not found in {root}")

    try:
        settings = _read_json(settings_path)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Cannot read {settings_path}: {e}")
    if not isinstance(settings, dict):
        raise ConfigError(f"{settings_path} must contain a JSON object")

    return {"__root": str(root), "settings": settings}


def apply_overrides(cfg: Dict[str, Any], overrides: Dict[str, Any] | None) -> Dict[str, Any]:
    # секции объединяем по верхнему уровню: {"engine": {"parallel": true}}
    if not overrides:
        return cfg
    settings = dict(cfg.get("settings", {}))
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(settings.get(key), dict):
            settings[key] = {**settings[key], **value}
        else:
            settings[key] = value
    return {**cfg, "settings": settings}
