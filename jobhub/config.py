"""Paths, environment and filter-option configuration."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobhub.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
FILTERS_PATH: Path = CONFIG_DIR / "filters.yaml"

DEFAULT_SEARCH_TIMEOUT = 90.0
DEFAULT_ERROR_MESSAGE = "無法取得職缺資訊。請檢查網路或稍後再試。"

DEFAULT_INDUSTRIES: list[str] = [
    "軟體及網路", "半導體", "電子資訊", "金融保險", "生技醫療",
    "製造業", "零售及電商", "傳播媒體", "教育", "顧問服務",
]

DEFAULT_REGIONS: list[str] = [
    "台北市", "新北市", "桃園市", "新竹縣市", "台中市",
    "台南市", "高雄市", "遠端工作",
]

DEFAULT_EXPERIENCE_LEVELS: list[str] = [
    "無經驗可", "1-3 年", "3-5 年", "5-10 年", "10 年以上",
]


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def data_dir() -> Path:
    """Directory holding the persisted saved/applied id sets."""
    override = get_env("JOBHUB_DATA_DIR")
    if override:
        return Path(override).expanduser()
    return ROOT_DIR / "data"


def search_timeout() -> float:
    raw = get_env("JOBHUB_SEARCH_TIMEOUT")
    if not raw:
        return DEFAULT_SEARCH_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        log.warning("Ignoring invalid JOBHUB_SEARCH_TIMEOUT=%r", raw)
        return DEFAULT_SEARCH_TIMEOUT
    return value if value > 0 else DEFAULT_SEARCH_TIMEOUT


def error_message() -> str:
    return get_env("JOBHUB_ERROR_MESSAGE") or DEFAULT_ERROR_MESSAGE


@dataclass(frozen=True)
class FilterOptions:
    industries: tuple[str, ...]
    regions: tuple[str, ...]
    experience_levels: tuple[str, ...]


def _option_list(data: dict[str, Any], key: str, fallback: list[str]) -> tuple[str, ...]:
    values = data.get(key)
    if not isinstance(values, list):
        return tuple(fallback)
    cleaned = [str(v).strip() for v in values if str(v).strip()]
    return tuple(cleaned) or tuple(fallback)


def load_filter_options(path: Path | None = None) -> FilterOptions:
    """Selectable values for the filter bar; built-in lists when the file is unusable."""
    path = path or FILTERS_PATH
    data: dict[str, Any] = {}
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
            if isinstance(loaded, dict):
                data = loaded
            else:
                log.warning("%s is not a mapping, using default filter options", path.name)
        except (OSError, yaml.YAMLError) as exc:
            log.warning("Failed to read %s (%s), using default filter options", path.name, exc)

    return FilterOptions(
        industries=_option_list(data, "industries", DEFAULT_INDUSTRIES),
        regions=_option_list(data, "regions", DEFAULT_REGIONS),
        experience_levels=_option_list(data, "experience_levels", DEFAULT_EXPERIENCE_LEVELS),
    )
