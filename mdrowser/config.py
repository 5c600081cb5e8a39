# === FILE: mdrowser/config.py ===
"""
Модуль для загрузки и валидации конфигурации mdrowser.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import json
import os
import errno
from pathlib import Path
from typing import Any, List, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)


class CommandSpec(BaseModel):
    """Внешняя утилита: имя или путь к исполняемому файлу и доп. аргументы."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    executable: str = Field(..., min_length=1, description="Имя в PATH или путь к файлу.")
    args: List[str] = Field(default_factory=list, description="Аргументы перед URL/доменом.")

    @field_validator("executable", mode="before")
    def _strip_executable(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    def argv(self, *extra: str) -> List[str]:
        return [self.executable, *self.args, *extra]


class BrowserConfig(BaseModel):
    """Конфигурация конвейера загрузки и конвертации."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    fetcher: CommandSpec = Field(
        default_factory=lambda: CommandSpec(executable="curl", args=["--no-progress-meter"]),
        description="HTTP-загрузчик; URL передаётся последним аргументом.",
    )
    converter: CommandSpec = Field(
        default_factory=lambda: CommandSpec(executable="html2markdown"),
        description="Конвертер HTML → markdown, читает stdin.",
    )
    domain_flag: str = Field("--domain", min_length=1, description="Флаг конвертера для домена.")
    notify_prefix: str = Field("[mdrowser]", description="Префикс уведомлений.")
    pager: bool = Field(False, description="Показывать результат через pager.")
    pipefail: bool = Field(
        False, description="Считать ошибкой и ненулевой код загрузчика, а не только конвертера."
    )

    @field_validator("domain_flag", mode="before")
    def _strip_equals(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().rstrip("=")
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> BrowserConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект BrowserConfig.

    Без явного пути берётся configs/default.yaml, а если его нет —
    значения по умолчанию. Явно указанный, но отсутствующий файл
    приводит к FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return BrowserConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return BrowserConfig(**data)


__all__ = ["CommandSpec", "BrowserConfig", "ValidationError", "load_config"]
