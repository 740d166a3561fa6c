from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Dict, Optional

APP_LOGGER_NAME = "quote_keeper"

DEFAULT_FORMAT = "%(asctime)s [%(levelname).4s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    component_levels: Optional[Dict[str, str]] = None,
) -> None:
    """配置 quote_keeper 根日志器：控制台输出，可选文件输出与分组件级别。"""
    root = logging.getLogger(APP_LOGGER_NAME)

    # 重复调用时先移除旧的 handler
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    formatter = logging.Formatter(DEFAULT_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_path), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if component_levels:
        for component, component_level in component_levels.items():
            set_component_level(component, component_level)


def get_logger(name: str) -> logging.Logger:
    if name.startswith(APP_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")


def set_component_level(component: str, level: str) -> None:
    numeric_level = getattr(logging, level.upper(), None)
    if numeric_level is not None:
        get_logger(component).setLevel(numeric_level)
