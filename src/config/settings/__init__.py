"""Agregador de settings do conector Feishu.

Re-exporta todas as settings e funções de cada módulo.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Channel-specific settings
from config.settings.feishu import (
    FEISHU_OPEN_BASE_URL,
    FeishuSettings,
    get_feishu_settings,
)

__all__ = [
    "FEISHU_OPEN_BASE_URL",
    "BaseSettings",
    "Environment",
    "FeishuSettings",
    "get_base_settings",
    "get_feishu_settings",
]
