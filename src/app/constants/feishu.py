"""Enums de domínio do Open API do Feishu."""

from __future__ import annotations

from enum import StrEnum


class MsgType(StrEnum):
    """Tipos de mensagem aceitos em `msg_type`."""

    TEXT = "text"
    POST = "post"
    IMAGE = "image"
    FILE = "file"
    AUDIO = "audio"
    MEDIA = "media"
    STICKER = "sticker"
    INTERACTIVE = "interactive"
    SHARE_CHAT = "share_chat"
    SHARE_USER = "share_user"


class IDType(StrEnum):
    """Namespaces de identificador (receive_id_type / user_id_type)."""

    OPEN_ID = "open_id"
    UNION_ID = "union_id"
    USER_ID = "user_id"
    EMAIL = "email"
    CHAT_ID = "chat_id"


class EventType(StrEnum):
    """Tipos de evento conhecidos do webhook."""

    URL_VERIFICATION = "url_verification"
    MESSAGE_RECEIVED = "im.message.receive_v1"


class Language(StrEnum):
    """Locales aceitos em conteúdo i18n (post e cartões)."""

    ZH_CN = "zh_cn"
    EN_US = "en_us"
    JA_JP = "ja_jp"
