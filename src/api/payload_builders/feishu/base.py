"""Mensagem pronta para envio e builders de conteúdo simples."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from app.constants.feishu import MsgType


@dataclass(frozen=True, slots=True)
class FeishuMessage:
    """Par `msg_type` + conteúdo (serializado como string JSON no envio)."""

    msg_type: MsgType
    content: dict[str, Any]

    def content_json(self) -> str:
        return json.dumps(self.content, ensure_ascii=False)


def text_message(text: str) -> FeishuMessage:
    return FeishuMessage(MsgType.TEXT, {"text": text})


def image_message(image_key: str) -> FeishuMessage:
    return FeishuMessage(MsgType.IMAGE, {"image_key": image_key})


def share_chat_message(chat_id: str) -> FeishuMessage:
    return FeishuMessage(MsgType.SHARE_CHAT, {"chat_id": chat_id})


def share_user_message(open_id: str) -> FeishuMessage:
    return FeishuMessage(MsgType.SHARE_USER, {"user_id": open_id})


def audio_message(file_key: str) -> FeishuMessage:
    return FeishuMessage(MsgType.AUDIO, {"file_key": file_key})


def media_message(file_key: str, image_key: str) -> FeishuMessage:
    """Vídeo: `image_key` é a capa."""
    return FeishuMessage(MsgType.MEDIA, {"file_key": file_key, "image_key": image_key})


def file_message(file_key: str) -> FeishuMessage:
    return FeishuMessage(MsgType.FILE, {"file_key": file_key})


def sticker_message(file_key: str) -> FeishuMessage:
    return FeishuMessage(MsgType.STICKER, {"file_key": file_key})
