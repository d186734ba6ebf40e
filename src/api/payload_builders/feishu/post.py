"""Builder de mensagens de texto rico (`post`).

Cada `Post` descreve um locale. Os elementos são agrupados em parágrafos;
uma imagem sempre ocupa um parágrafo próprio, então o parágrafo corrente é
fechado antes dela e um novo é aberto depois.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from api.payload_builders.feishu.base import FeishuMessage
from app.constants.feishu import Language, MsgType


@dataclass(frozen=True, slots=True)
class PostElement:
    elem: dict[str, Any]
    is_image: bool = False


@dataclass(frozen=True, slots=True)
class Post:
    """Conteúdo de um locale."""

    lang: Language
    title: str
    elements: list[PostElement] = field(default_factory=list)

    def paragraphs(self) -> list[list[dict[str, Any]]]:
        result: list[list[dict[str, Any]]] = []
        current: list[dict[str, Any]] = []
        for element in self.elements:
            if element.is_image:
                result.append(current)
                result.append([element.elem])
                current = []
            else:
                current.append(element.elem)
        result.append(current)
        return result


def post_text(text: str, un_escape: bool = False) -> PostElement:
    elem: dict[str, Any] = {"tag": "text", "text": text}
    if un_escape:
        elem["un_escape"] = True
    return PostElement(elem)


def post_link(text: str, href: str) -> PostElement:
    return PostElement({"tag": "a", "text": text, "href": href})


def post_image(image_key: str) -> PostElement:
    return PostElement({"tag": "img", "image_key": image_key}, is_image=True)


def post_mention_all() -> PostElement:
    return PostElement({"tag": "at", "user_id": "all"})


def post_mention_by_open_id(open_id: str, name: str = "") -> PostElement:
    """Open ID inválido mostra apenas `@` (diferente de mensagens `text`)."""
    elem: dict[str, Any] = {"tag": "at", "user_id": open_id}
    if name:
        elem["user_name"] = name
    return PostElement(elem)


def post_message(post: Post, *more: Post) -> FeishuMessage:
    """Monta mensagem `post` com um ou mais locales."""
    content: dict[str, Any] = {}
    for item in (post, *more):
        content[str(item.lang)] = {"title": item.title, "content": item.paragraphs()}
    return FeishuMessage(MsgType.POST, content)
