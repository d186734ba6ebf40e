"""Helpers de texto: menções e o subconjunto de markdown aceito pelo Feishu.

Referência de sintaxe: https://open.feishu.cn/document/ukTMukTMukTM/uADOwUjLwgDM14CM4ATN
"""

from __future__ import annotations


def mention_all() -> str:
    """@todos em mensagens `text`."""
    return '<at user_id="all"></at>'


def mention_by_open_id(open_id: str, name: str = "") -> str:
    """@usuário em mensagens `text`; `name` aparece se o open_id for inválido."""
    return f'<at user_id="{open_id}">{name}</at>'


def italics(s: str) -> str:
    return f"*{s}*"


def bold(s: str) -> str:
    return f"**{s}**"


def strikethrough(s: str) -> str:
    return f"~~{s}~~"


def link(url: str) -> str:
    return f"<a>{url}</a>"


def text_link(text: str, url: str) -> str:
    return f"[{text}]({url})"


def markdown_image(hover_text: str, image_key: str) -> str:
    return "!" + text_link(hover_text, image_key)


def horizontal_rule() -> str:
    return " ---"


def markdown_mention_by_open_id(open_id: str) -> str:
    """@usuário dentro de `lark_md`."""
    return f"<at id={open_id}></at>"
