"""Builder de cartões interativos (`interactive`).

Elementos de texto têm duas formas: bloco (`div`) quando ficam soltos no
cartão e inline quando embutidos em campos, botões ou notas.
Guia de cores: verde = sucesso, laranja = alerta, vermelho = erro, cinza = inativo.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from api.payload_builders.feishu.base import FeishuMessage
from app.constants.feishu import Language, MsgType

IMAGE_MIN_CUSTOM_WIDTH = 278
IMAGE_MAX_CUSTOM_WIDTH = 580


class CardTitleBgColor(StrEnum):
    DEFAULT = ""
    BLUE = "blue"
    WATHET = "wathet"
    TURQUOISE = "turquoise"
    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"
    CARMINE = "carmine"
    VIOLET = "violet"
    PURPLE = "purple"
    INDIGO = "indigo"
    GREY = "grey"


class ElementButton(StrEnum):
    DEFAULT = "default"
    PRIMARY = "primary"
    DANGER = "danger"


class ImageMode(StrEnum):
    CROP_CENTER = "crop_center"
    FIT_HORIZONTAL = "fit_horizontal"


@dataclass(frozen=True, slots=True)
class CardElement:
    block: dict[str, Any]
    inline: dict[str, Any] | None = None

    def render(self, embedded: bool = False) -> dict[str, Any]:
        if embedded and self.inline is not None:
            return self.inline
        return self.block


@dataclass(frozen=True, slots=True)
class Card:
    """Título e elementos de um locale."""

    lang: Language
    title: str
    elements: list[CardElement] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class CardConfig:
    """Propriedades do cartão; None mantém o padrão do Feishu."""

    enable_forward: bool | None = None
    update_multi: bool | None = None
    card_link: dict[str, str] | None = None

    def config_block(self) -> dict[str, Any] | None:
        cfg: dict[str, Any] = {}
        if self.enable_forward is not None:
            cfg["enable_forward"] = self.enable_forward
        if self.update_multi is not None:
            cfg["update_multi"] = self.update_multi
        return cfg or None


def multi_url(url: str, android: str, ios: str, pc: str) -> dict[str, str]:
    return {"url": url, "android_url": android, "ios_url": ios, "pc_url": pc}


def card_plain_text(text: str, lines: int = 0) -> CardElement:
    inline: dict[str, Any] = {"tag": "plain_text", "content": text}
    if lines > 0:
        inline["lines"] = lines
    return CardElement({"tag": "div", "text": inline}, inline)


def card_markdown(md: str, extra: CardElement | None = None) -> CardElement:
    """Texto `lark_md`; `extra` (normalmente uma imagem) fica à direita do bloco."""
    inline = {"tag": "lark_md", "content": md}
    block: dict[str, Any] = {"tag": "div", "text": inline}
    if extra is not None:
        block["extra"] = extra.render(embedded=True)
    return CardElement(block, inline)


def card_field(elem: CardElement, is_short: bool) -> dict[str, Any]:
    return {"text": elem.render(embedded=True), "is_short": is_short}


def card_fields(*fields: dict[str, Any]) -> CardElement:
    """Campos lado a lado (texto simples ou markdown)."""
    return CardElement({"tag": "div", "fields": list(fields)})


def card_action(
    elem: CardElement,
    url: str,
    button: ElementButton | None = None,
    urls: dict[str, str] | None = None,
) -> dict[str, Any]:
    action: dict[str, Any] = {"tag": "button", "text": elem.render(embedded=True), "url": url}
    if button is not None:
        action["type"] = str(button)
    if urls is not None:
        action["multi_url"] = urls
    return action


def card_actions(*actions: dict[str, Any]) -> CardElement:
    return CardElement({"tag": "action", "actions": list(actions)})


def card_horizontal_rule() -> CardElement:
    return CardElement({"tag": "hr"})


def card_image(
    img_key: str,
    *,
    hover: str = "",
    title: str | None = None,
    title_markdown: bool = False,
    mode: ImageMode | None = None,
    custom_width: int | None = None,
    compact_width: bool | None = None,
    preview: bool | None = None,
) -> CardElement:
    """Imagem; `custom_width` é limitado ao intervalo aceito (278-580 px)."""
    elem: dict[str, Any] = {
        "tag": "img",
        "img_key": img_key,
        "alt": {"tag": "plain_text", "content": hover},
    }
    if title is not None:
        if title_markdown:
            elem["title"] = {"tag": "lark_md", "content": title.lstrip()}
        else:
            elem["title"] = {"tag": "plain_text", "content": title}
    if mode is not None:
        elem["mode"] = str(mode)
    if custom_width is not None:
        elem["custom_width"] = min(max(custom_width, IMAGE_MIN_CUSTOM_WIDTH), IMAGE_MAX_CUSTOM_WIDTH)
    if compact_width is not None:
        elem["compact_width"] = compact_width
    if preview is not None:
        elem["preview"] = preview
    return CardElement(elem)


def card_note(*elements: CardElement) -> CardElement:
    """Nota de rodapé (texto simples, markdown ou imagem)."""
    return CardElement(
        {"tag": "note", "elements": [e.render(embedded=True) for e in elements]}
    )


def card_message(
    bg_color: CardTitleBgColor,
    config: CardConfig | None,
    card: Card,
    *more: Card,
) -> FeishuMessage:
    """Monta cartão i18n: um título e uma lista de elementos por locale."""
    i18n_title: dict[str, str] = {}
    i18n_elements: dict[str, list[dict[str, Any]]] = {}
    for item in (card, *more):
        i18n_title[str(item.lang)] = item.title
        i18n_elements[str(item.lang)] = [e.render() for e in item.elements]

    header: dict[str, Any] = {"title": {"i18n": i18n_title, "tag": "plain_text"}}
    if bg_color:
        header["template"] = str(bg_color)

    content: dict[str, Any] = {"header": header, "i18n_elements": i18n_elements}
    if config is not None:
        cfg = config.config_block()
        if cfg is not None:
            content["config"] = cfg
        if config.card_link is not None:
            content["card_link"] = config.card_link
    return FeishuMessage(MsgType.INTERACTIVE, content)
