"""Builders de mensagens do Feishu (text, post, image, interactive...)."""

from api.payload_builders.feishu.base import (
    FeishuMessage,
    audio_message,
    file_message,
    image_message,
    media_message,
    share_chat_message,
    share_user_message,
    sticker_message,
    text_message,
)
from api.payload_builders.feishu.card import (
    Card,
    CardConfig,
    CardElement,
    CardTitleBgColor,
    ElementButton,
    ImageMode,
    card_action,
    card_actions,
    card_field,
    card_fields,
    card_horizontal_rule,
    card_image,
    card_markdown,
    card_message,
    card_note,
    card_plain_text,
    multi_url,
)
from api.payload_builders.feishu.post import (
    Post,
    PostElement,
    post_image,
    post_link,
    post_mention_all,
    post_mention_by_open_id,
    post_message,
    post_text,
)
from api.payload_builders.feishu.text import (
    bold,
    horizontal_rule,
    italics,
    link,
    markdown_image,
    markdown_mention_by_open_id,
    mention_all,
    mention_by_open_id,
    strikethrough,
    text_link,
)

__all__ = [
    "Card",
    "CardConfig",
    "CardElement",
    "CardTitleBgColor",
    "ElementButton",
    "FeishuMessage",
    "ImageMode",
    "Post",
    "PostElement",
    "audio_message",
    "bold",
    "card_action",
    "card_actions",
    "card_field",
    "card_fields",
    "card_horizontal_rule",
    "card_image",
    "card_markdown",
    "card_message",
    "card_note",
    "card_plain_text",
    "file_message",
    "horizontal_rule",
    "image_message",
    "italics",
    "link",
    "markdown_image",
    "markdown_mention_by_open_id",
    "media_message",
    "mention_all",
    "mention_by_open_id",
    "multi_url",
    "post_image",
    "post_link",
    "post_mention_all",
    "post_mention_by_open_id",
    "post_message",
    "post_text",
    "share_chat_message",
    "share_user_message",
    "sticker_message",
    "strikethrough",
    "text_message",
    "text_link",
]
