"""Modelos de resposta e de evento do Open API do Feishu.

Todos ignoram campos desconhecidos: o Feishu acrescenta campos novos sem
aviso e não queremos quebrar o decode por isso.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FeishuModel(BaseModel):
    """Base comum (campos extras ignorados)."""

    model_config = ConfigDict(extra="ignore")


class FeishuResponse(FeishuModel):
    """Envelope padrão `{code, msg, ...}` de toda resposta."""

    code: int = 0
    msg: str = ""


# --- Access token -------------------------------------------------------------


class AppAccessTokenInternal(FeishuResponse):
    app_access_token: str = ""
    expire: int = 0  # segundos


class TenantAccessTokenInternal(FeishuResponse):
    tenant_access_token: str = ""
    expire: int = 0  # segundos


# --- Mensagens ----------------------------------------------------------------


class Sender(FeishuModel):
    id: str = ""
    id_type: str = ""
    sender_type: str = ""
    tenant_key: str = ""


class MessageBody(FeishuModel):
    content: str = ""  # JSON serializado; formato depende do msg_type


class Mention(FeishuModel):
    key: str = ""  # ex.: "@_user_3"
    id: str = ""
    id_type: str = ""
    name: str = ""
    tenant_key: str = ""


class MessageDetail(FeishuModel):
    message_id: str = ""
    root_id: str = ""
    parent_id: str = ""
    msg_type: str = ""
    create_time: str = ""  # ms
    update_time: str = ""  # ms
    deleted: bool = False
    updated: bool = False
    chat_id: str = ""
    sender: Sender = Field(default_factory=Sender)
    body: MessageBody = Field(default_factory=MessageBody)
    mentions: list[Mention] = Field(default_factory=list)
    upper_message_id: str = ""


class SendMessageResponse(FeishuResponse):
    data: MessageDetail = Field(default_factory=MessageDetail)


# --- Grupos -------------------------------------------------------------------


class GroupChat(FeishuModel):
    chat_id: str = ""
    avatar: str = ""
    name: str = ""
    description: str = ""
    owner_id: str = ""  # tipo controlado por user_id_type
    owner_id_type: str = ""
    external: bool = False
    tenant_key: str = ""


class GroupChatsPage(FeishuModel):
    items: list[GroupChat] = Field(default_factory=list)
    page_token: str = ""  # vazio quando has_more é False
    has_more: bool = False


class GroupChatsResponse(FeishuResponse):
    data: GroupChatsPage = Field(default_factory=GroupChatsPage)


# --- Imagens ------------------------------------------------------------------


class UploadedImage(FeishuModel):
    image_key: str = ""


class UploadImageResponse(FeishuResponse):
    data: UploadedImage = Field(default_factory=UploadedImage)


# --- Eventos ------------------------------------------------------------------


class EventHeaderV2(FeishuModel):
    """Header de eventos schema 2.0."""

    event_id: str = ""
    event_type: str = ""
    create_time: str = ""  # ms
    token: str = ""
    app_id: str = ""
    tenant_key: str = ""


class EventHeaderV1(FeishuModel):
    """Campos de topo de eventos 1.0 (sem bloco header)."""

    ts: str = ""
    uuid: str = ""
    token: str = ""
    type: str = ""


class EventUserID(FeishuModel):
    union_id: str = ""
    user_id: str = ""
    open_id: str = ""


class EventSender(FeishuModel):
    sender_id: EventUserID = Field(default_factory=EventUserID)
    sender_type: str = ""  # hoje apenas "user"
    tenant_key: str = ""


class EventMention(FeishuModel):
    key: str = ""
    id: EventUserID = Field(default_factory=EventUserID)
    name: str = ""
    tenant_key: str = ""


class EventMessage(FeishuModel):
    message_id: str = ""
    root_id: str = ""
    parent_id: str = ""
    create_time: str = ""
    chat_id: str = ""
    chat_type: str = ""  # p2p | group
    message_type: str = ""
    content: str = ""
    mentions: list[EventMention] = Field(default_factory=list)


class EventMessageReceived(FeishuModel):
    """Corpo do evento `im.message.receive_v1`."""

    sender: EventSender = Field(default_factory=EventSender)
    message: EventMessage = Field(default_factory=EventMessage)
