"""Cliente do Open API do Feishu.

Cada operação segue o mesmo caminho:
capacidade -> token (coordenado) -> pipeline -> decode -> checagem de `code`.

As chamadas de mensagens, imagens e grupos usam o app_access_token como
bearer. Não há retry: qualquer falha sobe como `FeishuError`.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any, TypeVar

from api.connectors.feishu.capabilities import AppKind, Operation, ensure_supported
from api.connectors.feishu.errors import ApiError
from api.connectors.feishu.feishu_logging import log_api_error
from api.connectors.feishu.http_base import RequestPipeline
from api.connectors.feishu.models import (
    AppAccessTokenInternal,
    FeishuResponse,
    GroupChatsPage,
    GroupChatsResponse,
    MessageDetail,
    SendMessageResponse,
    TenantAccessTokenInternal,
    UploadImageResponse,
)
from api.connectors.feishu.request_options import RequestOptions
from api.connectors.feishu.response import check_response, decode_response
from api.connectors.feishu.token_cache import CredentialCache
from api.connectors.feishu.token_coordinator import TokenCoordinator, TokenGrant

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from api.payload_builders.feishu import FeishuMessage
    from app.constants.feishu import IDType
    from app.protocols.debug_logger import DebugLogger
    from config.settings import FeishuSettings

DEFAULT_BASE_URL = "https://open.feishu.cn"

AUTH_DOMAIN = "auth"
IM_DOMAIN = "im"

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

ResponseT = TypeVar("ResponseT", bound=FeishuResponse)


def next_page_query(page: GroupChatsPage) -> dict[str, str] | None:
    """Parâmetros para buscar a página seguinte; None se não houver mais.

    O `user_id_type` da página anterior é preservado a partir do primeiro item.
    """
    if not page.has_more:
        return None
    query = {"page_token": page.page_token}
    if page.items and page.items[0].owner_id_type:
        query["user_id_type"] = page.items[0].owner_id_type
    return query


class FeishuHttpClient:
    """Superfície de endpoints do Feishu para uma aplicação."""

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        *,
        app_kind: AppKind = AppKind.CUSTOM,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
        debug: bool = False,
        debug_logger: DebugLogger | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.app_id = app_id
        self._app_secret = app_secret
        self.app_kind = app_kind
        self.base_url = base_url.rstrip("/")
        self._pipeline = RequestPipeline(http_client)
        self._base_options = RequestOptions(debug=debug, debug_logger=debug_logger)
        self._app_access = TokenCoordinator(
            "app_access_token",
            self._refresh_app_access_token,
            cache=CredentialCache(clock),
        )
        self._tenant_access = TokenCoordinator(
            "tenant_access_token",
            self._refresh_tenant_access_token,
            cache=CredentialCache(clock),
        )

    async def aclose(self) -> None:
        await self._pipeline.aclose()

    # --- Access token ---------------------------------------------------------

    async def get_app_access_token_internal(self) -> AppAccessTokenInternal:
        """Emite app_access_token (aplicação custom) e grava no slot."""
        resp = await self._fetch_app_access_token()
        self._app_access.store(TokenGrant(resp.app_access_token, resp.expire))
        return resp

    async def get_tenant_access_token_internal(self) -> TenantAccessTokenInternal:
        """Emite tenant_access_token (aplicação custom) e grava no slot."""
        resp = await self._fetch_tenant_access_token()
        self._tenant_access.store(TokenGrant(resp.tenant_access_token, resp.expire))
        return resp

    async def get_app_access_token(self) -> str:
        """app_access_token válido (renova só quando necessário)."""
        return await self._app_access.acquire()

    async def get_tenant_access_token(self) -> str:
        """tenant_access_token válido (renova só quando necessário)."""
        return await self._tenant_access.acquire()

    async def _refresh_app_access_token(self) -> TokenGrant:
        resp = await self._fetch_app_access_token()
        return TokenGrant(resp.app_access_token, resp.expire)

    async def _refresh_tenant_access_token(self) -> TokenGrant:
        resp = await self._fetch_tenant_access_token()
        return TokenGrant(resp.tenant_access_token, resp.expire)

    async def _fetch_app_access_token(self) -> AppAccessTokenInternal:
        options = self._options(AUTH_DOMAIN, "app_access_token_internal")
        ensure_supported(
            self.app_kind,
            Operation.APP_ACCESS_TOKEN_INTERNAL,
            api_domain=options.api_domain,
            api_name=options.api_name,
        )
        return await self._call(
            "POST",
            "/open-apis/auth/v3/app_access_token/internal",
            AppAccessTokenInternal,
            body=self._credentials(),
            options=options.with_headers({"Content-Type": JSON_CONTENT_TYPE}),
        )

    async def _fetch_tenant_access_token(self) -> TenantAccessTokenInternal:
        options = self._options(AUTH_DOMAIN, "tenant_access_token_internal")
        ensure_supported(
            self.app_kind,
            Operation.TENANT_ACCESS_TOKEN_INTERNAL,
            api_domain=options.api_domain,
            api_name=options.api_name,
        )
        return await self._call(
            "POST",
            "/open-apis/auth/v3/tenant_access_token/internal",
            TenantAccessTokenInternal,
            body=self._credentials(),
            options=options.with_headers({"Content-Type": JSON_CONTENT_TYPE}),
        )

    # --- Mensagens ------------------------------------------------------------

    async def send_message(
        self,
        receiver_id: str,
        id_type: IDType,
        message: FeishuMessage,
    ) -> MessageDetail:
        """Envia mensagem a um usuário ou grupo.

        Args:
            receiver_id: ID do destinatário no namespace `id_type`
            id_type: open_id, union_id, user_id, email ou chat_id
            message: Mensagem montada pelos builders

        Raises:
            FeishuError: Capacidade, transporte, decode ou `code` != 0
        """
        options = await self._authorized(IM_DOMAIN, "send_message", Operation.SEND_MESSAGE)
        resp = await self._call(
            "POST",
            "/open-apis/im/v1/messages",
            SendMessageResponse,
            body={
                "receive_id": receiver_id,
                "content": message.content_json(),
                "msg_type": str(message.msg_type),
            },
            options=options.with_headers({"Content-Type": JSON_CONTENT_TYPE}).with_query_param(
                "receive_id_type", str(id_type)
            ),
        )
        return resp.data

    async def reply_message(self, message_id: str, message: FeishuMessage) -> MessageDetail:
        """Responde a uma mensagem existente."""
        options = await self._authorized(IM_DOMAIN, "reply_message", Operation.REPLY_MESSAGE)
        resp = await self._call(
            "POST",
            f"/open-apis/im/v1/messages/{message_id}/reply",
            SendMessageResponse,
            body={"content": message.content_json(), "msg_type": str(message.msg_type)},
            options=options.with_headers({"Content-Type": JSON_CONTENT_TYPE}),
        )
        return resp.data

    # --- Imagens --------------------------------------------------------------

    async def upload_image(
        self,
        *,
        path: str | None = None,
        stream: bytes | IO[bytes] | None = None,
        filename: str = "",
    ) -> str:
        """Sobe imagem de mensagem (JPEG, PNG, WEBP, GIF, TIFF, BMP, ICO até 10MB).

        Informe `path` ou `stream` + `filename`.

        Returns:
            image_key para usar em mensagens
        """
        if (path is None) == (stream is None):
            raise ValueError("upload_image exige path ou stream")

        options = await self._authorized(IM_DOMAIN, "upload_image", Operation.UPLOAD_IMAGE)
        options = options.with_form_field("image_type", "message")
        if path is not None:
            options = options.with_form_file("image", path)
        else:
            options = options.with_form_stream("image", filename or "image", stream)  # type: ignore[arg-type]

        resp = await self._call("POST", "/open-apis/im/v1/images", UploadImageResponse, options=options)
        return resp.data.image_key

    # --- Grupos ---------------------------------------------------------------

    async def list_group_chats(
        self,
        *,
        page_size: int | None = None,
        page_token: str | None = None,
        owner_id_type: IDType | None = None,
        next_page_of: GroupChatsPage | None = None,
    ) -> GroupChatsPage:
        """Lista grupos em que o bot (ou usuário) está.

        `owner_id_type` controla o tipo de `owner_id` nos itens.
        `next_page_of` aplica `next_page_query` da página anterior por cima
        dos demais parâmetros.
        """
        options = await self._authorized(IM_DOMAIN, "list_group_chats", Operation.LIST_GROUP_CHATS)
        if owner_id_type is not None:
            options = options.with_query_param("user_id_type", str(owner_id_type))
        if page_size is not None:
            options = options.with_query_param("page_size", str(page_size))
        if page_token is not None:
            options = options.with_query_param("page_token", page_token)
        if next_page_of is not None:
            query = next_page_query(next_page_of)
            if query is not None:
                options = options.with_query(query)

        resp = await self._call("GET", "/open-apis/im/v1/chats", GroupChatsResponse, options=options)
        return resp.data

    # --- Internos -------------------------------------------------------------

    def _credentials(self) -> dict[str, str]:
        return {"app_id": self.app_id, "app_secret": self._app_secret}

    def _options(self, api_domain: str, api_name: str) -> RequestOptions:
        return self._base_options.with_labels(api_domain, api_name)

    async def _authorized(
        self,
        api_domain: str,
        api_name: str,
        operation: Operation,
    ) -> RequestOptions:
        options = self._options(api_domain, api_name)
        ensure_supported(self.app_kind, operation, api_domain=api_domain, api_name=api_name)
        token = await self._app_access.acquire()
        return options.with_headers({"Authorization": f"Bearer {token}"})

    async def _call(
        self,
        method: str,
        path: str,
        shape: type[ResponseT],
        *,
        body: Any = None,
        options: RequestOptions,
    ) -> ResponseT:
        raw = await self._pipeline.execute(method, self.base_url + path, body, options)
        resp = decode_response(raw, shape, options.api_domain, options.api_name, raw.request_id)
        try:
            check_response(resp, raw.request_id, options.api_domain, options.api_name)
        except ApiError as exc:
            log_api_error(exc, method, path)
            raise
        return resp


def create_feishu_http_client(
    settings: FeishuSettings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    debug_logger: DebugLogger | None = None,
) -> FeishuHttpClient:
    """Factory com configuração carregada do ambiente.

    Args:
        settings: FeishuSettings opcional. Se None, carrega do ambiente.
        http_client: Transporte injetado (testes, proxies)
        debug_logger: Destino das linhas [FEISHU-DEBUG]
    """
    # Import local para evitar dependência circular
    from config.logging import get_feishu_debug_logger
    from config.settings import get_feishu_settings

    feishu = settings or get_feishu_settings()
    if feishu.debug and debug_logger is None:
        debug_logger = get_feishu_debug_logger()
    return FeishuHttpClient(
        feishu.app_id,
        feishu.app_secret,
        app_kind=AppKind(feishu.app_kind),
        base_url=feishu.base_url,
        http_client=http_client,
        debug=feishu.debug,
        debug_logger=debug_logger,
    )
