"""Pipeline HTTP genérico do conector Feishu.

Monta e executa uma única requisição (JSON ou multipart) e devolve os bytes
brutos junto com o X-Request-Id. Não guarda estado entre chamadas: o mesmo
pipeline pode ser compartilhado por várias corrotinas desde que o
`httpx.AsyncClient` injetado também possa.

Não há retry nem timeout internos; o cliente injetado pode trazer o seu.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from api.connectors.feishu.errors import EncodeError, TransportError
from api.connectors.feishu.request_options import RequestOptions

if TYPE_CHECKING:
    from api.connectors.feishu.request_options import MultipartPart

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"


@dataclass(frozen=True, slots=True)
class RawResponse:
    """Resposta crua de uma chamada."""

    request_id: str
    status_code: int
    content: bytes


class RequestPipeline:
    """Executa chamadas ao Open API de forma uniforme."""

    def __init__(self, http_client: httpx.AsyncClient | None = None) -> None:
        self._http_client = http_client
        self._owns_client = http_client is None

    def _get_http_client(self, options: RequestOptions) -> httpx.AsyncClient:
        if options.http_client is not None:
            return options.http_client
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=None)
        return self._http_client

    async def aclose(self) -> None:
        """Fecha o cliente HTTP padrão (clientes injetados ficam com o chamador)."""
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def execute(
        self,
        method: str,
        url: str,
        body: Any = None,
        options: RequestOptions | None = None,
    ) -> RawResponse:
        """Executa uma chamada e retorna bytes crus + request_id.

        Args:
            method: Método HTTP
            url: URL absoluta
            body: Corpo JSON (ignorado se houver partes multipart; None vira `null`)
            options: Rótulos, headers, query, multipart, transporte e debug

        Raises:
            EncodeError: Falha local ao montar JSON, multipart, URL ou headers
            TransportError: Falha ao enviar ou ler a resposta
        """
        opts = options or RequestOptions()
        client = self._get_http_client(opts)
        request = self._build_request(client, method, url, body, opts)

        start = time.perf_counter()
        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise TransportError(
                str(exc) or type(exc).__name__,
                api_domain=opts.api_domain,
                api_name=opts.api_name,
            ) from exc

        request_id = response.headers.get(REQUEST_ID_HEADER, "")
        try:
            content = await response.aread()
        except httpx.HTTPError as exc:
            opts.debug_log(
                f"<-- [{opts.api_domain} - {opts.api_name}] {method} {request.url} "
                f"{response.status_code} {_elapsed(start)}\nread body: {exc}"
            )
            raise TransportError(
                str(exc) or type(exc).__name__,
                api_domain=opts.api_domain,
                api_name=opts.api_name,
                request_id=request_id,
            ) from exc
        finally:
            await response.aclose()

        opts.debug_log(
            f"<-- [{opts.api_domain} - {opts.api_name}] {method} {request.url} "
            f"{response.status_code} {_elapsed(start)}\n{content.decode('utf-8', 'replace')}"
        )
        logger.debug(
            "feishu_request_completed",
            extra={
                "api_domain": opts.api_domain,
                "api_name": opts.api_name,
                "status_code": response.status_code,
                "request_id": request_id,
            },
        )
        return RawResponse(request_id=request_id, status_code=response.status_code, content=content)

    def _build_request(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        body: Any,
        opts: RequestOptions,
    ) -> httpx.Request:
        label = f"--> [{opts.api_domain} - {opts.api_name}] {method}"
        if opts.parts:
            files, uploaded_name = self._build_multipart(method, url, opts)
            request = self._new_request(client, method, url, opts, files=files)
            opts.debug_log(f"{label} {request.url}\nfilename: {uploaded_name}")
            return request

        try:
            encoded = json.dumps(body, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise EncodeError(
                f"json encode: {exc}", api_domain=opts.api_domain, api_name=opts.api_name
            ) from exc

        request = self._new_request(client, method, url, opts, content=encoded.encode("utf-8"))
        if body is None:
            opts.debug_log(f"{label} {request.url}")
        else:
            opts.debug_log(f"{label} {request.url}\n{encoded}")
        return request

    def _new_request(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        opts: RequestOptions,
        **kwargs: Any,
    ) -> httpx.Request:
        """Monta o `httpx.Request`; URL ou header não codificável vira `EncodeError`."""
        try:
            return client.build_request(
                method, url, params=opts.query or None, headers=opts.headers, **kwargs
            )
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise EncodeError(
                f"build request: {exc}", api_domain=opts.api_domain, api_name=opts.api_name
            ) from exc

    def _build_multipart(
        self,
        method: str,
        url: str,
        opts: RequestOptions,
    ) -> tuple[list[tuple[str, tuple[str | None, bytes]]], str]:
        """Converte partes em lista ordenada aceita por `httpx` (`files=`).

        Devolve também o nome do último arquivo anexado, usado na linha de debug.
        """
        files: list[tuple[str, tuple[str | None, bytes]]] = []
        uploaded_name = ""
        for part in opts.parts:
            if part.filename:
                uploaded_name = part.path or part.filename
            data = self._read_part(part, method, url, opts)
            files.append((part.field_name, (part.filename, data)))
        return files, uploaded_name

    def _read_part(
        self,
        part: MultipartPart,
        method: str,
        url: str,
        opts: RequestOptions,
    ) -> bytes:
        if part.path is None:
            stream = part.stream
            if isinstance(stream, bytes | bytearray):
                return bytes(stream)
            try:
                return stream.read()  # type: ignore[union-attr]
            except (OSError, ValueError) as exc:
                raise EncodeError(
                    f"read stream {part.field_name}: {exc}",
                    api_domain=opts.api_domain,
                    api_name=opts.api_name,
                ) from exc

        try:
            handle = open(part.path, "rb")  # noqa: SIM115
        except OSError as exc:
            raise EncodeError(
                f"open {part.path}: {exc}", api_domain=opts.api_domain, api_name=opts.api_name
            ) from exc
        try:
            return handle.read()
        except OSError as exc:
            raise EncodeError(
                f"read {part.path}: {exc}", api_domain=opts.api_domain, api_name=opts.api_name
            ) from exc
        finally:
            try:
                handle.close()
            except OSError as exc:
                opts.debug_log(
                    f"--> [{opts.api_domain} - {opts.api_name}] {method} {url}\n"
                    f"filename: {part.path}: unexpected close: {exc}"
                )


def _elapsed(start: float) -> str:
    return f"{(time.perf_counter() - start) * 1000:.1f}ms"
