"""Opções de uma chamada ao pipeline HTTP.

`RequestOptions` é imutável; cada método `with_*` devolve uma cópia.
Para a mesma chave o valor mais recente vence, exceto partes multipart,
que são acumuladas na ordem de registro.

Uso:
    options = (
        RequestOptions(api_domain="im", api_name="upload_image")
        .with_headers({"Authorization": f"Bearer {token}"})
        .with_form_field("image_type", "message")
        .with_form_file("image", "/tmp/logo.png")
    )
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import IO, TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from app.protocols.debug_logger import DebugLogger


@dataclass(frozen=True, slots=True)
class MultipartPart:
    """Parte de um corpo multipart.

    Exatamente uma fonte: `path` (aberto, lido e fechado pelo pipeline)
    ou `stream` (bytes ou arquivo binário do chamador).
    """

    field_name: str
    filename: str | None = None
    path: str | None = None
    stream: bytes | IO[bytes] | None = None

    def __post_init__(self) -> None:
        if (self.path is None) == (self.stream is None):
            raise ValueError("MultipartPart exige exatamente uma fonte: path ou stream")


_SCALAR_DEFAULTS: dict[str, object] = {
    "api_domain": "",
    "api_name": "",
    "http_client": None,
    "debug": False,
    "debug_logger": None,
}


@dataclass(frozen=True, slots=True)
class RequestOptions:
    """Configuração de uma chamada (rótulos, headers, query, multipart, transporte).

    `explicit` registra os campos escalares informados pelo chamador (no
    construtor com valor diferente do padrão ou por um `with_*`), para que
    `merged` respeite inclusive valores falsos como `with_debug(False)`.
    """

    api_domain: str = ""
    api_name: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    parts: tuple[MultipartPart, ...] = ()
    http_client: httpx.AsyncClient | None = None
    debug: bool = False
    debug_logger: DebugLogger | None = None
    explicit: frozenset[str] = field(default=frozenset(), repr=False, compare=False)

    def __post_init__(self) -> None:
        changed = {
            name
            for name, default in _SCALAR_DEFAULTS.items()
            if getattr(self, name) is not default and getattr(self, name) != default
        }
        object.__setattr__(self, "explicit", frozenset(self.explicit) | changed)

    def with_labels(self, api_domain: str, api_name: str) -> RequestOptions:
        return self._set(api_domain=api_domain, api_name=api_name)

    def with_headers(self, headers: Mapping[str, str]) -> RequestOptions:
        return replace(self, headers={**self.headers, **headers})

    def with_query(self, query: Mapping[str, str]) -> RequestOptions:
        return replace(self, query={**self.query, **query})

    def with_query_param(self, key: str, value: str) -> RequestOptions:
        return self.with_query({key: value})

    def with_form_field(self, name: str, value: str | bytes) -> RequestOptions:
        data = value.encode("utf-8") if isinstance(value, str) else value
        return self._append(MultipartPart(field_name=name, stream=data))

    def with_form_file(self, name: str, path: str) -> RequestOptions:
        """Anexa arquivo lido do disco; filename é o basename do caminho."""
        return self._append(
            MultipartPart(field_name=name, filename=os.path.basename(path), path=path)
        )

    def with_form_stream(
        self,
        name: str,
        filename: str,
        stream: bytes | IO[bytes],
    ) -> RequestOptions:
        return self._append(
            MultipartPart(field_name=name, filename=os.path.basename(filename), stream=stream)
        )

    def with_transport(self, http_client: httpx.AsyncClient | None) -> RequestOptions:
        return self._set(http_client=http_client)

    def with_debug(self, debug: bool) -> RequestOptions:
        return self._set(debug=debug)

    def with_debug_logger(self, debug_logger: DebugLogger | None) -> RequestOptions:
        return self._set(debug_logger=debug_logger)

    def merged(self, other: RequestOptions) -> RequestOptions:
        """Aplica `other` por cima destas opções.

        Rótulos, transporte, debug e logger de `other` vencem quando foram
        informados, mesmo com valor falso; headers e query são mesclados;
        partes multipart são concatenadas.
        """
        picked = {
            name: getattr(other if name in other.explicit else self, name)
            for name in _SCALAR_DEFAULTS
        }
        return RequestOptions(
            headers={**self.headers, **other.headers},
            query={**self.query, **other.query},
            parts=self.parts + other.parts,
            explicit=self.explicit | other.explicit,
            **picked,  # type: ignore[arg-type]
        )

    def debug_log(self, msg: str) -> None:
        """Emite linha de debug somente com flag ativa e logger presente."""
        if self.debug_logger is None or not self.debug:
            return
        self.debug_logger.debug("[FEISHU-DEBUG] " + msg)

    def _set(self, **changes: object) -> RequestOptions:
        return replace(self, explicit=self.explicit | frozenset(changes), **changes)  # type: ignore[arg-type]

    def _append(self, part: MultipartPart) -> RequestOptions:
        return replace(self, parts=(*self.parts, part))
