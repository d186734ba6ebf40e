"""Payload builders por canal.

Estrutura:
- feishu/: mensagens do Open API do Feishu (text, post, image, interactive...)
"""

__all__: list[str] = []
