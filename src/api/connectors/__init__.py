"""Connectors por canal: adapters de borda para APIs externas.

Estrutura:
- feishu/: Open API do Feishu (Lark) e webhook de eventos
"""

__all__: list[str] = []
