"""API: camada de borda do conector Feishu.

Subpastas:
- connectors/: cliente do Open API e ingestão de webhook
- payload_builders/: construção de mensagens (text, post, cartões...)
- routes/: endpoints HTTP (webhook de eventos)

NÃO PODE conter: regras de negócio dos handlers de evento.
"""
