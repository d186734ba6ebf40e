"""Erros de criptografia de eventos do Feishu.

Definido em app/infra para manter boundaries corretas.
Re-exportado pelo pacote de webhook em api/connectors/feishu.
"""


class CryptoError(Exception):
    """Ciphertext malformado ou falha ao descriptografar o evento."""
