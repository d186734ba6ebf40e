"""Constantes criptográficas dos eventos criptografados do Feishu."""

AES_BLOCK_SIZE = 16  # bytes; também o tamanho do IV prefixado
AES_KEY_SIZE = 32  # 256 bits (SHA-256 da encrypt key)
