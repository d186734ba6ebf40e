"""App: composição, infraestrutura e handlers padrão do conector.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- coordinators/: handlers de evento registrados por padrão
- infra/: implementações concretas (criptografia de eventos)
- protocols/: contratos/interfaces
- observability/: correlation_id para logs estruturados
- constants/: enums do Open API

Padrão: app compõe; api adapta; config configura.
"""
