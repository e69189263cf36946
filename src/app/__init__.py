"""App — núcleo da resolução de identidades WhatsApp.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- constants/: tabelas de DDD e constantes de numeração
- domain/: value objects (NormalizedResult, CacheEntry, CacheStats)
- services/: transformações puras e o resolver
- infra/: cache em memória e cliente WPPConnect
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via log estruturado

Padrão: services decidem; infra executa IO; utils apoia.
"""
