"""Consultor Fortes: roteamento de conversas WhatsApp para agentes especializados"""

__version__ = "0.3.0"
