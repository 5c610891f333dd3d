"""Filtro de domínio para respostas com busca web

Remove da resposta final qualquer linha com link fora dos domínios permitidos.
"""

import logging
import re
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

# URLs soltas ou dentro de links markdown: [texto](https://...)
URL_PATTERN = re.compile(r"https?://[^\s)\]>\"']+", re.IGNORECASE)


def host_allowed(url: str, allowed_domains: tuple[str, ...] | list[str]) -> bool:
    """True se o host da URL é um domínio permitido ou subdomínio dele"""
    host = (urlparse(url).hostname or "").lower().rstrip(".")
    if not host:
        return False
    for domain in allowed_domains:
        domain = domain.lower().lstrip(".")
        if host == domain or host.endswith("." + domain):
            return True
    return False


def filter_offsite_lines(text: str, allowed_domains: tuple[str, ...] | list[str]) -> str:
    """Remove linhas que citam URLs fora dos domínios permitidos

    Args:
        text: resposta do responder
        allowed_domains: domínios aceitos (vazio = sem filtro)

    Returns:
        Texto sem as linhas rejeitadas
    """
    if not allowed_domains:
        return text

    kept = []
    for line in text.splitlines():
        urls = URL_PATTERN.findall(line)
        offsite = [u for u in urls if not host_allowed(u, allowed_domains)]
        if offsite:
            logger.info(f"descartando resultado fora do domínio: {offsite[0]}")
            continue
        kept.append(line)
    return "\n".join(kept).strip()
