"""Entrada do servidor: python -m consultor"""

import logging

import uvicorn

from consultor.api import create_app
from consultor.runtime import setup_logging
from consultor.settings import settings, validate_settings

logger = logging.getLogger("consultor")


def main() -> None:
    setup_logging()

    for area, warning in validate_settings().items():
        logger.warning(f"⚠️ [{area}] {warning}")

    app = create_app()
    logger.info(f"🚀 Consultor FIAT ouvindo em http://{settings.host}:{settings.port} (webhook: /twilio/whatsapp)")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
