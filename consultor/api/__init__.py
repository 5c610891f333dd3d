"""Camada HTTP (webhook Twilio)"""

from .webhook import create_app

__all__ = ["create_app"]
