"""
Clients component - bot/human classification from the User-Agent.
"""

from ._impl import ClientClass, ClientConfig, classify_client, is_bot
from .component import run, run_classify
from .models import ClassifyClientInput, ClassifyClientOutput

__all__ = [
    "run",
    "run_classify",
    "ClassifyClientInput",
    "ClassifyClientOutput",
    "ClientClass",
    "ClientConfig",
    "classify_client",
    "is_bot",
]
