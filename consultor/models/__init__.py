"""Modelos de dados compartilhados (conversa e agentes)"""

from .agents import (
    FileSearchTool,
    FunctionTool,
    InteractionRecord,
    ModelSettings,
    ResponderConfig,
    RouteDecision,
    RouteIdentifier,
    RunResult,
    WebSearchTool,
)
from .conversation import ConversationState, TextBlock, ToolCallBlock, ToolResultBlock, Turn

__all__ = [
    "ConversationState",
    "TextBlock",
    "ToolCallBlock",
    "ToolResultBlock",
    "Turn",
    "RouteIdentifier",
    "RouteDecision",
    "ModelSettings",
    "WebSearchTool",
    "FileSearchTool",
    "FunctionTool",
    "ResponderConfig",
    "InteractionRecord",
    "RunResult",
]
