"""Modelos de conversa

Turnos (Turn) e blocos de conteúdo que formam o histórico de uma requisição.
O histórico (ConversationState) é append-only: turnos nunca são alterados nem removidos.
"""
from __future__ import annotations

from typing import Annotated, Iterator, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypeAlias


# =============================================================================
# Tipos básicos
# =============================================================================

Role: TypeAlias = Literal['user', 'assistant', 'tool']
"""Papel de quem produziu o turno"""


class TextBlock(BaseModel):
    """Bloco de texto simples"""
    model_config = ConfigDict(frozen=True)

    kind: Literal['text'] = 'text'
    value: str


class ToolCallBlock(BaseModel):
    """Chamada de ferramenta local feita pelo modelo"""
    model_config = ConfigDict(frozen=True)

    kind: Literal['tool_call'] = 'tool_call'
    call_id: str
    name: str
    arguments: str = Field(default='{}', description="Argumentos em JSON, como o modelo enviou")


class ToolResultBlock(BaseModel):
    """Resultado de uma ferramenta local, devolvido ao modelo"""
    model_config = ConfigDict(frozen=True)

    kind: Literal['tool_result'] = 'tool_result'
    call_id: str
    output: str


ContentBlock: TypeAlias = Annotated[
    Union[TextBlock, ToolCallBlock, ToolResultBlock],
    Field(discriminator='kind'),
]


# =============================================================================
# Turno
# =============================================================================

class Turn(BaseModel):
    """Uma entrada do histórico (imutável)"""
    model_config = ConfigDict(frozen=True)

    role: Role
    content: tuple[ContentBlock, ...] = Field(default_factory=tuple)
    author: Optional[str] = Field(default=None, description="Nome do responder que gerou o turno")

    @classmethod
    def user(cls, text: str) -> 'Turn':
        if not text or not text.strip():
            raise ValueError("turno de usuário precisa de conteúdo")
        return cls(role='user', content=(TextBlock(value=text),))

    @classmethod
    def assistant(cls, text: str, author: Optional[str] = None) -> 'Turn':
        return cls(role='assistant', content=(TextBlock(value=text),), author=author)

    @property
    def text(self) -> str:
        """Concatena os blocos de texto do turno"""
        return "".join(b.value for b in self.content if isinstance(b, TextBlock))

    @property
    def tool_calls(self) -> List[ToolCallBlock]:
        return [b for b in self.content if isinstance(b, ToolCallBlock)]

    @property
    def tool_results(self) -> List[ToolResultBlock]:
        return [b for b in self.content if isinstance(b, ToolResultBlock)]


# =============================================================================
# Estado da conversa
# =============================================================================

class ConversationState:
    """Histórico ordenado e append-only de uma única requisição.

    Pertence ao Workflow durante o processamento de uma mensagem; não é
    compartilhado entre requisições nem persistido aqui.
    """

    def __init__(self, turns: Optional[Sequence[Turn]] = None):
        self._turns: List[Turn] = list(turns or [])

    @classmethod
    def seeded(cls, user_text: str, history: Optional[Sequence[Turn]] = None) -> 'ConversationState':
        """Cria um estado novo com o histórico opcional + o turno do usuário"""
        state = cls(history)
        state.append(Turn.user(user_text))
        return state

    def append(self, turn: Turn) -> None:
        if not isinstance(turn, Turn):
            raise TypeError(f"esperado Turn, recebido {type(turn).__name__}")
        self._turns.append(turn)

    def extend(self, turns: Sequence[Turn]) -> None:
        for turn in turns:
            self.append(turn)

    @property
    def turns(self) -> tuple[Turn, ...]:
        """Cópia imutável dos turnos"""
        return tuple(self._turns)

    def snapshot(self) -> 'ConversationState':
        return ConversationState(self._turns)

    @property
    def last_user_text(self) -> str:
        for turn in reversed(self._turns):
            if turn.role == 'user':
                return turn.text
        return ""

    def __iter__(self) -> Iterator[Turn]:
        return iter(tuple(self._turns))

    def __len__(self) -> int:
        return len(self._turns)

    def __getitem__(self, index: int) -> Turn:
        return self._turns[index]

    def __repr__(self) -> str:
        return f"ConversationState(turns={len(self._turns)})"


__all__ = [
    'Role',
    'TextBlock',
    'ToolCallBlock',
    'ToolResultBlock',
    'ContentBlock',
    'Turn',
    'ConversationState',
]
