"""Fixtures e configuração dos testes"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from consultor.models.agents import RouteDecision, RouteIdentifier, RunResult
from consultor.models.conversation import Turn
from consultor.services.llm.dummy_llm import DummyModelInvoker

# Carrega o .env da raiz do projeto
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


def make_result(text: str = "", parsed=None, author: str = "teste", raw_output=None) -> RunResult:
    """RunResult mínimo, como um provedor devolveria"""
    return RunResult(
        raw_output=raw_output if raw_output is not None else {"output_text": text},
        new_turns=[Turn.assistant(text, author=author)] if text else [],
        output_text=text,
        parsed=parsed,
        model="modelo-teste",
    )


class ScriptedInvoker:
    """Provedor de teste: rota fixa no classificador e texto fixo por responder"""

    provider = "scripted"

    def __init__(self, route: RouteIdentifier, replies: dict | None = None, default_reply: str = "ok"):
        self.route = route
        self.replies = replies or {}
        self.default_reply = default_reply
        self.calls = []

    def invoke(self, config, history):
        self.calls.append((config.name, len(history)))
        if config.output_schema is not None:
            decision = RouteDecision(route=self.route)
            return make_result(decision.model_dump_json(), parsed=decision, author=config.name)
        text = self.replies.get(config.route, self.default_reply)
        return make_result(text, author=config.name)


@pytest.fixture
def dummy_invoker():
    """Provedor dummy"""
    return DummyModelInvoker()


@pytest.fixture
def scripted_invoker():
    """Fábrica de ScriptedInvoker"""
    return ScriptedInvoker


@pytest.fixture
def run_result():
    """Fábrica de RunResult"""
    return make_result
