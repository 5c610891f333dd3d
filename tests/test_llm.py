"""Testes dos provedores de modelo"""

import json
from types import SimpleNamespace
from unittest.mock import Mock

import openai
import pytest

from consultor.models.agents import (
    FileSearchTool,
    ModelSettings,
    ResponderConfig,
    RouteDecision,
    RouteIdentifier,
    WebSearchTool,
)
from consultor.models.conversation import ConversationState, ToolCallBlock, Turn
from consultor.services.llm.anthropic_llm import (
    STRUCTURED_TOOL_NAME,
    AnthropicModelInvoker,
    history_to_messages,
)
from consultor.services.llm.base import ModelInvocationError
from consultor.services.llm.dummy_llm import DummyModelInvoker, guess_route
from consultor.services.llm.factory import get_model_invoker
from consultor.services.llm.openai_llm import OpenAIModelInvoker, tool_to_param, turn_to_input_items
from consultor.services.orchestration import RouteClassifier, Router, Workflow
from consultor.services.orchestration.intent_classifier import build_classifier_config
from consultor.services.orchestration.responders import build_financing_tool, build_responders


def _greeting_config(**kwargs) -> ResponderConfig:
    defaults = dict(
        name="saudacao",
        model="gpt-4.1-mini",
        instructions="Seja cordial.",
        route=RouteIdentifier.GREETING,
        settings=ModelSettings(temperature=1.0, top_p=1.0, max_output_tokens=2048),
    )
    defaults.update(kwargs)
    return ResponderConfig(**defaults)


def _financing_args() -> str:
    return json.dumps({"preco_base": 100000, "entrada": 0.2, "taxa_mensal": 0.0155, "prazos": [48]})


class TestDummyModelInvoker:
    """DummyModelInvoker"""

    def test_guess_route(self):
        """Palavras-chave com e sem acento"""
        assert guess_route("quero financiar um Argo") is RouteIdentifier.FINANCING
        assert guess_route("Tem promoção essa semana?") is RouteIdentifier.PROMOTION
        assert guess_route("Quero agendar a revisão") is RouteIdentifier.SERVICE
        assert guess_route("bom dia") is RouteIdentifier.GREETING

    def test_structured_output(self, dummy_invoker):
        """Classificador recebe RouteDecision"""
        result = dummy_invoker.invoke(build_classifier_config(), ConversationState.seeded("tem seminovo?"))
        assert isinstance(result.parsed, RouteDecision)
        assert result.parsed.route is RouteIdentifier.USED_VEHICLES
        assert result.new_turns[0].author == "Consultor"

    def test_text_output(self, dummy_invoker):
        """Responder recebe texto simulado"""
        result = dummy_invoker.invoke(_greeting_config(), ConversationState.seeded("Olá"))
        assert "saudacao" in result.output_text
        assert result.model == "dummy-model"
        assert result.usage is not None

    def test_chat(self, dummy_invoker):
        """Interface simples de chat"""
        response = dummy_invoker.chat("Oi", instructions="Seja breve.")
        assert isinstance(response, str)
        assert len(response) > 0


class TestFactory:
    """get_model_invoker"""

    def test_dummy(self):
        """Provedor dummy"""
        assert isinstance(get_model_invoker("dummy"), DummyModelInvoker)

    def test_unknown_provider(self):
        """Provedor desconhecido"""
        with pytest.raises(ValueError):
            get_model_invoker("llama")


class TestFunctionCalls:
    """Execução de ferramentas locais"""

    def test_unknown_tool(self, dummy_invoker):
        """Ferramenta que não está na config é erro de invocação"""
        call = ToolCallBlock(call_id="c1", name="apagar_tudo")
        with pytest.raises(ModelInvocationError):
            dummy_invoker.run_function_call(_greeting_config(), call)

    def test_bad_arguments_go_back_to_model(self, dummy_invoker):
        """Argumentos inválidos voltam como erro para o modelo"""
        config = _greeting_config(tools=(build_financing_tool(),))
        call = ToolCallBlock(call_id="c1", name="calcular_financiamento", arguments='{"preco_base": 1}')

        result = dummy_invoker.run_function_call(config, call)

        assert result.call_id == "c1"
        assert "erro" in json.loads(result.output)

    @pytest.mark.parametrize("arguments", ["null", "[]", '"48"', "12"])
    def test_non_object_arguments_go_back_to_model(self, dummy_invoker, arguments):
        """JSON válido que não é objeto volta como erro em vez de estourar"""
        config = _greeting_config(tools=(build_financing_tool(),))
        call = ToolCallBlock(call_id="c2", name="calcular_financiamento", arguments=arguments)

        result = dummy_invoker.run_function_call(config, call)

        assert "objeto JSON" in json.loads(result.output)["erro"]


class TestOpenAIMapping:
    """Conversão de histórico e ferramentas para a Responses API"""

    def test_user_and_assistant_turns(self):
        """Usuário usa input_text; assistente usa string"""
        assert turn_to_input_items(Turn.user("oi")) == [
            {"role": "user", "content": [{"type": "input_text", "text": "oi"}]}
        ]
        assert turn_to_input_items(Turn.assistant("Olá!")) == [{"role": "assistant", "content": "Olá!"}]

    def test_web_search_param(self):
        """Busca web com filtro de domínio"""
        param = tool_to_param(WebSearchTool(allowed_domains=("globofiat.com.br",)))
        assert param["type"] == "web_search"
        assert param["filters"] == {"allowed_domains": ["globofiat.com.br"]}
        assert param["user_location"] == {"type": "approximate"}

    def test_file_search_param(self):
        """File search com vector stores"""
        param = tool_to_param(FileSearchTool(vector_store_ids=("vs_1",)))
        assert param == {"type": "file_search", "vector_store_ids": ["vs_1"]}


class TestOpenAIModelInvoker:
    """OpenAIModelInvoker com cliente simulado"""

    def _response(self, text="", output=None, parsed=None):
        return SimpleNamespace(
            output=output or [],
            output_text=text,
            output_parsed=parsed,
            usage=SimpleNamespace(input_tokens=10, output_tokens=5, total_tokens=15),
            model="gpt-4.1-mini",
        )

    def _invoker(self, client) -> OpenAIModelInvoker:
        return OpenAIModelInvoker(api_key="sk-teste", client=client, timeout=5, max_tool_rounds=2)

    def test_text_response(self):
        """Resposta de texto com parâmetros de amostragem"""
        client = Mock()
        client.responses.create.return_value = self._response("Olá! Bem-vindo.")

        result = self._invoker(client).invoke(_greeting_config(), ConversationState.seeded("oi"))

        kwargs = client.responses.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4.1-mini"
        assert kwargs["instructions"] == "Seja cordial."
        assert kwargs["temperature"] == 1.0
        assert kwargs["max_output_tokens"] == 2048
        assert result.output_text == "Olá! Bem-vindo."
        assert result.usage["total_tokens"] == 15
        assert result.new_turns[-1].author == "saudacao"

    def test_reasoning_request(self):
        """Modelos de raciocínio recebem reasoning em vez de temperature"""
        client = Mock()
        client.responses.create.return_value = self._response("ok")
        config = _greeting_config(model="gpt-5", settings=ModelSettings(reasoning_effort="low"))

        self._invoker(client).invoke(config, ConversationState.seeded("oi"))

        kwargs = client.responses.create.call_args.kwargs
        assert kwargs["reasoning"] == {"effort": "low"}
        assert "temperature" not in kwargs

    def test_structured_output(self):
        """Classificador usa responses.parse com o schema"""
        client = Mock()
        decision = RouteDecision(route=RouteIdentifier.FINANCING)
        client.responses.parse.return_value = self._response(decision.model_dump_json(), parsed=decision)

        result = self._invoker(client).invoke(build_classifier_config(), ConversationState.seeded("financiar"))

        assert client.responses.parse.call_args.kwargs["text_format"] is RouteDecision
        assert result.parsed.route is RouteIdentifier.FINANCING

    def test_structured_output_missing(self):
        """Sem output_parsed é falha de invocação"""
        client = Mock()
        client.responses.parse.return_value = self._response("")

        with pytest.raises(ModelInvocationError):
            self._invoker(client).invoke(build_classifier_config(), ConversationState.seeded("oi"))

    def test_function_call_loop(self):
        """Chamada de função local seguida da resposta final"""
        client = Mock()
        call = SimpleNamespace(
            type="function_call", call_id="c1", name="calcular_financiamento", arguments=_financing_args()
        )
        client.responses.create.side_effect = [
            self._response(output=[call]),
            self._response("Parcela de R$ 2.375,16 em 48x."),
        ]
        config = _greeting_config(name="Financiamento", route=RouteIdentifier.FINANCING,
                                  tools=(build_financing_tool(),))

        result = self._invoker(client).invoke(config, ConversationState.seeded("financiar Argo"))

        assert client.responses.create.call_count == 2
        second_input = client.responses.create.call_args_list[1].kwargs["input"]
        outputs = [item for item in second_input if item.get("type") == "function_call_output"]
        assert outputs and "2.375,16" in outputs[0]["output"]
        assert [t.role for t in result.new_turns] == ["assistant", "tool", "assistant"]

    def test_null_tool_arguments_through_workflow(self):
        """Argumentos "null" do modelo não derrubam o fluxo de financiamento"""
        client = Mock()
        decision = RouteDecision(route=RouteIdentifier.FINANCING)
        client.responses.parse.return_value = self._response(decision.model_dump_json(), parsed=decision)
        call = SimpleNamespace(type="function_call", call_id="c1", name="calcular_financiamento", arguments="null")
        client.responses.create.side_effect = [
            self._response(output=[call]),
            self._response("Preciso do valor do carro para simular."),
        ]
        invoker = self._invoker(client)
        classifier = RouteClassifier(invoker)
        workflow = Workflow(classifier, Router(build_responders(invoker), classifier.routes))

        result = workflow.execute("quero financiar um Argo")

        assert result.route is RouteIdentifier.FINANCING
        assert result.output_text == "Preciso do valor do carro para simular."
        second_input = client.responses.create.call_args_list[1].kwargs["input"]
        outputs = [item for item in second_input if item.get("type") == "function_call_output"]
        assert "erro" in json.loads(outputs[0]["output"])

    def test_tool_round_limit(self):
        """Modelo que nunca para de chamar ferramentas"""
        client = Mock()
        call = SimpleNamespace(
            type="function_call", call_id="c1", name="calcular_financiamento", arguments=_financing_args()
        )
        client.responses.create.return_value = self._response(output=[call])
        config = _greeting_config(tools=(build_financing_tool(),))

        with pytest.raises(ModelInvocationError, match="rodadas"):
            self._invoker(client).invoke(config, ConversationState.seeded("oi"))

    def test_api_error_is_wrapped(self):
        """Erro do SDK vira ModelInvocationError"""
        client = Mock()
        client.responses.create.side_effect = openai.OpenAIError("rate limit")

        with pytest.raises(ModelInvocationError) as exc_info:
            self._invoker(client).invoke(_greeting_config(), ConversationState.seeded("oi"))

        assert exc_info.value.provider == "openai"


class TestAnthropicModelInvoker:
    """AnthropicModelInvoker com cliente simulado"""

    def _invoker(self, client) -> AnthropicModelInvoker:
        return AnthropicModelInvoker(api_key="sk-teste", model="claude-teste", client=client, max_tool_rounds=2)

    def test_foreign_turns_become_user_context(self):
        """Decisão do classificador entra como contexto do usuário"""
        state = ConversationState.seeded("oi")
        state.append(Turn.assistant('{"route":"greeting"}', author="Consultor"))

        messages = history_to_messages(state, "saudacao")

        assert len(messages) == 1
        assert messages[0]["role"] == "user"
        assert messages[0]["content"][1]["text"] == '[Consultor] {"route":"greeting"}'

    def test_text_response(self):
        """Resposta de texto"""
        client = Mock()
        client.messages.create.return_value = SimpleNamespace(
            content=[SimpleNamespace(type="text", text="Olá!")],
            usage=SimpleNamespace(input_tokens=3, output_tokens=2),
            model="claude-teste",
        )

        result = self._invoker(client).invoke(_greeting_config(), ConversationState.seeded("oi"))

        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-teste"
        assert kwargs["system"] == "Seja cordial."
        assert "top_p" not in kwargs
        assert result.output_text == "Olá!"

    def test_structured_output_uses_forced_tool(self):
        """Saída estruturada via ferramenta obrigatória"""
        client = Mock()
        client.messages.create.return_value = SimpleNamespace(
            content=[SimpleNamespace(type="tool_use", id="t1", name=STRUCTURED_TOOL_NAME,
                                     input={"route": "parts"})],
            usage=None,
            model="claude-teste",
        )

        result = self._invoker(client).invoke(build_classifier_config(), ConversationState.seeded("peças"))

        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["tool_choice"] == {"type": "tool", "name": STRUCTURED_TOOL_NAME}
        assert result.parsed.route is RouteIdentifier.PARTS

    def test_file_search_not_supported(self):
        """File search não existe na Messages API"""
        config = _greeting_config(tools=(FileSearchTool(vector_store_ids=("vs_1",)),))
        with pytest.raises(ModelInvocationError):
            self._invoker(Mock()).invoke(config, ConversationState.seeded("oi"))

    def test_web_search_domains(self):
        """Busca web nativa com domínios permitidos"""
        client = Mock()
        client.messages.create.return_value = SimpleNamespace(
            content=[SimpleNamespace(type="text", text="Pulse em https://globofiat.com.br/pulse")],
            usage=None,
            model="claude-teste",
        )
        config = _greeting_config(tools=(WebSearchTool(allowed_domains=("globofiat.com.br",)),))

        self._invoker(client).invoke(config, ConversationState.seeded("pulse"))

        tool = client.messages.create.call_args.kwargs["tools"][0]
        assert tool["type"] == "web_search_20250305"
        assert tool["allowed_domains"] == ["globofiat.com.br"]
