import openai
import pytest

from src.core.errors import ModelResponseParseError, UpstreamError
from src.domain.criteria import PromptInterpreter
from src.domain.criteria.interpreter import SYSTEM_PROMPT
from tests.support.stubs import ChatClientStub


@pytest.mark.unit
def test_interpret_sends_prompt_and_parses_reply():
    client = ChatClientStub(replies=['{"bpm": 170, "energy": "high", "playlistName": "Tempo Run"}'])
    interpreter = PromptInterpreter(client, model="test-model")

    parsed = interpreter.interpret("music for a fast run")

    assert parsed.criteria == {"bpm": 170, "energy": "high"}
    assert parsed.suggested_name == "Tempo Run"
    request = client.requests[0]
    assert request["model"] == "test-model"
    assert request["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert request["messages"][1] == {"role": "user", "content": "music for a fast run"}


@pytest.mark.unit
def test_client_error_becomes_upstream_error():
    interpreter = PromptInterpreter(ChatClientStub(error=openai.OpenAIError("down")))
    with pytest.raises(UpstreamError) as excinfo:
        interpreter.interpret("anything")
    assert excinfo.value.service == "language_model"


@pytest.mark.unit
def test_reply_without_json_raises_parse_error():
    interpreter = PromptInterpreter(ChatClientStub(replies=["I cannot help with that."]))
    with pytest.raises(ModelResponseParseError):
        interpreter.interpret("anything")


@pytest.mark.unit
def test_from_api_key_without_key_disables_interpreter():
    assert PromptInterpreter.from_api_key(None, "gpt-4o-mini") is None


@pytest.mark.unit
def test_from_api_key_builds_client():
    interpreter = PromptInterpreter.from_api_key("sk-test", "gpt-4o-mini")
    assert interpreter is not None
    assert interpreter.model == "gpt-4o-mini"
