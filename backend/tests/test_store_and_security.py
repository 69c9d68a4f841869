from types import SimpleNamespace

import httpx
import jwt
import openai
import pytest

from pickmypdf.core.config_loader import settings
from pickmypdf.core.errors import ProviderUnavailableError
from pickmypdf.core.llm import LLMClient
from pickmypdf.core.security import create_access_token, decode_token, user_id_from_header
from pickmypdf.db.sqlite_store import ItineraryStore


# -------------------------------------------------------
# store
# -------------------------------------------------------
def test_store_round_trip_and_ownership(tmp_path):
    store = ItineraryStore(str(tmp_path / "db" / "it.sqlite3"))
    form = {"title": "Oslo", "hotels": [{"name": "Thief", "rating": 4.6}], "nested": {"a": [1, 2]}}

    record = store.create_itinerary("u1", "Oslo", form)
    assert store.get_itinerary("u1", record["id"])["form_data"] == form
    assert store.get_itinerary("u2", record["id"]) is None
    assert store.update_itinerary("u2", record["id"], title="x") is None
    assert not store.delete_itinerary("u2", record["id"])
    assert not store.mark_exported("u2", record["id"])

    assert store.mark_exported("u1", record["id"])
    assert store.delete_itinerary("u1", record["id"])
    assert store.list_itineraries("u1") == []
    store.close()


# -------------------------------------------------------
# tokens
# -------------------------------------------------------
def test_token_round_trip():
    token = create_access_token("abc-123")
    assert decode_token(token)["sub"] == "abc-123"
    assert user_id_from_header(f"Bearer {token}") == "abc-123"


def test_rejects_bad_tokens():
    expired = create_access_token("abc", expires_minutes=-5)
    forged = jwt.encode({"sub": "abc"}, "wrong-secret", algorithm=settings.JWT_ALGORITHM)

    assert decode_token(expired) is None
    assert decode_token(forged) is None
    assert user_id_from_header(None) is None
    assert user_id_from_header("Token abc") is None


# -------------------------------------------------------
# llm client
# -------------------------------------------------------
class _Completions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error

    def create(self, **kwargs):
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(**kwargs):
    return SimpleNamespace(chat=SimpleNamespace(completions=_Completions(**kwargs)))


def test_llm_client_unconfigured():
    llm = LLMClient(api_key="")
    assert not llm.available
    with pytest.raises(ProviderUnavailableError):
        llm.complete("sys", "user")


def test_llm_client_returns_content_and_maps_errors():
    assert LLMClient(client=_client(content='{"ok": true}')).complete("s", "u") == '{"ok": true}'

    with pytest.raises(ProviderUnavailableError, match="temporarily unavailable"):
        LLMClient(client=_client(content="")).complete("s", "u")

    error = openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))
    with pytest.raises(ProviderUnavailableError):
        LLMClient(client=_client(error=error)).complete("s", "u")
