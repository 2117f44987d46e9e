import httpx
import pytest

from spark2scale.client.documents import load_document_groups
from spark2scale.client.errors import PartialHistoryUnavailable, UpstreamUnavailable

DOCUMENTS = [
    {"did": "d1", "type": "Financials", "document_name": "FY24", "current_path": "https://f/d1",
     "updated_at": "2024-02-01T00:00:00Z"},
    {"did": "d2", "type": "Financials", "document_name": "FY23", "current_path": "https://f/d2",
     "updated_at": "2024-01-01T00:00:00Z"},
    {"did": "d3", "type": "Legal Docs", "document_name": "NDA", "current_path": "https://f/d3",
     "updated_at": "2024-01-15T00:00:00Z"},
]

HISTORIES = {
    "d1": [{"vid": "v1", "version_number": 1, "path": "https://f/v1", "created_at": "2024-02-01T00:00:00Z"}],
    "d2": [{"vid": "v2", "version_number": 1, "path": "https://f/v2", "created_at": "2024-01-01T00:00:00Z"}],
    "d3": [{"vid": "v3", "version_number": 1, "path": "https://f/v3", "created_at": "2024-01-15T00:00:00Z"}],
}


def _handler(failing=()):
    def handler(request):
        path = request.url.path
        if path == "/api/documents":
            return httpx.Response(200, json=DOCUMENTS)
        document_id = path.rsplit("/", 1)[-1]
        if document_id in failing:
            return httpx.Response(500, text="boom")
        return httpx.Response(200, json=HISTORIES[document_id])
    return handler


class TestLoadDocumentGroups:
    @pytest.mark.asyncio
    async def test_groups_and_merges(self, stub_api):
        result = await load_document_groups(stub_api(_handler()), "s1")
        assert result.warnings == []
        assert [g.owner_type for g in result.groups] == ["Financials", "Legal Docs"]
        financials = result.groups[0]
        assert financials.id == "d1"
        assert [v.id for v in financials.versions] == ["v1", "v2"]

    @pytest.mark.asyncio
    async def test_failed_history_is_localized(self, stub_api):
        result = await load_document_groups(stub_api(_handler(failing={"d2"})), "s1")

        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert isinstance(warning, PartialHistoryUnavailable)
        assert warning.document_id == "d2"
        assert warning.owner_type == "Financials"

        financials, legal = result.groups
        assert [v.id for v in financials.versions] == ["v1"]
        assert [v.id for v in legal.versions] == ["v3"]

    @pytest.mark.asyncio
    async def test_every_history_failing_still_aggregates(self, stub_api):
        result = await load_document_groups(stub_api(_handler(failing={"d1", "d2", "d3"})), "s1")
        assert len(result.warnings) == 3
        assert all(g.versions == () for g in result.groups)

    @pytest.mark.asyncio
    async def test_document_list_failure_propagates(self, stub_api):
        api = stub_api(lambda request: httpx.Response(502))
        with pytest.raises(UpstreamUnavailable):
            await load_document_groups(api, "s1")

    @pytest.mark.asyncio
    async def test_against_app(self, asgi_api, startup_id):
        first = await asgi_api.upload_document(startup_id, "Deck", "Pitch Deck", "deck.pdf", b"deck v1")
        await asgi_api.upload_document(startup_id, "Deck", "Pitch Deck", "deck.pdf", b"deck v2",
                                       document_id=first["did"])
        await asgi_api.generate_mock(startup_id, "Evaluation")

        result = await load_document_groups(asgi_api, startup_id)
        assert result.warnings == []
        by_type = {g.owner_type: g for g in result.groups}
        assert set(by_type) == {"Pitch Deck", "Evaluation"}
        deck = by_type["Pitch Deck"]
        assert [v.version_number for v in deck.versions] == [2, 1]
        assert deck.path == deck.versions[0].path
