import pytest

from core.errors import ValidationError
from core.models import CompareForm, CompareResult, DiffResult
from sources.compare_source import DiffView
from tools import compare_refs as compare_tool


class FakeSource:
    def __init__(self):
        self.calls = []

    async def load_diff(self, form: CompareForm):
        self.calls.append(form)
        return DiffView(form=form, result=DiffResult(diff_text="diff", file_count=1), compare=CompareResult())


@pytest.mark.asyncio
async def test_compare_refs_validates_inputs(dummy_mcp):
    compare_tool.register(dummy_mcp, github_client=None)
    fn = dummy_mcp.tools["compare_refs"]

    with pytest.raises(ValidationError):
        await fn(repo="  ", base="main", head="dev")
    with pytest.raises(ValidationError):
        await fn(repo="o/r", base="", head="dev")


@pytest.mark.asyncio
async def test_compare_refs_calls_source(monkeypatch, dummy_mcp):
    fake_src = FakeSource()
    captured = {}

    def fake_get_compare_source(**kwargs):
        captured.update(kwargs)
        return fake_src

    monkeypatch.setattr(compare_tool, "get_compare_source", fake_get_compare_source)

    compare_tool.register(dummy_mcp, github_client="INJECTED_CLIENT", session="SESSION")
    fn = dummy_mcp.tools["compare_refs"]

    out = await fn(repo="o/r", base="main", head="dev", path_filter="**/*.py")

    assert captured == {"github_client": "INJECTED_CLIENT", "session": "SESSION"}
    assert fake_src.calls == [CompareForm(repo="o/r", base="main", head="dev", path_filter="**/*.py")]
    assert out["diff"] == "diff"
    assert out["file_count"] == 1


@pytest.mark.asyncio
async def test_compare_share_link_parses_url(monkeypatch, dummy_mcp):
    fake_src = FakeSource()
    monkeypatch.setattr(compare_tool, "get_compare_source", lambda **kwargs: fake_src)

    compare_tool.register(dummy_mcp)
    fn = dummy_mcp.tools["compare_share_link"]

    await fn(url="https://x.example/gh-dir-diff/o/r/release/1.x..main?filter=src%2F*")
    assert fake_src.calls == [CompareForm(repo="o/r", base="release/1.x", head="main", path_filter="src/*")]

    with pytest.raises(ValidationError):
        await fn(url="https://x.example/somewhere")
