import json
from pathlib import Path

import httpx
import pytest

from purgectl import cli


class FakeResponse:
    def __init__(self, payload: dict, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise httpx.HTTPError(f"HTTP {self.status_code}")

    def json(self) -> dict:
        return self._payload


def run(monkeypatch, capsys, argv, payload, status_code=200):
    calls = []

    def fake_request(method, url, json=None, timeout=None):
        calls.append((method, url, json))
        return FakeResponse(payload, status_code)

    monkeypatch.setattr(cli.httpx, "request", fake_request)
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    out = capsys.readouterr().out.strip()
    return exc.value.code, calls, json.loads(out)


def test_pages_reads_file_and_flags(monkeypatch, capsys, tmp_path: Path) -> None:
    url_file = tmp_path / "urls.txt"
    url_file.write_text("# comment\nhttps://example.com/b\n\n", encoding="utf-8")
    payload = {"results": [{"succeeded": True, "message": ""}] * 2, "summary": "ok"}
    code, calls, out = run(
        monkeypatch,
        capsys,
        ["pages", "--url", "https://example.com/a", "--file", str(url_file)],
        payload,
    )
    assert code == 0
    assert calls == [
        (
            "POST",
            "http://127.0.0.1:7600/v1/purge_pages",
            {"urls": ["https://example.com/a", "https://example.com/b"]},
        )
    ]
    assert out == payload


def test_everything_failure_exits_nonzero(monkeypatch, capsys) -> None:
    payload = {"results": [{"succeeded": False, "message": "nope"}], "summary": ""}
    code, calls, _ = run(
        monkeypatch, capsys, ["everything", "--domain", "example.com"], payload
    )
    assert code == 1
    assert calls[0][2] == {"domain": "example.com"}


def test_http_error_is_reported(monkeypatch, capsys) -> None:
    code, _, out = run(monkeypatch, capsys, ["health"], {}, status_code=500)
    assert code == 1
    assert out["status"] == "error"


def test_pages_without_urls(monkeypatch, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["pages"])
    assert exc.value.code == 1
    assert "Provide --url or --file" in capsys.readouterr().out
