"""Command line job: one comparison cycle and its summary."""

import pytest

from randompeople import job
from randompeople.errors import NetworkError


@pytest.mark.asyncio
async def test_run_comparison_both(orchestrator):
    metrics = await job.run_comparison(orchestrator)
    assert metrics["client"] == "both"
    assert metrics["error"] is None
    assert metrics["rows_fetched"] == {"requests": 12, "urllib": 12}
    assert metrics["elapsed_ms"]["requests"] == metrics["elapsed_ms"]["urllib"]


@pytest.mark.asyncio
async def test_run_comparison_single_client(orchestrator, client_a):
    metrics = await job.run_comparison(orchestrator, client="urllib")
    assert metrics["rows_fetched"] == {"requests": 0, "urllib": 12}
    assert metrics["elapsed_ms"]["requests"] is None
    assert client_a.calls == []


def test_print_summary(capsys):
    job.print_summary(
        {
            "url": "https://randomuser.me/api/?results=12&gender=&nat=US",
            "client": "both",
            "error": None,
            "rows_fetched": {"requests": 12, "urllib": 12},
            "elapsed_ms": {"requests": 101.234, "urllib": None},
        }
    )
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "api_url=https://randomuser.me/api/?results=12&gender=&nat=US",
        "client=both",
        "requests_rows=12 requests_elapsed=101.23 ms",
        "urllib_rows=12 urllib_elapsed=n/a",
    ]


def test_main_exit_code(monkeypatch, capsys, orchestrator, client_b):
    client_b.error = NetworkError("offline")
    monkeypatch.setattr(job, "RequestOrchestrator", lambda: orchestrator)

    assert job.main(["--client", "urllib", "--gender", "female", "--country", "fr"]) == 1

    assert client_b.calls == ["https://randomuser.test/api/?results=12&gender=female&nat=FR"]
    assert "error=Network error. No response received from the server." in capsys.readouterr().out


def test_main_success(monkeypatch, capsys, orchestrator):
    monkeypatch.setattr(job, "RequestOrchestrator", lambda: orchestrator)
    assert job.main([]) == 0
    assert "requests_rows=12" in capsys.readouterr().out
