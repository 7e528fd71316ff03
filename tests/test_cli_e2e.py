import json
from pathlib import Path

from pqlint_client.cli import main
from pqlint_client.http import ApiError, HttpResponse


def _fake_lint_execute(data_by_format: dict[str, list], calls: list[dict]):
    def fake_execute(uri, method="GET", headers=None, body=None, content_type="application/json", timeout=30):
        calls.append({"uri": uri, "body": body})
        return HttpResponse(status=200, headers={}, data=data_by_format[body["options"]["format"]])

    return fake_execute


def test_cli_lint_infers_tmdl_and_writes_output(tmp_path: Path, monkeypatch, capsys):
    model = tmp_path / "Sales.tmdl"
    model.write_text("table Sales\n", encoding="utf-8")
    query = tmp_path / "query.pq"
    query.write_text("let x = 1 in x", encoding="utf-8")
    output = tmp_path / "out" / "results.json"

    calls: list[dict] = []
    data = {
        "tmdl": [{"id": "TM001", "name": "Missing description", "severity": 2}],
        "pq": [],
    }
    monkeypatch.setattr("pqlint_client.clients.lint.execute", _fake_lint_execute(data, calls))
    monkeypatch.setenv("PQLINT_SUBSCRIPTION_KEY", "abc123")

    exit_code = main(["lint", str(model), str(query), "--output", str(output)])

    assert exit_code == 0
    assert [call["body"]["options"]["format"] for call in calls] == ["tmdl", "pq"]
    assert all(call["uri"].endswith("subscription-key=abc123") for call in calls)
    report = json.loads(output.read_text(encoding="utf-8"))
    assert report[0]["file"] == str(model)
    assert report[0]["results"][0]["id"] == "TM001"
    assert report[1]["results"] == []
    assert json.loads(capsys.readouterr().out) == report


def test_cli_lint_fails_on_error_severity(tmp_path: Path, monkeypatch):
    model = tmp_path / "Sales.tmdl"
    model.write_text("table Sales\n", encoding="utf-8")

    calls: list[dict] = []
    data = {"tmdl": [{"id": "TM009", "name": "Broken relationship", "severity": 3}]}
    monkeypatch.setattr("pqlint_client.clients.lint.execute", _fake_lint_execute(data, calls))

    exit_code = main(["lint", str(model), "--subscription-key", "k"])

    assert exit_code == 1
    assert len(calls) == 1


def test_cli_lint_without_key_reports_invalid_argument(tmp_path: Path, monkeypatch, capsys):
    query = tmp_path / "query.pq"
    query.write_text("let x = 1 in x", encoding="utf-8")
    monkeypatch.delenv("PQLINT_SUBSCRIPTION_KEY", raising=False)

    def fake_execute(*args, **kwargs):
        raise AssertionError("network call must not happen")

    monkeypatch.setattr("pqlint_client.clients.lint.execute", fake_execute)

    exit_code = main(["lint", str(query)])

    assert exit_code == 1
    assert "SubscriptionKey parameter cannot be null or empty" in capsys.readouterr().err


def test_cli_rules_prints_catalog(monkeypatch, capsys):
    def fake_execute(uri, method="GET", headers=None, body=None, content_type="application/json", timeout=30):
        return HttpResponse(status=200, headers={}, data=[{"id": "PQ001", "name": "Rule", "severity": 1}])

    monkeypatch.setattr("pqlint_client.clients.rules.execute", fake_execute)

    exit_code = main(["rules"])

    assert exit_code == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed[0]["id"] == "PQ001"


def test_cli_rules_reports_api_error(monkeypatch, capsys):
    def fake_execute(*args, **kwargs):
        raise ApiError("HTTP 500 Internal Server Error - boom", status_code=500)

    monkeypatch.setattr("pqlint_client.clients.rules.execute", fake_execute)

    exit_code = main(["rules"])

    assert exit_code == 1
    assert "HTTP 500 Internal Server Error - boom" in capsys.readouterr().err


def test_cli_lint_fails_on_unrecognized_severity(tmp_path: Path, monkeypatch, capsys):
    query = tmp_path / "query.pq"
    query.write_text("let x = 1 in x", encoding="utf-8")

    calls: list[dict] = []
    data = {"pq": [{"id": "PQ050", "name": None, "severity": "Critical"}]}
    monkeypatch.setattr("pqlint_client.clients.lint.execute", _fake_lint_execute(data, calls))

    exit_code = main(["lint", str(query), "--subscription-key", "k"])

    assert exit_code == 1
    report = json.loads(capsys.readouterr().out)
    assert report[0]["results"][0]["severity"] == "Critical"
    assert report[0]["results"][0]["name"] is None


def test_cli_lint_error_severity_name_meets_threshold(tmp_path: Path, monkeypatch):
    query = tmp_path / "query.pq"
    query.write_text("let x = 1 in x", encoding="utf-8")

    calls: list[dict] = []
    data = {"pq": [{"id": "PQ051", "severity": "Warning"}, {"id": "PQ052", "severity": "Error"}]}
    monkeypatch.setattr("pqlint_client.clients.lint.execute", _fake_lint_execute(data, calls))

    assert main(["lint", str(query), "--subscription-key", "k"]) == 1
    assert main(["lint", str(query), "--subscription-key", "k", "--fail-on-severity", "4"]) == 0
