import json

import pytest

import cli_planner


@pytest.fixture(autouse=True)
def workspace(tmp_path, monkeypatch, fresh_settings):
    monkeypatch.setattr(cli_planner, "configure_logging", lambda *args, **kwargs: None)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_no_command_prints_help(capsys):
    assert cli_planner.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_ask(capsys):
    assert cli_planner.main(["ask", "2 더하기 3"]) == 0
    assert "2 + 3 = 5" in capsys.readouterr().out


def test_tools_listing_and_test_call(capsys):
    assert cli_planner.main(["tools"]) == 0
    assert "calculate" in capsys.readouterr().out

    assert cli_planner.main(["tools", "--test", "calculate", "--args", '{"expression": "1/0"}']) == 1
    assert "Division by zero" in capsys.readouterr().out

    assert cli_planner.main(["tools", "-t", "calculate", "--args", '{"expression": "[]"}']) == 1
    assert cli_planner.main(["tools", "-t", "calculate", "--args", "{not json"]) == 2


@pytest.mark.parametrize("raw", ["[1, 2]", "\"1 + 1\"", "7"])
def test_tool_args_must_be_an_object(raw, capsys):
    assert cli_planner.main(["tools", "-t", "calculate", "--args", raw]) == 2
    assert "must be a JSON object" in capsys.readouterr().out


def test_plan_preview_does_not_execute(workspace, capsys):
    assert cli_planner.main(["plan", "cleanup"]) == 0
    assert "--execute" in capsys.readouterr().out
    assert not (workspace / "completion-report.md").exists()


def test_plan_execute_writes_report(workspace):
    assert cli_planner.main(["plan", "cleanup", "--execute"]) == 0
    assert (workspace / "completion-report.md").exists()


def test_ask_json(capsys):
    assert cli_planner.main(["ask", "2 더하기 3", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["intent"]["action"] == "calculate"
    assert payload["intent"]["args"] == {"expression": "2 + 3"}
    assert "2 + 3 = 5" in payload["reply"]


def test_plan_execute_json(workspace, capsys):
    assert cli_planner.main(["plan", "cleanup", "--execute", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [task["id"] for task in payload["plan"]["tasks"]] == ["clean-1", "clean-2", "clean-3"]
    assert payload["plan"]["tasks"][1]["dependencies"] == ["clean-1"]
    assert payload["report"]["completed"] == ["clean-1", "clean-2", "clean-3"]
    assert payload["report"]["outcomes"][0]["status"] == "completed"


def test_plan_json_without_execute(capsys):
    assert cli_planner.main(["plan", "문서 생성", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["plan"]["kind"] == "document_generation"
    assert payload["report"] is None


def test_tool_result_json(capsys):
    assert cli_planner.main(["tools", "-t", "calculate", "--args", '{"expression": "6 * 7"}', "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == {"success": True, "content": "6 * 7 = 42", "error": None}
