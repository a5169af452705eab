from __future__ import annotations

import asyncio

from runner.cli import build_behave_args, parse_args
from runner.debug_capture import DebugArtifactCapture, safe_filename
from runner.lifecycle import ScenarioState, init_results_dir


class _DummyBrowserPage:
    url = "https://demoqa.com/webtables"

    def __init__(self, *, fail_screenshot: bool = False) -> None:
        self.fail_screenshot = fail_screenshot

    async def screenshot(self, *, path=None, type="png", timeout=None) -> bytes:
        if self.fail_screenshot:
            raise RuntimeError("Target closed")
        with open(path, "wb") as f:
            f.write(b"png")
        return b"png"

    async def content(self) -> str:
        return "<html></html>"


def test_init_results_dir_resets_contents(tmp_path) -> None:
    root = tmp_path / "test-results"
    (root / "old").mkdir(parents=True)
    (root / "old" / "stale.png").write_bytes(b"x")

    init_results_dir(root)

    assert not (root / "old").exists()
    assert (root / "screenshots" / "failed").is_dir()
    assert (root / "screenshots" / "success").is_dir()


def test_safe_filename() -> None:
    assert safe_filename('Add a record: "John Doe"') == "Add_a_record_John_Doe"
    assert safe_filename("///") == "scenario"


def test_capture_failed_scenario_writes_screenshot_and_source(tmp_path) -> None:
    capture = DebugArtifactCapture(tmp_path)

    result = asyncio.run(
        capture.capture_scenario("Delete a record", _DummyBrowserPage(), failed=True, error=AssertionError("boom"))
    )

    failed_dir = tmp_path / "screenshots" / "failed"
    assert result["status"] == "failed"
    assert result["error_type"] == "AssertionError"
    assert (failed_dir / "Delete_a_record.png").exists()
    assert (failed_dir / "Delete_a_record.html").read_text() == "<html></html>"


def test_capture_passed_scenario_goes_to_success(tmp_path) -> None:
    capture = DebugArtifactCapture(tmp_path)

    result = asyncio.run(capture.capture_scenario("Select Yes", _DummyBrowserPage(), failed=False))

    assert result["status"] == "passed"
    assert result["screenshot_path"].endswith("success/Select_Yes.png")
    assert not (tmp_path / "screenshots" / "success" / "Select_Yes.html").exists()


def test_capture_errors_are_not_raised(tmp_path) -> None:
    capture = DebugArtifactCapture(tmp_path)

    result = asyncio.run(capture.capture_scenario("Broken", _DummyBrowserPage(fail_screenshot=True), failed=True))

    assert "screenshot_path" not in result


def test_capture_without_page(tmp_path) -> None:
    result = asyncio.run(DebugArtifactCapture(tmp_path).capture_scenario("No page", None, failed=True))

    assert result == {"scenario": "No page", "status": "failed", "timestamp": result["timestamp"]}


def test_scenario_state_defaults_are_independent() -> None:
    first, second = ScenarioState(name="a"), ScenarioState(name="b")
    first.added_records.append("x")

    assert second.added_records == []
    assert first.row_count_before is None


def test_build_behave_args_defaults() -> None:
    args = parse_args(["run"])

    behave_args = build_behave_args(args, "/tmp/report.json")

    assert behave_args[0].endswith("features")
    assert behave_args[1:] == ["-f", "json.pretty", "-o", "/tmp/report.json", "-f", "pretty"]


def test_build_behave_args_with_options() -> None:
    args = parse_args(["run", "features/web_tables.feature", "--tags", "@smoke", "--headed", "--browser", "firefox", "--debug"])

    behave_args = build_behave_args(args, "report.json")

    assert behave_args[0] == "features/web_tables.feature"
    assert behave_args[1:3] == ["--tags", "@smoke"]
    assert "headless=false" in behave_args
    assert "browser=firefox" in behave_args
    assert "debug=true" in behave_args
