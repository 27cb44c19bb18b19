import asyncio
import os

import pytest

from models.invocation import InvocationStatus
from services.formatter_invoker import FormatterInvoker

from formatter_scripts import ECHO_ARGS, EXIT_CODE_TWO, SLEEP_FOREVER, STRIP_TRAILING_SPACES, SYNTAX_ERROR


def test_build_args_without_config():
    invoker = FormatterInvoker("openscad-format")
    assert invoker.build_args("/src/part.scad") == ["--dry", "--input=/src/part.scad"]


def test_build_args_with_config():
    invoker = FormatterInvoker("openscad-format", config_path="/cfg/.openscad-format")
    assert invoker.build_args("part.scad")[-1] == "--config=/cfg/.openscad-format"


def test_working_directory_follows_document():
    invoker = FormatterInvoker("openscad-format")
    assert invoker.working_directory("/src/parts/gear.scad", workspace_root="/src") == "/src/parts"
    assert invoker.working_directory("Untitled-1", is_untitled=True, workspace_root="/src") == "/src"


@pytest.mark.asyncio
async def test_successful_run_returns_stdout(make_formatter, tmp_path):
    invoker = FormatterInvoker(make_formatter(STRIP_TRAILING_SPACES))
    result = await invoker.run("cube(1);   \nsphere(2);", str(tmp_path / "part.scad"))

    assert result.ok
    assert result.stdout == "cube(1);\nsphere(2);"
    assert result.return_code == 0


@pytest.mark.asyncio
async def test_args_and_cwd_reach_the_process(make_formatter, tmp_path):
    invoker = FormatterInvoker(make_formatter(ECHO_ARGS), config_path="style.cfg")
    file_path = str(tmp_path / "part.scad")
    result = await invoker.run("", file_path)

    assert result.stdout.split("\n") == [
        "--dry",
        f"--input={file_path}",
        "--config=style.cfg",
        os.path.realpath(str(tmp_path)),
    ]


@pytest.mark.asyncio
async def test_stderr_output_is_a_diagnostic(make_formatter, tmp_path):
    invoker = FormatterInvoker(make_formatter(SYNTAX_ERROR))
    result = await invoker.run("cube(", str(tmp_path / "part.scad"))

    assert result.status == InvocationStatus.DIAGNOSTIC
    assert "syntax error" in result.stderr
    assert result.message == "Cannot format due to syntax errors."


@pytest.mark.asyncio
async def test_non_zero_exit_is_a_process_error(make_formatter, tmp_path):
    invoker = FormatterInvoker(make_formatter(EXIT_CODE_TWO))
    result = await invoker.run("cube(1);", str(tmp_path / "part.scad"))

    assert result.status == InvocationStatus.PROCESS_ERROR
    assert result.return_code == 2


@pytest.mark.asyncio
async def test_missing_executable_is_not_found(tmp_path):
    invoker = FormatterInvoker(str(tmp_path / "missing-formatter"))
    result = await invoker.run("cube(1);", str(tmp_path / "part.scad"))

    assert result.status == InvocationStatus.NOT_FOUND
    assert "is not available" in result.message


@pytest.mark.asyncio
async def test_timeout_kills_the_process(make_formatter, tmp_path):
    invoker = FormatterInvoker(make_formatter(SLEEP_FOREVER), timeout=0.5)
    result = await invoker.run("cube(1);", str(tmp_path / "part.scad"))

    assert result.status == InvocationStatus.PROCESS_ERROR
    assert "timed out" in result.message


@pytest.mark.asyncio
async def test_cancellation_propagates(make_formatter, tmp_path):
    invoker = FormatterInvoker(make_formatter(SLEEP_FOREVER), timeout=None)
    task = asyncio.create_task(invoker.run("cube(1);", str(tmp_path / "part.scad")))
    await asyncio.sleep(0.5)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
