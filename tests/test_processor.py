"""上下文处理器测试."""

import json
from unittest.mock import patch

import pytest
from loguru import logger
from typer.testing import CliRunner

from completion_context.app.processor import ContextProcessor, ContextResult, app
from completion_context.utils.logger import setup_logger


@pytest.fixture
def source_file(tmp_path):
    """测试用源码文件."""
    path = tmp_path / "sample.py"
    path.write_text("def add(a, b):\n    return a + b\n\n\ndef sub(a, b):\n    \n", encoding="utf-8")
    return path


@pytest.fixture
def quiet_logger():
    """关闭日志输出，避免混入命令行输出."""
    logger.remove()
    yield
    setup_logger()


@pytest.fixture
def processor():
    """上下文处理器实例."""
    return ContextProcessor()


def test_process_success(processor, source_file, tmp_path):
    """测试处理成功的情况."""
    report_path = tmp_path / "report.md"

    result = processor.process(str(source_file), 5, 4, max_prefix_length=100, max_suffix_length=100,
                               report_path=str(report_path))

    assert result.success is True
    assert result.context.current_line_prefix == "    "
    assert result.context.prev_non_empty_line == "def sub(a, b):"
    assert result.context.multiline_trigger == ":"
    assert report_path.exists()
    assert "# 光标上下文报告" in report_path.read_text(encoding="utf-8")
    assert "报告文件" in result.report


def test_process_missing_file(processor, tmp_path):
    """测试文件不存在的情况."""
    result = processor.process(str(tmp_path / "missing.py"), 0, 0)

    assert result.success is False
    assert result.context is None
    assert "文件不存在" in result.error_message
    assert result.report.startswith("处理失败")


@patch("completion_context.service.doc_context.DocumentContextBuilder.build")
def test_process_error(mock_build, processor, source_file):
    """测试构建上下文失败的情况."""
    mock_build.side_effect = ValueError("测试错误")

    result = processor.process(str(source_file), 0, 0)

    assert result == ContextResult(input_path=str(source_file), success=False, error_message="测试错误")


def test_process_invalid_position(processor, source_file):
    """测试光标越界的情况."""
    result = processor.process(str(source_file), 50, 0)

    assert result.success is False
    assert "光标位置超出文档范围" in result.error_message


def test_cli_json_output(source_file, quiet_logger):
    """测试命令行输出JSON."""
    runner = CliRunner()

    result = runner.invoke(app, [str(source_file), "1", "9", "--max-prefix-length", "20", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["current_line_prefix"] == "    retur"
    assert payload["current_line_suffix"] == "n a + b"
    assert payload["injected_prefix"] is None
    assert payload["context_range"]["start"] == {"line": 1, "character": 0}


def test_cli_failure_exit_code(tmp_path):
    """测试命令行处理失败时返回非零退出码."""
    runner = CliRunner()

    result = runner.invoke(app, [str(tmp_path / "missing.py"), "0", "0"])

    assert result.exit_code == 1
