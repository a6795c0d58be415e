"""光标上下文提取应用."""

import json
from dataclasses import dataclass
from typing import Optional

import typer
from loguru import logger

from completion_context.config.settings import settings
from completion_context.data.document_io import DocumentIO
from completion_context.data.models import DocumentContext, Position
from completion_context.data.report_generator import ReportGenerator
from completion_context.service.doc_context import DocumentContextBuilder


@dataclass
class ContextResult:
    """处理结果."""

    input_path: str
    success: bool
    context: Optional[DocumentContext] = None
    report_path: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def report(self) -> str:
        """生成结果摘要.

        Returns:
            结果摘要字符串
        """
        if not self.success or self.context is None:
            return f"处理失败: {self.error_message}"

        lines = [
            "处理成功!",
            f"- 前缀: {len(self.context.prefix)} 字符",
            f"- 后缀: {len(self.context.suffix)} 字符",
            f"- 多行触发: {self.context.multiline_trigger or '无'}",
        ]
        if self.report_path:
            lines.append(f"- 报告文件: {self.report_path}")
        return "\n".join(lines)


class ContextProcessor:
    """光标上下文处理器."""

    def __init__(self, builder: Optional[DocumentContextBuilder] = None) -> None:
        """初始化光标上下文处理器."""
        self.document_io = DocumentIO()
        self.builder = builder or DocumentContextBuilder()
        self.report_generator = ReportGenerator()
        logger.debug("上下文处理器已初始化")

    def process(
        self,
        input_path: str,
        line: int,
        character: int,
        max_prefix_length: Optional[int] = None,
        max_suffix_length: Optional[int] = None,
        enable_extended_triggers: Optional[bool] = None,
        syntactic_triggers: Optional[bool] = None,
        report_path: Optional[str] = None,
    ) -> ContextResult:
        """读取文档并构建光标处的上下文.

        Args:
            input_path: 输入文件路径
            line: 光标所在行（从0开始）
            character: 光标所在列（从0开始）
            max_prefix_length: 前缀最大字符数，默认读取配置
            max_suffix_length: 后缀最大字符数，默认读取配置
            enable_extended_triggers: 是否启用扩展多行触发，默认读取配置
            syntactic_triggers: 是否启用语法触发，默认读取配置
            report_path: 报告输出路径，为空时不生成报告

        Returns:
            处理结果
        """
        try:
            logger.info(f"开始处理文档: {input_path}，光标 {line}:{character}")

            document = self.document_io.load_document(input_path)
            context = self.builder.build(
                document,
                Position(line, character),
                settings.context.max_prefix_length if max_prefix_length is None else max_prefix_length,
                settings.context.max_suffix_length if max_suffix_length is None else max_suffix_length,
                enable_extended_triggers=(
                    settings.context.enable_extended_triggers
                    if enable_extended_triggers is None
                    else enable_extended_triggers
                ),
                syntactic_triggers=(
                    settings.context.syntactic_triggers
                    if syntactic_triggers is None
                    else syntactic_triggers
                ),
            )

            if report_path:
                self.report_generator.generate_report(context, report_path)

            logger.info("上下文提取完成")
            return ContextResult(
                input_path=input_path,
                success=True,
                context=context,
                report_path=report_path,
            )

        except Exception as e:
            logger.error(f"提取上下文时发生错误: {e}")
            return ContextResult(
                input_path=input_path,
                success=False,
                error_message=str(e),
            )


# 命令行接口
app = typer.Typer()


@app.command()
def build_context(
    input_path: str = typer.Argument(..., help="输入文档路径（文本文件或Word文档）"),
    line: int = typer.Argument(..., help="光标所在行，从0开始"),
    character: int = typer.Argument(..., help="光标所在列，从0开始"),
    max_prefix_length: Optional[int] = typer.Option(None, help="前缀最大字符数，默认读取配置"),
    max_suffix_length: Optional[int] = typer.Option(None, help="后缀最大字符数，默认读取配置"),
    enable_extended_triggers: Optional[bool] = typer.Option(None, help="是否启用扩展多行触发"),
    syntactic_triggers: Optional[bool] = typer.Option(None, help="是否启用语法触发"),
    report_path: Optional[str] = typer.Option(None, help="Markdown报告路径，默认不生成"),
    as_json: bool = typer.Option(False, "--json", help="以JSON格式输出完整上下文"),
) -> None:
    """提取文档中光标处的补全上下文."""
    processor = ContextProcessor()
    result = processor.process(
        input_path,
        line,
        character,
        max_prefix_length=max_prefix_length,
        max_suffix_length=max_suffix_length,
        enable_extended_triggers=enable_extended_triggers,
        syntactic_triggers=syntactic_triggers,
        report_path=report_path,
    )

    if not result.success:
        typer.echo(typer.style(result.report, fg=typer.colors.RED))
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.context.to_dict(), ensure_ascii=False, indent=2))
    else:
        typer.echo(typer.style(result.report, fg=typer.colors.GREEN))


if __name__ == "__main__":
    app()
