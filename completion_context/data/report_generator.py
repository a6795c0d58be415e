"""报告生成器."""

from pathlib import Path
from typing import Union

from loguru import logger

from completion_context.data.models import DocumentContext, Position


def _format_position(position: Position) -> str:
    return f"第{position.line}行 第{position.character}列"


class ReportGenerator:
    """报告生成器."""

    def generate_report(self, doc_context: DocumentContext, output_path: Union[str, Path]) -> None:
        """生成上下文报告.

        Args:
            doc_context: 文档上下文
            output_path: 输出文件路径

        Raises:
            ValueError: 写入失败
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(output_path, "w", encoding="utf-8") as f:
                f.write("# 光标上下文报告\n\n")
                f.write(f"- 上下文区间: {_format_position(doc_context.context_range.start)} - "
                        f"{_format_position(doc_context.context_range.end)}\n")
                f.write(f"- 前缀长度: {len(doc_context.prefix)} 字符\n")
                f.write(f"- 后缀长度: {len(doc_context.suffix)} 字符\n")
                f.write(f"- 注入前缀: {doc_context.injected_prefix if doc_context.injected_prefix is not None else '无'}\n")
                f.write(f"- 多行触发: {doc_context.multiline_trigger or '无'}\n\n")

                f.write("## 当前行\n\n")
                f.write(f"光标前: `{doc_context.current_line_prefix}`\n\n")
                f.write(f"光标后: `{doc_context.current_line_suffix}`\n\n")
                f.write(f"上一非空行: `{doc_context.prev_non_empty_line}`\n\n")
                f.write(f"下一非空行: `{doc_context.next_non_empty_line}`\n\n")

                # 代码块内容原样输出
                for title, content in (
                    ("前缀", doc_context.prefix),
                    ("后缀", doc_context.suffix),
                    ("相似代码块", doc_context.semantic_context),
                ):
                    f.write(f"## {title}\n\n")
                    f.write(f"```\n{content}\n```\n\n")

            logger.info(f"已生成上下文报告: {output_path}")
        except Exception as e:
            logger.error(f"生成上下文报告失败: {e}")
            raise ValueError(f"生成上下文报告失败: {e}")
