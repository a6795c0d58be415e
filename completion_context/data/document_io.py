"""文档读取操作."""

from pathlib import Path
from typing import Optional, Union

from docx import Document
from loguru import logger

from completion_context.data.document import InMemoryDocument

# 文件后缀与语言标识的对应关系
LANGUAGE_BY_SUFFIX = {
    ".py": "python",
    ".js": "javascript",
    ".jsx": "javascriptreact",
    ".ts": "typescript",
    ".tsx": "typescriptreact",
    ".go": "go",
    ".java": "java",
    ".rs": "rust",
    ".c": "c",
    ".cpp": "cpp",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".md": "markdown",
    ".txt": "plaintext",
    ".docx": "plaintext",
}


class DocumentIO:
    """文档读取操作类."""

    @staticmethod
    def load_document(file_path: Union[str, Path], language_id: Optional[str] = None) -> InMemoryDocument:
        """加载文档.

        Word文档按段落读取，其他文件按UTF-8文本读取。

        Args:
            file_path: 文档路径
            language_id: 语言标识，为空时根据文件后缀推断

        Returns:
            加载的文档对象

        Raises:
            FileNotFoundError: 文件不存在
            ValueError: 文件无法读取
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"文件不存在: {file_path}")

        suffix = file_path.suffix.lower()
        language_id = language_id or LANGUAGE_BY_SUFFIX.get(suffix)

        try:
            if suffix == ".docx":
                text = DocumentIO.extract_docx_text(file_path)
            else:
                text = file_path.read_text(encoding="utf-8")
        except Exception as e:
            logger.error(f"加载文档失败: {e}")
            raise ValueError(f"加载文档失败: {e}")

        document = InMemoryDocument(text, language_id=language_id)
        logger.info(f"已加载文档: {file_path}，共 {document.line_count} 行")
        return document

    @staticmethod
    def extract_docx_text(file_path: Union[str, Path]) -> str:
        """提取Word文档中的所有段落文本.

        Args:
            file_path: Word文档路径

        Returns:
            按换行符拼接的段落文本
        """
        doc = Document(str(file_path))
        return "\n".join(para.text for para in doc.paragraphs)
