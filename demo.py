from loguru import logger

from completion_context.data.document import InMemoryDocument
from completion_context.data.models import Position
from completion_context.service.doc_context import get_current_doc_context

source = """def add(a, b):
    return a + b


def sub(a, b):
    return a - b


def mul(a, b):
"""

document = InMemoryDocument(source, language_id="python")
context = get_current_doc_context(document, Position(8, 14), max_prefix_length=100, max_suffix_length=50)

logger.info(f"多行触发: {context.multiline_trigger}")
print(context.prefix)
print("----")
print(context.semantic_context)
