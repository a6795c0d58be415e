"""数据处理模块."""

"""
completion_context/data/
├── __init__.py
├── models.py              # 数据模型定义
├── document.py            # 只读文档接口及内存实现
├── document_io.py         # 文档读取操作
├── text_processing.py     # 分行及非空行查找
└── report_generator.py    # 报告生成
"""
