"""
Test Scripts - 测试脚本集合

此目录包含 gc_aligner 的 pytest 测试。

模块列表:

1. test_cost.py - Gale-Church 代价函数
2. test_engine.py - 六种操作的动态规划引擎与平局规则
3. test_paragraph.py - 段落校正（合并、删除、插入）
4. test_sentence.py - 段内句子对齐
5. test_aligner.py - 两阶段流程与阶段状态
6. test_corpus.py - 文本存储与文本加载
7. test_splitter.py - 分句
8. test_formatter.py / test_api.py / test_cli.py - 输出与外部接口

运行所有测试:
  python -m pytest tests/ -v
"""
