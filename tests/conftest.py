"""Pytest 配置和 fixtures

定义所有测试共享的 fixtures 和配置。
"""

import pytest
from pathlib import Path

from gc_aligner.alignment import AlignableUnit, AlignmentEngine, GaleChurchCostModel
from gc_aligner.corpus import BilingualCorpus


SOURCE_TEXT = """The meeting opened at nine. The chairman welcomed the delegates.
Three reports were presented. Each was discussed at length.
The session closed at noon.
"""

TARGET_TEXT = """La séance est ouverte à neuf heures. Le président souhaite la bienvenue aux délégués.
Trois rapports sont présentés. Chacun fait l'objet d'un long débat.
La séance est levée à midi.
"""


@pytest.fixture
def project_root():
    """获取项目根目录"""
    return Path(__file__).parent.parent


@pytest.fixture
def cost_model():
    """默认参数的 Gale-Church 代价模型"""
    return GaleChurchCostModel()


@pytest.fixture
def engine():
    """默认参数的对齐引擎"""
    return AlignmentEngine()


@pytest.fixture
def units():
    """由长度列表构建对齐单元的工厂"""

    def _build(lengths, prefix="u"):
        return [AlignableUnit(f"{prefix}{i}", length) for i, length in enumerate(lengths)]

    return _build


@pytest.fixture
def corpus_from_lengths():
    """按段落句长构建语料库的工厂"""
    return BilingualCorpus.from_lengths


@pytest.fixture
def sample_texts():
    """双语示例文本"""
    return SOURCE_TEXT, TARGET_TEXT


@pytest.fixture
def text_files(tmp_path):
    """写入临时目录的双语示例文件"""
    source = tmp_path / "source.txt"
    target = tmp_path / "target.txt"
    source.write_text(SOURCE_TEXT, encoding="utf-8")
    target.write_text(TARGET_TEXT, encoding="utf-8")
    return source, target
