#!/usr/bin/env python3
"""
语料库（文本存储）测试
"""

import pytest

from gc_aligner.corpus import BilingualCorpus
from gc_aligner.models import InvalidConnectionError, InvalidKeyError, Side
from gc_aligner.store import TextStore


def test_corpus_is_text_store():
    """测试语料库实现文本存储接口"""
    assert isinstance(BilingualCorpus(), TextStore)


def test_keys_are_unique_across_sides():
    """测试键在两侧之间不重复"""
    corpus = BilingualCorpus()
    a = corpus.add(Side.SOURCE, "Hello.")
    b = corpus.add(Side.TARGET, "Bonjour.")
    c = corpus.add(Side.SOURCE, "Bye.")

    assert len({a, b, c}) == 3
    assert corpus.ordered_keys(Side.SOURCE) == [a, c]
    assert corpus.length(Side.TARGET, b) == len("Bonjour.")


def test_removed_keys_are_not_reused():
    """测试删除后的键不会再次分配"""
    corpus = BilingualCorpus()
    a = corpus.add(Side.SOURCE, "one")
    corpus.remove(a)
    b = corpus.add(Side.SOURCE, "two")

    assert b != a
    assert a not in corpus


def test_insert_keeps_document_order():
    """测试在指定位置插入单元"""
    corpus = BilingualCorpus()
    a = corpus.add(Side.SOURCE, "first")
    c = corpus.add(Side.SOURCE, "third")
    b = corpus.insert(Side.SOURCE, 1, "second")

    assert corpus.ordered_keys(Side.SOURCE) == [a, b, c]


def test_invalid_key_raises():
    """测试访问不存在或不在该侧的键"""
    corpus = BilingualCorpus()
    key = corpus.add(Side.SOURCE, "text")

    with pytest.raises(InvalidKeyError):
        corpus.length(Side.SOURCE, 999)
    with pytest.raises(InvalidKeyError) as exc_info:
        corpus.paragraph_id(Side.TARGET, key)
    assert "target" in str(exc_info.value)


def test_negative_paragraph_id_rejected():
    """测试段落编号不能为负"""
    corpus = BilingualCorpus()
    key = corpus.add(Side.SOURCE, "text")

    with pytest.raises(ValueError):
        corpus.set_paragraph_id(Side.SOURCE, key, -1)
    with pytest.raises(ValueError):
        corpus.add(Side.TARGET, "text", paragraph_id=-2)


def test_add_edge_is_idempotent():
    """测试重复添加边返回 False"""
    corpus = BilingualCorpus()
    s = corpus.add(Side.SOURCE, "Hello.")
    t = corpus.add(Side.TARGET, "Bonjour.")

    assert corpus.add_edge(s, t) is True
    assert corpus.add_edge(s, t) is False
    assert corpus.add_edge(t, s) is False
    assert corpus.edges() == [(s, t)]


def test_same_side_edge_rejected():
    """测试同侧单元之间不能连边"""
    corpus = BilingualCorpus()
    a = corpus.add(Side.SOURCE, "one")
    b = corpus.add(Side.SOURCE, "two")

    with pytest.raises(InvalidConnectionError):
        corpus.add_edge(a, b)


def test_remove_unit_drops_edges():
    """测试删除单元时同时删除其边"""
    corpus = BilingualCorpus()
    s = corpus.add(Side.SOURCE, "Hello.")
    t = corpus.add(Side.TARGET, "Bonjour.")
    corpus.add_edge(s, t)
    corpus.remove(t)

    assert corpus.connections(s) == set()
    assert corpus.edges() == []


def test_remove_edge_and_clear():
    """测试删除单条边与清空所有边"""
    corpus = BilingualCorpus.from_lengths([[10, 20]], [[10, 20]])
    s0, s1 = corpus.ordered_keys(Side.SOURCE)
    t0, t1 = corpus.ordered_keys(Side.TARGET)
    corpus.add_edge(s0, t0)
    corpus.add_edge(s1, t1)

    assert corpus.remove_edge(s0, t0) is True
    assert corpus.remove_edge(s0, t0) is False
    corpus.clear_edges()
    assert corpus.edges() == []


def test_split_paragraphs_line_mode():
    """测试按行分段"""
    text = "First line.\n\n  Second line.  \nThird."
    assert BilingualCorpus.split_paragraphs(text, "line") == [
        "First line.",
        "Second line.",
        "Third.",
    ]


def test_split_paragraphs_blank_mode():
    """测试按空行分段并合并折行"""
    text = "First part\nwrapped here.\n\nSecond.\n"
    assert BilingualCorpus.split_paragraphs(text, "blank") == [
        "First part wrapped here.",
        "Second.",
    ]


def test_unknown_paragraph_mode():
    """测试未知分段模式"""
    with pytest.raises(ValueError):
        BilingualCorpus.split_paragraphs("text", "sentence")


def test_load_text_assigns_paragraph_ids(sample_texts):
    """测试加载文本后句子带有段落编号"""
    source, target = sample_texts
    corpus = BilingualCorpus.from_texts(source, target)

    runs = corpus.paragraph_runs(Side.SOURCE)
    assert [run.paragraph_id for run in runs] == [0, 1, 2]
    assert [len(run) for run in runs] == [2, 2, 1]
    assert len(corpus.paragraph_runs(Side.TARGET)) == 3


def test_load_text_appends_paragraphs():
    """测试多次加载时段落编号继续递增"""
    corpus = BilingualCorpus()
    corpus.load_text(Side.SOURCE, "One. Two.\nThree.")
    added = corpus.load_text(Side.SOURCE, "Four.")

    assert added == 1
    ids = [corpus.paragraph_id(Side.SOURCE, k) for k in corpus.ordered_keys(Side.SOURCE)]
    assert ids == [0, 0, 1, 2]


def test_unit_hash():
    """测试单元哈希忽略首尾空白"""
    corpus = BilingualCorpus()
    a = corpus.get(corpus.add(Side.SOURCE, "Hello."))
    b = corpus.get(corpus.add(Side.TARGET, "Hello."))

    assert a.hash_value == b.hash_value
    assert a.is_source and not b.is_source
