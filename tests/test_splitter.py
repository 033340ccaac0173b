#!/usr/bin/env python3
"""
分句器测试
"""

import pytest

from gc_aligner.core import PunctuationHandler, SentenceSplitter


@pytest.mark.parametrize(
    "text, expected",
    [
        ("It's a test. I'm here. You're coming.", 3),
        ("Price is $1,000.50 today. That's expensive!", 2),
        ("你好。世界！", 2),
        ('He said: "This is important." Then he left.', 2),
        ("Wait... what?", 1),
        ("No terminal punctuation", 1),
    ],
)
def test_sentence_count(text, expected):
    """测试分句数量"""
    assert len(SentenceSplitter.split(text)) == expected


def test_blank_text():
    """测试空白文本不产生句子"""
    assert SentenceSplitter.split("   ") == []
    assert SentenceSplitter.split_points("") == []


def test_sentences_are_stripped():
    """测试句子去除首尾空白"""
    assert SentenceSplitter.split("One.  Two.") == ["One.", "Two."]


def test_closing_quote_stays_with_sentence():
    """测试句末引号归属前一句"""
    sentences = SentenceSplitter.split("「你来了吗？」他问。")
    assert sentences == ["「你来了吗？」他问。"]

    sentences = SentenceSplitter.split('"Stop." He left.')
    assert sentences == ['"Stop."', "He left."]


def test_punctuation_context():
    """测试标点上下文判断"""
    assert PunctuationHandler.is_decimal_point("3.14", 1)
    assert PunctuationHandler.is_part_of_ellipsis("a...b", 2)
    assert not PunctuationHandler.is_part_of_ellipsis("a..b", 1)
    assert PunctuationHandler.is_between_ascii_letters("e.g", 1)
    assert not PunctuationHandler.is_between_ascii_letters("好。世", 1)
