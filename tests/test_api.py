#!/usr/bin/env python3
"""
高层 API 测试
"""

import json

import pytest

from gc_aligner import TextAligner, align_texts
from gc_aligner.api import align_corpus
from gc_aligner.corpus import BilingualCorpus
from gc_aligner.models import Side


def test_missing_file_raises(tmp_path, text_files):
    """测试输入文件不存在时报错"""
    source, _ = text_files
    with pytest.raises(FileNotFoundError):
        TextAligner(str(source), str(tmp_path / "missing.txt"))


def test_align_sample_files(text_files):
    """测试示例文件的对齐结果"""
    source, target = text_files
    aligner = TextAligner(str(source), str(target))
    result = aligner.align()

    stats = result["stats"]
    assert stats["source_paragraphs"] == 3
    assert stats["source_sentences"] == 5
    assert stats["aligned_blocks"] == 3
    assert stats["total_edges"] == 5
    assert stats["total_edges"] == len(aligner.corpus.edges())
    assert result["summary"]["operation_breakdown"]["1:1"] == 5
    assert result["performance"]["cost_statistics"]["count"] == 5
    assert "loading" in result["performance"]["timing_seconds"]

    first = result["alignments"][0]
    assert first["source_text"] == ["The meeting opened at nine."]
    assert first["target_text"] == ["La séance est ouverte à neuf heures."]
    assert first["source_paragraph"] == 0


def test_save_results_writes_json(tmp_path, text_files):
    """测试结果写入 JSON 文件"""
    source, target = text_files
    aligner = TextAligner(str(source), str(target))
    result = aligner.save_results(aligner.align(), str(tmp_path / "out"))

    output_path = result["io"]["output_path"]
    assert output_path.endswith("source_alignment.json")
    with open(output_path, encoding="utf-8") as f:
        data = json.load(f)

    assert data["configuration"]["paragraph_mode"] == "line"
    assert len(data["alignments"]) == 5
    assert data["summary"]["total_edges"] == 5
    assert not (tmp_path / "out" / "source_alignment.json.tmp").exists()


def test_save_results_custom_file(tmp_path, text_files):
    """测试自定义输出文件名"""
    source, target = text_files
    aligner = TextAligner(str(source), str(target))
    result = aligner.save_results(aligner.align(), str(tmp_path), output_file="run/a.json")

    assert (tmp_path / "run" / "a.json").exists()
    assert result["io"]["output_base"] == str(tmp_path)


def test_print_report(capsys, text_files):
    """测试打印报告"""
    source, target = text_files
    aligner = TextAligner(str(source), str(target))
    output = aligner.print_report(aligner.align(), level="minimal")

    assert "5 edges" in output
    assert "5 edges" in capsys.readouterr().out


def test_align_texts_blank_mode():
    """测试内存文本按空行分段对齐"""
    source = "Hello there.\nHow are you?\n\nGoodbye."
    target = "Bonjour.\nComment allez-vous ?\n\nAu revoir."
    corpus, result = align_texts(source, target, paragraph_mode="blank")

    assert result["stats"]["source_paragraphs"] == 2
    assert result["stats"]["target_paragraphs"] == 2
    assert len(corpus.paragraph_runs(Side.SOURCE)) == 2
    assert result["stats"]["total_edges"] == len(corpus.edges())
    last_source = corpus.ordered_keys(Side.SOURCE)[-1]
    last_target = corpus.ordered_keys(Side.TARGET)[-1]
    assert (last_source, last_target) in corpus.edges()


def test_align_texts_without_correction():
    """测试关闭段落校正"""
    _, result = align_texts("One.\nTwo.", "Un.\nDeux.", correct_paragraphs=False)
    assert result["paragraph_correction"] is None
    assert result["stats"]["renumbered_units"] == 0


def test_align_corpus_twice_keeps_alignment():
    """测试对同一语料库重复对齐时段落编号与边不变"""
    corpus = BilingualCorpus.from_lengths([[100], [100], [100]], [[100]])
    first = align_corpus(corpus)
    ids = [corpus.paragraph_id(Side.SOURCE, k) for k in corpus.ordered_keys(Side.SOURCE)]
    edges = corpus.edges()

    second = align_corpus(corpus)

    assert ids == [0, 0, 2]
    assert [
        corpus.paragraph_id(Side.SOURCE, k) for k in corpus.ordered_keys(Side.SOURCE)
    ] == ids
    assert corpus.edges() == edges
    assert second["stats"]["deleted_paragraphs"] == [2]
    assert second["stats"]["source_paragraphs"] == 3
    assert second["stats"]["total_edges"] == first["stats"]["total_edges"] == 2


def test_text_aligner_align_twice(text_files):
    """测试 TextAligner 重复调用 align 不会重新对齐"""
    source, target = text_files
    aligner = TextAligner(str(source), str(target))
    first = aligner.align()
    edges = aligner.corpus.edges()
    second = aligner.align()

    assert aligner.corpus.edges() == edges
    assert second["alignments"] == first["alignments"]
