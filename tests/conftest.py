"""
Shared fixtures: a small in-memory catalog and a data directory on disk.
"""

import json
import random

import pytest

from core.models import Catalog, SentenceItem, VocabularyItem

LEVEL_ONE = [
    {"char": "你好", "pinyin": "nǐ hǎo", "meaning": "hello"},
    {"char": "谢谢", "pinyin": "xièxiè", "meaning": "thank you"},
    {"char": "再见", "pinyin": "zàijiàn", "meaning": "goodbye"},
    {"char": "是", "pinyin": "shì", "meaning": "to be"},
]

LEVEL_TWO = [
    {"char": "唱歌", "pinyin": "chànggē", "meaning": "to sing"},
    {"char": "跳舞", "pinyin": "tiàowǔ", "meaning": "to dance"},
    {"char": "旅游", "pinyin": "lǚyóu", "meaning": "to travel"},
    {"char": "手机", "pinyin": "shǒujī", "meaning": "mobile phone"},
    {"char": "咖啡", "pinyin": "kāfēi", "meaning": "coffee"},
]

LEVEL_THREE = [
    {"char": "环境", "pinyin": "huánjìng", "meaning": "environment"},
    {"char": "决定", "pinyin": "juédìng", "meaning": "to decide"},
    {"char": "经常", "pinyin": "jīngcháng", "meaning": "often"},
    {"char": "关心", "pinyin": "guānxīn", "meaning": "to care about"},
    {"char": "解决", "pinyin": "jiějué", "meaning": "to solve"},
    {"char": "简单", "pinyin": "jiǎndān", "meaning": "simple"},
]

SENTENCES = {
    "1": [
        {"chinese": "你好！", "english": "Hello!"},
        {"chinese": "谢谢你。", "english": "Thank you."},
        {"chinese": "再见！", "english": "Goodbye!"},
    ],
    "2": [],
    "3": [{"chinese": "这里的环境很好。", "english": "The environment here is good."}],
}


def _words(records):
    return [VocabularyItem(r["char"], r["pinyin"], r["meaning"]) for r in records]


def _sentences(records):
    return [SentenceItem(r["chinese"], r["english"]) for r in records]


@pytest.fixture
def catalog():
    return Catalog(
        vocabulary={1: _words(LEVEL_ONE), 2: _words(LEVEL_TWO), 3: _words(LEVEL_THREE)},
        sentences={int(k): _sentences(v) for k, v in SENTENCES.items()},
    )


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def data_dir(tmp_path):
    """A complete data directory, as shipped next to the application."""
    for level, records in ((1, LEVEL_ONE), (2, LEVEL_TWO), (3, LEVEL_THREE)):
        (tmp_path / f"hsk{level}.json").write_text(
            json.dumps(records, ensure_ascii=False), encoding="utf-8")
    (tmp_path / "sentences.json").write_text(
        json.dumps(SENTENCES, ensure_ascii=False), encoding="utf-8")
    return tmp_path
