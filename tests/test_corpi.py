import pytest

from word_ladders import corpi
from word_ladders.corpi import (
    English,
    Txt,
    clean_word,
    get_corpus,
    merge_dictionaries,
    partition_words,
    read_corpus_file,
)


@pytest.mark.parametrize('word,expected', [
    ('cat', 'cat'),
    ('Cat', 'cat'),
    ('cat\r', 'cat'),
    ('ab', None),
    ("don't", None),
    ('café', None),
    ('abc1', None),
])
def test_clean_word(word, expected):
    assert clean_word(word) == expected


def test_merge_dictionaries(tmp_path):
    dictionary_dir = tmp_path / 'dictionaries'
    dictionary_dir.mkdir()
    (dictionary_dir / 'one.txt').write_text('Dog\ncat\nab\ncot\n')
    # invalid utf-8 on the second line is dropped quietly
    (dictionary_dir / 'two.txt').write_bytes(b'cop\n\xff\xfe\ncat\r\nzebra\n')
    corpus_file = tmp_path / 'output' / 'corpus.txt'

    n_words = merge_dictionaries(dictionary_dir, corpus_file)

    assert n_words == 5
    assert corpus_file.read_text().splitlines() == ['cat', 'cop', 'cot', 'dog', 'zebra']


def test_merge_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        merge_dictionaries(tmp_path / 'nope', tmp_path / 'corpus.txt')


def test_partition_words():
    words = partition_words(['cat\n', 'cot\n', '\n', 'bark\n', 'cat\n', 'zebra\n', 'bare\n'])
    assert words == {3: ['cat', 'cot'], 4: ['bark', 'bare'], 5: ['zebra']}
    for length, bucket in words.items():
        assert all(len(word) == length for word in bucket)


def test_read_corpus_file(tmp_path):
    corpus_file = tmp_path / 'corpus.txt'
    corpus_file.write_text('bark\ncat\ncot\n')
    assert read_corpus_file(corpus_file) == {3: ['cat', 'cot'], 4: ['bark']}


def test_txt_corpus(tmp_path):
    path = tmp_path / 'words.txt'
    path.write_text('Zebra\napple\nno\napple\n')
    assert Txt(path).corpus == ['apple', 'zebra']


class FakeResponse(object):
    def __init__(self, content):
        self.content = content

    def raise_for_status(self):
        pass


def test_english_is_downloaded_once(tmp_path, monkeypatch):
    calls = []

    def fake_get(url):
        calls.append(url)
        return FakeResponse(b'aardvark\r\nab\r\nzoo\r\n')

    monkeypatch.setattr(corpi.requests, 'get', fake_get)

    assert English(cache_dir=tmp_path).corpus == ['aardvark', 'zoo']
    assert English(cache_dir=tmp_path).corpus == ['aardvark', 'zoo']
    assert calls == [English.url]
    assert (tmp_path / 'english.pck').exists()


def test_merge_with_extra_corpus(tmp_path, monkeypatch):
    monkeypatch.setattr(corpi.requests, 'get', lambda url: FakeResponse(b'zoo\r\ncat\r\n'))
    dictionary_dir = tmp_path / 'dictionaries'
    dictionary_dir.mkdir()
    (dictionary_dir / 'one.txt').write_text('cat\ncot\n')
    corpus_file = tmp_path / 'corpus.txt'

    assert merge_dictionaries(dictionary_dir, corpus_file, extra=[English(cache_dir=tmp_path)]) == 3
    assert corpus_file.read_text().splitlines() == ['cat', 'cot', 'zoo']


def test_get_corpus():
    assert get_corpus('english') is English
    # local corpi need a path, so they can't be looked up by name
    assert get_corpus('dictionaries') is None
    assert get_corpus('txt') is None
    assert get_corpus('klingon') is None
