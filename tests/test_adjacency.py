import pytest

from word_ladders.adjacency import (
    calc_adjacency_lists,
    calculate_corpus_adjacency_lists,
    one_letter_different,
    write_adjacency_list_file,
)


@pytest.mark.parametrize('w1,w2,expected', [
    ('cat', 'cot', True),
    ('cat', 'cop', False),
    ('cat', 'cat', False),
    ('cat', 'dog', False),
    ('abcd', 'abce', True),
    ('abcd', 'xbcd', True),
    ('abcd', 'xbcx', False),
])
def test_one_letter_different(w1, w2, expected):
    assert one_letter_different(w1, w2) is expected
    assert one_letter_different(w2, w1) is expected


def test_different_lengths_are_a_bug():
    with pytest.raises(AssertionError):
        one_letter_different('cat', 'cats')


def test_scenario_adjacency(scenario_words):
    adjacency = dict(calc_adjacency_lists(scenario_words))
    assert adjacency == {
        'cat': ['cot'],
        'cop': ['cot'],
        'cot': ['cat', 'cop'],
        'dog': [],
    }


def test_adjacency_is_symmetric():
    words = ['bat', 'bad', 'bid', 'bit', 'cat', 'cab', 'rat', 'rot', 'tot', 'zzz']
    adjacency = dict(calc_adjacency_lists(words))
    for w1 in words:
        for w2 in words:
            assert (w2 in adjacency[w1]) == (w1 in adjacency[w2])


def test_write_keeps_isolated_words(tmp_path, scenario_words):
    filename = tmp_path / 'adj.txt'
    assert write_adjacency_list_file(filename, calc_adjacency_lists(scenario_words))
    assert filename.read_text().splitlines() == [
        'cat cot',
        'cop cot',
        'cot cat cop',
        'dog',
    ]


def test_write_skips_when_nothing_is_adjacent(tmp_path):
    filename = tmp_path / 'adj.txt'
    assert not write_adjacency_list_file(filename, calc_adjacency_lists(['abc', 'xyz', 'qrs']))
    assert not filename.exists()
    assert not write_adjacency_list_file(filename, [])
    assert not filename.exists()


def test_corpus_adjacency_files(dirs, scenario_words):
    corpus = {
        3: scenario_words,
        # only two words, skipped even though they're adjacent
        4: ['cart', 'cars'],
        # nothing adjacent, no file
        5: ['apple', 'zebra', 'mango'],
    }
    written = calculate_corpus_adjacency_lists(dirs, corpus=corpus, n_procs=2)

    assert written == [dirs.all_adjacency_file(3)]
    assert not dirs.all_adjacency_file(4).exists()
    assert not dirs.all_adjacency_file(5).exists()
    assert dirs.all_adjacency_file(3).read_text().splitlines()[-1] == 'dog'


def test_corpus_adjacency_from_corpus_file(dirs, scenario_words):
    dirs.corpus_file.write_text('\n'.join(scenario_words + ['bark', 'bare', 'care']) + '\n')
    written = calculate_corpus_adjacency_lists(dirs, word_lengths=[4], n_procs=1)

    assert written == [dirs.all_adjacency_file(4)]
    assert dirs.all_adjacency_file(4).read_text().splitlines() == [
        'bark bare',
        'bare bark care',
        'care bare',
    ]


def test_missing_corpus_is_fatal(dirs):
    with pytest.raises(FileNotFoundError):
        calculate_corpus_adjacency_lists(dirs)
