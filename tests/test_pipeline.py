import pandas as pd
import pytest

from word_ladders.adjacency import calculate_corpus_adjacency_lists
from word_ladders.corpi import merge_dictionaries
from word_ladders.directories import RelativeDirectories
from word_ladders.graph import Graph
from word_ladders.pipeline import PipelineError, calculate_all_longest_paths, calculate_initial_graphs


@pytest.fixture
def prepared(dirs):
    (dirs.dictionary_directory / 'words.txt').write_text(
        'cat\ncot\ncop\ndog\n'
        'bark\nbare\ncare\ncart\ncore\nzany\n'
    )
    merge_dictionaries(dirs.dictionary_directory, dirs.corpus_file)
    calculate_corpus_adjacency_lists(dirs, n_procs=2)
    return dirs


def test_initial_graphs(prepared):
    dirs = prepared
    stats = calculate_initial_graphs(dirs, n_procs=2)

    assert [s.word_length for s in stats] == [3, 4]
    # zany is alone but still counted
    assert stats[1].total_word_count == 6
    assert stats[1].largest_five_component_counts == [5, 1]

    df = pd.read_csv(dirs.word_stats_file)
    assert list(df['Len']) == [3, 4]
    assert list(df['WordCount']) == [4, 6]

    largest = Graph.load_from_adjacency_file(dirs.largest_component_adjacency_file(4))
    assert set(largest.word_to_index) == {'bare', 'bark', 'care', 'cart', 'core'}
    assert len(largest.components()) == 1


def test_longest_paths_and_resume(prepared):
    dirs = prepared
    calculate_initial_graphs(dirs, n_procs=2)

    assert calculate_all_longest_paths(dirs, n_procs=2) == {3: 3, 4: 5}
    assert (dirs.chains_directory(3) / 'cat.txt').read_text() == 'cat cot cop\n'
    assert dirs.longest_chain_file(4).read_text() == 'bark bare care cart\n'

    chains = sorted(p.name for p in dirs.chains_directory(4).iterdir())
    assert chains == ['bare.txt', 'bark.txt', 'care.txt', 'cart.txt', 'core.txt']
    summary_mtime = dirs.longest_chain_file(4).stat().st_mtime_ns

    assert calculate_all_longest_paths(dirs, n_procs=2) == {3: 0, 4: 0}
    assert sorted(p.name for p in dirs.chains_directory(4).iterdir()) == chains
    # nothing new, so the summary is left alone
    assert dirs.longest_chain_file(4).stat().st_mtime_ns == summary_mtime


def test_missing_summary_is_rewritten_on_resume(prepared):
    dirs = prepared
    calculate_initial_graphs(dirs, n_procs=1)
    calculate_all_longest_paths(dirs, word_lengths=[4], n_procs=1)
    dirs.longest_chain_file(4).unlink()

    assert calculate_all_longest_paths(dirs, word_lengths=[4], n_procs=1) == {4: 0}
    assert dirs.longest_chain_file(4).read_text() == 'bark bare care cart\n'


def test_word_length_filter(prepared):
    dirs = prepared
    stats = calculate_initial_graphs(dirs, word_lengths=[4], n_procs=1)
    assert [s.word_length for s in stats] == [4]
    assert not dirs.largest_component_adjacency_file(3).exists()

    assert calculate_all_longest_paths(dirs, word_lengths=[3, 4], n_procs=1) == {4: 5}
    assert not dirs.chains_directory(3).exists()


def test_nothing_to_load(dirs):
    with pytest.raises(PipelineError):
        calculate_initial_graphs(dirs, n_procs=1)
    with pytest.raises(PipelineError):
        calculate_all_longest_paths(dirs, n_procs=1)


def test_missing_output_directory(tmp_path):
    dirs = RelativeDirectories(tmp_path / 'dictionaries')
    with pytest.raises(PipelineError):
        calculate_initial_graphs(dirs)
    with pytest.raises(PipelineError):
        calculate_all_longest_paths(dirs)
