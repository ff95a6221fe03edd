import pytest

from word_ladders.adjacency import calc_adjacency_lists
from word_ladders.directories import RelativeDirectories
from word_ladders.graph import Graph

SCENARIO_WORDS = ['cat', 'cop', 'cot', 'dog']


@pytest.fixture
def scenario_words():
    return list(SCENARIO_WORDS)


@pytest.fixture
def scenario_graph():
    return Graph.from_adjacency_lists(calc_adjacency_lists(SCENARIO_WORDS))


@pytest.fixture
def dirs(tmp_path):
    """Dictionary and output directories that both exist"""
    dictionary_dir = tmp_path / 'dictionaries'
    dictionary_dir.mkdir()
    dirs = RelativeDirectories(dictionary_dir)
    dirs.output_directory.mkdir()
    return dirs