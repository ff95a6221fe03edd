import typing
from pathlib import Path

import pandas as pd

from word_ladders.graph import Graph

STATS_COLUMNS = (
    'Len',
    'WordCount',
    'ComponentCount',
    '1-Components',
    '2-Components',
    '3-Components',
    'Top5-Components',
    'LargestComponentSize',
    'LargestComponentLeafCount',
    'LargestComponentUpperBound',
    'LargestComponentPercent',
    'MaxAdjacentsCount',
    'MaxAdjacentsWord',
    'MaxAdjacentsList',
)


class WordLengthStatistics(object):
    """
    Interesting numbers about the graph of one word length.

    Attributes:
        largest_five_component_counts (list): sizes of the five largest components,
            fewer if the graph doesn't have five components
        largest_component_leaf_count (int): vertices of degree 1 in the largest component
        max_adjacents_word (str): the word with the most adjacent words
            (the first one, if there's a tie)
    """

    def __init__(self, word_length:int=0, total_word_count:int=0,
                 num_components:int=0, num_one_components:int=0,
                 num_two_components:int=0, num_three_components:int=0,
                 largest_five_component_counts:typing.Optional[typing.List[int]]=None,
                 largest_component_leaf_count:int=0,
                 max_adjacents_count:int=0, max_adjacents_word:str='',
                 max_adjacents_list:typing.Optional[typing.List[str]]=None):
        self.word_length = word_length
        self.total_word_count = total_word_count
        self.num_components = num_components
        self.num_one_components = num_one_components
        self.num_two_components = num_two_components
        self.num_three_components = num_three_components
        self.largest_five_component_counts = largest_five_component_counts or []
        self.largest_component_leaf_count = largest_component_leaf_count
        self.max_adjacents_count = max_adjacents_count
        self.max_adjacents_word = max_adjacents_word
        self.max_adjacents_list = max_adjacents_list or []

    def __repr__(self):
        return f'WordLengthStatistics(word_length={self.word_length}, total_word_count={self.total_word_count}, ' \
               f'num_components={self.num_components})'

    @property
    def largest_component_word_count(self) -> int:
        if len(self.largest_five_component_counts) == 0:
            return 0
        return self.largest_five_component_counts[0]

    @property
    def largest_component_percent_of_total(self) -> float:
        if self.total_word_count == 0:
            return 0.0
        return self.largest_component_word_count / self.total_word_count

    @property
    def largest_component_upper_bound(self) -> int:
        """
        Upper bound on the longest simple path through the largest component.

        A path can only start and end on a leaf, so all but two of the leaves
        can't be on it.
        """
        if self.largest_component_leaf_count > 2:
            return self.largest_component_word_count - self.largest_component_leaf_count + 2
        return self.largest_component_word_count

    def to_record(self) -> typing.Dict[str, typing.Any]:
        return dict(zip(STATS_COLUMNS, (
            self.word_length,
            self.total_word_count,
            self.num_components,
            self.num_one_components,
            self.num_two_components,
            self.num_three_components,
            ','.join(str(n) for n in self.largest_five_component_counts),
            self.largest_component_word_count,
            self.largest_component_leaf_count,
            self.largest_component_upper_bound,
            f'{self.largest_component_percent_of_total:.2f}',
            self.max_adjacents_count,
            self.max_adjacents_word,
            ','.join(self.max_adjacents_list),
        )))


def calculate_graph_stats(graph:Graph) -> WordLengthStatistics:
    """
    Calculate various interesting statistics for a word graph.

    The graph's components must already be calculated
    (:meth:`.Graph.load_from_adjacency_file` does that).
    """
    stats = WordLengthStatistics(
        word_length=graph.word_length,
        total_word_count=graph.size
    )
    if graph.size == 0:
        return stats

    components = graph.components()
    stats.num_components = len(components)
    stats.num_one_components = sum(1 for c in components if c.num_vertices == 1)
    stats.num_two_components = sum(1 for c in components if c.num_vertices == 2)
    stats.num_three_components = sum(1 for c in components if c.num_vertices == 3)
    stats.largest_five_component_counts = [c.num_vertices for c in components[:5]]

    largest = components[0]
    stats.largest_component_leaf_count = sum(
        1 for v in graph.vertices if v.component == largest.number and v.is_leaf
    )

    # first vertex wins ties
    max_vertex = max(graph.vertices, key=lambda v: v.degree)
    stats.max_adjacents_count = max_vertex.degree
    stats.max_adjacents_word = max_vertex.word
    stats.max_adjacents_list = graph.words(max_vertex.adjacency_list)

    return stats


def stats_to_frame(stats:typing.Iterable[WordLengthStatistics]) -> pd.DataFrame:
    """One row per word length, sorted by length, in :data:`.STATS_COLUMNS`"""
    df = pd.DataFrame([stat.to_record() for stat in stats], columns=list(STATS_COLUMNS))
    return df.sort_values(by='Len', ignore_index=True)


def write_word_stats(filename:Path, stats:typing.Iterable[WordLengthStatistics]) -> pd.DataFrame:
    df = stats_to_frame(stats)
    df.to_csv(filename, index=False)
    print(f'Wrote stats for {len(df)} word lengths to {filename}')
    return df
