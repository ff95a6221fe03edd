import typing
from collections import namedtuple
from pathlib import Path

import networkx as nx

from word_ladders.adjacency import AdjacencyLists, format_adjacency_line

UNASSIGNED = -1
"""Component number of a vertex before :meth:`.Graph.calculate_components` has run"""

Component = namedtuple('Component', ['number', 'num_vertices'])


class MalformedAdjacencyFile(ValueError):
    """An adjacency list refers to a word that never appears as an anchor"""


class Vertex(object):
    """
    A single word in the graph.

    Attributes:
        word (str): the word
        adjacency_list (list): indices (into :attr:`.Graph.vertices`) of every word
            one letter different from this one
        component (int): number of the component this vertex belongs to
    """

    __slots__ = ('word', 'adjacency_list', 'component')

    def __init__(self, word:str):
        self.word = word
        self.adjacency_list = [] # type: typing.List[int]
        self.component = UNASSIGNED

    def __repr__(self):
        return f'Vertex({self.word!r}, degree={self.degree}, component={self.component})'

    @property
    def degree(self) -> int:
        return len(self.adjacency_list)

    @property
    def is_leaf(self) -> bool:
        return self.degree == 1


class Graph(object):
    """
    A graph of words of length N, where words are joined if they are one letter different.

    This is really a forest, because there may be (in fact, probably are)
    multiple components within the graph.

    Vertices live in one list and refer to each other by index,
    :attr:`.word_to_index` maps back from words. Both are built once when the
    graph is loaded and not changed after that, except for the component
    numbers which are filled in once by :meth:`.calculate_components`.

    Attributes:
        vertices (list): :class:`.Vertex` objects
        word_to_index (dict): word -> index into :attr:`.vertices`
    """

    def __init__(self):
        self.vertices = [] # type: typing.List[Vertex]
        self.word_to_index = {} # type: typing.Dict[str, int]

    def __len__(self):
        return len(self.vertices)

    def __repr__(self):
        return f'Graph(word_length={self.word_length}, size={self.size})'

    @property
    def size(self) -> int:
        """Number of vertices"""
        return len(self.vertices)

    @property
    def word_length(self) -> int:
        if len(self.vertices) == 0:
            return 0
        return len(self.vertices[0].word)

    @classmethod
    def load_from_adjacency_file(cls, filename:Path) -> 'Graph':
        """
        Read an adjacency list file (eg. ``all_adjacency_lists_05.txt``) and return
        a graph with all its vertices linked and its components calculated.

        Each line is an anchor word followed by every word reachable from it by
        changing one letter.

        Args:
            filename (Path): file to read

        Raises:
            FileNotFoundError: if there's no such file
            :class:`.MalformedAdjacencyFile`: if an adjacent word has no line of its own
        """
        with open(filename, 'r', encoding='utf-8') as in_file:
            lines = [line.split() for line in in_file]

        graph = cls._from_lines([line for line in lines if len(line) > 0])
        graph.calculate_components()
        return graph

    @classmethod
    def from_adjacency_lists(cls, adjacency_lists:AdjacencyLists) -> 'Graph':
        """
        Build a graph from ``(anchor, [adjacent words])`` pairs, as returned by
        :func:`.adjacency.calc_adjacency_lists`
        """
        graph = cls._from_lines([[anchor, *adjacent] for anchor, adjacent in adjacency_lists])
        graph.calculate_components()
        return graph

    @classmethod
    def _from_lines(cls, lines:typing.List[typing.List[str]]) -> 'Graph':
        graph = cls()

        # Every vertex has to exist before any adjacency list can be resolved
        # to indices. No reachable word should be missing an anchor line since
        # for any pair "A B" there is also "B A".
        for line in lines:
            graph.add_vertex(line[0])

        for line in lines:
            anchor_index = graph.index_of(line[0])
            try:
                graph.vertices[anchor_index].adjacency_list = [
                    graph.word_to_index[word] for word in line[1:]
                ]
            except KeyError as e:
                raise MalformedAdjacencyFile(
                    f'{e.args[0]!r} is adjacent to {line[0]!r} but has no adjacency list of its own'
                ) from e

        return graph

    def add_vertex(self, word:str) -> int:
        if word in self.word_to_index:
            return self.word_to_index[word]
        self.vertices.append(Vertex(word))
        self.word_to_index[word] = len(self.vertices) - 1
        return self.word_to_index[word]

    def index_of(self, word:str) -> int:
        return self.word_to_index[word]

    def words(self, indices:typing.Iterable[int]) -> typing.List[str]:
        """Turn a list of vertex indices back into words"""
        return [self.vertices[index].word for index in indices]

    def neighbors(self, word:str) -> typing.List[str]:
        return self.words(self.vertices[self.index_of(word)].adjacency_list)

    def calculate_components(self):
        """
        Give every vertex a component number so that vertices reachable from
        each other (in one or more steps) share the same number.
        """
        next_component_number = 0

        for start_index, vertex in enumerate(self.vertices):
            if vertex.component != UNASSIGNED:
                continue

            # find everything in this component without touching the vertices...
            seen = self._reachable_from(start_index)

            # ...then number them all at once
            for index in seen:
                self.vertices[index].component = next_component_number

            next_component_number += 1

    def _reachable_from(self, start_index:int) -> typing.Set[int]:
        seen = {start_index}
        stack = [start_index]
        while stack:
            index = stack.pop()
            for adjacent_index in self.vertices[index].adjacency_list:
                if adjacent_index not in seen:
                    seen.add(adjacent_index)
                    stack.append(adjacent_index)
        return seen

    def components(self) -> typing.List[Component]:
        """
        Every component and how many vertices are in it, largest first.

        Components of the same size are ordered by their number.

        Returns:
            list of :class:`.Component`
        """
        counts = {} # type: typing.Dict[int, int]
        for vertex in self.vertices:
            counts[vertex.component] = counts.get(vertex.component, 0) + 1

        components = [Component(number, num_vertices) for number, num_vertices in counts.items()]
        return sorted(components, key=lambda c: (-c.num_vertices, c.number))

    def largest_component(self) -> Component:
        components = self.components()
        if len(components) == 0:
            raise ValueError('An empty graph has no components')
        return components[0]

    def component_vertices(self, component:int) -> typing.List[Vertex]:
        return [vertex for vertex in self.vertices if vertex.component == component]

    def adjacency_lists(self, component:typing.Optional[int]=None) -> AdjacencyLists:
        """
        Turn the graph back into ``(anchor, [adjacent words])`` pairs.

        Args:
            component (int): only include vertices from this component
        """
        if component is None:
            vertices = self.vertices
        else:
            vertices = self.component_vertices(component)
        return [(vertex.word, self.words(vertex.adjacency_list)) for vertex in vertices]

    def to_networkx(self) -> nx.Graph:
        """
        An undirected :class:`networkx.Graph` of the words, with each
        node's ``component`` as an attribute.
        """
        g = nx.Graph()
        for vertex in self.vertices:
            g.add_node(vertex.word, component=vertex.component)
        for vertex in self.vertices:
            for adjacent_index in vertex.adjacency_list:
                g.add_edge(vertex.word, self.vertices[adjacent_index].word)
        return g


def write_adjacency_file(filename:Path, adjacency_lists:AdjacencyLists):
    """
    Like :func:`.adjacency.write_adjacency_list_file` but always writes, even if
    nothing is adjacent to anything.
    """
    with open(filename, 'w', encoding='utf-8') as out_file:
        for anchor, adjacent in adjacency_lists:
            out_file.write(format_adjacency_line(anchor, adjacent))


def write_largest_component_file(graph:Graph, filename:Path) -> Component:
    """
    Write just the largest component of the graph as its own adjacency list file,
    which makes everything downstream smaller and faster.

    Returns:
        :class:`.Component` that was written
    """
    component = graph.largest_component()
    write_adjacency_file(filename, graph.adjacency_lists(component.number))
    return component
