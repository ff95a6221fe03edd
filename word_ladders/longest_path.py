"""
Long word chains, one per anchor word, written as they're found so a batch
that takes days can be stopped and picked back up.

.. note::

    This is not an exhaustive search for the longest simple path (which is
    NP-hard). From the anchor we keep stepping to the first unvisited
    adjacent word and stop as soon as there isn't one, with no backtracking.
    The chain found depends only on the order of the adjacency lists, so it's
    the same on every run, but it's usually shorter than the true longest path.
"""
import multiprocessing as mp
import os
from pathlib import Path
import typing

from tqdm import tqdm

from word_ladders.directories import RelativeDirectories
from word_ladders.graph import Graph

# set in each worker process by _init_worker
_worker_graph = None # type: typing.Optional[Graph]
_worker_dirs = None # type: typing.Optional[RelativeDirectories]


class CompletedWords(object):
    """
    Anchor words that already have a chain file, by word length

    Attributes:
        completed (dict): word length -> list of anchor words
    """

    def __init__(self, completed:typing.Optional[typing.Dict[int, typing.List[str]]]=None):
        self.completed = completed or {}

    def num_complete(self, word_length:int) -> int:
        return len(self.completed.get(word_length, []))

    def completed_words_of_length(self, word_length:int) -> typing.List[str]:
        return self.completed.get(word_length, [])


def get_completed_words(dirs:RelativeDirectories, word_lengths:typing.Iterable[int]) -> CompletedWords:
    """
    Find completed words by scanning the ``chains_NN`` directories: every
    non-empty ``<word>.txt`` in there is a word that's done.
    """
    completed = {}
    for word_length in word_lengths:
        chains_dir = dirs.chains_directory(word_length)
        if not chains_dir.is_dir():
            continue
        completed[word_length] = sorted(
            chain_file.stem for chain_file in chains_dir.glob('*.txt')
            if chain_file.is_file() and chain_file.stat().st_size > 0
        )
    return CompletedWords(completed)


def create_chain_directories(dirs:RelativeDirectories, word_lengths:typing.Iterable[int]):
    for word_length in word_lengths:
        dirs.chains_directory(word_length).mkdir(parents=True, exist_ok=True)


def calculate_longest_path_for_word(graph:Graph, word:str) -> typing.List[int]:
    """
    Walk from ``word`` to the first adjacent word not already in the chain until
    we get stuck.

    Returns:
        list of vertex indices, starting with ``word``'s
    """
    start_index = graph.index_of(word)
    longest_path = [start_index]
    visited = {start_index}

    current = start_index
    while True:
        for adjacent_index in graph.vertices[current].adjacency_list:
            if adjacent_index not in visited:
                break
        else:
            return longest_path

        visited.add(adjacent_index)
        longest_path.append(adjacent_index)
        current = adjacent_index


def write_path_output_file(dirs:RelativeDirectories, path:typing.List[str]) -> Path:
    """
    Write ``chains_NN/<anchor>.txt`` with the chain on one line.

    A chain of just the anchor is never worth writing. The chain goes to a
    ``.tmp`` file first and is moved into place, so a killed run never leaves
    a partial ``.txt`` behind.
    """
    assert len(path) > 1, f'Refusing to write a chain of length {len(path)}'
    anchor_word = path[0]
    chains_dir = dirs.chains_directory(len(anchor_word))
    chains_dir.mkdir(parents=True, exist_ok=True)
    filename = chains_dir / f'{anchor_word}.txt'

    tmp_filename = filename.with_suffix('.tmp')
    with open(tmp_filename, 'w', encoding='utf-8') as out_file:
        out_file.write(' '.join(path) + '\n')
    os.replace(tmp_filename, filename)

    return filename


def _init_worker(graph:Graph, dirs:RelativeDirectories):
    global _worker_graph, _worker_dirs
    _worker_graph, _worker_dirs = graph, dirs


def _longest_path_worker(word:str) -> typing.Tuple[str, int, typing.Optional[Path]]:
    path = calculate_longest_path_for_word(_worker_graph, word)
    if len(path) < 2:
        return word, len(path), None
    filename = write_path_output_file(_worker_dirs, _worker_graph.words(path))
    return word, len(path), filename


def calculate_longest_paths(dirs:RelativeDirectories, graph:Graph,
                            completed_already:typing.Iterable[str]=(),
                            n_procs:typing.Optional[int]=None,
                            batch_size:int=100) -> int:
    """
    Find a chain for every word in the graph that doesn't have one yet.

    Args:
        dirs (:class:`.RelativeDirectories`): where to write the chains
        graph (:class:`.Graph`): usually just the largest component of a word length
        completed_already (list): words to skip
        n_procs (int): Number of processors to spawn in the multiprocessing pool,
            1 does everything in this process
        batch_size (int): chunksize for ``imap_unordered``

    Returns:
        int: number of chain files written
    """
    all_words = set(graph.word_to_index.keys())
    words_still_to_do = sorted(all_words.difference(completed_already))
    if len(words_still_to_do) == 0:
        return 0

    print(f'There are {len(words_still_to_do)} words still to compute '
          f'for the graph of word length {graph.word_length}')

    n_written = 0
    progress_pbar = tqdm(total=len(words_still_to_do), desc=f'Chains {graph.word_length:02d}')
    try:
        if n_procs == 1:
            _init_worker(graph, dirs)
            results = map(_longest_path_worker, words_still_to_do)
            for word, path_length, filename in results:
                if filename is not None:
                    n_written += 1
                progress_pbar.update()
        else:
            with mp.Pool(n_procs, initializer=_init_worker, initargs=(graph, dirs)) as pool:
                for word, path_length, filename in pool.imap_unordered(
                        _longest_path_worker, words_still_to_do, chunksize=batch_size):
                    if filename is not None:
                        n_written += 1
                    progress_pbar.update()
    finally:
        progress_pbar.close()

    return n_written


def _load_graph_worker(args:typing.Tuple[int, Path]) -> typing.Tuple[int, typing.Optional[Graph]]:
    word_length, filename = args
    try:
        return word_length, Graph.load_from_adjacency_file(filename)
    except FileNotFoundError:
        # not every length has a graph
        return word_length, None


def load_graphs(dirs:RelativeDirectories, word_lengths:typing.Iterable[int],
                n_procs:typing.Optional[int]=None) -> typing.List[Graph]:
    """
    Load the largest-component graph of each word length that has one.

    Returns:
        list of :class:`.Graph`, smallest first
    """
    iterator = [(word_length, dirs.largest_component_adjacency_file(word_length))
                for word_length in word_lengths]
    if len(iterator) == 0:
        return []

    graphs = []
    with mp.Pool(n_procs) as pool:
        for word_length, graph in pool.imap_unordered(_load_graph_worker, iterator):
            if graph is None:
                continue
            tqdm.write(f'Loaded graph of size {graph.size} from '
                       f'{dirs.largest_component_adjacency_file(word_length)}')
            graphs.append(graph)

    # smallest first so it looks like we're making progress
    return sorted(graphs, key=lambda g: (g.size, g.word_length))


def print_completion_status(graphs:typing.Iterable[Graph], completed_words:CompletedWords):
    for graph in graphs:
        num_complete = completed_words.num_complete(graph.word_length)
        if num_complete == 0 or graph.size == 0:
            percent = 0.0
        else:
            percent = 100.0 * num_complete / graph.size
        print(f'Graph {graph.word_length} is {percent:.2f}% complete')


def summarize_chains(dirs:RelativeDirectories, word_length:int) -> typing.Optional[typing.List[str]]:
    """
    Find the longest chain written so far for this length and copy it to
    :meth:`.RelativeDirectories.longest_chain_file`

    Chains of equal length are broken by the alphabetically first anchor.

    Returns:
        the longest chain as a list of words, or ``None`` if there are no chains
    """
    chains_dir = dirs.chains_directory(word_length)
    if not chains_dir.is_dir():
        return None

    longest = None
    for chain_file in sorted(chains_dir.glob('*.txt')):
        chain = chain_file.read_text(encoding='utf-8').split()
        if longest is None or len(chain) > len(longest):
            longest = chain

    if longest is None:
        return None

    dirs.longest_chain_file(word_length).write_text(' '.join(longest) + '\n', encoding='utf-8')
    print(f'Longest chain for word length {word_length} has {len(longest)} words, '
          f'starting from {longest[0]!r}')
    return longest
