"""
The stages of the pipeline, each of which reads the files the previous one wrote:

1. :func:`.corpi.merge_dictionaries` - dictionaries -> ``corpus.txt``
2. :func:`.adjacency.calculate_corpus_adjacency_lists` - corpus -> ``all_adjacency_lists_NN.txt``
3. :func:`.calculate_initial_graphs` - adjacency lists -> ``word_stats.csv`` and
   ``largest_component_adjacency_lists_NN.txt``
4. :func:`.calculate_all_longest_paths` - largest components -> ``chains_NN/<word>.txt``
"""
import multiprocessing as mp
import typing

from tqdm import tqdm

from word_ladders.directories import RelativeDirectories
from word_ladders.graph import Graph, write_largest_component_file
from word_ladders.longest_path import (
    calculate_longest_paths,
    create_chain_directories,
    get_completed_words,
    load_graphs,
    print_completion_status,
    summarize_chains,
)
from word_ladders.stats import WordLengthStatistics, calculate_graph_stats, write_word_stats

DEFAULT_WORD_LENGTHS = tuple(range(1, 31))


class PipelineError(RuntimeError):
    """A stage can't run because the stage before it hasn't"""


def _initial_graph_worker(args) -> typing.Tuple[int, typing.Optional[Graph], typing.Optional[WordLengthStatistics]]:
    word_length, filename = args
    try:
        graph = Graph.load_from_adjacency_file(filename)
    except FileNotFoundError:
        return word_length, None, None
    return word_length, graph, calculate_graph_stats(graph)


def calculate_initial_graphs(dirs:RelativeDirectories,
                             word_lengths:typing.Optional[typing.Iterable[int]]=None,
                             n_procs:typing.Optional[int]=None) -> typing.List[WordLengthStatistics]:
    """
    Load the graph of every word length, calculate its stats, and write the
    largest component of each to its own adjacency list file.

    Lengths without an adjacency list file are skipped.

    Args:
        dirs (:class:`.RelativeDirectories`): where everything is
        word_lengths (list): lengths to try, default 1 to 30
        n_procs (int): Number of processors to spawn in the multiprocessing pool

    Returns:
        list of :class:`.WordLengthStatistics`, sorted by word length
    """
    if not dirs.output_directory.is_dir():
        raise PipelineError(f'Output directory {dirs.output_directory} does not exist')

    if word_lengths is None:
        word_lengths = DEFAULT_WORD_LENGTHS
    iterator = [(word_length, dirs.all_adjacency_file(word_length))
                for word_length in sorted(set(word_lengths))]

    graphs = {}
    stats = {}
    with mp.Pool(n_procs) as pool:
        for word_length, graph, stat in tqdm(pool.imap_unordered(_initial_graph_worker, iterator),
                                             total=len(iterator), desc='Graphs'):
            if graph is None or graph.size == 0:
                continue
            tqdm.write(f'Loaded graph for word length of {word_length} from '
                       f'{dirs.all_adjacency_file(word_length)}')
            graphs[word_length] = graph
            stats[word_length] = stat

    if len(graphs) == 0:
        raise PipelineError(f'No adjacency list files found in {dirs.output_directory}, '
                            f'calculate adjacency lists first')

    stats = [stats[word_length] for word_length in sorted(stats.keys())]
    write_word_stats(dirs.word_stats_file, stats)

    for word_length in sorted(graphs.keys()):
        filename = dirs.largest_component_adjacency_file(word_length)
        print(f'Writing {filename}')
        write_largest_component_file(graphs[word_length], filename)

    return stats


def calculate_all_longest_paths(dirs:RelativeDirectories,
                                word_lengths:typing.Optional[typing.Iterable[int]]=None,
                                n_procs:typing.Optional[int]=None) -> typing.Dict[int, int]:
    """
    Find a chain for every word of the largest component of every word length,
    skipping words that already have one.

    Lengths are done smallest graph first.

    Returns:
        dict of word length -> number of chain files written by this call
    """
    if not dirs.output_directory.is_dir():
        raise PipelineError(f'Output directory {dirs.output_directory} does not exist')

    if word_lengths is None:
        word_lengths = DEFAULT_WORD_LENGTHS

    graphs = load_graphs(dirs, sorted(set(word_lengths)), n_procs=n_procs)
    if len(graphs) == 0:
        raise PipelineError(f'No largest component files found in {dirs.output_directory}, '
                            f'calculate graphs first')

    # only make directories for the graphs we actually loaded
    loaded_lengths = [graph.word_length for graph in graphs]
    create_chain_directories(dirs, loaded_lengths)

    completed_words = get_completed_words(dirs, loaded_lengths)
    print_completion_status(graphs, completed_words)

    written = {}
    for graph in graphs:
        completed_already = completed_words.completed_words_of_length(graph.word_length)
        written[graph.word_length] = calculate_longest_paths(
            dirs, graph, completed_already, n_procs=n_procs
        )
        if written[graph.word_length] > 0 or not dirs.longest_chain_file(graph.word_length).exists():
            summarize_chains(dirs, graph.word_length)

    return written
