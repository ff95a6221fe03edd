import multiprocessing as mp
from itertools import repeat
from pathlib import Path
import typing

from tqdm import tqdm

from word_ladders.corpi import read_corpus_file
from word_ladders.directories import RelativeDirectories

AdjacencyLists = typing.List[typing.Tuple[str, typing.List[str]]]
"""``[(anchor, [adjacent, words, ...]), ...]`` in corpus order"""


def one_letter_different(w1:str, w2:str) -> bool:
    """
    True if the two words differ in exactly one position.

    Stops scanning at the second difference. Both words must be the same length.
    """
    assert len(w1) == len(w2), f'{w1!r} and {w2!r} are different lengths'

    num_diffs = 0
    for a, b in zip(w1, w2):
        if a != b:
            num_diffs += 1
            if num_diffs == 2:
                return False

    return num_diffs == 1


def calc_adjacency_lists(words:typing.Sequence[str]) -> AdjacencyLists:
    """
    For every word, find all the other words in ``words`` that can be made by
    changing a single letter.

    Args:
        words (list): words that are all the same length

    Returns:
        list of ``(anchor, [adjacent words])`` in the order of ``words``
    """
    adjacency_lists = []
    for w1 in words:
        adjacency_lists.append((w1, [w2 for w2 in words if one_letter_different(w1, w2)]))
    return adjacency_lists


def format_adjacency_line(anchor:str, adjacent_words:typing.Iterable[str]) -> str:
    return ' '.join([anchor, *adjacent_words]) + '\n'


def write_adjacency_list_file(filename:Path, adjacency_lists:AdjacencyLists) -> bool:
    """
    Write one ``anchor adj1 adj2 ...`` line per word.

    Words with nothing adjacent still get a line of their own, they're needed
    for the stats later on. If no word has anything adjacent the file isn't
    written at all.

    Returns:
        bool: whether the file was written
    """
    if len(adjacency_lists) == 0 or \
            all(len(adjacent) == 0 for _, adjacent in adjacency_lists):
        return False

    with open(filename, 'w', encoding='utf-8') as out_file:
        for anchor, adjacent in adjacency_lists:
            out_file.write(format_adjacency_line(anchor, adjacent))
    return True


def _adjacency_worker(args:typing.Tuple[int, typing.List[str], RelativeDirectories]) -> typing.Tuple[int, typing.Optional[Path]]:
    # unpack since imap only passes one arg
    word_length, words, dirs = args
    adjacency_lists = calc_adjacency_lists(words)
    filename = dirs.all_adjacency_file(word_length)
    if write_adjacency_list_file(filename, adjacency_lists):
        return word_length, filename
    return word_length, None


def calculate_corpus_adjacency_lists(dirs:RelativeDirectories,
                                     corpus:typing.Optional[typing.Dict[int, typing.List[str]]]=None,
                                     word_lengths:typing.Optional[typing.Iterable[int]]=None,
                                     n_procs:typing.Optional[int]=None) -> typing.List[Path]:
    """
    Calculate the adjacency lists of every word in the corpus and write one
    ``all_adjacency_lists_NN.txt`` file per word length.

    Lengths with two words or fewer are skipped, you can't make a chain out of them.

    Args:
        dirs (:class:`.RelativeDirectories`): where to find the corpus and put the files
        corpus (dict): length -> words, if ``None`` read from ``dirs.corpus_file``
        word_lengths (list): only calculate these lengths, default all of them
        n_procs (int): Number of processors to spawn in the multiprocessing pool

    Returns:
        list of files written, sorted by word length
    """
    if corpus is None:
        print(f'Calculating word adjacency lists based on {dirs.corpus_file}')
        if not dirs.corpus_file.exists():
            raise FileNotFoundError(f'Corpus file {dirs.corpus_file} does not exist, merge dictionaries first')
        corpus = read_corpus_file(dirs.corpus_file)
        print(f'Finished reading {dirs.corpus_file}')

    keys = sorted(corpus.keys())
    if word_lengths is not None:
        word_lengths = set(word_lengths)
        keys = [key for key in keys if key in word_lengths]

    for key in keys:
        print(f'Number of words of length {key:2d} = {len(corpus[key])}')

    keys = [key for key in keys if len(corpus[key]) > 2]
    if len(keys) == 0:
        return []

    dirs.output_directory.mkdir(parents=True, exist_ok=True)

    iterator = zip(
        keys,
        (corpus[key] for key in keys),
        repeat(dirs)
    )

    written = {}
    with mp.Pool(n_procs) as pool:
        for word_length, filename in tqdm(pool.imap_unordered(_adjacency_worker, iterator),
                                          total=len(keys), desc='Adjacency lists'):
            if filename is not None:
                tqdm.write(f'Wrote {filename}')
                written[word_length] = filename

    return [written[key] for key in sorted(written.keys())]
