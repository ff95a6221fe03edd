import argparse
import sys
import typing

from word_ladders.adjacency import calculate_corpus_adjacency_lists
from word_ladders.corpi import get_corpus, merge_dictionaries
from word_ladders.directories import RelativeDirectories
from word_ladders.pipeline import PipelineError, calculate_all_longest_paths, calculate_initial_graphs


def parse_word_lengths(word_lengths:typing.Optional[str]) -> typing.Optional[typing.List[int]]:
    """``'3,4,5'`` -> ``[3, 4, 5]``"""
    if word_lengths is None:
        return None
    try:
        return sorted({int(length) for length in word_lengths.split(',') if length.strip()})
    except ValueError:
        raise argparse.ArgumentTypeError(f'word lengths must be comma-separated integers, got {word_lengths!r}')


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='word-ladders',
        description='Find word ladders: chains of words that each differ from the last by one letter.'
    )
    parser.add_argument('-1', '--merge-dictionaries', action='store_true',
                        help='Merge the dictionary directory into a single corpus file')
    parser.add_argument('-2', '--calc-adjacency-lists', action='store_true',
                        help='Calculate the adjacency lists of every word in the corpus')
    parser.add_argument('-3', '--calc-graphs', action='store_true',
                        help='Calculate graph statistics and extract the largest components')
    parser.add_argument('-4', '--calc-longest-paths', action='store_true',
                        help='Find a long chain for every word in the largest components')
    parser.add_argument('-n', '--word-lengths', type=parse_word_lengths, default=None,
                        help='Comma-separated list of word lengths to calculate for')
    parser.add_argument('-w', '--word-list', action='append', default=[],
                        help='Name of a downloadable word list (eg. "english") to merge into the corpus')
    parser.add_argument('-p', '--procs', type=int, default=None,
                        help='Number of processes to use, default all of them')
    parser.add_argument('-o', '--output-dir', default=None,
                        help='Output directory, default "output" next to the dictionary directory')
    parser.add_argument('dictionary_directory', metavar='DICTIONARY_DIR',
                        help='Directory of dictionary files')
    return parser


def main(argv:typing.Optional[typing.List[str]]=None) -> int:
    args = make_parser().parse_args(argv)
    dirs = RelativeDirectories(args.dictionary_directory, args.output_dir)

    if not dirs.dictionary_directory.is_dir():
        print(f'Dictionary directory {dirs.dictionary_directory} does not exist', file=sys.stderr)
        return 1

    try:
        if args.merge_dictionaries:
            extra = []
            for name in args.word_list:
                corpus_cls = get_corpus(name)
                if corpus_cls is None:
                    print(f'Unknown word list {name!r}', file=sys.stderr)
                    return 1
                extra.append(corpus_cls())
            merge_dictionaries(dirs.dictionary_directory, dirs.corpus_file, extra=extra)

        if args.calc_adjacency_lists:
            calculate_corpus_adjacency_lists(dirs, word_lengths=args.word_lengths, n_procs=args.procs)

        if args.calc_graphs:
            calculate_initial_graphs(dirs, word_lengths=args.word_lengths, n_procs=args.procs)

        if args.calc_longest_paths:
            calculate_all_longest_paths(dirs, word_lengths=args.word_lengths, n_procs=args.procs)
    except (PipelineError, FileNotFoundError) as e:
        print(e, file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
