import typing
from pathlib import Path


class RelativeDirectories(object):
    """
    Calculates every file and directory the pipeline reads or writes relative
    to the dictionary directory.

    All stages take one of these rather than deriving paths themselves, so
    the whole pipeline can be pointed at some other place (eg. a temporary
    directory) by constructing a different one.

    Attributes:
        dictionary_directory (:class:`pathlib.Path`): directory of raw dictionary files
        output_directory (:class:`pathlib.Path`): where corpus, adjacency lists, stats
            and chains are written. Defaults to ``../output`` next to the dictionary directory
    """

    def __init__(self, dictionary_directory:typing.Union[str, Path],
                 output_directory:typing.Optional[typing.Union[str, Path]]=None):
        """
        Args:
            dictionary_directory (str, Path): directory holding the raw dictionaries
            output_directory (str, Path): optional override for the output directory
        """
        self.dictionary_directory = Path(dictionary_directory).expanduser().absolute()
        if output_directory is None:
            self.output_directory = self.dictionary_directory.parent / 'output'
        else:
            self.output_directory = Path(output_directory).expanduser().absolute()

    def __repr__(self):
        return f'RelativeDirectories({str(self.dictionary_directory)!r}, {str(self.output_directory)!r})'

    @property
    def corpus_file(self) -> Path:
        """The merged, sorted corpus of every word"""
        return self.output_directory / 'corpus.txt'

    @property
    def word_stats_file(self) -> Path:
        """CSV of :class:`.stats.WordLengthStatistics`, one row per word length"""
        return self.output_directory / 'word_stats.csv'

    def all_adjacency_file(self, word_length:int) -> Path:
        """Adjacency lists of every word of this length"""
        return self.output_directory / f'all_adjacency_lists_{word_length:02d}.txt'

    def largest_component_adjacency_file(self, word_length:int) -> Path:
        """Adjacency lists restricted to the largest component"""
        return self.output_directory / f'largest_component_adjacency_lists_{word_length:02d}.txt'

    def chains_directory(self, word_length:int) -> Path:
        """One ``<anchor>.txt`` chain file per processed anchor word"""
        return self.output_directory / f'chains_{word_length:02d}'

    def longest_chain_file(self, word_length:int) -> Path:
        """The single longest chain found for this length"""
        return self.output_directory / f'longest_chain_{word_length:02d}.txt'
