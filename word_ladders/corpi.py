import typing
from abc import ABC, abstractmethod
from pathlib import Path
import pickle

import requests
from tqdm import tqdm


class Corpus(ABC):
    """
    Class to get a corpus of clean, lowercase words
    """

    name = ''
    url = ''
    decode = True
    """decode the raw bytes from the request in download_corpus"""
    cache = True
    """pickle the cleaned corpus in ``cache_dir`` after the first get"""

    def __init__(self, get=False, cache_dir='~/.word_ladders'):
        """
        Args:
            get (bool): get the corpus on init
            cache_dir (str, Path): where to keep pickled copies of downloaded corpi
        """
        self._corpus = []
        self.cache_dir = Path(cache_dir).expanduser().absolute()
        self.cache_file = (self.cache_dir / self.name).with_suffix('.pck')
        if get:
            self._corpus = self.get()

    @property
    def corpus(self) -> typing.List[str]:
        if len(self._corpus) == 0:
            self._corpus = self.get()
        return self._corpus

    def download_corpus(self) -> typing.Union[bytes, str]:
        """Return the raw bytes of the request"""
        res = requests.get(self.url)
        res.raise_for_status()
        if self.decode:
            return res.content.decode('utf-8', errors='ignore')
        else:
            return res.content

    def _load(self) -> typing.List[str]:
        with open(self.cache_file, 'rb') as cache_file:
            corpus = pickle.load(cache_file)
        return corpus

    def _save(self, corpus:typing.List[str]):
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        with open(self.cache_file, 'wb') as cache_file:
            pickle.dump(corpus, cache_file)

    def get(self) -> typing.List[str]:
        if self.cache and self.cache_file.exists():
            print(f'Loading cached corpus from {self.cache_file}')
            corpus = self._load()
        else:
            print(f'Reading corpus from {self.url}')
            corpus_str = self.download_corpus()
            corpus = self.clean(corpus_str)
            corpus = list(sorted(set(corpus)))
            if self.cache:
                self._save(corpus)
        return corpus

    @abstractmethod
    def clean(self, to_clean:typing.Union[bytes, str]) -> typing.List[str]:
        """
        Clean the corpus of any debris, returning a list of strings

        Args:
            to_clean (str): the big long string to clean

        Returns:
            list of words
        """
        pass


class Txt(Corpus):
    """A local text file, one word per line"""

    name = 'txt'
    cache = False

    def __init__(self, path:Path, sep='\n', *args, **kwargs):

        self.url = str(path)
        self.path = Path(path)
        self.sep = sep

        super(Txt, self).__init__(*args, **kwargs)

    def download_corpus(self) -> typing.Union[bytes, str]:
        with open(self.path, 'r', encoding='utf-8', errors='ignore') as txtfile:
            corpus_str = txtfile.read()
        return corpus_str

    def clean(self, to_clean:str) -> typing.List[str]:
        return _clean_words(to_clean.split(self.sep))


class English(Corpus):
    name = 'english'
    url = 'https://raw.githubusercontent.com/dwyl/english-words/master/words_alpha.txt'

    def clean(self, to_clean:str) -> typing.List[str]:
        return _clean_words(to_clean.split('\r\n'))


class Dictionaries(Corpus):
    """
    Every file in a directory of dictionaries, merged.

    Files are read as bytes and split into lines; any line that isn't valid utf-8
    is dropped silently, everything else goes through :func:`.clean_word`
    """

    name = 'dictionaries'
    decode = False
    cache = False

    def __init__(self, path:Path, *args, **kwargs):
        self.url = str(path)
        self.path = Path(path)

        super(Dictionaries, self).__init__(*args, **kwargs)

    def download_corpus(self) -> bytes:
        if not self.path.is_dir():
            raise FileNotFoundError(f'Dictionary directory {self.path} does not exist')

        chunks = []
        for dict_file in sorted(self.path.iterdir()):
            if not dict_file.is_file():
                continue
            print(f'Reading words from {dict_file}')
            chunks.append(dict_file.read_bytes())
        return b'\n'.join(chunks)

    def clean(self, to_clean:bytes) -> typing.List[str]:
        words = []
        for line in to_clean.split(b'\n'):
            try:
                words.append(line.decode('utf-8'))
            except UnicodeDecodeError:
                continue
        return _clean_words(words)


def clean_word(word:str) -> typing.Optional[str]:
    """
    Trim and lowercase a word, returning ``None`` if it's too short to be
    interesting or has anything but ascii letters in it.
    """
    if len(word) <= 2:
        return None

    word = word.lower().strip()
    if len(word) > 0 and all('a' <= c <= 'z' for c in word):
        return word
    return None


def _clean_words(words:typing.Iterable[str]) -> typing.List[str]:
    cleaned = (clean_word(word) for word in words)
    return [word for word in cleaned if word is not None]


def write_corpus_file(words:typing.Iterable[str], corpus_file:Path) -> int:
    """
    Write words sorted, one per line.

    Returns:
        int: number of words written
    """
    corpus_file = Path(corpus_file)
    corpus_file.parent.mkdir(parents=True, exist_ok=True)
    words = sorted(set(words))
    with open(corpus_file, 'w', encoding='utf-8') as out_file:
        for word in words:
            out_file.write(word + '\n')
    return len(words)


def merge_dictionaries(dictionary_dir:Path, corpus_file:Path,
                       extra:typing.Sequence[Corpus]=()) -> int:
    """
    Read all the dictionaries in ``dictionary_dir`` and merge them into a single
    sorted corpus file.

    Args:
        dictionary_dir (Path): directory of word lists
        corpus_file (Path): file to write
        extra (list of :class:`.Corpus`): additional corpi (eg. :class:`.English`) to merge in

    Returns:
        int: number of distinct words in the corpus
    """
    print(f'Merging dictionary files from {dictionary_dir} to {corpus_file}')
    words = set(Dictionaries(dictionary_dir).corpus)
    for corpus in extra:
        n_before = len(words)
        words.update(corpus.corpus)
        print(f'    Added {len(words) - n_before} words from {corpus.name}')

    n_words = write_corpus_file(words, corpus_file)
    print(f'Finished, wrote {n_words} words to {corpus_file}')
    return n_words


def partition_words(corpus:typing.Iterable[str]) -> typing.Dict[int, typing.List[str]]:
    """
    Group words by length, eg. length-4 words are ``words[4]``.

    Order within a bucket follows the input order; blank lines and repeats are dropped.
    """
    word_lengths = {} # type: typing.Dict[int, typing.List[str]]
    seen = set()
    for word in corpus:
        word = word.rstrip('\r\n')
        if len(word) == 0 or word in seen:
            continue
        seen.add(word)
        if len(word) in word_lengths.keys():
            word_lengths[len(word)].append(word)
        else:
            word_lengths[len(word)] = [word]
    return word_lengths


def read_corpus_file(corpus_file:Path) -> typing.Dict[int, typing.List[str]]:
    """
    Read a corpus file as written by :func:`.merge_dictionaries` into a
    length -> words partition
    """
    with open(corpus_file, 'r', encoding='utf-8') as in_file:
        return partition_words(tqdm(in_file, desc='Reading corpus', leave=False))


def _all_subclasses(cls) -> typing.List[type]:
    subclasses = []
    for subclass in cls.__subclasses__():
        subclasses.append(subclass)
        subclasses.extend(_all_subclasses(subclass))
    return subclasses


def get_corpus(corp_name:str) -> typing.Optional[typing.Type[Corpus]]:
    """
    Find a downloadable :class:`.Corpus` by its ``name``

    Only corpi with a remote ``url`` of their own can be made without arguments,
    so local ones like :class:`.Txt` and :class:`.Dictionaries` aren't returned.
    """
    for corpus_cls in _all_subclasses(Corpus):
        if corpus_cls.name == corp_name and corpus_cls.url.startswith(('http://', 'https://')):
            return corpus_cls
    return None
