from word_ladders.directories import RelativeDirectories
from word_ladders.graph import Graph, Vertex, Component, MalformedAdjacencyFile
from word_ladders.stats import WordLengthStatistics, calculate_graph_stats
from word_ladders.pipeline import PipelineError
