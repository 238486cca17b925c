"""Вывод ASCII-эквивалентов для символов Unicode и построение правил для распознавания схожих символов."""
from .errors import *
from .config import HomoglyphsConfig, DEFAULT_FALLBACKS, AMBIGUOUS_SENTINEL
from .decomposition import DecompositionResolver, strip_non_ascii
from .confusables import ConfusableRow, ConfusableCluster, iter_clusters, ascii_candidates, ConfusableMerger
from .patterns import synthesize, build_variants, generate_rules, format_rule
from .coverage import IssueKind, CoverageIssue, scan
from .charmap import encode_entry, decode_entry, write_charmap, read_charmap
from .sources import parse_confusables_summary, fetch_confusables
