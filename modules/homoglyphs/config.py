"""Конфигурация вывода ASCII-эквивалентов и генерации правил."""
import dataclasses


__all__ = ['HomoglyphsConfig', 'DEFAULT_FALLBACKS', 'AMBIGUOUS_SENTINEL']
AMBIGUOUS_SENTINEL = '_?_'
# литералы, которые часто используют вместо букв, но которых нет в данных Unicode
DEFAULT_FALLBACKS: dict[str, list[str]] = {
    'A': ['@', '4'],
    'B': ['8', '6'],
    'E': ['3'],
    'I': ['l', '1'],
    'L': ['I', '1'],
    'O': ['0'],
    'S': ['5', '$'],
}


@dataclasses.dataclass
class HomoglyphsConfig:
    """Общая конфигурация вывода ASCII-эквивалентов."""
    sentinel: str = AMBIGUOUS_SENTINEL
    max_decomposition_depth: int = 32
    fallbacks: dict[str, list[str]] = dataclasses.field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_FALLBACKS.items()})
    confusables_url: str = 'https://www.unicode.org/Public/security/latest/confusablesSummary.txt'
    confusables_cache: str = 'confusablesSummary.txt'
    charmap_file: str = 'charmap.txt'
    rule_name: str = 'replace_tag'
    last_codepoint: int = 0x10FFFF
