"""Строит компактные регулярные выражения, распознающие все варианты написания буквы.

Варианты задаются как последовательности байт UTF-8. Из них строится префиксное дерево, которое затем
сворачивается в выражение: общие префиксы выносятся за скобки, а одиночные байты собираются в классы
символов с диапазонами. Например, для вариантов "a" и кириллической "а" получится (?-i:a|\\xD0\\xB0)."""
import itertools
import typing as t


__all__ = [
    'TrieNode', 'build_trie', 'escape_byte', 'char_class', 'parse_tree', 'synthesize',
    'build_variants', 'generate_rules', 'format_rule',
]
REGEX_SPECIAL = frozenset(b'.^$|?*+()[]{}\\')
CLASS_SPECIAL = frozenset(b'\\[]^-')
GROUP_START = '(?:'
CASE_SENSITIVE_GROUP_START = '(?-i:'


class TrieNode:
    """Узел префиксного дерева. Каждый узел владеет своими потомками, ключ потомка - значение байта."""
    __slots__ = ('children', 'terminal')

    def __init__(self):
        self.children: dict[int, TrieNode] = {}
        self.terminal: bool = False  # здесь заканчивается один из вариантов

    def insert(self, data: bytes) -> None:
        node = self
        for byte in data:
            node = node.children.setdefault(byte, TrieNode())
        node.terminal = True


def build_trie(variants: t.Iterable[bytes]) -> TrieNode:
    """Строит префиксное дерево из непустых вариантов."""
    root = TrieNode()
    for variant in variants:
        if variant:
            root.insert(variant)
    return root


def escape_byte(byte: int, in_class: bool = False) -> str:
    """Представляет байт в выражении. Печатные символы ASCII выводятся как есть (метасимволы экранируются),
    остальные байты - как \\xHH, чтобы куски многобайтовых символов не смешивались с синтаксисом выражения."""
    if 0x20 <= byte <= 0x7E:
        special = CLASS_SPECIAL if in_class else REGEX_SPECIAL
        return ('\\' + chr(byte)) if byte in special else chr(byte)
    return f'\\x{byte:02X}'


def _class_run(start: int, end: int) -> str:
    if start == end:
        return escape_byte(start, True)
    if start + 1 == end:  # два соседних значения короче записать подряд, чем диапазоном
        return escape_byte(start, True) + escape_byte(end, True)
    return f'{escape_byte(start, True)}-{escape_byte(end, True)}'


def char_class(values: t.Iterable[int]) -> str:
    """Собирает байты в класс символов, сворачивая подряд идущие значения в диапазоны."""
    ordered = sorted(set(values))
    members = []
    start = prev = ordered[0]
    for value in ordered[1:]:
        if value == prev + 1:
            prev = value
            continue
        members.append(_class_run(start, prev))
        start = prev = value
    members.append(_class_run(start, prev))
    return '[' + ''.join(members) + ']'


def _suffix(node: TrieNode) -> t.Optional[str]:
    """Выражение для продолжения после узла, или None для листа."""
    if not node.children:
        return None
    suffix = parse_tree(node)
    if node.terminal:  # один вариант является префиксом другого
        # группу и класс символов можно сделать необязательными без лишней обёртки
        if suffix.startswith(GROUP_START) or suffix.startswith('['):
            suffix = f'{suffix}?'
        else:
            suffix = f'{GROUP_START}{suffix})?'
    return suffix


def parse_tree(node: TrieNode) -> str:
    """Сворачивает поддерево в выражение. Потомки перебираются по возрастанию значения байта,
    поэтому результат не зависит от порядка добавления вариантов."""
    branches = [(byte, _suffix(child)) for byte, child in sorted(node.children.items())]
    if not branches:
        return ''
    if len(branches) > 1 and all(suffix is None for _, suffix in branches):
        return char_class(byte for byte, _ in branches)
    patterns = [escape_byte(byte) + (suffix or '') for byte, suffix in branches]
    if len(patterns) == 1:
        return patterns[0]
    return GROUP_START + '|'.join(patterns) + ')'


def synthesize(variants: t.Iterable[bytes]) -> str:
    """Строит регулярное выражение, совпадающее с любым из вариантов.
    Выражение всегда является группой и явно отключает нечувствительность к регистру,
    так как варианты сами перечисляют нужные регистры. Для пустого набора возвращает пустую строку."""
    pattern = parse_tree(build_trie(variants))
    if not pattern:
        return ''
    if not pattern.startswith('('):
        pattern = f'{GROUP_START}{pattern})'
    return CASE_SENSITIVE_GROUP_START + pattern[len(GROUP_START):]


def build_variants(letter: str, codepoints: t.Iterable[int],
                   fallbacks: t.Optional[t.Mapping[str, t.Iterable[str]]] = None) -> set[bytes]:
    """Собирает варианты написания буквы: её строчный и заглавный вид, UTF-8 всех схожих символов,
    а также заданные в конфигурации замены (вроде @ для A)."""
    letter = letter.upper()
    variants = {letter.lower().encode('ascii'), letter.encode('ascii')}
    variants.update(chr(cp).encode('utf-8') for cp in codepoints)
    if fallbacks:
        variants.update(literal.encode('utf-8') for literal in fallbacks.get(letter, ()) if literal)
    return variants


def generate_rules(resolved: t.Iterable[tuple[str, int]],
                   fallbacks: t.Optional[t.Mapping[str, t.Iterable[str]]] = None
                   ) -> t.Iterator[tuple[str, str]]:
    """Группирует пары (ASCII-эквивалент, кодовая точка) по букве без учёта регистра,
    и строит выражение для каждой буквы от A до Z.
    :returns: Пары (буква, выражение) в алфавитном порядке."""
    ordered = sorted((ascii_value.upper(), cp) for ascii_value, cp in resolved)
    for letter, group in itertools.groupby(ordered, key=lambda item: item[0]):
        if len(letter) != 1 or not 'A' <= letter <= 'Z':
            continue
        yield letter, synthesize(build_variants(letter, (cp for _, cp in group), fallbacks))


def format_rule(rule_name: str, letter: str, pattern: str) -> str:
    """Формирует строку правила для фильтра, например "replace_tag    A1    (?-i:...)"."""
    return f'{rule_name}    {letter}1    {pattern}'
