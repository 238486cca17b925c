"""Объединяет кластеры визуально схожих символов и назначает каждому кластеру один ASCII-эквивалент."""
import dataclasses
import logging
import typing as t

from api import CodepointStore
from modules.unicode_data import CodepointRecord
from .config import AMBIGUOUS_SENTINEL
from .errors import AmbiguousConfusableCluster


__all__ = ['ConfusableRow', 'ConfusableCluster', 'iter_clusters', 'ascii_candidates', 'ConfusableMerger']
ConfusableCluster = list[str]


@dataclasses.dataclass(frozen=True)
class ConfusableRow:
    """Строка источника. Пустой маркер означает начало нового кластера."""
    marker: str
    text: str

    @property
    def starts_cluster(self) -> bool:
        return not self.marker.strip()


def iter_clusters(rows: t.Iterable[ConfusableRow]) -> t.Iterator[ConfusableCluster]:
    """Собирает строки источника в кластеры. Строка с пустым маркером закрывает текущий кластер
    и открывает новый; последний открытый кластер выдаётся по окончании ввода."""
    cluster: ConfusableCluster = []
    for row in rows:
        if row.starts_cluster and cluster:
            yield cluster
            cluster = []
        cluster.append(row.text)
    if cluster:
        yield cluster


def ascii_candidates(cluster: t.Iterable[str]) -> list[str]:
    """Возвращает различные односимвольные члены кластера из диапазона ASCII, в порядке их появления."""
    candidates = []
    for member in cluster:
        if len(member) == 1 and ord(member) < 128 and member not in candidates:
            candidates.append(member)
    return candidates


class ConfusableMerger:
    """Назначает ASCII-эквиваленты членам кластеров схожих символов.

    Если в кластере один ASCII-символ, он становится эквивалентом для всех остальных односимвольных членов.
    Если их несколько, то каноническим считается первый, но остальным членам записывается метка-заглушка,
    чтобы их можно было найти и разобрать вручную. Сам канонический символ и многосимвольные члены
    не получают записи никогда."""
    def __init__(self, store: CodepointStore[CodepointRecord], sentinel: str = AMBIGUOUS_SENTINEL,
                 log: t.Optional[logging.Logger] = None):
        self.store = store
        self.sentinel = sentinel
        self._log = log or logging.getLogger('homoglyphs.confusables')
        self.conflicts: list[AmbiguousConfusableCluster] = []

    def merge_cluster(self, cluster: t.Sequence[str]) -> int:
        """Обрабатывает один кластер. :returns: Число сделанных записей."""
        candidates = ascii_candidates(cluster)
        if not candidates:
            return 0
        canonical = candidates[0]
        target = canonical
        if len(candidates) > 1:
            conflict = AmbiguousConfusableCluster(cluster, candidates)
            self.conflicts.append(conflict)
            self._log.warning('%s', conflict)
            target = self.sentinel
        written = 0
        for member in cluster:
            # ASCII-члены не получают метку даже в неоднозначном кластере, см. DESIGN.md
            if len(member) != 1 or ord(member) < 128:
                continue
            if self.store.set_ascii(ord(member), target):
                written += 1
        return written

    def merge(self, clusters: t.Iterable[t.Sequence[str]]) -> int:
        """Обрабатывает все кластеры. :returns: Общее число сделанных записей."""
        written = 0
        count = 0
        for cluster in clusters:
            count += 1
            written += self.merge_cluster(cluster)
        self._log.info('Processed %d clusters, %d conflicts, %d ascii equivalents written',
                       count, len(self.conflicts), written)
        return written
