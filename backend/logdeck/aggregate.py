import logging
from typing import List, Sequence

from logdeck.core import ViewLine
from logdeck.errors import EmptySearchTerm, NoSourceChecked
from logdeck.filtering import build_filters, apply_filters
from logdeck.store import LogStore

logger = logging.getLogger(__name__)

def collect_matches(store: LogStore, term: str, selected: Sequence[str],
                    error_only: bool = False) -> List[ViewLine]:
    """
    跨日志搜索的核心 (不做输入校验)。
    结果按勾选顺序分组，组内按行号排序；每行保留自己所在日志的名称、颜色和行号。
    """
    layers = build_filters(term, error_only, store.settings.error_keyword)
    results = []
    for source in store.resolve_real(selected):
        results.extend(apply_filters(source, layers))
    return results

def mass_search(store: LogStore, term: str, selected: Sequence[str],
                error_only: bool = False) -> List[ViewLine]:
    """
    在多个已勾选的日志中执行同一搜索，并把结果写入合成的 Query 源。
    """
    if not term:
        raise EmptySearchTerm()
    sources = store.resolve_real(selected)
    if not sources:
        raise NoSourceChecked()

    results = collect_matches(store, term, selected, error_only)
    store.set_synthetic([line.text for line in results])
    logger.info("[Query] '%s' over %d sources: %d lines", term, len(sources), len(results))
    return results
