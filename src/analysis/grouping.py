from typing import Dict, List, Sequence, Tuple

from src.analysis.pipeline import SlideRecord


# Records grouped per source file, in submission order; pages sorted inside a file
def group_by_file(records: Sequence[SlideRecord]) -> List[Tuple[int, str, List[SlideRecord]]]:

    groups: Dict[int, Tuple[str, List[SlideRecord]]] = {}

    for r in records:
        if r.file_index not in groups:
            groups[r.file_index] = (r.file_name, [])
        groups[r.file_index][1].append(r)

    return [
        (idx, name, sorted(items, key=lambda r: r.page_number))
        for idx, (name, items) in sorted(groups.items())
    ]


# How often each term was assigned in one taxonomy column (error records excluded)
def term_counts(records: Sequence[SlideRecord], column: str) -> Dict[str, int]:

    counts: Dict[str, int] = {}

    for r in records:
        if r.error:
            continue
        for term in r.analysis.taxonomy_columns().get(column, []):
            counts[term] = counts.get(term, 0) + 1

    # most frequent first, ties alphabetical
    return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))


def batch_stats(records: Sequence[SlideRecord]) -> Dict[str, int]:
    return {
        "files": len({r.file_index for r in records}),
        "records": len(records),
        "errors": sum(1 for r in records if r.error),
    }
