from src.analysis.grouping import batch_stats, group_by_file, term_counts
from src.analysis.pipeline import SlideRecord
from src.models.variants import MEDICAL_AFFAIRS


def _record(file_index, page, terms, error=False):
    if error:
        analysis = MEDICAL_AFFAIRS.placeholder("Error Processing Page", "An error occurred: x")
    else:
        analysis = MEDICAL_AFFAIRS.from_payload({"title": f"p{page}", "content_taxonomy": terms})
    return SlideRecord(file_index=file_index, file_name=f"f{file_index}.pdf", page_number=page,
                       analysis=analysis, error=error)


def test_group_by_file_keeps_submission_order():
    records = [_record(1, 2, ["Safety"]), _record(0, 3, ["Dosing"]), _record(1, 1, ["Safety"]), _record(0, 1, ["Dosing"])]

    groups = group_by_file(records)

    assert [(idx, name) for idx, name, _ in groups] == [(0, "f0.pdf"), (1, "f1.pdf")]
    assert [r.page_number for r in groups[0][2]] == [1, 3]
    assert [r.page_number for r in groups[1][2]] == [1, 2]


def test_term_counts_skip_error_records():
    records = [
        _record(0, 1, ["Dosing", "Safety"]),
        _record(0, 2, ["Safety"]),
        _record(0, 3, [], error=True),
    ]

    assert term_counts(records, "Content Taxonomy") == {"Safety": 2, "Dosing": 1}
    assert term_counts(records, "No Such Column") == {}


def test_batch_stats():
    records = [_record(0, 1, ["Dosing"]), _record(1, 1, [], error=True)]
    assert batch_stats(records) == {"files": 2, "records": 2, "errors": 1}
