import copy
from datetime import datetime, timezone
from functools import partial

import pytest

from app.schemas.analysis import AnalysisResultResponse
from app.schemas.customer import CustomerResponse
from app.schemas.request import ServiceRequestResponse
from app.schemas.sample import SampleResponse
from app.services.summary_service import (
    SelectionState,
    summarize_clients,
    summarize_requests,
    summarize_results,
    summarize_samples,
    with_selection,
)


def test_clients_are_deduplicated_by_id():
    clients = [
        CustomerResponse(customer_id=1, name="Ana", state="A"),
        CustomerResponse(customer_id=1, name="Ana (copia)", state="I"),
        CustomerResponse(customer_id=2, name="Luis", state="I"),
    ]
    summary = summarize_clients(clients)
    assert summary.counters == {"total": 2, "active": 1, "inactive": 1}
    assert [card.value for card in summary.cards] == [2, 1, 1, 0]


def test_empty_lists_give_zero_cards():
    for summary in (
        summarize_clients([]),
        summarize_requests([]),
        summarize_samples([]),
        summarize_results([]),
    ):
        assert len(summary.cards) == 4
        assert all(card.value == 0 for card in summary.cards)


def test_request_counters(request_rows):
    requests = [ServiceRequestResponse.model_validate(r) for r in request_rows]
    summary = summarize_requests(requests, selected=[10, 12])
    assert summary.counters == {"total": 3, "completed": 1, "pending": 1, "cancelled": 1}
    assert summary.cards[2].title == "En Proceso"
    assert summary.cards[3].value == 2


def test_sample_totals_exclude_archived(sample_rows):
    samples = [SampleResponse.model_validate(s) for s in sample_rows]
    summary = summarize_samples(samples)
    # 1 pendiente, 1 analizada, 1 archivada, 1 sin estado (pendiente)
    assert summary.counters == {"total": 3, "analyzed": 1, "pending": 2, "archived": 1}


def test_results_counters(result_rows):
    results = [AnalysisResultResponse.model_validate(r) for r in result_rows]
    now = datetime(2026, 1, 20, tzinfo=timezone.utc)
    summary = summarize_results(results, now=now)
    assert summary.counters == {"total": 2, "deleted": 1, "this_month": 2, "samples_analyzed": 1}
    assert summary.cards[1].title == "Este Mes"


def test_with_selection_only_touches_last_card():
    summary = summarize_clients([CustomerResponse(customer_id=1, state="A")])
    updated = with_selection(summary, [1, 1, 5])
    assert updated.selected == 2
    assert updated.cards[-1].value == 2
    assert updated.cards[:-1] == summary.cards[:-1]
    assert summary.cards[-1].value == 0


def test_selection_toggle_and_select_all():
    selection = SelectionState()
    selection.toggle(1)
    selection.toggle(2)
    selection.toggle(1)
    assert selection.ids == {2}
    selection.select_all([3, 4, 5])
    assert selection.count == 3
    selection.clear()
    assert selection.count == 0


def test_selection_survives_same_reload():
    selection = SelectionState([1])
    assert selection.on_reload([1, 2]) is False
    assert selection.on_reload([2, 1]) is False
    assert selection.ids == {1}


def test_selection_cleared_when_identity_changes():
    selection = SelectionState()
    selection.on_reload([1, 2])
    selection.toggle(1)
    assert selection.on_reload([1, 2, 3]) is True
    assert selection.count == 0


def test_selection_cleared_when_selected_row_disappears():
    selection = SelectionState([9])
    assert selection.on_reload([1, 2]) is True
    assert selection.ids == set()


NOW = datetime(2026, 1, 20, tzinfo=timezone.utc)

SUMMARIZERS = [
    (summarize_clients, CustomerResponse, "customer_rows", "customer_id"),
    (summarize_requests, ServiceRequestResponse, "request_rows", "service_request_id"),
    (summarize_samples, SampleResponse, "sample_rows", "sample_id"),
    (partial(summarize_results, now=NOW), AnalysisResultResponse, "result_rows", "analysis_result_id"),
]
SUMMARIZER_IDS = ["clients", "requests", "samples", "results"]


@pytest.mark.parametrize("summarize, model, rows_fixture, id_key", SUMMARIZERS, ids=SUMMARIZER_IDS)
def test_repeated_rows_do_not_change_counters(request, summarize, model, rows_fixture, id_key):
    items = [model.model_validate(row) for row in request.getfixturevalue(rows_fixture)]

    once = summarize(items)
    twice = summarize(items + items)

    assert twice.counters == once.counters
    assert [card.value for card in twice.cards] == [card.value for card in once.cards]


@pytest.mark.parametrize("summarize, model, rows_fixture, id_key", SUMMARIZERS, ids=SUMMARIZER_IDS)
def test_summaries_leave_input_untouched(request, summarize, model, rows_fixture, id_key):
    items = [model.model_validate(row) for row in request.getfixturevalue(rows_fixture)]
    before = copy.deepcopy(items)

    summarize(items, [getattr(items[0], id_key)])

    assert items == before
