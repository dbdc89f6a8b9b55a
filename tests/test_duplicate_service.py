from datetime import date, datetime, timedelta

from gym_admin.models.payment import Payment
from gym_admin.models.payment_plan import PaymentPlan
from gym_admin.services.duplicate_service import (
    find_duplicate_payments,
    find_duplicate_plans,
    summarize_duplicates,
)

T = datetime(2025, 1, 1, 12, 0, 0)


def _payment(id, plan_id="p1", installment_number=1, amount=100.0, created_at=T):
    return Payment(
        id=id,
        client_id=1,
        plan_id=plan_id,
        installment_number=installment_number,
        amount=amount,
        created_at=created_at,
    )


def _plan(id, created_at, total_amount=600.0, installments=6, start_date=date(2025, 1, 1)):
    return PaymentPlan(
        id=id,
        client_id=1,
        total_amount=total_amount,
        installments=installments,
        installment_amount=total_amount / installments,
        start_date=start_date,
        created_at=created_at,
    )


# ---------------- PAYMENTS ----------------

def test_keeps_newest_payment_and_flags_older_copy():
    older = _payment(1, created_at=T)
    newer = _payment(2, created_at=T + timedelta(seconds=60))

    duplicates = find_duplicate_payments([newer, older])

    assert [p.id for p in duplicates] == [1]


def test_distinct_installments_are_not_duplicates():
    payments = [
        _payment(1, installment_number=1),
        _payment(2, installment_number=2),
        _payment(3, installment_number=1, plan_id="p2"),
        _payment(4, installment_number=1, amount=150.0),
    ]

    assert find_duplicate_payments(payments) == []


def test_every_later_copy_is_flagged_in_input_order():
    payments = [_payment(5), _payment(4), _payment(3, installment_number=2), _payment(2)]

    assert [p.id for p in find_duplicate_payments(payments)] == [4, 2]


def test_result_is_subset_and_never_contains_first_seen_record():
    payments = [_payment(i, installment_number=i % 3) for i in range(1, 10)]

    duplicates = find_duplicate_payments(payments)

    assert all(p in payments for p in duplicates)
    first_seen = {}
    for p in payments:
        first_seen.setdefault((p.plan_id, p.installment_number, p.amount), p)
    assert not set(first_seen.values()) & set(duplicates)


def test_detection_is_idempotent():
    payments = [_payment(3), _payment(2), _payment(1, installment_number=2)]

    assert find_duplicate_payments(payments) == find_duplicate_payments(payments)


def test_standalone_payments_share_a_none_plan_key():
    payments = [_payment(2, plan_id=None), _payment(1, plan_id=None)]

    assert [p.id for p in find_duplicate_payments(payments)] == [1]


def test_none_plan_does_not_match_text_null_plan():
    payments = [_payment(2, plan_id=None), _payment(1, plan_id="null")]

    assert find_duplicate_payments(payments) == []


def test_amounts_are_compared_to_the_cent():
    payments = [_payment(2, amount=33.333), _payment(1, amount=33.33)]

    assert [p.id for p in find_duplicate_payments(payments)] == [1]


# ---------------- PLANS ----------------

def test_plans_created_four_minutes_apart_are_duplicates():
    first = _plan(1, created_at=T)
    second = _plan(2, created_at=T + timedelta(minutes=4))

    # newest-first input flags the later index, which is the older plan here
    assert [p.id for p in find_duplicate_plans([second, first])] == [1]


def test_plan_window_boundary_is_exclusive():
    base = _plan(1, created_at=T)
    just_inside = _plan(2, created_at=T + timedelta(milliseconds=299999))
    at_boundary = _plan(3, created_at=T + timedelta(milliseconds=300000))

    assert [p.id for p in find_duplicate_plans([base, just_inside])] == [2]
    assert find_duplicate_plans([base, at_boundary]) == []


def test_plans_with_different_terms_are_not_duplicates():
    base = _plan(1, created_at=T)
    plans = [
        base,
        _plan(2, created_at=T, total_amount=700.0),
        _plan(3, created_at=T, installments=3),
        _plan(4, created_at=T, start_date=date(2025, 2, 1)),
    ]

    assert find_duplicate_plans(plans) == []


def test_flagged_plan_follows_input_position_not_timestamp():
    older = _plan(1, created_at=T)
    newer = _plan(2, created_at=T + timedelta(minutes=1))

    assert [p.id for p in find_duplicate_plans([older, newer])] == [2]


def test_triple_submission_flags_each_extra_plan_once():
    plans = [
        _plan(3, created_at=T + timedelta(minutes=2)),
        _plan(2, created_at=T + timedelta(minutes=1)),
        _plan(1, created_at=T),
    ]

    assert [p.id for p in find_duplicate_plans(plans)] == [2, 1]


# ---------------- SUMMARY ----------------

def test_summary_reports_counts_and_ids():
    payments = [_payment(2), _payment(1)]
    plans = [_plan(20, created_at=T + timedelta(minutes=1)), _plan(10, created_at=T)]

    summary = summarize_duplicates(payments, plans).as_dict()

    assert summary == {
        "has_duplicates": True,
        "duplicate_payments": 1,
        "duplicate_plans": 1,
        "payment_ids": [1],
        "plan_ids": [10],
    }


def test_summary_without_duplicates():
    summary = summarize_duplicates([_payment(1)], [_plan(1, created_at=T)])

    assert summary.has_duplicates is False
    assert summary.as_dict()["payment_ids"] == []
