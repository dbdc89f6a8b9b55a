from datetime import date, datetime, timedelta

from gym_admin.core.security import hash_password
from gym_admin.models.audit_log import AuditLog
from gym_admin.models.payment import Payment
from gym_admin.models.payment_plan import PaymentPlan


T = datetime(2025, 1, 1, 12, 0, 0)


def test_root(client):
    assert client.get("/").json() == {"status": "Backend running successfully"}


def test_requires_authentication(client, factory):
    member = factory.profile()

    response = client.get(f"/admin/clients/{member.id}/history")

    assert response.status_code == 401


def test_requires_admin_role(client, factory, headers_for):
    member = factory.profile()
    instructor = factory.user(role="instructor")

    response = client.get(
        f"/admin/clients/{member.id}/history",
        headers=headers_for(instructor),
    )

    assert response.status_code == 403


def test_login_returns_bearer_token(client, factory):
    factory.user(role="admin", email="owner@gymdesk.com", hashed_password=hash_password("s3cret"))

    response = client.post(
        "/auth/login",
        data={"username": "owner@gymdesk.com", "password": "s3cret"},
    )

    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"

    bad = client.post(
        "/auth/login",
        data={"username": "owner@gymdesk.com", "password": "wrong"},
    )
    assert bad.status_code == 401


def test_history_shows_duplicate_banner(client, factory, admin_headers):
    member = factory.profile()
    first = factory.plan(member, created_at=T)
    factory.plan(member, created_at=T + timedelta(minutes=4))

    response = client.get(f"/admin/clients/{member.id}/history", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["profile"]["username"] == member.username
    assert body["duplicates"]["duplicate_plans"] == 1
    assert body["duplicates"]["plan_ids"] == [first.id]
    assert body["stats"]["total_plans"] == 2


def test_detect_then_reconcile(client, factory, admin_headers, db_session):
    member = factory.profile()
    first = factory.plan(member, created_at=T)
    second = factory.plan(member, created_at=T + timedelta(minutes=4))
    factory.plan_payments(first)
    factory.plan_payments(second)
    first_id, second_id = first.id, second.id

    detected = client.get(f"/admin/clients/{member.id}/duplicates", headers=admin_headers)
    assert detected.json()["plan_ids"] == [first_id]

    response = client.post(
        f"/admin/clients/{member.id}/duplicates/reconcile",
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["plans_removed"] == 1
    assert body["plan_payments_removed"] == 6
    assert body["total_removed"] == 7
    assert body["message"] == "7 duplicate records removed"

    assert [p.id for p in db_session.query(PaymentPlan).all()] == [second_id]
    assert db_session.query(Payment).filter(Payment.plan_id == first_id).count() == 0

    again = client.post(
        f"/admin/clients/{member.id}/duplicates/reconcile",
        headers=admin_headers,
    )
    assert again.json()["message"] == "No duplicates found"


def test_create_plan_and_pay_installment(client, factory, admin_headers, db_session):
    member = factory.profile()

    created = client.post(
        "/payment-plans",
        json={
            "client_id": member.id,
            "total_amount": 300,
            "installments": 3,
            "start_date": "2025-01-10",
        },
        headers=admin_headers,
    )

    assert created.status_code == 201
    plan = created.json()
    assert plan["installment_amount"] == 100.0
    assert plan["status"] == "active"

    listed = client.get(f"/payment-plans?client_id={member.id}", headers=admin_headers).json()
    assert len(listed) == 1
    assert [p["due_date"] for p in listed[0]["payments"]] == ["2025-01-10", "2025-02-10", "2025-03-10"]

    payment_id = listed[0]["payments"][0]["id"]
    paid = client.post(
        f"/payment-plans/payments/{payment_id}/pay",
        json={"method": "pix"},
        headers=admin_headers,
    )

    assert paid.status_code == 200
    assert paid.json()["receipt_number"].startswith("REC")

    actions = {log.action for log in db_session.query(AuditLog).all()}
    assert {"CREATE_PAYMENT_PLAN", "PAY_INSTALLMENT"} <= actions


def test_plan_payload_is_validated(client, factory, admin_headers):
    member = factory.profile()

    response = client.post(
        "/payment-plans",
        json={"client_id": member.id, "total_amount": 300, "installments": 13},
        headers=admin_headers,
    )

    assert response.status_code == 422


def test_freeze_unfreeze_and_delete_client(client, factory, admin_headers):
    member = factory.profile()
    factory.payment(member)

    frozen = client.post(
        f"/admin/clients/{member.id}/freeze",
        json={"start_date": "2025-02-01", "end_date": "2025-03-01"},
        headers=admin_headers,
    )
    assert frozen.json()["payments_frozen"] == 1

    resumed = client.post(f"/admin/clients/{member.id}/unfreeze", headers=admin_headers)
    assert resumed.json()["payments_resumed"] == 1

    deleted = client.delete(f"/admin/clients/{member.id}", headers=admin_headers)
    assert deleted.status_code == 200
    assert deleted.json()["payments_cancelled"] == 1

    trash = client.get("/admin/trash", headers=admin_headers).json()
    assert [item["original_id"] for item in trash] == [member.id]

    restored = client.post(f"/admin/trash/{trash[0]['id']}/restore", headers=admin_headers)
    assert restored.status_code == 200
    assert client.get("/admin/trash", headers=admin_headers).json() == []

    logs = client.get("/admin/audit-logs", headers=admin_headers).json()
    assert {"FREEZE_ENROLLMENT", "UNFREEZE_ENROLLMENT", "SOFT_DELETE_CLIENT", "RESTORE_TRASH_ITEM"} <= {
        log["action"] for log in logs
    }


def test_unknown_client_returns_404(client, admin_headers):
    response = client.get("/admin/clients/999/duplicates", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Client not found"


def test_receive_standalone_payment_rejects_repeat(client, factory, admin_headers, db_session):
    member = factory.profile()
    payload = {"amount": 120, "method": "cash"}

    first = client.post(f"/admin/clients/{member.id}/payments", json=payload, headers=admin_headers)

    assert first.status_code == 201
    body = first.json()
    assert body["plan_id"] is None
    assert body["status"] == "paid"
    assert body["description"] == "Mensalidade"

    repeat = client.post(f"/admin/clients/{member.id}/payments", json=payload, headers=admin_headers)

    assert repeat.status_code == 409
    assert repeat.json()["detail"] == "This payment was already recorded today"

    actions = [log.action for log in db_session.query(AuditLog).all()]
    assert actions.count("RECEIVE_PAYMENT") == 1


def test_defaulters_endpoint(client, factory, admin_headers):
    member = factory.profile(full_name="Carla Lima", phone="11988887777")
    overdue = factory.payment(member, due_date=date.today() - timedelta(days=3))
    factory.payment(member, due_date=date.today() + timedelta(days=3))

    response = client.get("/admin/defaulters", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert [d["id"] for d in body] == [overdue.id]
    assert body[0]["days_overdue"] == 3
    assert body[0]["client"]["full_name"] == "Carla Lima"
    assert body[0]["client"]["phone"] == "11988887777"
