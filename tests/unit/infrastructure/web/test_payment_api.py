"""
API tests for unlock payments, confirmation, refunds and the Stripe webhook.
"""

import json

import pytest


@pytest.fixture
def matched(api):
    """A company and a VA with a mutual match."""
    company = api.create_company()
    va = api.create_va()
    job = api.create_job(company)
    api.vote(company, job["id"], va["profile"]["id"])
    match = api.vote(va["headers"], job["id"]).json()["data"]
    return {"company": company, "va": va, "match": match}


def create_intent(api, matched):
    response = api.client.post("/api/payments/create-intent", headers=matched["company"],
                               json={"matchId": matched["match"]["id"]})
    assert response.status_code == 200, response.text
    return response.json()["data"]


def confirm(api, headers, intent_id):
    return api.client.post("/api/payments/confirm", headers=headers, json={"paymentIntentId": intent_id})


class TestUnlockIntent:

    def test_creates_pending_payment_for_fixed_fee(self, api, matched):
        intent = create_intent(api, matched)

        assert intent["amount"] == 2999
        assert intent["currency"] == "usd"
        assert intent["clientSecret"] == f"{intent['paymentIntentId']}_secret"
        assert intent["payment"]["status"] == "pending"
        assert intent["payment"]["paymentType"] == "unlock"
        assert intent["payment"]["matchId"] == matched["match"]["id"]

        stripe_intent = api.payment_gateway.intents[intent["paymentIntentId"]]
        assert stripe_intent.metadata["matchId"] == str(matched["match"]["id"])

    def test_va_cannot_pay_the_unlock_fee(self, api, matched):
        response = api.client.post("/api/payments/create-intent", headers=matched["va"]["headers"],
                                   json={"matchId": matched["match"]["id"]})

        assert response.status_code == 403

    def test_unknown_match_is_not_found(self, api, matched):
        response = api.client.post("/api/payments/create-intent", headers=matched["company"],
                                   json={"matchId": 999})

        assert response.status_code == 404

    def test_already_paid_match_is_rejected(self, api, matched):
        intent = create_intent(api, matched)
        api.payment_gateway.set_status(intent["paymentIntentId"], "succeeded")
        confirm(api, matched["company"], intent["paymentIntentId"])

        response = api.client.post("/api/payments/create-intent", headers=matched["company"],
                                   json={"matchId": matched["match"]["id"]})

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Payment already completed for this match"


class TestConfirmPayment:

    def test_succeeded_intent_confirms_payment(self, api, matched):
        intent = create_intent(api, matched)
        api.payment_gateway.set_status(intent["paymentIntentId"], "succeeded")

        response = confirm(api, matched["company"], intent["paymentIntentId"])

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Payment confirmed successfully"
        assert body["data"]["status"] == "succeeded"

    def test_cancelled_intent_is_stored_as_failed(self, api, matched):
        intent = create_intent(api, matched)
        api.payment_gateway.set_status(intent["paymentIntentId"], "canceled")

        response = confirm(api, matched["company"], intent["paymentIntentId"])

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == {"error": "Payment not completed", "code": "PAYMENT_NOT_COMPLETED"}
        assert body["data"]["status"] == "failed"

        stored = api.client.get(f"/api/payments/match/{matched['match']['id']}",
                                headers=matched["company"]).json()["data"]
        assert stored["status"] == "failed"

    def test_amount_mismatch_keeps_payment_pending(self, api, matched):
        intent = create_intent(api, matched)
        api.payment_gateway.set_status(intent["paymentIntentId"], "succeeded", amount=100)

        response = confirm(api, matched["company"], intent["paymentIntentId"])

        assert response.status_code == 400
        assert response.json()["data"]["status"] == "pending"
        unlock = api.client.post(f"/api/matches/{matched['match']['id']}/unlock", headers=matched["company"])
        assert unlock.status_code == 402

    def test_only_the_payer_can_confirm(self, api, matched):
        intent = create_intent(api, matched)
        api.payment_gateway.set_status(intent["paymentIntentId"], "succeeded")

        response = confirm(api, matched["va"]["headers"], intent["paymentIntentId"])

        assert response.status_code == 403

    def test_unknown_intent_is_not_found(self, api, matched):
        response = confirm(api, matched["company"], "pi_missing")

        assert response.status_code == 404


class TestPaymentQueries:

    def test_match_payment_is_null_before_any_intent(self, api, matched):
        response = api.client.get(f"/api/payments/match/{matched['match']['id']}", headers=matched["company"])

        assert response.status_code == 200
        assert response.json()["data"] is None

    def test_list_and_get_sent_payments(self, api, matched):
        intent = create_intent(api, matched)
        payment_id = intent["payment"]["id"]

        listing = api.client.get("/api/payments", headers=matched["company"], params={"type": "sent"})

        assert listing.status_code == 200
        body = listing.json()
        assert [p["id"] for p in body["data"]] == [payment_id]
        assert body["pagination"]["total"] == 1

        single = api.client.get(f"/api/payments/{payment_id}", headers=matched["company"])
        assert single.json()["data"]["stripePaymentIntentId"] == intent["paymentIntentId"]

    def test_outsider_cannot_read_payment(self, api, matched):
        intent = create_intent(api, matched)

        response = api.client.get(f"/api/payments/{intent['payment']['id']}",
                                  headers=matched["va"]["headers"])

        assert response.status_code == 403


class TestRefund:

    def test_payer_refunds_succeeded_payment(self, api, matched):
        intent = create_intent(api, matched)
        api.payment_gateway.set_status(intent["paymentIntentId"], "succeeded")
        confirm(api, matched["company"], intent["paymentIntentId"])

        response = api.client.post(f"/api/payments/{intent['payment']['id']}/refund",
                                   headers=matched["company"], json={"amount": 10.0, "reason": "Duplicate"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "refunded"
        assert data["refundAmount"] == 1000
        assert api.payment_gateway.refunds == [(intent["paymentIntentId"], 1000)]

    def test_pending_payment_cannot_be_refunded(self, api, matched):
        intent = create_intent(api, matched)

        response = api.client.post(f"/api/payments/{intent['payment']['id']}/refund",
                                   headers=matched["company"])

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Can only refund successful payments"
        assert api.payment_gateway.refunds == []


class TestWebhook:

    def _event(self, event_type, intent_id):
        return json.dumps({"type": event_type, "data": {"object": {"id": intent_id}}})

    def test_missing_signature_is_rejected(self, api):
        response = api.client.post("/api/payments/webhook", content=self._event("payment_intent.succeeded", "x"))

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Missing Stripe signature"

    def test_bad_signature_is_rejected(self, api):
        response = api.client.post("/api/payments/webhook",
                                   content=self._event("payment_intent.succeeded", "x"),
                                   headers={"Stripe-Signature": "forged"})

        assert response.status_code == 400

    def test_succeeded_event_marks_payment_and_allows_unlock(self, api, matched):
        intent = create_intent(api, matched)

        response = api.client.post("/api/payments/webhook",
                                   content=self._event("payment_intent.succeeded", intent["paymentIntentId"]),
                                   headers={"Stripe-Signature": api.payment_gateway.signature})

        assert response.status_code == 200
        assert response.json() == {"received": True, "eventType": "payment_intent.succeeded"}
        unlock = api.client.post(f"/api/matches/{matched['match']['id']}/unlock", headers=matched["company"])
        assert unlock.status_code == 200

    def test_unrelated_event_is_acknowledged(self, api):
        response = api.client.post("/api/payments/webhook",
                                   content=self._event("customer.created", "cus_1"),
                                   headers={"Stripe-Signature": api.payment_gateway.signature})

        assert response.status_code == 200
        assert response.json()["received"] is True

    def test_late_succeeded_event_leaves_refund_in_place(self, api, matched):
        intent = create_intent(api, matched)
        api.payment_gateway.set_status(intent["paymentIntentId"], "succeeded")
        confirm(api, matched["company"], intent["paymentIntentId"])
        refund = api.client.post(f"/api/payments/{intent['payment']['id']}/refund", headers=matched["company"], json={})
        assert refund.status_code == 200

        response = api.client.post("/api/payments/webhook",
                                   content=self._event("payment_intent.succeeded", intent["paymentIntentId"]),
                                   headers={"Stripe-Signature": api.payment_gateway.signature})

        assert response.status_code == 200
        assert response.json() == {"received": True, "eventType": "payment_intent.succeeded"}
        payment = api.client.get(f"/api/payments/{intent['payment']['id']}", headers=matched["company"])
        assert payment.json()["data"]["status"] == "refunded"
