"""
API tests for profiles, the job marketplace, proposals and contracts.
"""

import pytest


PROPOSAL = {
    "coverLetter": "I have five years of help desk experience.",
    "bidAmount": 500,
    "deliveryTime": "2 weeks",
}


@pytest.fixture
def contracted(api):
    """A company, a VA and an active contract between them."""
    company = api.create_company()
    va = api.create_va()
    job = api.create_job(company)
    proposal = api.client.post("/api/proposals", headers=va["headers"],
                               json={"jobPostingId": job["id"], **PROPOSAL}).json()["data"]
    response = api.client.post("/api/contracts", headers=company,
                               json={"proposalId": proposal["id"], "terms": "Net 15"})
    assert response.status_code == 201, response.text
    return {"company": company, "va": va, "job": job, "proposal": proposal,
            "contract": response.json()["data"]}


class TestVAProfiles:

    def test_create_switches_role_and_reports_completion(self, api):
        va = api.create_va()

        profile = va["profile"]
        assert profile["completionPercentage"] > 0
        me = api.client.get("/api/auth/me", headers=va["headers"]).json()["data"]
        assert me["role"] == "va"
        assert me["profileComplete"] is True

    def test_second_profile_is_a_conflict(self, api):
        va = api.create_va()

        response = api.client.post("/api/va/profile", headers=va["headers"], json={
            "name": "Maria", "country": "Philippines", "hourlyRate": 12, "skills": ["Support"],
        })

        assert response.status_code == 409

    def test_update_recomputes_completion(self, api):
        va = api.create_va()
        before = va["profile"]["completionPercentage"]

        response = api.client.put("/api/va/profile", headers=va["headers"], json={
            "timezone": "Asia/Manila", "phone": "+63 912 345 6789",
        })

        assert response.status_code == 200
        assert response.json()["data"]["completionPercentage"] > before

    def test_public_view_counts_views_and_hides_contact_fields(self, api):
        va = api.create_va(email="maria.public@example.com")
        viewer = api.create_company()
        profile_id = va["profile"]["id"]

        api.client.get(f"/api/va/profile/{profile_id}", headers=viewer)
        response = api.client.get(f"/api/va/profile/{profile_id}", headers=viewer)

        data = response.json()["data"]
        assert data["profileViews"] == 2
        assert "email" not in data
        assert "phone" not in data

    def test_search_filters_and_paginates(self, api):
        api.create_va("maria", country="Philippines", hourlyRate=12)
        api.create_va("juan", country="Mexico", hourlyRate=25)
        api.create_va("ana", country="Philippines", hourlyRate=40)
        viewer = api.create_company()

        response = api.client.get("/api/va/search", headers=viewer, params={
            "country": "Philippines", "maxRate": 30, "page": 1, "limit": 10,
        })

        body = response.json()
        assert [p["name"] for p in body["data"]] == ["Maria"]
        assert body["pagination"] == {"page": 1, "limit": 10, "total": 1, "totalPages": 1}

    def test_validation_errors_are_400(self, api):
        headers = api.sign_up("maria")

        response = api.client.post("/api/va/profile", headers=headers, json={
            "name": "M", "country": "PH", "hourlyRate": 500, "skills": [],
        })

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestCompanyProfiles:

    def test_create_switches_role(self, api):
        company = api.create_company()

        me = api.client.get("/api/auth/me", headers=company).json()["data"]
        own = api.client.get("/api/company/profile", headers=company).json()["data"]

        assert me["role"] == "company"
        assert own["name"] == "Acme Inc"
        assert "completionPercentage" in own

    def test_missing_profile_is_not_found(self, api):
        headers = api.sign_up("acme")

        response = api.client.get("/api/company/profile", headers=headers)

        assert response.status_code == 404


class TestJobMarketplace:

    def test_only_companies_post_jobs(self, api):
        va = api.create_va()

        response = api.client.post("/api/jobs/marketplace", headers=va["headers"], json={
            "title": "Customer support assistant",
            "description": "Answer customer emails and keep the help desk tidy.",
            "rateRange": "$10-15/hr",
            "skillsRequired": ["Customer Support"],
        })

        assert response.status_code == 403

    def test_listing_shows_open_postings_with_company(self, api):
        company = api.create_company()
        api.create_job(company, "Customer support assistant")
        api.create_job(company, "Bookkeeping assistant")

        response = api.client.get("/api/jobs/marketplace", headers=company, params={"search": "bookkeeping"})

        body = response.json()
        assert [job["title"] for job in body["data"]] == ["Bookkeeping assistant"]
        assert body["data"][0]["company"]["name"] == "Acme Inc"
        assert body["pagination"]["total"] == 1

    def test_get_counts_views(self, api):
        company = api.create_company()
        job = api.create_job(company)

        api.client.get(f"/api/jobs/marketplace/{job['id']}", headers=company)
        response = api.client.get(f"/api/jobs/marketplace/{job['id']}", headers=company)

        assert response.json()["data"]["views"] == 2

    def test_only_owner_updates_posting(self, api):
        owner = api.create_company("acme")
        other = api.create_company("globex")
        job = api.create_job(owner)

        denied = api.client.put(f"/api/jobs/marketplace/{job['id']}", headers=other, json={"remote": False})
        allowed = api.client.put(f"/api/jobs/marketplace/{job['id']}", headers=owner, json={"remote": False})

        assert denied.status_code in (403, 404)
        assert allowed.status_code == 200
        assert allowed.json()["data"]["remote"] is False

    def test_unknown_posting_is_not_found(self, api):
        company = api.create_company()

        response = api.client.get("/api/jobs/marketplace/999", headers=company)

        assert response.status_code == 404


class TestProposals:

    def test_submit_once_per_job(self, api):
        company = api.create_company()
        va = api.create_va()
        job = api.create_job(company)

        first = api.client.post("/api/proposals", headers=va["headers"], json={"jobPostingId": job["id"], **PROPOSAL})
        second = api.client.post("/api/proposals", headers=va["headers"], json={"jobPostingId": job["id"], **PROPOSAL})

        assert first.status_code == 201
        assert first.json()["data"]["status"] == "pending"
        assert second.status_code == 409
        assert second.json()["detail"]["error"] == "You have already submitted a proposal for this job"

    def test_company_sees_proposals_and_is_notified(self, api):
        company = api.create_company()
        va = api.create_va()
        job = api.create_job(company)
        api.client.post("/api/proposals", headers=va["headers"], json={"jobPostingId": job["id"], **PROPOSAL})

        proposals = api.client.get(f"/api/jobs/marketplace/{job['id']}/proposals", headers=company).json()["data"]
        notifications = api.client.get("/api/notifications", headers=company).json()["data"]
        posting = api.client.get(f"/api/jobs/marketplace/{job['id']}", headers=company).json()["data"]

        assert len(proposals) == 1
        assert [n["type"] for n in notifications] == ["proposal_received"]
        assert posting["proposalCount"] == 1

    def test_va_lists_and_edits_own_pending_proposal(self, api):
        company = api.create_company()
        va = api.create_va()
        job = api.create_job(company)
        proposal = api.client.post("/api/proposals", headers=va["headers"],
                                   json={"jobPostingId": job["id"], **PROPOSAL}).json()["data"]

        updated = api.client.put(f"/api/proposals/{proposal['id']}", headers=va["headers"], json={"bidAmount": 450})
        own = api.client.get("/api/proposals", headers=va["headers"]).json()["data"]

        assert updated.json()["data"]["bidAmount"] == 450
        assert [p["id"] for p in own] == [proposal["id"]]

    def test_companies_cannot_submit_proposals(self, api):
        company = api.create_company()
        job = api.create_job(company)

        response = api.client.post("/api/proposals", headers=company, json={"jobPostingId": job["id"], **PROPOSAL})

        assert response.status_code == 403


class TestContracts:

    def test_accepting_a_proposal_opens_contract_and_fills_posting(self, api, contracted):
        contract = contracted["contract"]

        assert contract["status"] == "active"
        assert contract["amount"] == 500
        assert contract["proposalId"] == contracted["proposal"]["id"]

        posting = api.client.get(f"/api/jobs/marketplace/{contracted['job']['id']}",
                                 headers=contracted["company"]).json()["data"]
        assert posting["status"] == "filled"
        proposals = api.client.get("/api/proposals", headers=contracted["va"]["headers"]).json()["data"]
        assert proposals[0]["status"] == "accepted"

    def test_list_defaults_to_active_contracts(self, api, contracted):
        active = api.client.get("/api/contracts", headers=contracted["va"]["headers"]).json()
        completed = api.client.get("/api/contracts", headers=contracted["va"]["headers"],
                                   params={"type": "completed"}).json()

        assert [c["id"] for c in active["data"]] == [contracted["contract"]["id"]]
        assert completed["data"] == []

    def test_completing_contract_moves_it_to_completed(self, api, contracted):
        contract_id = contracted["contract"]["id"]

        response = api.client.put(f"/api/contracts/{contract_id}", headers=contracted["company"],
                                  json={"status": "completed"})

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "completed"
        completed = api.client.get("/api/contracts", headers=contracted["company"],
                                   params={"type": "completed"}).json()["data"]
        assert [c["id"] for c in completed] == [contract_id]

    def test_completed_contract_cannot_reopen(self, api, contracted):
        contract_id = contracted["contract"]["id"]
        api.client.put(f"/api/contracts/{contract_id}", headers=contracted["company"], json={"status": "completed"})

        response = api.client.put(f"/api/contracts/{contract_id}", headers=contracted["company"],
                                  json={"status": "active"})

        assert response.status_code == 400

    def test_outsiders_cannot_read_contract(self, api, contracted):
        outsider = api.create_va("juan")

        response = api.client.get(f"/api/contracts/{contracted['contract']['id']}", headers=outsider["headers"])

        assert response.status_code in (403, 404)

    def test_milestones_and_metrics(self, api, contracted):
        contract_id = contracted["contract"]["id"]
        company = contracted["company"]
        later = api.client.post(f"/api/contracts/{contract_id}/milestones", headers=company, json={
            "title": "Second month", "amount": 250, "dueDate": "2026-03-01T00:00:00Z",
        })
        sooner = api.client.post(f"/api/contracts/{contract_id}/milestones", headers=company, json={
            "title": "First month", "amount": 250, "dueDate": "2026-02-01T00:00:00Z",
        })
        assert later.status_code == sooner.status_code == 201

        milestones = api.client.get(f"/api/contracts/{contract_id}/milestones",
                                    headers=contracted["va"]["headers"]).json()["data"]
        assert [m["title"] for m in milestones] == ["First month", "Second month"]

        milestone_id = sooner.json()["data"]["id"]
        done = api.client.put(f"/api/milestones/{milestone_id}", headers=contracted["va"]["headers"],
                              json={"status": "completed"})
        assert done.json()["data"]["status"] == "completed"

        deleted = api.client.delete(f"/api/milestones/{milestone_id}", headers=company)
        assert deleted.status_code == 400

        detail = api.client.get(f"/api/contracts/{contract_id}", headers=company).json()["data"]
        assert detail["metrics"]["totalMilestones"] == 2
        assert detail["metrics"]["completedMilestones"] == 1
        assert detail["metrics"]["milestoneProgress"] == 50

    def test_va_cannot_approve_their_own_milestone(self, api, contracted):
        contract_id = contracted["contract"]["id"]
        milestone = api.client.post(f"/api/contracts/{contract_id}/milestones", headers=contracted["company"], json={
            "title": "First month", "amount": 250, "dueDate": "2026-02-01T00:00:00Z",
        }).json()["data"]

        response = api.client.put(f"/api/milestones/{milestone['id']}", headers=contracted["va"]["headers"],
                                  json={"status": "approved"})

        assert response.status_code == 403

    def test_timesheet_review_flow(self, api, contracted):
        contract_id = contracted["contract"]["id"]
        va_headers = contracted["va"]["headers"]
        submitted = api.client.post(f"/api/contracts/{contract_id}/timesheets", headers=va_headers, json={
            "date": "2026-01-05",
            "startTime": "2026-01-05T09:00:00Z",
            "endTime": "2026-01-05T12:30:00Z",
            "description": "Inbox cleanup",
        })
        assert submitted.status_code == 201
        timesheet = submitted.json()["data"]
        assert timesheet["totalHours"] == 3.5
        assert timesheet["status"] == "pending"

        by_va = api.client.put(f"/api/timesheets/{timesheet['id']}/approve", headers=va_headers)
        assert by_va.status_code == 403

        approved = api.client.put(f"/api/timesheets/{timesheet['id']}/approve", headers=contracted["company"])
        assert approved.json()["data"]["status"] == "approved"

        rejected = api.client.put(f"/api/timesheets/{timesheet['id']}/reject", headers=contracted["company"])
        assert rejected.status_code == 400
        assert api.client.delete(f"/api/timesheets/{timesheet['id']}", headers=va_headers).status_code == 400

    def test_timesheet_end_must_follow_start(self, api, contracted):
        response = api.client.post(f"/api/contracts/{contracted['contract']['id']}/timesheets",
                                   headers=contracted["va"]["headers"], json={
                                       "date": "2026-01-05",
                                       "startTime": "2026-01-05T12:00:00Z",
                                       "endTime": "2026-01-05T09:00:00Z",
                                   })

        assert response.status_code == 400

    def test_contract_payment_splits_fees(self, api, contracted):
        response = api.client.post("/api/payments/contract", headers=contracted["company"], json={
            "contractId": contracted["contract"]["id"], "amount": 100.0, "description": "January",
        })

        assert response.status_code == 200
        payment = response.json()["data"]["payment"]
        assert payment["amount"] == 10000
        assert payment["platformFee"] == 1000
        assert payment["stripeFee"] == 320
        assert payment["netAmount"] == 8680
        assert payment["paymentType"] == "payment"

        received = api.client.get("/api/payments", headers=contracted["va"]["headers"],
                                  params={"type": "received"}).json()["data"]
        assert [p["id"] for p in received] == [payment["id"]]

    def test_contract_payment_minimum(self, api, contracted):
        response = api.client.post("/api/payments/contract", headers=contracted["company"], json={
            "contractId": contracted["contract"]["id"], "amount": 0.5,
        })

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Minimum payment amount is $1.00"
