"""
API tests for voting, matches, discovery and the paid contact unlock.
"""

from app.application.use_cases.matching_use_cases import MATCH_MESSAGE
from app.infrastructure.db.models import MatchModel, MatchVoteModel


class TestVoting:
    """Mutual votes turn into exactly one match."""

    def test_company_vote_alone_creates_no_match(self, api):
        company = api.create_company()
        va = api.create_va()
        job = api.create_job(company)

        response = api.vote(company, job["id"], va["profile"]["id"])

        assert response.status_code == 200
        body = response.json()
        assert body["match"] is False
        assert body["data"]["voteByCompany"] is True
        assert body["data"]["voteByVa"] is None
        assert api.client.get("/api/matches", headers=company).json()["data"] == []

    def test_match_appears_for_both_sides_after_mutual_votes(self, api):
        company = api.create_company()
        va = api.create_va()
        job = api.create_job(company)

        api.vote(company, job["id"], va["profile"]["id"])
        assert api.client.get("/api/matches", headers=company).json()["data"] == []

        response = api.vote(va["headers"], job["id"])

        body = response.json()
        assert body["match"] is True
        assert body["message"] == MATCH_MESSAGE
        assert body["data"]["contactUnlocked"] is False
        assert body["data"]["contactInfo"] is None

        company_matches = api.client.get("/api/matches", headers=company).json()["data"]
        va_matches = api.client.get("/api/matches", headers=va["headers"]).json()["data"]
        assert len(company_matches) == 1
        assert company_matches[0]["id"] == va_matches[0]["id"] == body["data"]["id"]
        assert company_matches[0]["jobPosting"]["id"] == job["id"]
        assert company_matches[0]["vaProfile"]["id"] == va["profile"]["id"]

    def test_vote_order_does_not_matter(self, api):
        company = api.create_company()
        va = api.create_va()
        job = api.create_job(company)

        first = api.vote(va["headers"], job["id"])
        second = api.vote(company, job["id"], va["profile"]["id"])

        assert first.json()["match"] is False
        assert second.json()["match"] is True

    def test_repeated_votes_never_duplicate_the_match(self, api, database):
        company = api.create_company()
        va = api.create_va()
        job = api.create_job(company)

        api.vote(company, job["id"], va["profile"]["id"])
        first = api.vote(va["headers"], job["id"]).json()
        second = api.vote(va["headers"], job["id"]).json()
        third = api.vote(company, job["id"], va["profile"]["id"]).json()

        assert first["data"]["id"] == second["data"]["id"] == third["data"]["id"]
        with database.SessionLocal() as session:
            assert session.query(MatchModel).count() == 1

    def test_match_notifies_both_parties(self, api):
        company = api.create_company()
        va = api.create_va()
        job = api.create_job(company)

        api.vote(company, job["id"], va["profile"]["id"])
        api.vote(va["headers"], job["id"])

        for headers in (company, va["headers"]):
            notifications = api.client.get("/api/notifications", headers=headers).json()["data"]
            assert [n["type"] for n in notifications] == ["match_created"]

    def test_vote_on_another_companys_job_is_not_found(self, api, database):
        owner = api.create_company("acme")
        other = api.create_company("globex")
        va = api.create_va()
        job = api.create_job(owner)
        api.vote(owner, job["id"], va["profile"]["id"], vote=False)

        response = api.vote(other, job["id"], va["profile"]["id"])

        assert response.status_code == 404
        assert response.json()["detail"] == {"error": "Job posting not found", "code": "ENTITY_NOT_FOUND"}
        with database.SessionLocal() as session:
            votes = session.query(MatchVoteModel).all()
            assert len(votes) == 1
            assert votes[0].vote_by_company is False

    def test_va_cannot_vote_with_someone_elses_profile(self, api):
        company = api.create_company()
        maria = api.create_va("maria")
        juan = api.create_va("juan")
        job = api.create_job(company)

        response = api.vote(maria["headers"], job["id"], juan["profile"]["id"])

        assert response.status_code == 403
        assert response.json()["detail"]["code"] == "PERMISSION_DENIED"

    def test_vote_requires_authentication(self, api):
        response = api.client.post("/api/matches/vote", json={"jobPostingId": 1, "vote": True})

        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "MISSING_AUTH_HEADER"


class TestMatchRetrieval:

    def test_match_is_hidden_from_outsiders(self, api):
        company = api.create_company()
        va = api.create_va()
        outsider = api.create_va("juan")
        job = api.create_job(company)
        api.vote(company, job["id"], va["profile"]["id"])
        match_id = api.vote(va["headers"], job["id"]).json()["data"]["id"]

        assert api.client.get(f"/api/matches/{match_id}", headers=company).status_code == 200
        response = api.client.get(f"/api/matches/{match_id}", headers=outsider["headers"])

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "Match not found"


class TestDiscovery:

    def test_discovery_skips_voted_and_unavailable_profiles(self, api):
        company = api.create_company()
        voted = api.create_va("maria", country="Philippines")
        api.create_va("juan", country="Mexico", availability=False)
        fresh = api.create_va("ana", country="Colombia", hourlyRate=9)
        job = api.create_job(company)
        api.vote(company, job["id"], voted["profile"]["id"], vote=False)

        response = api.client.get("/api/matches/discover", headers=company,
                                  params={"jobPostingId": job["id"]})

        assert response.status_code == 200
        ids = [profile["id"] for profile in response.json()["data"]]
        assert ids == [fresh["profile"]["id"]]

    def test_discovery_orders_by_country_then_rate(self, api):
        company = api.create_company()
        pricey = api.create_va("maria", country="Philippines", hourlyRate=20)
        cheap = api.create_va("juan", country="Philippines", hourlyRate=8)
        first = api.create_va("ana", country="Colombia", hourlyRate=30)
        job = api.create_job(company)

        response = api.client.get("/api/matches/discover", headers=company,
                                  params={"jobPostingId": job["id"]})

        ids = [profile["id"] for profile in response.json()["data"]]
        assert ids == [first["profile"]["id"], cheap["profile"]["id"], pricey["profile"]["id"]]

    def test_discovery_for_another_companys_job_is_not_found(self, api):
        owner = api.create_company("acme")
        other = api.create_company("globex")
        job = api.create_job(owner)

        response = api.client.get("/api/matches/discover", headers=other,
                                  params={"jobPostingId": job["id"]})

        assert response.status_code == 404

    def test_va_job_discovery_skips_voted_postings(self, api):
        company = api.create_company()
        va = api.create_va()
        voted = api.create_job(company, "Bookkeeping assistant")
        fresh = api.create_job(company, "Social media assistant")
        api.vote(va["headers"], voted["id"], vote=False)

        response = api.client.get("/api/matches/discover/jobs", headers=va["headers"])

        assert [job["id"] for job in response.json()["data"]] == [fresh["id"]]


class TestContactUnlock:
    """The unlock fee gates contact information."""

    def _match(self, api):
        company = api.create_company()
        va = api.create_va()
        job = api.create_job(company)
        api.vote(company, job["id"], va["profile"]["id"])
        match = api.vote(va["headers"], job["id"]).json()["data"]
        return company, va, match

    def test_unlock_without_payment_is_payment_required(self, api):
        company, _, match = self._match(api)

        response = api.client.post(f"/api/matches/{match['id']}/unlock", headers=company)

        assert response.status_code == 402
        body = response.json()
        assert body["detail"] == {
            "error": "Payment required to unlock contact information",
            "code": "PAYMENT_REQUIRED",
        }
        assert "data" not in body

    def test_pending_payment_does_not_unlock(self, api):
        company, _, match = self._match(api)
        api.client.post("/api/payments/create-intent", headers=company, json={"matchId": match["id"]})

        response = api.client.post(f"/api/matches/{match['id']}/unlock", headers=company)

        assert response.status_code == 402

    def test_confirmed_unlock_fee_reveals_both_emails(self, api):
        company, va, match = self._match(api)
        intent = api.client.post("/api/payments/create-intent", headers=company,
                                 json={"matchId": match["id"]}).json()["data"]
        assert intent["amount"] == 2999
        api.payment_gateway.set_status(intent["paymentIntentId"], "succeeded")
        confirmed = api.client.post("/api/payments/confirm", headers=company,
                                    json={"paymentIntentId": intent["paymentIntentId"]})
        assert confirmed.status_code == 200

        response = api.client.post(f"/api/matches/{match['id']}/unlock", headers=company)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["contactUnlocked"] is True
        assert data["contactInfo"] == {
            "vaEmail": "maria@example.com",
            "companyEmail": "acme@example.com",
        }

        # Both parties now see the unlocked match
        va_view = api.client.get(f"/api/matches/{match['id']}", headers=va["headers"]).json()["data"]
        assert va_view["contactInfo"]["companyEmail"] == "acme@example.com"

    def test_va_cannot_unlock(self, api):
        _, va, match = self._match(api)

        response = api.client.post(f"/api/matches/{match['id']}/unlock", headers=va["headers"])

        assert response.status_code == 403
