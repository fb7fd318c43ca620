"""
Test suite for the /jobs endpoints.

Tests cover:
- Job creation (admin only, payload validation)
- Listing with filters
- Retrieval with the nested company
- Partial updates and deletion
"""

import pytest

from app.crud import company as company_crud


@pytest.fixture
def new_job():
    return {
        "company_handle": "c1",
        "title": "J-new",
        "salary": 10,
        "equity": "0.2",
    }


class TestJobCreation:
    """Tests for POST /jobs"""

    def test_create_job_as_admin(self, client, seeded, new_job, admin_headers):
        response = client.post("/jobs", json=new_job, headers=admin_headers)

        assert response.status_code == 201
        job = response.json()["job"]
        assert isinstance(job["id"], int)
        assert {k: v for k, v in job.items() if k != "id"} == new_job

    def test_create_job_as_user(self, client, seeded, new_job, user_headers):
        response = client.post("/jobs", json=new_job, headers=user_headers)

        assert response.status_code == 401
        assert response.json()["error"]["status"] == 401

    def test_create_job_anonymous(self, client, seeded, new_job):
        response = client.post("/jobs", json=new_job)

        assert response.status_code == 401

    def test_create_job_missing_fields(self, client, seeded, admin_headers):
        """Missing title is reported in the list of violations"""
        response = client.post("/jobs", json={"company_handle": "c1"}, headers=admin_headers)

        assert response.status_code == 400
        messages = response.json()["error"]["message"]
        assert isinstance(messages, list)
        assert any("title" in message for message in messages)

    def test_create_job_invalid_equity(self, client, seeded, new_job, admin_headers):
        """Equity must be a fraction below one"""
        response = client.post("/jobs", json={**new_job, "equity": "1.5"}, headers=admin_headers)

        assert response.status_code == 400

    def test_create_job_negative_salary(self, client, seeded, new_job, admin_headers):
        response = client.post("/jobs", json={**new_job, "salary": -1}, headers=admin_headers)

        assert response.status_code == 400

    def test_create_job_unknown_field(self, client, seeded, new_job, admin_headers):
        response = client.post("/jobs", json={**new_job, "id": 7}, headers=admin_headers)

        assert response.status_code == 400

    def test_create_job_unknown_company(self, client, seeded, new_job, admin_headers):
        """The store rejects a dangling company handle"""
        response = client.post(
            "/jobs",
            json={**new_job, "company_handle": "nope"},
            headers=admin_headers,
        )

        assert response.status_code == 500
        assert response.json()["error"]["status"] == 500


class TestJobListing:
    """Tests for GET /jobs"""

    def test_list_jobs(self, client, seeded):
        """Public, ordered by title"""
        response = client.get("/jobs")

        assert response.status_code == 200
        jobs = response.json()["jobs"]
        assert [job["title"] for job in jobs] == ["Job1", "Job2", "Job3", "Job4"]
        assert jobs[0] == {
            "id": seeded[0],
            "title": "Job1",
            "salary": 100,
            "equity": "0.1",
            "company_handle": "c1",
        }

    def test_list_jobs_min_salary(self, client, seeded):
        response = client.get("/jobs", params={"minSalary": 150})

        assert [job["title"] for job in response.json()["jobs"]] == ["Job2", "Job3"]

    def test_list_jobs_has_equity(self, client, seeded):
        response = client.get("/jobs", params={"hasEquity": "true"})

        assert [job["title"] for job in response.json()["jobs"]] == ["Job1", "Job2"]

    def test_list_jobs_has_equity_false(self, client, seeded):
        response = client.get("/jobs", params={"hasEquity": "false"})

        assert len(response.json()["jobs"]) == 4

    @pytest.mark.parametrize("value", ["yes", "1", "True", "maybe"])
    def test_list_jobs_has_equity_only_literal_true(self, client, seeded, value):
        """Anything but the exact string 'true' imposes no equity filter"""
        response = client.get("/jobs", params={"hasEquity": value})

        assert response.status_code == 200
        assert len(response.json()["jobs"]) == 4

    def test_list_jobs_title(self, client, seeded):
        response = client.get("/jobs", params={"title": "3"})

        assert [job["title"] for job in response.json()["jobs"]] == ["Job3"]

    def test_list_jobs_bad_min_salary(self, client, seeded):
        response = client.get("/jobs", params={"minSalary": "lots"})

        assert response.status_code == 400


class TestJobRetrieval:
    """Tests for GET /jobs/{id}"""

    def test_get_job(self, client, seeded):
        response = client.get(f"/jobs/{seeded[0]}")

        assert response.status_code == 200
        assert response.json() == {
            "job": {
                "id": seeded[0],
                "title": "Job1",
                "salary": 100,
                "equity": "0.1",
                "company_handle": "c1",
                "company": {
                    "handle": "c1",
                    "name": "C1",
                    "description": "Desc1",
                    "numEmployees": 1,
                    "logoUrl": "http://c1.img",
                },
            },
        }

    def test_get_job_without_company(self, client, seeded, monkeypatch):
        """A failed company lookup is serialised as null"""
        monkeypatch.setattr(company_crud, "find_by_handle", lambda db, handle: None)

        response = client.get(f"/jobs/{seeded[0]}")

        assert response.status_code == 200
        assert response.json()["job"]["company"] is None
        assert response.json()["job"]["title"] == "Job1"

    def test_get_nonexistent_job(self, client, seeded):
        response = client.get("/jobs/0")

        assert response.status_code == 404
        assert "No job" in response.json()["error"]["message"]


class TestJobUpdate:
    """Tests for PATCH /jobs/{id}"""

    def test_update_as_admin(self, client, seeded, admin_headers):
        response = client.patch(f"/jobs/{seeded[0]}", json={"title": "J-New"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            "job": {
                "id": seeded[0],
                "title": "J-New",
                "salary": 100,
                "equity": "0.1",
                "company_handle": "c1",
            },
        }

    def test_update_as_user_leaves_row(self, client, seeded, user_headers):
        """Rejected with 401 and nothing is written"""
        response = client.patch(f"/jobs/{seeded[0]}", json={"title": "Update"}, headers=user_headers)

        assert response.status_code == 401
        assert client.get(f"/jobs/{seeded[0]}").json()["job"]["title"] == "Job1"

    def test_update_not_found(self, client, seeded, admin_headers):
        response = client.patch("/jobs/0", json={"title": "Update"}, headers=admin_headers)

        assert response.status_code == 404

    def test_update_empty_body(self, client, seeded, admin_headers):
        response = client.patch(f"/jobs/{seeded[0]}", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "No data"

    def test_update_company_handle_rejected(self, client, seeded, admin_headers):
        response = client.patch(
            f"/jobs/{seeded[0]}",
            json={"company_handle": "c2"},
            headers=admin_headers,
        )

        assert response.status_code == 400


class TestJobDeletion:
    """Tests for DELETE /jobs/{id}"""

    def test_delete_as_admin(self, client, seeded, admin_headers):
        response = client.delete(f"/jobs/{seeded[0]}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": str(seeded[0])}

        assert client.get(f"/jobs/{seeded[0]}").status_code == 404

    def test_delete_as_user(self, client, seeded, user_headers):
        response = client.delete(f"/jobs/{seeded[0]}", headers=user_headers)

        assert response.status_code == 401
        assert client.get(f"/jobs/{seeded[0]}").status_code == 200

    def test_delete_nonexistent_job(self, client, seeded, admin_headers):
        response = client.delete("/jobs/0", headers=admin_headers)

        assert response.status_code == 404
