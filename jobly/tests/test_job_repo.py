import pytest

from jobly.db import get_conn
from jobly.errors import BadRequestError, ConflictError, NotFoundError
from jobly.repository import job_repo


class TestJobRepo:

    def test_create(self, seeded):
        with get_conn() as conn:
            job = job_repo.create(conn, "new", 1200, 0.11, "c1")
            assert job == {"id": job["id"], "title": "new", "salary": 1200, "equity": 0.11, "companyHandle": "c1"}
            rows = conn.execute("SELECT title, company_handle FROM jobs WHERE id=?", (job["id"],)).fetchall()
            assert [tuple(r) for r in rows] == [("new", "c1")]

    def test_create_duplicate(self, seeded):
        with get_conn() as conn:
            with pytest.raises(ConflictError):
                job_repo.create(conn, "job", 1, 0, "c3")

    def test_create_unknown_company(self, seeded):
        with get_conn() as conn:
            with pytest.raises(BadRequestError):
                job_repo.create(conn, "new", 1, 0, "nope")

    def test_find_all_ordered_by_id(self, seeded):
        with get_conn() as conn:
            jobs = job_repo.find_all(conn)
        assert [j["id"] for j in jobs] == seeded["job_ids"]
        assert jobs[0] == {"id": seeded["job_ids"][0], "title": "job", "salary": 50000, "equity": 0.3, "companyHandle": "c3"}

    def test_filter_by_all_criteria(self, seeded):
        with get_conn() as conn:
            jobs = job_repo.filter_by(conn, {"title": "j", "minSalary": 40000, "hasEquity": "true"})
        assert [j["title"] for j in jobs] == ["job"]

    def test_filter_by_title_is_case_insensitive(self, seeded):
        with get_conn() as conn:
            job_repo.create(conn, "Job Listing", 10, 0, "c1")
            jobs = job_repo.filter_by(conn, {"title": "OB"})
        assert [j["title"] for j in jobs] == ["job", "job2", "Job Listing"]

    def test_filter_by_has_equity_false_is_no_filter(self, seeded):
        with get_conn() as conn:
            job_repo.create(conn, "no equity", 10, 0, "c1")
            jobs = job_repo.filter_by(conn, {"hasEquity": "false"})
            with_equity = job_repo.filter_by(conn, {"hasEquity": "true"})
        assert len(jobs) == 3
        assert [j["title"] for j in with_equity] == ["job", "job2"]

    def test_filter_by_is_repeatable(self, seeded):
        with get_conn() as conn:
            first = job_repo.filter_by(conn, {"title": "job"})
            second = job_repo.filter_by(conn, {"title": "job"})
        assert first == second

    def test_get(self, seeded):
        job_id = seeded["job_ids"][1]
        with get_conn() as conn:
            job = job_repo.get(conn, job_id)
        assert job["title"] == "job2"

    def test_get_not_found(self, seeded):
        with get_conn() as conn:
            with pytest.raises(NotFoundError):
                job_repo.get(conn, 0)

    def test_update(self, seeded):
        job_id = seeded["job_ids"][0]
        with get_conn() as conn:
            job = job_repo.update(conn, job_id, {"title": "job-new"})
        assert job == {"id": job_id, "title": "job-new", "salary": 50000, "equity": 0.3, "companyHandle": "c3"}

    def test_update_not_found(self, seeded):
        with get_conn() as conn:
            with pytest.raises(NotFoundError):
                job_repo.update(conn, 0, {"title": "x"})

    def test_update_no_data(self, seeded):
        with get_conn() as conn:
            with pytest.raises(BadRequestError):
                job_repo.update(conn, seeded["job_ids"][0], {})

    def test_update_company_handle_not_allowed(self, seeded):
        with get_conn() as conn:
            with pytest.raises(BadRequestError):
                job_repo.update(conn, seeded["job_ids"][0], {"companyHandle": "c1"})

    def test_remove(self, seeded):
        job_id = seeded["job_ids"][0]
        with get_conn() as conn:
            job_repo.remove(conn, job_id)
            with pytest.raises(NotFoundError):
                job_repo.get(conn, job_id)

    def test_remove_not_found(self, seeded):
        with get_conn() as conn:
            with pytest.raises(NotFoundError):
                job_repo.remove(conn, 0)
