import pytest

from jobly.db import get_conn
from jobly.errors import BadRequestError, ConflictError, NotFoundError
from jobly.repository import company_repo


class TestCompanyRepo:

    def test_create(self, seeded):
        with get_conn() as conn:
            company = company_repo.create(conn, "new", "New", "New Description", 1, "http://new.img")
        assert company == {
            "handle": "new",
            "name": "New",
            "description": "New Description",
            "numEmployees": 1,
            "logoUrl": "http://new.img",
        }

    def test_create_duplicate(self, seeded):
        with get_conn() as conn:
            with pytest.raises(ConflictError):
                company_repo.create(conn, "c1", "Other", "Desc")

    def test_find_all(self, seeded):
        with get_conn() as conn:
            companies = company_repo.find_all(conn)
        assert [c["handle"] for c in companies] == ["c1", "c2", "c3"]

    def test_filter_by_name(self, seeded):
        with get_conn() as conn:
            companies = company_repo.filter_by(conn, {"name": "2"})
        assert [c["handle"] for c in companies] == ["c2"]

    def test_filter_by_employee_range(self, seeded):
        with get_conn() as conn:
            companies = company_repo.filter_by(conn, {"minEmployees": 2, "maxEmployees": 3})
        assert [c["handle"] for c in companies] == ["c2", "c3"]

    def test_filter_by_min_greater_than_max(self, seeded):
        with get_conn() as conn:
            with pytest.raises(BadRequestError):
                company_repo.filter_by(conn, {"minEmployees": 3, "maxEmployees": 1})

    def test_get_includes_jobs(self, seeded):
        with get_conn() as conn:
            company = company_repo.get(conn, "c3")
        assert company["name"] == "C3"
        assert [j["title"] for j in company["jobs"]] == ["job", "job2"]
        assert "company_handle" not in company["jobs"][0]

    def test_get_not_found(self, seeded):
        with get_conn() as conn:
            with pytest.raises(NotFoundError):
                company_repo.get(conn, "nope")

    def test_update_translates_columns(self, seeded):
        with get_conn() as conn:
            company = company_repo.update(conn, "c1", {"numEmployees": 10, "logoUrl": None})
        assert company["numEmployees"] == 10
        assert company["logoUrl"] is None

    def test_update_rejects_handle(self, seeded):
        with get_conn() as conn:
            with pytest.raises(BadRequestError):
                company_repo.update(conn, "c1", {"handle": "c9"})

    def test_update_not_found(self, seeded):
        with get_conn() as conn:
            with pytest.raises(NotFoundError):
                company_repo.update(conn, "nope", {"name": "x"})

    def test_remove_cascades_jobs(self, seeded):
        with get_conn() as conn:
            company_repo.remove(conn, "c3")
            assert conn.execute("SELECT COUNT(1) AS c FROM jobs").fetchone()["c"] == 0
            with pytest.raises(NotFoundError):
                company_repo.remove(conn, "c3")

    def test_create_duplicate_name(self, seeded):
        with get_conn() as conn:
            with pytest.raises(ConflictError):
                company_repo.create(conn, "c9", "C2", "Desc")
