"""Tests for the auth gate: authenticate (401) followed by require_role (403)."""

import unittest
from datetime import UTC, datetime, timedelta

from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from app.api.dependencies import authenticate, require_admin, require_role
from app.core.config import settings
from app.core.database import SessionLocal, engine
from app.core.exceptions import ServiceError
from app.core.security import ACCESS_TOKEN_LIFETIME, create_access_token, hash_password
from app.main import app, service_error_handler
from app.models import Base, Role, User
from app.services.bootstrap import ensure_admin_exists


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class AuthGateTestCase(unittest.TestCase):
    def setUp(self) -> None:
        Base.metadata.drop_all(engine)
        Base.metadata.create_all(engine)
        with SessionLocal() as db:
            ensure_admin_exists(db, settings)
            student = User(
                name="Stu",
                email="stu@school.test",
                password_hash=hash_password("secret1"),
                role=Role.STUDENT,
            )
            db.add(student)
            db.commit()
            self.student_id = student.id
            self.admin_id = db.query(User).filter(User.role == Role.ADMIN).one().id
        self.client = TestClient(app)

    def tearDown(self) -> None:
        Base.metadata.drop_all(engine)


class TestAuthenticate(AuthGateTestCase):
    """Any missing, malformed, expired or orphaned credential is a 401."""

    def test_missing_header(self) -> None:
        response = self.client.get("/api/students/profile")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "Access denied. No token provided."})

    def test_header_without_bearer_prefix(self) -> None:
        token = create_access_token(sub=self.student_id)
        for header in (token, f"Token {token}", f"Basic {token}", "Bearer"):
            with self.subTest(header=header):
                response = self.client.get("/api/students/profile", headers={"Authorization": header})
                self.assertEqual(response.status_code, 401)

    def test_scheme_must_be_exactly_bearer(self) -> None:
        token = create_access_token(sub=self.student_id)
        for scheme in ("bearer", "BEARER"):
            with self.subTest(scheme=scheme):
                response = self.client.get(
                    "/api/students/profile", headers={"Authorization": f"{scheme} {token}"}
                )
                self.assertEqual(response.status_code, 401)
                self.assertEqual(response.json(), {"message": "Invalid token."})

    def test_garbage_token(self) -> None:
        response = self.client.get("/api/students/profile", headers=_bearer("abc.def.ghi"))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "Invalid token."})

    def test_expired_token(self) -> None:
        issued = datetime.now(UTC) - ACCESS_TOKEN_LIFETIME - timedelta(minutes=1)
        token = create_access_token(sub=self.student_id, issued_at=issued)
        response = self.client.get("/api/students/profile", headers=_bearer(token))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "Invalid token."})

    def test_token_for_deleted_user(self) -> None:
        token = create_access_token(sub=self.student_id)
        with SessionLocal() as db:
            db.delete(db.get(User, self.student_id))
            db.commit()
        response = self.client.get("/api/students/profile", headers=_bearer(token))
        self.assertEqual(response.status_code, 401)

    def test_valid_token_reaches_handler(self) -> None:
        token = create_access_token(sub=self.student_id)
        response = self.client.get("/api/students/profile", headers=_bearer(token))
        # Authenticated; this student simply has no profile yet.
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Student profile not found."})


class TestRequireAdmin(AuthGateTestCase):
    def test_student_token_forbidden(self) -> None:
        token = create_access_token(sub=self.student_id)
        response = self.client.get("/api/students", headers=_bearer(token))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), {"message": "Access denied. Admins only."})

    def test_admin_token_passes(self) -> None:
        token = create_access_token(sub=self.admin_id)
        response = self.client.get("/api/students", headers=_bearer(token))
        self.assertEqual(response.status_code, 200)

    def test_unauthenticated_is_401_not_403(self) -> None:
        response = self.client.get("/api/students")
        self.assertEqual(response.status_code, 401)


class TestRequireRoleWithoutAuthenticate(unittest.TestCase):
    """require_role on its own never treats a missing user as allowed."""

    def setUp(self) -> None:
        gateless = FastAPI()
        gateless.add_exception_handler(ServiceError, service_error_handler)

        @gateless.get("/admin-only", dependencies=[Depends(require_admin)])
        def admin_only() -> dict[str, str]:
            return {"ok": "yes"}

        @gateless.get("/students-only", dependencies=[Depends(require_role(Role.STUDENT))])
        def students_only() -> dict[str, str]:
            return {"ok": "yes"}

        self.client = TestClient(gateless)

    def test_admin_check_fails_closed(self) -> None:
        response = self.client.get("/admin-only")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "Authentication required."})

    def test_student_check_fails_closed(self) -> None:
        token = create_access_token(sub="whoever")
        response = self.client.get("/students-only", headers=_bearer(token))
        self.assertEqual(response.status_code, 401)


class TestRequireStudentRole(AuthGateTestCase):
    """require_role(Role.STUDENT) after authenticate rejects admins."""

    def setUp(self) -> None:
        super().setUp()
        gated = FastAPI()
        gated.add_exception_handler(ServiceError, service_error_handler)

        @gated.get(
            "/students-only",
            dependencies=[Depends(authenticate), Depends(require_role(Role.STUDENT))],
        )
        def students_only() -> dict[str, str]:
            return {"ok": "yes"}

        self.gated = TestClient(gated)

    def test_admin_forbidden(self) -> None:
        token = create_access_token(sub=self.admin_id)
        response = self.gated.get("/students-only", headers=_bearer(token))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), {"message": "Access denied. Students only."})

    def test_student_allowed(self) -> None:
        token = create_access_token(sub=self.student_id)
        response = self.gated.get("/students-only", headers=_bearer(token))
        self.assertEqual(response.status_code, 200)


if __name__ == "__main__":
    unittest.main()
