import threading
import unittest

from cpauth.auth import ProverSession, authenticate, register_user
from cpauth.encoding import secret_from_password
from cpauth.errors import InvalidAuthId, PermissionDenied, UserNotFound
from cpauth.params import GroupParameters
from cpauth.service import VerifierService


class TestProverSession(unittest.TestCase):
    def setUp(self) -> None:
        self.params = GroupParameters.default()
        self.service = VerifierService(self.params)
        self.prover = ProverSession(self.service, self.params)

    def test_register_and_authenticate(self) -> None:
        secret = secret_from_password("hunter2")
        self.prover.register("alice", secret)
        session_id = self.prover.authenticate("alice", secret)
        self.assertEqual(len(session_id), 12)
        self.assertEqual(self.service.store.pending_challenges(), [])

    def test_wrong_secret_denied(self) -> None:
        self.prover.register("alice", secret_from_password("hunter2"))
        with self.assertRaises(PermissionDenied):
            self.prover.authenticate("alice", secret_from_password("hunter3"))

    def test_unregistered_user(self) -> None:
        with self.assertRaises(UserNotFound):
            self.prover.authenticate("nobody", 42)

    def test_repeated_logins_get_distinct_sessions(self) -> None:
        secret = secret_from_password("hunter2")
        self.prover.register("alice", secret)
        sessions = {self.prover.authenticate("alice", secret) for _ in range(3)}
        self.assertEqual(len(sessions), 3)

    def test_reregistration_replaces_secret(self) -> None:
        self.prover.register("alice", secret_from_password("old"))
        self.prover.register("alice", secret_from_password("new"))
        self.prover.authenticate("alice", secret_from_password("new"))
        with self.assertRaises(PermissionDenied):
            self.prover.authenticate("alice", secret_from_password("old"))

    def test_toy_group(self) -> None:
        params = GroupParameters.toy()
        service = VerifierService(params)
        prover = ProverSession(service, params)
        prover.register("alice", 6)
        prover.authenticate("alice", 6)
        # 17 = 6 (mod 11): the same secret as far as the group can tell.
        prover.authenticate("alice", 17)


class TestHelpers(unittest.TestCase):
    def setUp(self) -> None:
        self.params = GroupParameters.default()
        self.service = VerifierService(self.params)

    def test_register_user_and_authenticate(self) -> None:
        self.assertEqual(
            register_user(self.service, self.params, "bob", "s3cret"),
            {"username": "bob", "registered": True},
        )
        result = authenticate(self.service, self.params, "bob", "s3cret")
        self.assertTrue(result["success"])
        self.assertIn("session_id", result)

    def test_authenticate_reports_failure_kind(self) -> None:
        register_user(self.service, self.params, "bob", "s3cret")
        result = authenticate(self.service, self.params, "bob", "wrong")
        self.assertFalse(result["success"])
        self.assertEqual(result["error"], "PermissionDenied")

        result = authenticate(self.service, self.params, "carol", "s3cret")
        self.assertEqual(result["error"], "UserNotFound")


class _InterleavingVerifier:
    """Issues a second challenge for the same user before the first is answered."""

    def __init__(self, service: VerifierService) -> None:
        self.service = service
        self.register = service.register
        self.verify_response = service.verify_response

    def create_challenge(self, username: str, r1: bytes, r2: bytes):
        auth_id, c = self.service.create_challenge(username, r1, r2)
        self.service.create_challenge(username, r1, r2)
        return auth_id, c


class TestInterleavedAttempts(unittest.TestCase):
    def test_superseded_attempt_fails(self) -> None:
        params = GroupParameters.default()
        service = VerifierService(params)
        prover = ProverSession(_InterleavingVerifier(service), params)
        secret = secret_from_password("hunter2")
        prover.register("alice", secret)
        with self.assertRaises(InvalidAuthId):
            prover.authenticate("alice", secret)

    def test_concurrent_flows_for_distinct_users(self) -> None:
        params = GroupParameters.default()
        service = VerifierService(params)
        errors: list = []
        sessions: dict = {}

        def flow(index: int) -> None:
            prover = ProverSession(service, params)
            secret = secret_from_password(f"password-{index}")
            try:
                prover.register(f"user-{index}", secret)
                sessions[index] = prover.authenticate(f"user-{index}", secret)
            except Exception as exc:  # pragma: no cover - reported below
                errors.append(exc)

        threads = [threading.Thread(target=flow, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(errors, [])
        self.assertEqual(len(sessions), 8)


if __name__ == "__main__":
    unittest.main()
