import unittest
from unittest import mock

from cpauth.crypto import ZkpEngine
from cpauth.encoding import bytes_to_int, int_to_bytes
from cpauth.errors import InvalidAuthId, MalformedInput, PermissionDenied, UserNotFound
from cpauth.params import GroupParameters
from cpauth.service import VerifierService
from cpauth.store import VerifierStore


def _b(value: int) -> bytes:
    return int_to_bytes(value)


class TestVerifierServiceToyGroup(unittest.TestCase):
    """Drive the service with the textbook numbers by pinning its randomness."""

    def setUp(self) -> None:
        self.params = GroupParameters.toy()
        self.store = VerifierStore()
        self.service = VerifierService(self.params, self.store)

    def _challenge(self, username: str = "alice") -> tuple:
        with mock.patch.object(GroupParameters, "random_below", return_value=4):
            return self.service.create_challenge(username, _b(8), _b(4))

    def test_worked_example(self) -> None:
        self.service.register("alice", _b(2), _b(3))
        auth_id, c = self._challenge()
        self.assertEqual(bytes_to_int(c), 4)
        self.assertEqual(len(auth_id), 12)
        session_id = self.service.verify_response(auth_id, _b(5))
        self.assertEqual(len(session_id), 12)
        self.assertNotEqual(session_id, auth_id)

    def test_eavesdropped_response_denied(self) -> None:
        self.service.register("alice", _b(2), _b(3))
        auth_id, _ = self._challenge()
        eavesdropped = ZkpEngine(self.params).solve(7, 4, 7)
        with self.assertRaises(PermissionDenied):
            self.service.verify_response(auth_id, _b(eavesdropped))

    def test_auth_id_invalidated_after_failure(self) -> None:
        self.service.register("alice", _b(2), _b(3))
        auth_id, _ = self._challenge()
        with self.assertRaises(PermissionDenied):
            self.service.verify_response(auth_id, _b(1))
        with self.assertRaises(InvalidAuthId):
            self.service.verify_response(auth_id, _b(5))

    def test_auth_id_invalidated_after_success(self) -> None:
        self.service.register("alice", _b(2), _b(3))
        auth_id, _ = self._challenge()
        self.service.verify_response(auth_id, _b(5))
        with self.assertRaises(InvalidAuthId):
            self.service.verify_response(auth_id, _b(5))

    def test_stale_auth_id_after_new_challenge(self) -> None:
        self.service.register("alice", _b(2), _b(3))
        first, _ = self._challenge()
        second, _ = self._challenge()
        with self.assertRaises(InvalidAuthId):
            self.service.verify_response(first, _b(5))
        self.service.verify_response(second, _b(5))

    def test_unknown_user(self) -> None:
        with self.assertRaises(UserNotFound) as ctx:
            self.service.create_challenge("mallory", _b(8), _b(4))
        self.assertEqual(ctx.exception.username, "mallory")
        self.assertEqual(self.store.pending_challenges(), [])

    def test_unknown_auth_id(self) -> None:
        with self.assertRaises(InvalidAuthId):
            self.service.verify_response("AAAAAAAAAAAA", _b(5))

    def test_malformed_inputs(self) -> None:
        with self.assertRaises(MalformedInput):
            self.service.register("alice", b"", _b(3))
        with self.assertRaises(MalformedInput):
            self.service.register("", _b(2), _b(3))
        self.service.register("alice", _b(2), _b(3))
        with self.assertRaises(MalformedInput):
            self.service.create_challenge("alice", _b(8), b"")

    def test_error_messages_do_not_leak_response(self) -> None:
        self.service.register("alice", _b(2), _b(3))
        auth_id, _ = self._challenge()
        with self.assertRaises(PermissionDenied) as ctx:
            self.service.verify_response(auth_id, _b(10))
        self.assertNotIn("10", str(ctx.exception))

    def test_identifier_length_is_configurable(self) -> None:
        service = VerifierService(self.params, identifier_length=20)
        service.register("alice", _b(2), _b(3))
        auth_id, _ = service.create_challenge("alice", _b(8), _b(4))
        self.assertEqual(len(auth_id), 20)


class TestVerifierServiceDefaultGroup(unittest.TestCase):
    def test_challenge_is_below_q(self) -> None:
        params = GroupParameters.default()
        service = VerifierService(params)
        engine = ZkpEngine(params)
        commitment = engine.commit(123456789)
        service.register("alice", _b(commitment.y1), _b(commitment.y2))
        for _ in range(10):
            _, c = service.create_challenge("alice", _b(2), _b(2))
            self.assertLess(bytes_to_int(c), params.q)


if __name__ == "__main__":
    unittest.main()
