import unittest
from jose import jwt

from pantry.infra.identity import CredentialError, GoogleIdentityProvider


class TestGoogleIdentityProvider(unittest.TestCase):

    def setUp(self):
        self.provider = GoogleIdentityProvider("client-123")

    def test_reads_profile_from_payload(self):
        token = jwt.encode({"name": "Ada Lovelace", "email": "ada@example.com", "sub": "1001",
                            "aud": "client-123"}, "not-google", algorithm="HS256")
        user = self.provider.decode_credential(token)
        self.assertEqual((user.name, user.email, user.sub), ("Ada Lovelace", "ada@example.com", "1001"))

    def test_signature_is_not_checked(self):
        token = jwt.encode({"email": "ada@example.com", "sub": "1001"}, "one-key", algorithm="HS256")
        header, payload, _ = token.split(".")
        tampered = ".".join([header, payload, "c2lnbmF0dXJl"])
        self.assertEqual(self.provider.decode_credential(tampered).email, "ada@example.com")

    def test_missing_name_falls_back_to_email(self):
        token = jwt.encode({"email": "ada@example.com", "sub": "1001"}, "k", algorithm="HS256")
        self.assertEqual(self.provider.decode_credential(token).display_name, "ada@example.com")

    def test_garbage_token(self):
        with self.assertRaises(CredentialError):
            self.provider.decode_credential("not-a-token")

    def test_payload_without_identity(self):
        token = jwt.encode({"foo": "bar"}, "k", algorithm="HS256")
        with self.assertRaises(CredentialError):
            self.provider.decode_credential(token)
